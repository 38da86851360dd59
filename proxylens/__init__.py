"""
ProxyLens — Signal Presentation & Highlighting Engine

Display-side helpers for a proxy checker's reputation and judge data.
Pure functions, no I/O.

Public API:
  - format_signals:   Reputation signal bag -> ordered display entries
  - decompose:        Nested value -> bounded-depth StructuredItem tree
  - tone:             (key, value) -> positive / neutral / negative
  - highlight:        Judge response body + pattern -> HTML-safe marked text
  - escape:           HTML escaping for display strings
  - build_breakdown_view: Overall + per-protocol reputation card model
  - label_distribution:   Good / neutral / poor / unknown shares

Usage:
    from proxylens import format_signals, highlight
    entries = format_signals(signals, "overall")
    html = highlight(body, "default")
"""

__version__ = "0.4.0"

from proxylens.escaper import escape
from proxylens.tone import Tone, tone, label_from_score, label_tone
from proxylens.layout import detect_layout, PROTOCOL_LAYOUT
from proxylens.formatter import (
    format_signals,
    decompose,
    format_value,
    humanize,
    priority,
    SignalEntry,
    StructuredItem,
    MAX_DEPTH,
    PRECISION,
    UNBOUNDED,
)
from proxylens.highlighter import highlight, resolve_pattern, wrap_matches
from proxylens.breakdown import build_breakdown_view, label_distribution

__all__ = [
    "escape",
    "Tone",
    "tone",
    "label_from_score",
    "label_tone",
    "detect_layout",
    "PROTOCOL_LAYOUT",
    "format_signals",
    "decompose",
    "format_value",
    "humanize",
    "priority",
    "SignalEntry",
    "StructuredItem",
    "MAX_DEPTH",
    "PRECISION",
    "UNBOUNDED",
    "highlight",
    "resolve_pattern",
    "wrap_matches",
    "build_breakdown_view",
    "label_distribution",
]
