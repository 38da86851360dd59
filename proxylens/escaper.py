"""
HTML escaping for display strings.

Escaping is the last step before concatenation: callers escape each raw
substring exactly once and never feed escaped output back in.
"""

from __future__ import annotations

from html import escape as _html_escape


def escape(text: str) -> str:
    """Replace & < > " ' with their entities."""
    if not text:
        return ""
    return _html_escape(text, quote=True)
