"""
Signal Formatter — Structured Display Entries

Turns a reputation signal bag (arbitrary nested JSON-like data) into an
ordered list of display entries:

  - primitives become a single rendered string
  - lists and mappings become StructuredItem trees, at most MAX_DEPTH deep
  - anything deeper is serialized compactly into the item value

Every entry also carries a tone (see tone.py). Formatting never raises;
values that cannot be rendered fall back to the placeholder.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Union

from proxylens.config import settings
from proxylens.layout import detect_layout
from proxylens.tone import Tone, tone

logger = logging.getLogger(__name__)

SignalValue = Union[
    None, bool, int, float, str,
    list["SignalValue"], tuple, Mapping[str, "SignalValue"],
]

MAX_DEPTH = settings.MAX_DEPTH
PRECISION = settings.PRECISION
PLACEHOLDER = settings.PLACEHOLDER
OVERALL_KIND = settings.OVERALL_KIND

UNBOUNDED = "unbounded"

# Key ordering, only applied for the overall kind
KEY_PRIORITY: dict[str, int] = {
    "components": 0,
    "protocols": 0,
    "combined": 1,
}
DEFAULT_PRIORITY = 5

_SEPARATORS = re.compile(r"[_-]+")


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass
class StructuredItem:
    """One node of a decomposed composite signal."""
    label: str
    value: Optional[str] = None
    children: Optional[list[StructuredItem]] = None
    layout: Optional[str] = None   # "protocol" or None


@dataclass
class SignalEntry:
    """Display entry for one top-level signal key."""
    raw_key: str
    display_key: str
    rendered_text: str
    tone: Tone
    structured_children: Optional[list[StructuredItem]] = None


# ============================================================
# PRIMITIVES
# ============================================================

def format_number(value: Union[int, float]) -> str:
    """Round to PRECISION digits, strip trailing zeros, no negative zero."""
    if isinstance(value, float) and not math.isfinite(value):
        return PLACEHOLDER
    rounded = round(value, PRECISION)
    if isinstance(rounded, int):
        try:
            return str(rounded)
        except ValueError:
            # past the int to str digit limit
            return PLACEHOLDER
    text = f"{rounded:.{PRECISION}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_value(value) -> str:
    """Render a value that is not shown as a structured tree."""
    if value is None:
        return PLACEHOLDER
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value.strip() or PLACEHOLDER
    return serialize_compact(value)


def serialize_compact(value) -> str:
    """
    Single-line JSON rendering with numbers rounded like format_number.

    Cycles and unsupported types give the placeholder.
    """
    try:
        return json.dumps(
            _json_ready(value, set()),
            ensure_ascii=False,
            separators=(", ", ": "),
        )
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug(
            "Signal value not serializable: %s", e,
            extra={"error_type": type(e).__name__},
        )
        return PLACEHOLDER


def _json_ready(value, seen: set[int]):
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        rounded = round(value, PRECISION)
        if rounded == 0:
            return 0
        if rounded.is_integer() and abs(rounded) < 2 ** 53:
            return int(rounded)
        return rounded

    if isinstance(value, (Mapping, list, tuple)):
        marker = id(value)
        if marker in seen:
            raise ValueError("circular reference in signal value")
        seen.add(marker)
        try:
            if isinstance(value, Mapping):
                return {str(k): _json_ready(v, seen) for k, v in value.items()}
            return [_json_ready(v, seen) for v in value]
        finally:
            seen.discard(marker)

    raise TypeError(f"unsupported signal value type: {type(value).__name__}")


def humanize(key: str) -> str:
    """'latency_median-ms' -> 'Latency Median Ms'; separator-only keys give ''."""
    words = _SEPARATORS.sub(" ", str(key)).split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


# ============================================================
# DECOMPOSITION
# ============================================================

def decompose(
    value,
    depth: int = 0,
    parent_key: Optional[str] = None,
) -> Optional[list[StructuredItem]]:
    """
    Break a composite value into StructuredItems.

    Returns None for primitives, opaque values, and once depth reaches
    MAX_DEPTH (the caller then renders the value compactly instead).
    """
    if depth >= MAX_DEPTH:
        return None

    layout = detect_layout(parent_key)

    if isinstance(value, Mapping):
        if not value:
            return [StructuredItem(label="Value", value=PLACEHOLDER, layout=layout)]
        return [
            _build_item(humanize(str(key)), child, depth, str(key), layout)
            for key, child in value.items()
        ]

    if isinstance(value, (list, tuple)):
        if not value:
            return [StructuredItem(label="Entries", value=PLACEHOLDER, layout=layout)]
        return [
            _build_item(f"Entry {index + 1}", child, depth, None, layout)
            for index, child in enumerate(value)
        ]

    return None


def _build_item(
    label: str,
    child,
    depth: int,
    child_key: Optional[str],
    layout: Optional[str],
) -> StructuredItem:
    children = decompose(child, depth + 1, child_key)
    if children:
        return StructuredItem(label=label, children=children, layout=layout)
    return StructuredItem(label=label, value=format_value(child), layout=layout)


# ============================================================
# ORDERING
# ============================================================

def priority(kind_context: Optional[str], raw_key: str) -> int:
    """Sort weight for a key; only the overall kind reorders keys."""
    kind = str(kind_context or "").strip().lower()
    if kind != OVERALL_KIND.strip().lower():
        return DEFAULT_PRIORITY
    return KEY_PRIORITY.get(str(raw_key).strip().lower(), DEFAULT_PRIORITY)


def _apply_limit(entries: list[SignalEntry], limit) -> list[SignalEntry]:
    if limit is None or limit == UNBOUNDED:
        return entries
    try:
        count = float(limit)
    except (TypeError, ValueError):
        return []
    except OverflowError:
        return entries
    if not math.isfinite(count) or count <= 0:
        return []
    return entries[: int(count)]


# ============================================================
# ENTRY POINT
# ============================================================

def format_signals(
    signals: Optional[Mapping[str, SignalValue]],
    kind_context: Optional[str] = "",
    limit: Union[int, float, str, None] = UNBOUNDED,
) -> list[SignalEntry]:
    """
    Build ordered display entries for a signal bag.

    Args:
        signals: Mapping of signal key -> value. None or empty gives [].
        kind_context: Reputation kind the signals belong to ("overall",
            "http", ...). The overall kind moves components first.
        limit: Maximum entries, or "unbounded".
    """
    if not signals:
        return []
    if not isinstance(signals, Mapping):
        logger.warning(
            "Ignoring non-mapping signal bag",
            extra={"kind": kind_context, "error_type": type(signals).__name__},
        )
        return []

    entries: list[SignalEntry] = []
    for raw_key, value in signals.items():
        key = "" if raw_key is None else str(raw_key)
        if not key.strip():
            continue

        children = decompose(value, 0, key)
        if children:
            rendered = ""
        else:
            children = None
            rendered = format_value(value)

        entries.append(SignalEntry(
            raw_key=key,
            display_key=humanize(key),
            rendered_text=rendered,
            tone=tone(key, value),
            structured_children=children,
        ))

    # list.sort is stable: equal priorities keep insertion order
    entries.sort(key=lambda e: priority(kind_context, e.raw_key))
    return _apply_limit(entries, limit)
