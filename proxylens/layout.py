"""Structural layout hints for nested signal keys."""

from __future__ import annotations

from typing import Optional

PROTOCOL_LAYOUT = "protocol"

# Parent keys whose children are per-protocol breakdowns
PROTOCOL_PARENT_KEYS = frozenset({"components"})


def detect_layout(parent_key: Optional[str]) -> Optional[str]:
    """Return "protocol" when items sit directly under a components key."""
    if parent_key is None:
        return None
    if str(parent_key).strip().lower() in PROTOCOL_PARENT_KEYS:
        return PROTOCOL_LAYOUT
    return None
