"""
Reputation Breakdown View

Builds the display model for a proxy's reputation card:

  - the overall result first, then one section per protocol (by name)
  - each section: kind, score, label, label tone, formatted signal entries
  - a label distribution (good / neutral / poor / unknown) with shares

Payloads come from the reputation scoring service as plain dicts and
are validated here; a malformed payload gives an empty view.

Usage:
    from proxylens.breakdown import build_breakdown_view
    view = build_breakdown_view(payload, limit=6)
    data = view.model_dump(mode="json")
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Optional, Union

from pydantic import ValidationError

from proxylens.formatter import OVERALL_KIND, UNBOUNDED, format_signals
from proxylens.schemas.reputation import (
    BreakdownView,
    LabelShare,
    ReputationBreakdown,
    ReputationDetail,
    ReputationSection,
    SignalEntryView,
)
from proxylens.tone import label_from_score, label_tone

logger = logging.getLogger(__name__)

DISTRIBUTION_LABELS: list[tuple[str, str]] = [
    ("good", "Good"),
    ("neutral", "Neutral"),
    ("poor", "Poor"),
    ("unknown", "Unknown"),
]


def build_breakdown_view(
    payload: Union[ReputationBreakdown, Mapping, None],
    limit: Union[int, float, str, None] = UNBOUNDED,
) -> BreakdownView:
    """Validate a reputation breakdown and format every section."""
    if payload is None:
        return BreakdownView()

    try:
        if isinstance(payload, ReputationBreakdown):
            breakdown = payload
        else:
            breakdown = ReputationBreakdown.model_validate(payload)
    except ValidationError as e:
        logger.warning(
            "Invalid reputation breakdown: %d error(s)", e.error_count(),
            extra={"error": str(e), "error_type": "ValidationError"},
        )
        return BreakdownView()

    overall = None
    if breakdown.overall is not None:
        overall = _build_section(breakdown.overall, OVERALL_KIND, None, limit)

    protocols = [
        _build_section(detail, name, name, limit)
        for name, detail in sorted(
            (breakdown.protocols or {}).items(), key=lambda kv: kv[0].lower(),
        )
        if detail is not None
    ]

    return BreakdownView(overall=overall, protocols=protocols)


def _build_section(
    detail: ReputationDetail,
    default_kind: str,
    protocol: Optional[str],
    limit,
) -> ReputationSection:
    kind = detail.kind.strip() or default_kind
    label = detail.label.strip().lower() or label_from_score(detail.score)
    entries = format_signals(detail.signals, kind, limit)

    return ReputationSection(
        kind=kind,
        protocol=protocol,
        score=round(detail.score, 1) if math.isfinite(detail.score) else 0.0,
        label=label,
        tone=label_tone(label),
        entries=[SignalEntryView.model_validate(e) for e in entries],
    )


def label_distribution(counts: Optional[Mapping]) -> list[LabelShare]:
    """
    Count and percentage per reputation label.

    Percentages are of the total across all four labels, rounded
    half-up to one decimal. A zero total gives 0 everywhere.
    """
    counts = counts or {}
    values = {key: _as_count(counts.get(key)) for key, _ in DISTRIBUTION_LABELS}
    total = sum(values.values())

    shares = []
    for key, title in DISTRIBUTION_LABELS:
        count = values[key]
        percentage = math.floor(count / total * 1000 + 0.5) / 10 if total > 0 else 0.0
        shares.append(LabelShare(
            key=key,
            title=title,
            count=count,
            percentage=percentage,
            tone=label_tone(key),
        ))
    return shares


def _as_count(value) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)
