"""
Reputation Schemas — Input Payloads and View Models

Pydantic models for the reputation breakdown handed over by the scoring
service, and for the display-ready view built from it.
"""

from __future__ import annotations

from typing import Any, Optional
from pydantic import BaseModel, Field

from proxylens.tone import Tone


# ============================================================
# INPUT (reputation scoring service)
# ============================================================

class ReputationDetail(BaseModel):
    """One reputation result: overall or a single protocol."""
    kind: str = ""
    score: float = Field(0.0, description="Reputation score on a 0-100 scale.")
    label: str = Field("", description="good | neutral | poor")
    signals: Optional[dict[str, Any]] = None


class ReputationBreakdown(BaseModel):
    """Overall result plus per-protocol results for one proxy."""
    overall: Optional[ReputationDetail] = None
    protocols: Optional[dict[str, Optional[ReputationDetail]]] = None

    model_config = {"json_schema_extra": {"examples": [
        {
            "overall": {
                "kind": "overall", "score": 86.4, "label": "good",
                "signals": {"uptime_score": 0.93, "latency_median_ms": 420},
            },
            "protocols": {
                "http": {"kind": "http", "score": 71.0, "label": "neutral"},
            },
        },
    ]}}


# ============================================================
# VIEW
# ============================================================

class StructuredItemView(BaseModel):
    model_config = {"from_attributes": True}

    label: str
    value: Optional[str] = None
    children: Optional[list[StructuredItemView]] = None
    layout: Optional[str] = None


class SignalEntryView(BaseModel):
    model_config = {"from_attributes": True}

    raw_key: str
    display_key: str
    rendered_text: str
    tone: Tone
    structured_children: Optional[list[StructuredItemView]] = None


class ReputationSection(BaseModel):
    """A rendered reputation card section."""
    kind: str
    protocol: Optional[str] = None
    score: float
    label: str
    tone: Optional[Tone] = None
    entries: list[SignalEntryView] = Field(default_factory=list)


class BreakdownView(BaseModel):
    overall: Optional[ReputationSection] = None
    protocols: list[ReputationSection] = Field(default_factory=list)


class LabelShare(BaseModel):
    """Share of proxies carrying one reputation label."""
    key: str
    title: str
    count: int
    percentage: float
    tone: Optional[Tone] = None
