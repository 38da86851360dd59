"""
Tone Classifier — qualitative reading of a single signal.

Maps a (key, value) pair from a reputation signal bag to positive,
neutral or negative. Pure and total: every value, including opaque
objects, gets a tone, and the same input always gets the same tone.

Thresholds mirror the reputation scorer that produces the signals:
  - *_score / uptime_ratio:  0..1 (or 0..100) score, >=0.66 good, >=0.33 fair
  - latency_median_ms:       <=600 good, <=2000 fair
  - recency_minutes:         <=30 good, <=180 fair
  - failure_streak:          0 good, <=2 fair
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional


class Tone(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


# ============================================================
# THRESHOLD TABLES
# ============================================================

SCORE_KEYS = frozenset({
    "uptime_score",
    "uptime_ratio",
    "recency_score",
    "latency_score",
    "anonymity_score",
    "failures_score",
})

POSITIVE_SCORE = 0.66
NEUTRAL_SCORE = 0.33

# key -> (positive ceiling, neutral ceiling), lower is better
_CEILINGS: dict[str, tuple[float, float]] = {
    "latency_median_ms": (600, 2000),
    "recency_minutes": (30, 180),
}

ANONYMITY_SCALE: dict[str, float] = {
    "elite": 1.0,
    "anonymous": 0.8,
    "transparent": 0.3,
}
ANONYMITY_DEFAULT = 0.5

TYPE_SCALE: dict[str, float] = {
    "residential": 1.0,
    "isp": 0.9,
    "mobile": 0.85,
    "datacenter": 0.4,
}
TYPE_DEFAULT = 0.6

POSITIVE_TOKENS = ("true", "yes", "low", "good", "success")
NEGATIVE_TOKENS = ("false", "no", "high", "bad", "poor", "fail")

# Reputation labels as produced by the scorer
LABEL_GOOD = "good"
LABEL_NEUTRAL = "neutral"
LABEL_POOR = "poor"

_LABEL_TONES: dict[str, Tone] = {
    LABEL_GOOD: Tone.POSITIVE,
    LABEL_NEUTRAL: Tone.NEUTRAL,
    LABEL_POOR: Tone.NEGATIVE,
}


# ============================================================
# CLASSIFICATION
# ============================================================

def tone(raw_key: str, value) -> Tone:
    """Classify a signal value. Never raises."""
    key = str(raw_key or "").strip().lower()

    if value is None:
        return Tone.NEUTRAL
    if isinstance(value, bool):
        return Tone.POSITIVE if value else Tone.NEGATIVE
    if isinstance(value, (int, float)):
        try:
            return _number_tone(key, value)
        except OverflowError:
            return Tone.NEUTRAL
    if isinstance(value, str):
        return _text_tone(key, value)
    # Composite (Mapping / list / tuple) and opaque values carry no tone
    return Tone.NEUTRAL


def score_tone(score: float) -> Tone:
    """Apply the shared 0..1 score thresholds."""
    if score >= POSITIVE_SCORE:
        return Tone.POSITIVE
    if score >= NEUTRAL_SCORE:
        return Tone.NEUTRAL
    return Tone.NEGATIVE


def _number_tone(key: str, value: float) -> Tone:
    if isinstance(value, float) and not math.isfinite(value):
        return Tone.NEUTRAL

    if key in SCORE_KEYS:
        normalized = value / 100 if value > 1 else value
        return score_tone(normalized)

    if key in _CEILINGS:
        good, fair = _CEILINGS[key]
        if value <= good:
            return Tone.POSITIVE
        if value <= fair:
            return Tone.NEUTRAL
        return Tone.NEGATIVE

    if key == "failure_streak":
        if value == 0:
            return Tone.POSITIVE
        if value <= 2:
            return Tone.NEUTRAL
        return Tone.NEGATIVE

    return Tone.NEGATIVE if value < 0 else Tone.NEUTRAL


def _text_tone(key: str, value: str) -> Tone:
    text = value.strip().lower()
    if not text:
        return Tone.NEUTRAL

    if key == "anonymity":
        return score_tone(ANONYMITY_SCALE.get(text, ANONYMITY_DEFAULT))
    if key == "estimated_type":
        return score_tone(TYPE_SCALE.get(text, TYPE_DEFAULT))

    # Substring match, positive tokens checked first
    if any(token in text for token in POSITIVE_TOKENS):
        return Tone.POSITIVE
    if any(token in text for token in NEGATIVE_TOKENS):
        return Tone.NEGATIVE
    return Tone.NEUTRAL


# ============================================================
# REPUTATION LABELS
# ============================================================

def label_from_score(score: float) -> str:
    """Bucket a 0-100 reputation score into good / neutral / poor."""
    try:
        score = float(score)
    except (TypeError, ValueError, OverflowError):
        return LABEL_POOR
    if not math.isfinite(score):
        return LABEL_POOR
    if score >= 80:
        return LABEL_GOOD
    if score >= 40:
        return LABEL_NEUTRAL
    return LABEL_POOR


def label_tone(label: Optional[str]) -> Optional[Tone]:
    """Tone for a reputation label; None when the label is unknown."""
    normalized = (label or "").strip().lower()
    return _LABEL_TONES.get(normalized)
