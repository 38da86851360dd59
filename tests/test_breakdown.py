"""
Tests for the reputation breakdown view and label distribution.
"""

from proxylens.breakdown import build_breakdown_view, label_distribution
from proxylens.schemas import BreakdownView, ReputationBreakdown
from proxylens.tone import Tone


PAYLOAD = {
    "overall": {
        "kind": "overall",
        "score": 86.44,
        "label": "good",
        "signals": {
            "uptime_score": 0.93,
            "latency_median_ms": 420,
            "components": {"http": {"score": 0.91}, "socks5": {"score": 0.4}},
        },
    },
    "protocols": {
        "socks5": {"kind": "socks5", "score": 35.0, "label": "", "signals": {"failure_streak": 4}},
        "HTTP": {"kind": "http", "score": 71.0, "label": "Neutral", "signals": None},
        "https": None,
    },
}


# ============================================================
# BREAKDOWN VIEW
# ============================================================

class TestBreakdownView:
    def test_overall_section(self):
        view = build_breakdown_view(PAYLOAD)
        overall = view.overall
        assert overall.kind == "overall"
        assert overall.score == 86.4
        assert overall.tone == Tone.POSITIVE
        assert [e.raw_key for e in overall.entries] == [
            "components", "uptime_score", "latency_median_ms",
        ]

    def test_components_carry_protocol_layout(self):
        components = build_breakdown_view(PAYLOAD).overall.entries[0]
        assert components.rendered_text == ""
        assert [c.layout for c in components.structured_children] == ["protocol", "protocol"]
        assert components.structured_children[0].children[0].value == "0.91"

    def test_protocols_sorted_and_null_skipped(self):
        view = build_breakdown_view(PAYLOAD)
        assert [p.protocol for p in view.protocols] == ["HTTP", "socks5"]

    def test_label_normalized_or_derived(self):
        http, socks5 = build_breakdown_view(PAYLOAD).protocols
        assert http.label == "neutral"
        assert http.entries == []
        assert socks5.label == "poor"
        assert socks5.tone == Tone.NEGATIVE
        assert socks5.entries[0].tone == Tone.NEGATIVE

    def test_limit_per_section(self):
        view = build_breakdown_view(PAYLOAD, limit=1)
        assert [e.raw_key for e in view.overall.entries] == ["components"]

    def test_missing_kind_defaults(self):
        view = build_breakdown_view({"overall": {"score": 50}})
        assert view.overall.kind == "overall"
        assert view.overall.label == "neutral"

    def test_accepts_model_instance(self):
        model = ReputationBreakdown.model_validate(PAYLOAD)
        assert build_breakdown_view(model) == build_breakdown_view(PAYLOAD)

    def test_none_and_invalid_payloads(self):
        assert build_breakdown_view(None) == BreakdownView()
        assert build_breakdown_view({"overall": {"score": "abc"}}) == BreakdownView()
        assert build_breakdown_view({"protocols": ["http"]}) == BreakdownView()

    def test_json_dump(self):
        data = build_breakdown_view(PAYLOAD).model_dump(mode="json")
        assert data["overall"]["tone"] == "positive"
        assert data["overall"]["entries"][1]["display_key"] == "Uptime Score"
        assert data["protocols"][1]["entries"][0]["rendered_text"] == "4"


# ============================================================
# LABEL DISTRIBUTION
# ============================================================

class TestLabelDistribution:
    def test_shares(self):
        shares = label_distribution({"good": 3, "neutral": 1, "poor": 0})
        assert [s.key for s in shares] == ["good", "neutral", "poor", "unknown"]
        assert [s.percentage for s in shares] == [75.0, 25.0, 0.0, 0.0]
        assert shares[0].title == "Good"
        assert shares[0].tone == Tone.POSITIVE
        assert shares[3].tone is None

    def test_rounding_to_one_decimal(self):
        shares = label_distribution({"good": 1, "neutral": 2})
        assert shares[0].percentage == 33.3
        assert shares[1].percentage == 66.7

    def test_empty_total(self):
        shares = label_distribution(None)
        assert all(s.count == 0 and s.percentage == 0 for s in shares)

    def test_bad_counts_ignored(self):
        shares = label_distribution({"good": "x", "poor": -3, "unknown": True, "neutral": 2})
        assert [s.count for s in shares] == [0, 2, 0, 0]
        assert shares[1].percentage == 100.0
