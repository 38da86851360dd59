from proxylens.schemas.reputation import (
    BreakdownView,
    LabelShare,
    ReputationBreakdown,
    ReputationDetail,
    ReputationSection,
    SignalEntryView,
    StructuredItemView,
)

__all__ = [
    "BreakdownView",
    "LabelShare",
    "ReputationBreakdown",
    "ReputationDetail",
    "ReputationSection",
    "SignalEntryView",
    "StructuredItemView",
]
