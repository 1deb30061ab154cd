"""Data models for the trigger diary."""

from .analysis import (
    FlareupPrediction,
    LowSleepTrigger,
    TriggerAggregate,
    TriggerAnalysis,
    TriggerCounts,
    TriggerExample,
)
from .records import (
    DietRecord,
    MenstrualRecord,
    RecordSet,
    SleepRecord,
    SymptomRecord,
)

__all__ = [
    "SleepRecord",
    "DietRecord",
    "MenstrualRecord",
    "SymptomRecord",
    "RecordSet",
    "TriggerExample",
    "LowSleepTrigger",
    "TriggerCounts",
    "TriggerAggregate",
    "TriggerAnalysis",
    "FlareupPrediction",
]
