"""Business logic services."""

from .advisor import HealthAdvisor, RecommendationComposer
from .engine import TriggerEngine
from .storage import RecordStore

__all__ = [
    "RecordStore",
    "TriggerEngine",
    "HealthAdvisor",
    "RecommendationComposer",
]
