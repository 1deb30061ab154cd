"""FastAPI dependencies shared by the route modules."""

from typing import Iterator

from fastapi import Depends

from ..models.records import RecordSet
from ..services.advisor import HealthAdvisor, RecommendationComposer
from ..services.engine import TriggerEngine
from ..services.storage import RecordStore
from ..utils.config import Settings, get_settings


def get_store() -> Iterator[RecordStore]:
    """Open the record store for the duration of one request."""
    with RecordStore() as store:
        yield store


def get_composer(settings: Settings = Depends(get_settings)) -> RecommendationComposer:
    return HealthAdvisor(settings)


def get_engine(
    store: RecordStore = Depends(get_store),
    composer: RecommendationComposer = Depends(get_composer),
    settings: Settings = Depends(get_settings),
) -> TriggerEngine:
    """Load every record once and wrap it in a fresh engine."""
    records: RecordSet = store.load_records()
    return TriggerEngine.from_settings(records, settings, composer=composer)
