"""Single entry point for trigger analysis, flare-up prediction and advice."""

from functools import cached_property
from typing import Optional

from ..exceptions import RecommendationError
from ..models.analysis import FlareupPrediction, TriggerAggregate, TriggerAnalysis
from ..models.records import RecordSet
from ..utils.config import Settings
from .advisor import RecommendationComposer
from .analysis import (
    LOW_SLEEP_HOURS,
    RecordIndex,
    SpikeReport,
    correlate_triggers,
    detect_spikes,
)
from .prediction import RECENT_WINDOW, predict_flareup


class TriggerEngine:
    """
    Runs the analysis pipeline over one materialized set of records.

    Build one engine per request: the date indexes are built once on
    first use and discarded with the engine. Nothing is shared between
    instances.

    NoDataError and InsufficientSeriesError from spike detection
    propagate out of every analysis method.
    """

    def __init__(
        self,
        records: RecordSet,
        composer: Optional[RecommendationComposer] = None,
        low_sleep_hours: float = LOW_SLEEP_HOURS,
        recent_window: int = RECENT_WINDOW,
    ):
        self.records = records
        self.composer = composer
        self.low_sleep_hours = low_sleep_hours
        self.recent_window = recent_window

    @classmethod
    def from_settings(cls, records: RecordSet, settings: Settings, composer=None) -> "TriggerEngine":
        return cls(
            records,
            composer=composer,
            low_sleep_hours=settings.low_sleep_hours,
            recent_window=settings.recent_window,
        )

    @cached_property
    def index(self) -> RecordIndex:
        return RecordIndex.build(self.records)

    def detect_spikes(self) -> SpikeReport:
        return detect_spikes(self.records.symptoms)

    def correlate(self, report: SpikeReport) -> TriggerAggregate:
        return correlate_triggers(report.spikes, self.index, self.low_sleep_hours)

    def analyze_triggers(self) -> TriggerAnalysis:
        """Spike statistics plus the triggers found the day before each spike."""
        report = self.detect_spikes()
        aggregate = self.correlate(report)
        return TriggerAnalysis(
            threshold=report.threshold,
            mean=report.mean,
            std_dev=report.std_dev,
            low_sleep=aggregate.low_sleep,
            food_items=aggregate.food_items,
            menstrual_events=aggregate.menstrual_events,
            flow_levels=aggregate.flow_levels,
        )

    def predict_flareup(self) -> FlareupPrediction:
        report = self.detect_spikes()
        aggregate = self.correlate(report)
        return predict_flareup(
            report,
            aggregate,
            self.records,
            window_size=self.recent_window,
            low_sleep_hours=self.low_sleep_hours,
        )

    def recommend(self) -> list[str]:
        """Three recommendations from the injected composer."""
        if self.composer is None:
            raise RecommendationError("No recommendation composer configured")
        report = self.detect_spikes()
        return self.composer.compose(self.correlate(report), self.records)
