"""Result models produced by the trigger engine."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class TriggerExample(BaseModel):
    """One observed trigger instance: the antecedent day and the spike it preceded."""

    date: dt.date
    severity: float


class LowSleepTrigger(BaseModel):
    """Nights under the low-sleep threshold before a spike."""

    count: int = 0
    examples: list[TriggerExample] = Field(default_factory=list)

    def add(self, example: TriggerExample) -> None:
        self.count += 1
        self.examples.append(example)


class TriggerCounts(BaseModel):
    """Counts and examples for a categorical trigger (food item, flow level, ...)."""

    counts: dict[str, int] = Field(default_factory=dict)
    examples: dict[str, list[TriggerExample]] = Field(default_factory=dict)

    def add(self, value: str, example: TriggerExample) -> None:
        self.counts[value] = self.counts.get(value, 0) + 1
        self.examples.setdefault(value, []).append(example)

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class TriggerAggregate(BaseModel):
    """Every trigger observed on the day before a symptom spike."""

    low_sleep: LowSleepTrigger = Field(default_factory=LowSleepTrigger)
    food_items: TriggerCounts = Field(default_factory=TriggerCounts)
    menstrual_events: TriggerCounts = Field(default_factory=TriggerCounts)
    flow_levels: TriggerCounts = Field(default_factory=TriggerCounts)

    @property
    def total_triggers(self) -> int:
        return (
            self.low_sleep.count
            + self.food_items.total
            + self.menstrual_events.total
            + self.flow_levels.total
        )


class TriggerAnalysis(TriggerAggregate):
    """Trigger aggregate together with the spike statistics it came from."""

    threshold: float
    mean: float
    std_dev: float


class FlareupPrediction(BaseModel):
    """
    Short-term flare-up estimate.

    `flareup_probability` is a heuristic ratio of historical trigger
    instances to recent explanations, scaled to 0-100. It is not a
    calibrated probability and saturates at 100. When it is None,
    `message` says why nothing was computed.
    """

    flareup_probability: Optional[float] = None
    flareup_predictions: list[str] = Field(default_factory=list)
    message: Optional[str] = None

    @property
    def has_probability(self) -> bool:
        return self.flareup_probability is not None
