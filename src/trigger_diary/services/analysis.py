"""Symptom spike detection and trigger correlation."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable

import pandas as pd

from ..exceptions import InsufficientSeriesError, NoDataError
from ..models.analysis import TriggerAggregate, TriggerExample
from ..models.records import (
    DietRecord,
    MenstrualRecord,
    RecordSet,
    SleepRecord,
    SymptomRecord,
)

log = logging.getLogger(__name__)

LOW_SLEEP_HOURS = 6.0


def rating_total(record: SymptomRecord) -> int:
    return record.nausea + record.fatigue + record.pain


def severity_score(record: SymptomRecord) -> float:
    """Average of the nausea, fatigue and pain ratings. Not range-checked."""
    return rating_total(record) / 3.0


@dataclass
class ScoredDay:
    """A symptom record reduced to its severity."""
    date: date
    severity: float
    total: int  # unscaled rating sum, severity * 3


@dataclass
class SpikeReport:
    """Result of spike detection over a symptom series."""
    threshold: float
    mean: float  # average severity
    std_dev: float  # sample standard deviation of severity
    mean_delta: float
    std_delta: float  # population standard deviation of the deltas
    spikes: dict[date, float] = field(default_factory=dict)

    @property
    def high_severity(self) -> float:
        """Severity above which a single day counts as unusually bad."""
        return self.mean + self.std_dev


@dataclass
class RecordIndex:
    """
    Records keyed by calendar day.

    Diet is one-to-many; sleep, menstrual and symptom records are
    one-to-one and a later record for the same day replaces an earlier one.
    """
    sleep: dict[date, SleepRecord] = field(default_factory=dict)
    diet: dict[date, list[DietRecord]] = field(default_factory=dict)
    menstrual: dict[date, MenstrualRecord] = field(default_factory=dict)
    symptoms: dict[date, SymptomRecord] = field(default_factory=dict)

    @classmethod
    def build(cls, records: RecordSet) -> "RecordIndex":
        diet: dict[date, list[DietRecord]] = defaultdict(list)
        for record in records.diet:
            diet[record.date].append(record)

        return cls(
            sleep={r.date: r for r in records.sleep},
            diet=dict(diet),
            menstrual={r.date: r for r in records.menstrual},
            symptoms={r.date: r for r in records.symptoms},
        )


def score_days(symptoms: Iterable[SymptomRecord]) -> list[ScoredDay]:
    """Score each symptom record and sort the days ascending (stable)."""
    days = [
        ScoredDay(date=r.date, severity=severity_score(r), total=rating_total(r))
        for r in symptoms
    ]
    days.sort(key=lambda d: d.date)
    return days


def detect_spikes(symptoms: list[SymptomRecord]) -> SpikeReport:
    """
    Flag days whose severity jump exceeds the typical day-over-day change.

    The threshold is the mean of all consecutive deltas plus their
    population standard deviation. Only strict increases above it count;
    drops are never spikes.

    Raises:
        NoDataError: no symptom records at all
        InsufficientSeriesError: a single scored day, so no deltas exist
    """
    if not symptoms:
        raise NoDataError()

    days = score_days(symptoms)
    if len(days) < 2:
        raise InsufficientSeriesError()

    severity = pd.Series([d.severity for d in days], dtype="float64")

    # Compare on integer rating totals: thirds do not diff exactly in floats.
    totals = pd.Series([d.total for d in days], dtype="int64")
    deltas = totals.diff().iloc[1:]

    mean_delta = float(deltas.mean())
    std_delta = float(deltas.std(ddof=0))
    threshold = mean_delta + std_delta

    spikes: dict[date, float] = {}
    for i, delta in deltas.items():
        if delta > threshold:
            spikes[days[i].date] = days[i].severity

    log.debug(
        "Detected %d spike(s) over %d days (threshold %.3f)",
        len(spikes), len(days), threshold / 3.0,
    )

    return SpikeReport(
        threshold=threshold / 3.0,
        mean=float(severity.mean()),
        std_dev=float(severity.std(ddof=1)),
        mean_delta=mean_delta / 3.0,
        std_delta=std_delta / 3.0,
        spikes=spikes,
    )


def correlate_triggers(
    spikes: dict[date, float],
    index: RecordIndex,
    low_sleep_hours: float = LOW_SLEEP_HOURS,
) -> TriggerAggregate:
    """
    Count lifestyle triggers on the day before each spike.

    The spike day itself is never inspected. Categories are independent,
    so one antecedent day can feed all four. Missing records add nothing.
    """
    aggregate = TriggerAggregate()

    for spike_date, severity in spikes.items():
        antecedent = spike_date - timedelta(days=1)
        example = TriggerExample(date=antecedent, severity=severity)

        sleep = index.sleep.get(antecedent)
        if sleep is not None and sleep.duration < low_sleep_hours:
            aggregate.low_sleep.add(example)

        for meal in index.diet.get(antecedent, []):
            for item in meal.items:
                aggregate.food_items.add(item, example)

        menstrual = index.menstrual.get(antecedent)
        if menstrual is not None:
            aggregate.menstrual_events.add(menstrual.period_event, example)
            aggregate.flow_levels.add(menstrual.flow_level, example)

    return aggregate
