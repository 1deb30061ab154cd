"""Short-term flare-up prediction from recent records."""

from ..models.analysis import FlareupPrediction, TriggerAggregate
from ..models.records import RecordSet
from .analysis import LOW_SLEEP_HOURS, RecordIndex, SpikeReport, severity_score

RECENT_WINDOW = 3

NO_PREDICTIONS_MESSAGE = "no recent flareup predictions found"
NO_TRIGGERS_MESSAGE = "no triggers found in recent data"


def recent_window(records: RecordSet, size: int = RECENT_WINDOW) -> RecordSet:
    """Last `size` records of each kind by storage order, not by date."""
    return RecordSet(
        sleep=records.sleep[-size:],
        diet=records.diet[-size:],
        menstrual=records.menstrual[-size:],
        symptoms=records.symptoms[-size:],
    )


def explain_recent(
    window: RecordIndex,
    high_severity: float,
    low_sleep_hours: float = LOW_SLEEP_HOURS,
) -> list[str]:
    """
    Describe risk factors on each day of the recent sleep window.

    Days only appear if they have a recent sleep record; diet, menstrual
    and symptom records on other days are ignored.
    """
    explanations = []

    for day, sleep in window.sleep.items():
        label = day.isoformat()

        if sleep.duration < low_sleep_hours:
            explanations.append(f"Low sleep hours on {label}")

        for meal in window.diet.get(day, []):
            for item in meal.items:
                explanations.append(f"{item.capitalize()} consumed on {label}")

        menstrual = window.menstrual.get(day)
        if menstrual is not None:
            explanations.append(f"{menstrual.period_event.capitalize()} period event on {label}")
            explanations.append(f"{menstrual.flow_level.capitalize()} flow level on {label}")

        symptom = window.symptoms.get(day)
        if symptom is not None:
            severity = severity_score(symptom)
            if severity > high_severity:
                explanations.append(f"High symptom severity on {label}: {severity:.2f}")

    return explanations


def flareup_probability(total_triggers: int, explanation_count: int) -> float:
    """
    Ratio of historical trigger instances to recent explanations, as 0-100.

    A heuristic, not a calibrated probability: it saturates at 100 as soon
    as the trigger count reaches the number of explanations.
    """
    ratio = min(total_triggers / explanation_count, 1.0)
    return round(ratio * 100, 2)


def predict_flareup(
    report: SpikeReport,
    aggregate: TriggerAggregate,
    records: RecordSet,
    window_size: int = RECENT_WINDOW,
    low_sleep_hours: float = LOW_SLEEP_HOURS,
) -> FlareupPrediction:
    """Combine recent explanations with historical trigger counts."""
    window = RecordIndex.build(recent_window(records, window_size))
    explanations = explain_recent(window, report.high_severity, low_sleep_hours)

    if not explanations:
        return FlareupPrediction(message=NO_PREDICTIONS_MESSAGE)

    total = aggregate.total_triggers
    if total == 0:
        return FlareupPrediction(message=NO_TRIGGERS_MESSAGE)

    return FlareupPrediction(
        flareup_probability=flareup_probability(total, len(explanations)),
        flareup_predictions=explanations,
    )
