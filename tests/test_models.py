"""Tests for data models."""

from datetime import date

import pytest
from pydantic import ValidationError

from trigger_diary.models import (
    DietRecord,
    FlareupPrediction,
    RecordSet,
    SleepRecord,
    TriggerAggregate,
    TriggerExample,
)


class TestRecordDates:
    """Tests for date parsing on records."""

    def test_rfc3339_timestamp(self):
        """Only the calendar day of an RFC3339 timestamp is kept."""
        record = SleepRecord(date="2025-03-14T22:30:00Z", duration=7.5)
        assert record.date == date(2025, 3, 14)

    def test_rfc3339_with_offset(self):
        """Test an RFC3339 timestamp with an offset keeps its date."""
        record = SleepRecord(date="2025-03-14T08:00:00-07:00", duration=7.5)
        assert record.date == date(2025, 3, 14)

    def test_plain_date(self):
        """Test a plain ISO date."""
        record = SleepRecord(date="2025-03-14", duration=7.5)
        assert record.date == date(2025, 3, 14)

    def test_invalid_date(self):
        """Test an unparseable date fails validation."""
        with pytest.raises(ValidationError, match="RFC3339"):
            SleepRecord(date="14/03/2025", duration=7.5)


class TestDietRecord:
    """Tests for the DietRecord model."""

    def test_items_default_empty(self):
        """Test diet items default to an empty list."""
        record = DietRecord(date=date(2025, 1, 1), meal="breakfast")
        assert record.items == []
        assert record.id is None


class TestTriggerAggregate:
    """Tests for trigger accumulation."""

    def test_add_keeps_counts_and_examples_in_step(self):
        """Test counts and examples grow together."""
        aggregate = TriggerAggregate()
        example = TriggerExample(date=date(2025, 1, 1), severity=8.0)

        aggregate.food_items.add("coffee", example)
        aggregate.food_items.add("coffee", example)
        aggregate.low_sleep.add(example)

        assert aggregate.food_items.counts == {"coffee": 2}
        assert len(aggregate.food_items.examples["coffee"]) == 2
        assert aggregate.total_triggers == 3

    def test_json_shape(self):
        """Test the serialized trigger shape."""
        aggregate = TriggerAggregate()
        aggregate.flow_levels.add("light", TriggerExample(date=date(2025, 1, 1), severity=6.5))

        data = aggregate.model_dump(mode="json")

        assert data["low_sleep"] == {"count": 0, "examples": []}
        assert data["flow_levels"]["counts"] == {"light": 1}
        assert data["flow_levels"]["examples"] == {
            "light": [{"date": "2025-01-01", "severity": 6.5}]
        }


class TestRecordSet:
    """Tests for the RecordSet model."""

    def test_defaults_to_empty_collections(self):
        """Test that every record kind defaults to an empty list."""
        records = RecordSet()
        assert records.sleep == records.diet == records.menstrual == records.symptoms == []


class TestFlareupPrediction:
    """Tests for the FlareupPrediction model."""

    def test_message_variant_has_no_probability(self):
        """Test a message prediction carries no probability."""
        prediction = FlareupPrediction(message="no triggers found in recent data")
        assert prediction.has_probability is False
