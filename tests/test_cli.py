"""Tests for the command-line interface."""

from datetime import date, timedelta

import pytest
import typer
from typer.testing import CliRunner

from trigger_diary.cli import app, parse_date
from trigger_diary.services.storage import RecordStore
from trigger_diary.utils.config import get_settings

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the CLI's settings at a temporary data directory."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


class TestParseDate:
    """Tests for CLI date parsing."""

    def test_today(self):
        """Test that no date means today."""
        assert parse_date(None) == date.today()

    def test_relative(self):
        """Test relative day offsets."""
        assert parse_date("-2") == date.today() - timedelta(days=2)

    def test_iso(self):
        """Test ISO dates."""
        assert parse_date("2025-02-01") == date(2025, 2, 1)

    def test_invalid(self):
        """Test that an unparseable date exits."""
        with pytest.raises(typer.Exit):
            parse_date("Feb 1")


class TestCommands:
    """Tests for the logging and analysis commands."""

    def _log_spike_scenario(self):
        for d, level in (("2025-01-01", 2), ("2025-01-02", 2), ("2025-01-03", 2), ("2025-01-04", 9)):
            result = runner.invoke(app, ["add-symptoms", str(level), str(level), str(level), "--date", d])
            assert result.exit_code == 0, result.output
        runner.invoke(app, ["add-sleep", "5", "--date", "2025-01-03"])
        runner.invoke(app, ["add-diet", "chocolate", "--meal", "snack", "--date", "2025-01-03"])

    def test_add_sleep(self, data_dir):
        """Test logging a sleep record."""
        result = runner.invoke(app, ["add-sleep", "7.5", "--date", "2025-01-02"])

        assert result.exit_code == 0
        assert "7.5h" in result.output
        with RecordStore() as store:
            assert store.get_all_sleep()[0].duration == 7.5

    def test_add_menstrual(self, data_dir):
        """Test logging a menstrual record."""
        result = runner.invoke(app, ["add-menstrual", "start", "light", "--date", "2025-01-02"])
        assert result.exit_code == 0
        with RecordStore() as store:
            assert store.get_all_menstrual()[0].period_event == "start"

    def test_triggers_without_data(self, data_dir):
        """Test trigger analysis with no symptom data."""
        result = runner.invoke(app, ["triggers"])
        assert result.exit_code == 0
        assert "no symptom data" in result.output

    def test_triggers(self, data_dir):
        """Test trigger analysis over the spike scenario."""
        self._log_spike_scenario()

        result = runner.invoke(app, ["triggers"])

        assert result.exit_code == 0
        assert "Low sleep nights before spikes: 1" in result.output
        assert "chocolate" in result.output

    def test_flareup(self, data_dir):
        """Test flare-up prediction over the spike scenario."""
        self._log_spike_scenario()

        result = runner.invoke(app, ["flareup"])

        assert result.exit_code == 0
        assert "100.00%" in result.output
        assert "Chocolate consumed on 2025-01-03" in result.output
