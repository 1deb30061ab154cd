"""Exceptions raised by the trigger diary."""


class TriggerDiaryError(Exception):
    """Base class for trigger diary errors."""

    pass


class AnalysisError(TriggerDiaryError):
    """The symptom series cannot be analyzed."""

    message = "analysis failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class NoDataError(AnalysisError):
    """No symptom records exist."""

    message = "no symptom data"


class InsufficientSeriesError(AnalysisError):
    """Fewer than two scored days, so there are no day-over-day deltas."""

    message = "insufficient data for spike detection"


class RecommendationError(TriggerDiaryError):
    """Recommendations could not be produced."""

    pass


class ProviderNotConfiguredError(RecommendationError):
    """No text-generation provider has an API key."""

    pass
