"""Recommendation composer backed by a text-generation provider."""

import json
import logging
from typing import Optional, Protocol

from ..exceptions import ProviderNotConfiguredError, RecommendationError
from ..models.analysis import TriggerAggregate
from ..models.records import RecordSet
from ..utils.config import Settings, get_settings

log = logging.getLogger(__name__)

RECOMMENDATION_COUNT = 3


class RecommendationComposer(Protocol):
    """Anything that can turn a trigger aggregate into advice."""

    def compose(self, aggregate: TriggerAggregate, records: RecordSet) -> list[str]:
        ...


class HealthAdvisor:
    """
    Asks Claude (preferred) or OpenAI for three short recommendations
    based on the trigger aggregate and the raw health log.

    IMPORTANT: This is not medical advice. Always consult a real doctor.
    """

    SYSTEM_PROMPT = """You are a supportive health coach helping someone manage chronic symptom flare-ups (nausea, fatigue, pain).
You will receive statistics about lifestyle factors that were observed on the day before their symptom spikes,
together with their most recent sleep, diet, menstrual and symptom logs.

IMPORTANT GUIDELINES:
- You are NOT a replacement for a real doctor
- Don't diagnose conditions
- Base every suggestion on the triggers and records provided
- Keep each recommendation to one or two short sentences

Respond with ONLY a JSON array of exactly 3 strings, no other text."""

    # Raw records of each kind sent along with the aggregate
    RECENT_RECORDS = 7

    def __init__(
        self,
        settings: Optional[Settings] = None,
        anthropic_client=None,
        openai_client=None,
    ):
        self.settings = settings or get_settings()
        self._anthropic_client = anthropic_client
        self._openai_client = openai_client

    @property
    def anthropic_client(self):
        if self._anthropic_client is None and self.settings.anthropic_api_key:
            import anthropic
            self._anthropic_client = anthropic.Anthropic(api_key=self.settings.anthropic_api_key)
        return self._anthropic_client

    @property
    def openai_client(self):
        if self._openai_client is None and self.settings.openai_api_key:
            from openai import OpenAI
            self._openai_client = OpenAI(api_key=self.settings.openai_api_key)
        return self._openai_client

    @property
    def has_claude(self) -> bool:
        return self._anthropic_client is not None or self.settings.has_claude

    @property
    def has_openai(self) -> bool:
        return self._openai_client is not None or self.settings.has_openai

    @property
    def is_configured(self) -> bool:
        return self.has_claude or self.has_openai

    def build_prompt(self, aggregate: TriggerAggregate, records: RecordSet) -> str:
        """Summarize triggers and recent records for the provider."""
        n = self.RECENT_RECORDS
        parts = ["=== TRIGGERS OBSERVED THE DAY BEFORE SYMPTOM SPIKES ==="]

        parts.append(f"Low sleep nights: {aggregate.low_sleep.count}")
        for label, counts in (
            ("Food items", aggregate.food_items.counts),
            ("Period events", aggregate.menstrual_events.counts),
            ("Flow levels", aggregate.flow_levels.counts),
        ):
            if counts:
                ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
                parts.append(f"{label}: " + ", ".join(f"{k} ({v})" for k, v in ranked))
            else:
                parts.append(f"{label}: none")

        parts.append("")
        parts.append("=== RECENT RECORDS ===")
        for s in records.sleep[-n:]:
            parts.append(f"  {s.date}: slept {s.duration:.1f}h")
        for d in records.diet[-n:]:
            parts.append(f"  {d.date}: {d.meal or 'meal'} - {', '.join(d.items) or 'nothing listed'}")
        for m in records.menstrual[-n:]:
            parts.append(f"  {m.date}: period {m.period_event}, flow {m.flow_level}")
        for sym in records.symptoms[-n:]:
            parts.append(
                f"  {sym.date}: nausea {sym.nausea}/10, fatigue {sym.fatigue}/10, pain {sym.pain}/10"
            )

        return "\n".join(parts)

    def compose(self, aggregate: TriggerAggregate, records: RecordSet) -> list[str]:
        """
        Get exactly three recommendations.

        Raises:
            ProviderNotConfiguredError: no API key for either provider
            RecommendationError: every provider failed or returned bad output
        """
        if not self.is_configured:
            raise ProviderNotConfiguredError(
                "No AI provider configured. Add ANTHROPIC_API_KEY or OPENAI_API_KEY to .env"
            )

        prompt = self.build_prompt(aggregate, records)

        text = None
        if self.has_claude:
            text = self._try_claude(prompt)
        if text is None and self.has_openai:
            text = self._try_openai(prompt)
        if text is None:
            raise RecommendationError("All AI providers failed to respond")

        return parse_recommendations(text)

    def _try_claude(self, prompt: str) -> Optional[str]:
        """Try to get response from Claude."""
        try:
            response = self.anthropic_client.messages.create(
                model=self.settings.anthropic_model,
                max_tokens=500,
                system=self.SYSTEM_PROMPT,
                messages=[{"role": "user", "content": prompt}],
            )
            return response.content[0].text
        except Exception as e:
            log.warning("Claude recommendation error: %s", e)
            return None

    def _try_openai(self, prompt: str) -> Optional[str]:
        """Try to get response from OpenAI."""
        try:
            response = self.openai_client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {"role": "system", "content": self.SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=500,
                temperature=0.7,
            )
            return response.choices[0].message.content
        except Exception as e:
            log.warning("OpenAI recommendation error: %s", e)
            return None


def parse_recommendations(text: str) -> list[str]:
    """Parse a JSON array of exactly three strings, tolerating code fences."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]

    try:
        data = json.loads(text.strip())
    except json.JSONDecodeError as e:
        raise RecommendationError(f"Provider returned invalid JSON: {e}") from e

    if (
        not isinstance(data, list)
        or len(data) != RECOMMENDATION_COUNT
        or not all(isinstance(item, str) for item in data)
    ):
        raise RecommendationError(
            f"Expected a JSON array of {RECOMMENDATION_COUNT} strings, got: {data!r}"
        )

    return [item.strip() for item in data]
