"""
Insight Service - natural-language weather summaries via OpenAI.

Builds either a general summary prompt or a question-answering prompt
from the raw weather payload the dashboard already has.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Optional

from openai import OpenAI, OpenAIError

from app.config import get_settings
from app.core.exceptions import ProviderNotConfiguredError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

PROVIDER = "OpenAI"
FALLBACK_INSIGHT = "Unable to generate weather insights at this time."


class InsightService:
    """Wraps the chat completions API for weather insights."""

    SYSTEM_PROMPT = (
        "You are a helpful weather assistant. Provide clear, practical advice "
        "based on weather data. Be conversational and focus on actionable insights."
    )

    def __init__(
        self,
        api_key: Optional[str] = None,
        chat_model: Optional[str] = None,
        client=None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.chat_model = chat_model or settings.openai_model
        self.max_tokens = settings.insight_max_tokens
        self.temperature = settings.insight_temperature

        if client is not None:
            self.client = client
        elif self.api_key:
            self.client = OpenAI(api_key=self.api_key)
        else:
            self.client = None

    @staticmethod
    def build_prompt(weather_data: dict, location: str, question: Optional[str] = None) -> str:
        payload = json.dumps(weather_data, indent=2)

        if question:
            return (
                f'Answer this weather question based on the current conditions: "{question}"\n\n'
                f"Weather data for {location}:\n{payload}\n\n"
                "Provide a helpful, conversational response."
            )

        return (
            f"Analyze the weather conditions for {location} and provide intelligent insights, "
            "recommendations, and a brief summary. Include:\n\n"
            "1. Current conditions summary\n"
            "2. What to expect today/tomorrow\n"
            "3. Activity recommendations\n"
            "4. What to wear/bring\n"
            "5. Any notable weather patterns\n\n"
            f"Weather data:\n{payload}\n\n"
            "Keep the response conversational, helpful, and under 200 words."
        )

    def generate(self, weather_data: dict, location: str, question: Optional[str] = None) -> dict:
        """Return {"insight": str, "timestamp": ISO-8601}."""
        if self.client is None:
            raise ProviderNotConfiguredError(PROVIDER)

        try:
            response = self.client.chat.completions.create(
                model=self.chat_model,
                messages=[
                    {"role": "system", "content": self.SYSTEM_PROMPT},
                    {"role": "user", "content": self.build_prompt(weather_data, location, question)},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.warning("Insight generation failed for %s: %s", location, e)
            raise UpstreamUnavailableError(PROVIDER, message=f"{PROVIDER} API error: {e}") from e

        insight = None
        if response.choices:
            insight = response.choices[0].message.content
        return {
            "insight": insight or FALLBACK_INSIGHT,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


_insight_service = None


def get_insight_service() -> InsightService:
    """Get or create insight service instance."""
    global _insight_service
    if _insight_service is None:
        _insight_service = InsightService()
    return _insight_service
