"""
Mock LLM Client - offline stand-in for a real provider.

Reads the prompt to work out what is being asked (manifest, destination
recommendations, one or more plan sections) and answers with JSON built
from the mock data, after a short random delay.
"""
import asyncio
import json
import logging
import random
import re
from typing import Any, Optional

from ..config import settings
from .llm_client import LLMClient
from .mock_data import (
    MOCK_DESTINATIONS,
    MOCK_SECTION_BUILDERS,
    MockTripContext,
    mock_destination_summary,
    mock_manifest,
)

logger = logging.getLogger(__name__)

# Template key that identifies each section inside a prompt
SECTION_MARKERS = {
    "locations": '"neighborhoods"',
    "attractions": '"placesToVisit"',
    "practical": '"weatherInfo"',
    "cultural": '"itinerary"',
}

MAX_MOCK_DESTINATIONS = 3


class MockLLMClient(LLMClient):
    """Answers prompts with synthesized JSON instead of calling a provider."""

    provider = "mock"

    def __init__(self, max_delay: Optional[float] = None):
        self.model = "mock"
        self.max_delay = settings.ai_mock_max_delay if max_delay is None else max_delay

    async def generate(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        response_schema: Optional[dict[str, Any]] = None,
        schema_name: str = "response",
    ) -> str:
        if self.max_delay > 0:
            await asyncio.sleep(random.uniform(0, self.max_delay))

        if "travel plan manifest" in prompt:
            logger.info("Mock: generating manifest")
            return json.dumps(mock_manifest(self._extract_context(prompt)))

        if "destination recommendations" in prompt:
            logger.info("Mock: generating destination recommendations")
            return json.dumps(self._recommend_destinations(prompt))

        ctx = self._extract_context(prompt)
        sections = [name for name, marker in SECTION_MARKERS.items() if marker in prompt]
        if not sections:
            sections = list(MOCK_SECTION_BUILDERS)
        logger.info(f"Mock: generating sections {sections} for {ctx.destination}")

        payload: dict[str, Any] = {}
        for name in sections:
            payload.update(MOCK_SECTION_BUILDERS[name](ctx))
        return json.dumps(payload)

    def _extract_context(self, prompt: str) -> MockTripContext:
        """Pull destination and preference facts back out of the prompt text."""
        destination, country = "Your Destination", ""
        match = re.search(r"^DESTINATION: (.+)$", prompt, re.MULTILINE)
        if match:
            name, _, country = match.group(1).strip().rstrip(",").rpartition(", ")
            destination = name or country
            if not name:
                country = ""

        days = 7
        match = re.search(r"^(?:- Duration|DURATION): \s*(\d+)", prompt, re.MULTILINE)
        if match and int(match.group(1)) > 0:
            days = int(match.group(1))

        special = re.search(r"^- Special Activities Requested: (.*)$", prompt, re.MULTILINE)

        return MockTripContext(
            destination=destination,
            country=country,
            days=days,
            want_restaurants="Wants Restaurant Recommendations: No" not in prompt,
            want_bars="Wants Bar/Nightlife Recommendations: Yes" in prompt,
            activities=[special.group(1).lower()] if special and special.group(1) else [],
        )

    def _recommend_destinations(self, prompt: str) -> dict[str, Any]:
        excluded = {name.lower() for name in self._excluded_destinations(prompt)}
        available = [d for d in MOCK_DESTINATIONS if d["name"].lower() not in excluded]
        if not available:
            available = MOCK_DESTINATIONS

        picked = random.sample(available, min(MAX_MOCK_DESTINATIONS, len(available)))
        return {
            "destinations": [dict(d) for d in picked],
            "summary": mock_destination_summary(),
        }

    @staticmethod
    def _excluded_destinations(prompt: str) -> list[str]:
        marker = "## PREVIOUS RECOMMENDATIONS TO AVOID"
        if marker not in prompt:
            return []
        block = prompt.split(marker, 1)[1].split("\n\n", 1)[0]
        return [line[2:].strip() for line in block.splitlines() if line.startswith("- ")]
