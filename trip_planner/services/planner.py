"""
Single-shot trip planning and the fast plan manifest.

Both paths degrade rather than fail when the model answers with something
that is not the expected JSON: the response is replaced with mock data and
a warning is logged. Provider failures (HTTP errors, timeouts) still
propagate to the caller.
"""
import logging
import random
import string
import time
from typing import Any, Optional

from pydantic import ValidationError

from ..config import AIConfig, get_ai_config
from ..errors import ResponseParseError
from ..models.travel import TravelPlanManifest, TripPlanningRequest, TripPlanningResponse
from .chunked_planner import ChunkedPlanner
from .llm_client import LLMClient
from .mock_data import MOCK_SECTION_BUILDERS, MockTripContext, mock_manifest, mock_trip_plan
from .prompts import generate_manifest_prompt, generate_trip_planning_prompt
from .response_parser import ParsePolicy, parse_json_response
from .tokens import calculate_token_budget, get_model_token_limit

logger = logging.getLogger(__name__)

MANIFEST_MAX_TOKENS = 1500
PLAN_CONFIDENCE = 0.9
PLAN_REASONING = "AI-generated travel plan based on your preferences and destination"

# A plan body must carry at least one of these to be usable
PLAN_SECTION_KEYS = ("neighborhoods", "placesToVisit", "weatherInfo", "itinerary")


def new_session_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"session-{int(time.time() * 1000)}-{suffix}"


class TripPlanner:
    """Produces full plans and manifests for a trip-planning request."""

    plan_policy = ParsePolicy.FALLBACK
    manifest_policy = ParsePolicy.FALLBACK

    def __init__(self, llm: LLMClient, config: Optional[AIConfig] = None):
        self.llm = llm
        self.config = config or get_ai_config()
        self.chunked = ChunkedPlanner(llm, self.config)

    def needs_chunking(self, prompt: str) -> bool:
        """True when one request cannot hold the configured response size."""
        if not self.config.enable_chunking:
            return False
        budget = calculate_token_budget(
            prompt,
            get_model_token_limit(self.config.model),
            self.config.max_tokens,
            self.llm.provider,
        )
        return budget.chunks_needed > 1

    async def generate_plan(self, request: TripPlanningRequest) -> TripPlanningResponse:
        prompt = generate_trip_planning_prompt(request)
        ctx = MockTripContext.from_request(request)

        if self.needs_chunking(prompt):
            logger.info(f"Plan for {request.destination.name} exceeds one request, generating by section")
            body = await self._generate_by_section(request, ctx)
        else:
            text = await self.llm.generate(prompt, max_tokens=self.config.max_tokens)
            body = self._plan_body(text, ctx)

        prefs = request.preferences
        return TripPlanningResponse(
            plan={"destination": request.destination.to_json_dict(), **body},
            reasoning=PLAN_REASONING,
            confidence=PLAN_CONFIDENCE,
            personalizations=[
                f"Customized for {request.traveler_type.name} traveler type",
                f"Tailored to {prefs.budget} budget",
                f"Optimized for {prefs.duration} trip duration",
            ],
        )

    async def _generate_by_section(self, request: TripPlanningRequest, ctx: MockTripContext) -> dict[str, Any]:
        assembled = await self.chunked.assemble_plan(request)
        for section in assembled.failed:
            logger.warning(f"Filling failed section {section} with mock data")
            assembled.sections[section] = MOCK_SECTION_BUILDERS[section](ctx)
        return assembled.data

    def _plan_body(self, text: str, ctx: MockTripContext) -> dict[str, Any]:
        try:
            body = parse_json_response(text, label="trip plan")
            if not any(key in body for key in PLAN_SECTION_KEYS):
                raise ResponseParseError("Trip plan is missing every expected section", preview=text[:200])
        except ResponseParseError as e:
            if self.plan_policy is ParsePolicy.RAISE:
                raise
            logger.warning(f"Using mock trip plan for {ctx.destination}: {e}")
            return mock_trip_plan(ctx)
        return body

    async def generate_manifest(self, request: TripPlanningRequest) -> TravelPlanManifest:
        session_id = new_session_id()
        started = time.monotonic()
        logger.info(f"Generating manifest for {request.destination.name}, session {session_id}")

        prompt = generate_manifest_prompt(request)
        text = await self.llm.generate(prompt, max_tokens=MANIFEST_MAX_TOKENS)

        try:
            parsed = parse_json_response(text, label="manifest")
            manifest = TravelPlanManifest.model_validate(
                {**parsed, "sessionId": session_id, "destination": request.destination}
            )
        except (ResponseParseError, ValidationError) as e:
            if self.manifest_policy is ParsePolicy.RAISE:
                raise
            logger.warning(f"Using mock manifest for {request.destination.name}: {e}")
            fallback = mock_manifest(MockTripContext.from_request(request))
            manifest = TravelPlanManifest.model_validate(
                {**fallback, "sessionId": session_id, "destination": request.destination}
            )

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.info(f"Generated manifest in {elapsed_ms:.0f}ms for session {session_id}")
        return manifest
