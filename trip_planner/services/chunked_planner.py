"""
Chunked trip planning.

A full plan is split into four independently prompted sections. Each
section is one provider call with its own token budget; sections share no
state and can be requested in any order or concurrently. Parse failures
are surfaced to the caller rather than replaced with mock data.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..config import AIConfig, get_ai_config
from ..errors import APIError, LLMError, ResponseParseError
from ..models.travel import ChunkInfo, ChunkResult, TripPlanningRequest
from .llm_client import LLMClient
from .prompts import (
    generate_cultural_prompt,
    generate_food_prompt,
    generate_locations_prompt,
    generate_practical_prompt,
)
from .response_parser import parse_json_response
from .schemas import SECTION_SCHEMAS
from .tokens import calculate_max_tokens_for_request, get_model_token_limit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanChunk:
    """One fixed section of a trip plan."""
    id: int
    section: str
    description: str
    prompt: Callable[[TripPlanningRequest], str]

    @property
    def schema(self) -> dict[str, Any]:
        return SECTION_SCHEMAS[self.section]

    def info(self) -> ChunkInfo:
        return ChunkInfo(
            chunk_id=self.id,
            total_chunks=len(TRAVEL_PLAN_CHUNKS),
            section=self.section,
            description=self.description,
        )


TRAVEL_PLAN_CHUNKS: tuple[PlanChunk, ...] = (
    PlanChunk(1, "locations", "Neighborhoods, hotels, restaurants, and bars", generate_locations_prompt),
    PlanChunk(2, "attractions", "Places to visit and must-try local food and drink", generate_food_prompt),
    PlanChunk(3, "practical", "Weather, safety, transportation, and money", generate_practical_prompt),
    PlanChunk(4, "cultural", "Activities, history, and detailed itinerary", generate_cultural_prompt),
)

VALID_CHUNK_IDS = [c.id for c in TRAVEL_PLAN_CHUNKS]


def invalid_chunk_error() -> APIError:
    return APIError(400, "Invalid chunk ID", validChunks=VALID_CHUNK_IDS)


def get_chunk(chunk_id: int) -> PlanChunk:
    for chunk in TRAVEL_PLAN_CHUNKS:
        if chunk.id == chunk_id:
            return chunk
    logger.error(f"Invalid chunk ID: {chunk_id}")
    raise invalid_chunk_error()


def parse_chunk_id(raw: str) -> int:
    """Parse a ``chunk`` query value, rejecting anything that is not a known id."""
    try:
        chunk_id = int(raw.strip())
    except (AttributeError, ValueError):
        logger.error(f"Invalid chunk ID: {raw!r}")
        raise invalid_chunk_error()
    return get_chunk(chunk_id).id


def list_chunks() -> dict[str, Any]:
    return {
        "chunks": [
            {"id": c.id, "section": c.section, "description": c.description}
            for c in TRAVEL_PLAN_CHUNKS
        ],
        "totalChunks": len(TRAVEL_PLAN_CHUNKS),
    }


@dataclass
class AssembledPlan:
    """Result of generating every section. Sections whose output did not parse are reported, not raised."""
    sections: dict[str, dict[str, Any]] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def data(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for chunk in TRAVEL_PLAN_CHUNKS:
            merged.update(self.sections.get(chunk.section, {}))
        return merged

    @property
    def is_complete(self) -> bool:
        return not self.failed and len(self.sections) == len(TRAVEL_PLAN_CHUNKS)


class ChunkedPlanner:
    """Generates trip-plan sections one provider call at a time."""

    def __init__(self, llm: LLMClient, config: Optional[AIConfig] = None):
        self.llm = llm
        self.config = config or get_ai_config()

    def token_budget(self, prompt: str) -> int:
        """
        Response budget for one section.

        The model-derived ceiling is capped by the configured chunk token limit,
        so the smaller of the two always wins.
        """
        model_limit = get_model_token_limit(self.config.model)
        model_budget = calculate_max_tokens_for_request(prompt, model_limit, self.llm.provider)
        return min(model_budget, self.config.chunk_token_limit)

    async def generate_chunk(self, chunk_id: int, request: TripPlanningRequest) -> ChunkResult:
        chunk = get_chunk(chunk_id)
        logger.info(f"Generating {chunk.section} for {request.destination.name}")

        prompt = chunk.prompt(request)
        max_tokens = self.token_budget(prompt)

        try:
            text = await self.llm.generate(
                prompt,
                max_tokens=max_tokens,
                response_schema=chunk.schema,
                schema_name=f"chunk_{chunk.id}_response",
            )
        except LLMError as e:
            logger.error(f"AI call failed for chunk {chunk.id}: {e}")
            raise
        logger.info(f"AI response received for chunk {chunk.id}, length: {len(text)} chars")

        data = parse_json_response(text, label=f"chunk {chunk.id}")
        logger.info(f"Chunk {chunk.id} completed successfully")
        return ChunkResult(chunk=chunk.info(), data=data, is_complete=False)

    async def assemble_plan(self, request: TripPlanningRequest) -> AssembledPlan:
        """
        Generate all sections concurrently, at most ``max_chunks`` in flight.

        Provider errors propagate. A section whose output does not parse is
        recorded in ``failed`` and the others are kept.
        """
        semaphore = asyncio.Semaphore(self.config.max_chunks)

        async def run(chunk: PlanChunk) -> ChunkResult:
            async with semaphore:
                return await self.generate_chunk(chunk.id, request)

        results = await asyncio.gather(
            *(run(chunk) for chunk in TRAVEL_PLAN_CHUNKS),
            return_exceptions=True,
        )

        assembled = AssembledPlan()
        for chunk, result in zip(TRAVEL_PLAN_CHUNKS, results):
            if isinstance(result, ResponseParseError):
                logger.warning(f"Section {chunk.section} returned unparseable output: {result}")
                assembled.failed[chunk.section] = str(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                assembled.sections[chunk.section] = result.data
        return assembled
