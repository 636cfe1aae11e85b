"""
AI endpoints - destination recommendations and trip plans.
"""
import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from ..config import get_ai_config
from ..errors import APIError, LLMError, ResponseParseError
from ..models.travel import DestinationRequest, TripPlanningRequest
from ..services.chunked_planner import ChunkedPlanner, list_chunks, parse_chunk_id
from ..services.destination_recommender import DestinationRecommender
from ..services.llm_client import LLMClient, get_llm_client
from ..services.planner import TripPlanner, new_session_id
from ..services.streaming import SSE_HEADERS, StreamingRelay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


@router.get("/test")
async def ai_config_status():
    """Report the active provider configuration without exposing the key."""
    config = get_ai_config()
    return {
        "provider": config.provider,
        "hasApiKey": bool(config.api_key),
        "model": config.model,
        "maxTokens": config.max_tokens,
        "temperature": config.temperature,
        "enableChunking": config.enable_chunking,
        "chunkTokenLimit": config.chunk_token_limit,
        "apiKeyPreview": f"{config.api_key[:8]}..." if config.api_key else "Not set",
    }


@router.post("/destinations")
async def recommend_destinations(request: DestinationRequest, llm: LLMClient = Depends(get_llm_client)):
    """Recommend destinations for a traveler persona."""
    started = time.monotonic()
    try:
        response = await DestinationRecommender(llm).recommend(request)
    except (LLMError, ResponseParseError) as e:
        logger.error(f"Destination recommendation failed after {_elapsed_ms(started)}ms: {e}")
        raise APIError(500, "Failed to generate destination recommendations", details=str(e))

    logger.info(f"Recommended {len(response.destinations)} destinations in {_elapsed_ms(started)}ms")
    return response.to_json_dict()


@router.post("/trip-planning")
async def plan_trip(request: TripPlanningRequest, llm: LLMClient = Depends(get_llm_client)):
    """Generate a complete trip plan in one call."""
    started = time.monotonic()
    logger.info(f"Trip plan requested for {request.destination.name} ({request.traveler_type.id})")
    try:
        response = await TripPlanner(llm).generate_plan(request)
    except (LLMError, ResponseParseError) as e:
        logger.error(f"Trip planning failed after {_elapsed_ms(started)}ms: {e}")
        raise APIError(500, "Failed to generate trip plan", details=str(e))

    logger.info(f"Trip plan for {request.destination.name} ready in {_elapsed_ms(started)}ms")
    return response.to_json_dict()


@router.post("/trip-planning/manifest")
async def plan_manifest(request: TripPlanningRequest, llm: LLMClient = Depends(get_llm_client)):
    """Generate the quick plan preview shown while sections load."""
    try:
        manifest = await TripPlanner(llm).generate_manifest(request)
    except (LLMError, ResponseParseError) as e:
        logger.error(f"Manifest generation failed for {request.destination.name}: {e}")
        raise APIError(500, "Failed to generate travel plan manifest", details=str(e))
    return manifest.to_json_dict()


@router.post("/trip-planning/chunked")
async def plan_chunk(
    request: TripPlanningRequest,
    chunk: Optional[str] = Query(default=None),
    llm: LLMClient = Depends(get_llm_client),
):
    """
    Generate one section of a trip plan.

    Without a ``chunk`` query parameter the available sections are listed
    instead, so the client can request them individually.
    """
    logger.info(f"Chunked request: {f'chunk {chunk}' if chunk else 'session init'}")
    if chunk is None:
        return list_chunks()

    chunk_id = parse_chunk_id(chunk)
    started = time.monotonic()
    try:
        result = await ChunkedPlanner(llm).generate_chunk(chunk_id, request)
    except (LLMError, ResponseParseError) as e:
        logger.error(f"Chunk {chunk_id} failed after {_elapsed_ms(started)}ms: {e}")
        raise APIError(500, "Failed to generate chunked trip plan", details=str(e), chunkId=chunk_id)

    logger.info(f"Chunk {chunk_id} generated in {_elapsed_ms(started)}ms")
    return result.to_json_dict()


@router.post("/trip-planning/stream")
async def stream_chunk(
    request: Request,
    chunk: str = Query(default="1"),
    session_id: Optional[str] = Query(default=None, alias="sessionId"),
    llm: LLMClient = Depends(get_llm_client),
):
    """Stream one section as server-sent events."""
    if not llm.supports_streaming:
        return {
            "message": f"{llm.provider.capitalize()} mode doesn't support streaming",
            "useRegularEndpoint": True,
        }

    chunk_id = parse_chunk_id(chunk)
    try:
        payload = await request.json()
    except ValueError:
        raise APIError(400, "Invalid JSON data")
    try:
        trip_request = TripPlanningRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    relay = StreamingRelay(llm)
    return StreamingResponse(
        relay.relay(chunk_id, session_id or new_session_id(), trip_request, request.is_disconnected),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
