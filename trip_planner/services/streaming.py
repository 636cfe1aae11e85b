"""
Server-sent-events relay for one plan section.

Frames are ``data: <json>\\n\\n``; the stream ends with ``data: [DONE]\\n\\n``.
Text deltas are forwarded as they arrive and the accumulated text is parsed
as JSON exactly once, after the provider stream ends.
"""
import json
import logging
import time
from contextlib import aclosing
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from ..config import AIConfig, get_ai_config
from ..errors import LLMError, ResponseParseError
from ..models.travel import TripPlanningRequest
from .chunked_planner import get_chunk
from .llm_client import LLMClient
from .response_parser import parse_json_response, preview

logger = logging.getLogger(__name__)

DONE_FRAME = "data: [DONE]\n\n"

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def sse_event(event_type: str, **payload: Any) -> str:
    body = {"type": event_type, **payload, "timestamp": int(time.time() * 1000)}
    return f"data: {json.dumps(body)}\n\n"


async def _never_disconnected() -> bool:
    return False


class StreamingRelay:
    """Relays a provider's token stream for one section to the browser."""

    def __init__(self, llm: LLMClient, config: Optional[AIConfig] = None):
        self.llm = llm
        self.config = config or get_ai_config()

    async def relay(
        self,
        chunk_id: int,
        session_id: str,
        request: TripPlanningRequest,
        is_disconnected: Callable[[], Awaitable[bool]] = _never_disconnected,
    ) -> AsyncIterator[str]:
        chunk = get_chunk(chunk_id)
        prompt = chunk.prompt(request)
        logger.info(f"Starting streaming for chunk {chunk_id}, session {session_id}")

        yield sse_event("start", chunkId=chunk_id, sessionId=session_id)

        parts: list[str] = []
        try:
            async with aclosing(
                self.llm.stream(
                    prompt,
                    response_schema=chunk.schema,
                    schema_name=f"chunk_{chunk_id}_response",
                    max_tokens=self.config.chunk_token_limit,
                )
            ) as deltas:
                async for delta in deltas:
                    if await is_disconnected():
                        logger.info(f"Client disconnected during chunk {chunk_id}, session {session_id}")
                        yield sse_event("error", error="Client disconnected")
                        return
                    if delta.refusal:
                        yield sse_event("refusal", refusal=delta.refusal)
                    if delta.content:
                        parts.append(delta.content)
                        yield sse_event("content_delta", delta=delta.content)
        except LLMError as e:
            logger.error(f"Error in chunk {chunk_id}: {e}")
            yield sse_event("error", error=str(e))
            yield DONE_FRAME
            return

        accumulated = "".join(parts)
        try:
            data = parse_json_response(accumulated, label=f"chunk {chunk_id}")
        except ResponseParseError as e:
            yield sse_event(
                "error",
                error="Failed to parse final JSON",
                details=str(e),
                preview=preview(accumulated),
            )
        else:
            logger.info(f"Completed chunk {chunk_id} for session {session_id}")
            yield sse_event("complete", chunkId=chunk_id, sessionId=session_id, data=data)

        yield DONE_FRAME
