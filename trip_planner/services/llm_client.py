"""
LLM Client - one interface over the mock, OpenAI and Anthropic backends.

Every backend answers ``generate(prompt, max_tokens) -> str``. HTTP failures
and timeouts are raised as ``LLMError`` / ``LLMTimeoutError`` on the first
failure; nothing here retries.
"""
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional

import anthropic
import openai
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from ..config import DEFAULT_ANTHROPIC_MODEL, AIConfig, get_ai_config, model_supports_temperature
from ..errors import LLMError, LLMTimeoutError

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response from AI"
OPENAI_TIMEOUT_SECONDS = 120.0
ANTHROPIC_TIMEOUT_SECONDS = 60.0


@dataclass
class StreamDelta:
    """One increment of a streamed completion."""
    content: str = ""
    refusal: Optional[str] = None


class LLMClient:
    """Base class for provider backends."""

    provider = "base"
    supports_streaming = False

    async def generate(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        response_schema: Optional[dict[str, Any]] = None,
        schema_name: str = "response",
    ) -> str:
        """
        Send a single user prompt and return the raw text of the answer.

        Args:
            prompt: The full prompt text
            max_tokens: Response budget; the configured default when omitted
            response_schema: Strict JSON schema, used by backends that support it
            schema_name: Name reported alongside the schema

        Returns:
            The model's text, or "No response from AI" when it returned nothing
        """
        raise NotImplementedError

    def stream(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        schema_name: str,
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[StreamDelta]:
        raise LLMError(f"Streaming is not supported by the {self.provider} provider")


class OpenAIClient(LLMClient):
    """Chat completions against the OpenAI API (or a compatible base URL)."""

    provider = "openai"
    supports_streaming = True

    def __init__(self, config: AIConfig, client: Optional[AsyncOpenAI] = None):
        self.config = config
        self.model = config.model
        self.client = client or AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=OPENAI_TIMEOUT_SECONDS,
            max_retries=0,
        )
        logger.info(f"Initializing OpenAIClient with model={self.model}")

    def _request_kwargs(self, prompt: str, max_tokens: Optional[int]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens or self.config.max_tokens,
        }
        if model_supports_temperature(self.model):
            kwargs["temperature"] = self.config.temperature
        return kwargs

    @staticmethod
    def _json_schema_format(schema: dict[str, Any], name: str) -> dict[str, Any]:
        return {
            "type": "json_schema",
            "json_schema": {"name": name, "strict": True, "schema": schema},
        }

    async def generate(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        response_schema: Optional[dict[str, Any]] = None,
        schema_name: str = "response",
    ) -> str:
        kwargs = self._request_kwargs(prompt, max_tokens)
        if response_schema is not None:
            kwargs["response_format"] = self._json_schema_format(response_schema, schema_name)

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except openai.APITimeoutError as e:
            logger.warning(f"OpenAI API request timed out after {OPENAI_TIMEOUT_SECONDS:.0f}s")
            raise LLMTimeoutError(f"OpenAI API request timed out after {OPENAI_TIMEOUT_SECONDS:.0f}s") from e
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API error: status={e.status_code} message={e.message}")
            raise LLMError(f"OpenAI API error: {_status_text(e.response, e.status_code)}") from e
        except openai.APIConnectionError as e:
            logger.error(f"OpenAI connection error: {e}")
            raise LLMError(f"OpenAI API error: {e}") from e

        if not response.choices:
            return NO_RESPONSE
        return response.choices[0].message.content or NO_RESPONSE

    async def stream(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        schema_name: str,
        max_tokens: Optional[int] = None,
    ) -> AsyncIterator[StreamDelta]:
        kwargs = self._request_kwargs(prompt, max_tokens)
        kwargs["response_format"] = self._json_schema_format(response_schema, schema_name)
        kwargs["stream"] = True

        try:
            completion = await self.client.chat.completions.create(**kwargs)
            async for chunk in completion:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                content = delta.content or ""
                refusal = getattr(delta, "refusal", None)
                if content or refusal:
                    yield StreamDelta(content=content, refusal=refusal)
        except openai.APITimeoutError as e:
            raise LLMTimeoutError(f"OpenAI API request timed out after {OPENAI_TIMEOUT_SECONDS:.0f}s") from e
        except openai.APIStatusError as e:
            raise LLMError(f"OpenAI API error: {_status_text(e.response, e.status_code)}") from e
        except openai.APIConnectionError as e:
            raise LLMError(f"OpenAI API error: {e}") from e


class AnthropicClient(LLMClient):
    """Messages API against Anthropic."""

    provider = "anthropic"

    def __init__(self, config: AIConfig, client: Optional[AsyncAnthropic] = None):
        self.config = config
        # An OpenAI model name is the global default; Anthropic needs its own
        self.model = config.model if config.model.startswith("claude") else DEFAULT_ANTHROPIC_MODEL
        self.client = client or AsyncAnthropic(
            api_key=config.api_key,
            timeout=ANTHROPIC_TIMEOUT_SECONDS,
            max_retries=0,
        )
        logger.info(f"Initializing AnthropicClient with model={self.model}")

    async def generate(
        self,
        prompt: str,
        max_tokens: Optional[int] = None,
        response_schema: Optional[dict[str, Any]] = None,
        schema_name: str = "response",
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens or self.config.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if model_supports_temperature(self.model):
            kwargs["temperature"] = self.config.temperature

        try:
            message = await self.client.messages.create(**kwargs)
        except anthropic.APITimeoutError as e:
            logger.warning(f"Anthropic API request timed out after {ANTHROPIC_TIMEOUT_SECONDS:.0f}s")
            raise LLMTimeoutError(f"Anthropic API request timed out after {ANTHROPIC_TIMEOUT_SECONDS:.0f}s") from e
        except anthropic.APIStatusError as e:
            logger.error(f"Anthropic API error: status={e.status_code} message={e.message}")
            raise LLMError(f"Anthropic API error: {_status_text(e.response, e.status_code)}") from e
        except anthropic.APIConnectionError as e:
            logger.error(f"Anthropic connection error: {e}")
            raise LLMError(f"Anthropic API error: {e}") from e

        for block in message.content or []:
            text = getattr(block, "text", None)
            if text:
                return text
        return NO_RESPONSE


def _status_text(response: Any, status_code: int) -> str:
    reason = getattr(response, "reason_phrase", "") if response is not None else ""
    return reason or str(status_code)


def create_llm_client(config: Optional[AIConfig] = None) -> LLMClient:
    """
    Build the backend for the configured provider.

    A real provider without an API key degrades to the mock backend.
    """
    from .mock_llm import MockLLMClient

    config = config or get_ai_config()

    if config.provider == "mock":
        return MockLLMClient()

    if not config.api_key:
        logger.warning(f"No API key configured for provider '{config.provider}', using mock responses")
        return MockLLMClient()

    if config.provider == "openai":
        return OpenAIClient(config)
    if config.provider == "anthropic":
        return AnthropicClient(config)

    raise LLMError(f"Unsupported AI provider: {config.provider}")


# Global client instance
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client."""
    global _llm_client
    if _llm_client is None:
        _llm_client = create_llm_client()
    return _llm_client


def reset_llm_client() -> None:
    """Forget the cached client so the next call re-reads settings."""
    global _llm_client
    _llm_client = None
