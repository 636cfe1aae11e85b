"""
Token estimation helpers.

Counts are a character-based heuristic, not a real tokenizer: roughly four
characters per token for OpenAI models and 3.5 for Anthropic models.
"""
import math
from dataclasses import dataclass


CHARS_PER_TOKEN = {
    "openai": 4.0,
    "anthropic": 3.5,
}

MODEL_TOKEN_LIMITS = {
    "gpt-4": 8192,
    "gpt-4-32k": 32768,
    "gpt-4-turbo": 128000,
    "gpt-4o": 128000,
    "gpt-3.5-turbo": 4096,
    "gpt-3.5-turbo-16k": 16384,
    "claude-3-haiku": 200000,
    "claude-3-sonnet": 200000,
    "claude-3-opus": 200000,
    "claude-3-sonnet-20240229": 200000,
    "claude-3.5-sonnet": 200000,
}

DEFAULT_MODEL_TOKEN_LIMIT = 4096
MIN_RESPONSE_TOKENS = 500
REQUEST_OVERHEAD_TOKENS = 100
BUDGET_SAFETY_BUFFER = 200


@dataclass
class TokenEstimate:
    tokens: int
    characters: int
    is_approximate: bool = True


@dataclass
class TokenBudget:
    total_tokens: int
    prompt_tokens: int
    response_tokens: int
    chunks_needed: int
    tokens_per_chunk: int


def _divisor(provider: str) -> float:
    # Mock mode budgets like OpenAI
    return CHARS_PER_TOKEN.get(provider, CHARS_PER_TOKEN["openai"])


def estimate_tokens(text: str, provider: str = "openai") -> TokenEstimate:
    """Estimate the token count of ``text`` for the given provider."""
    characters = len(text or "")
    return TokenEstimate(
        tokens=math.ceil(characters / _divisor(provider)),
        characters=characters,
    )


def would_exceed_token_limit(
    prompt: str,
    max_tokens: int,
    provider: str = "openai",
    reserve_for_response: int = 2000,
) -> bool:
    """True when the prompt plus a response reserve does not fit in ``max_tokens``."""
    prompt_tokens = estimate_tokens(prompt, provider).tokens
    return prompt_tokens + reserve_for_response > max_tokens


def calculate_max_tokens_for_request(prompt: str, model_limit: int, provider: str = "openai") -> int:
    """Largest response budget the model can take after the prompt, never below 500."""
    prompt_tokens = estimate_tokens(prompt, provider).tokens
    available = model_limit - prompt_tokens - REQUEST_OVERHEAD_TOKENS
    return max(MIN_RESPONSE_TOKENS, available)


def get_model_token_limit(model: str) -> int:
    return MODEL_TOKEN_LIMITS.get(model, DEFAULT_MODEL_TOKEN_LIMIT)


def chunk_text_by_tokens(text: str, max_tokens_per_chunk: int, provider: str = "openai") -> list[str]:
    """
    Split text on line boundaries into pieces that each fit the token limit.

    A single line longer than the limit is kept whole in its own piece.
    """
    chunks: list[str] = []
    current: list[str] = []
    current_tokens = 0

    for line in text.split("\n"):
        line_tokens = estimate_tokens(line + "\n", provider).tokens
        if current and current_tokens + line_tokens > max_tokens_per_chunk:
            chunks.append("\n".join(current))
            current = []
            current_tokens = 0
        current.append(line)
        current_tokens += line_tokens

    if current:
        chunks.append("\n".join(current))
    return chunks


def calculate_token_budget(
    prompt: str,
    model_limit: int,
    target_response_tokens: int,
    provider: str = "openai",
) -> TokenBudget:
    """
    Work out how many requests are needed to produce ``target_response_tokens``.

    If the prompt and the whole target fit in one request the budget is a
    single chunk. Otherwise the target is divided evenly across as many
    chunks as the remaining headroom requires.
    """
    prompt_tokens = estimate_tokens(prompt, provider).tokens
    available = model_limit - BUDGET_SAFETY_BUFFER

    if prompt_tokens + target_response_tokens <= available:
        return TokenBudget(
            total_tokens=available,
            prompt_tokens=prompt_tokens,
            response_tokens=target_response_tokens,
            chunks_needed=1,
            tokens_per_chunk=target_response_tokens,
        )

    max_response = max(MIN_RESPONSE_TOKENS, available - prompt_tokens)
    chunks_needed = max(1, math.ceil(target_response_tokens / max_response))
    tokens_per_chunk = target_response_tokens // chunks_needed

    return TokenBudget(
        total_tokens=available,
        prompt_tokens=prompt_tokens,
        response_tokens=target_response_tokens,
        chunks_needed=chunks_needed,
        tokens_per_chunk=tokens_per_chunk,
    )
