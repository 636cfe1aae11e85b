"""Tests for token estimation and budgeting."""
from trip_planner.services.tokens import (
    calculate_max_tokens_for_request,
    calculate_token_budget,
    chunk_text_by_tokens,
    estimate_tokens,
    get_model_token_limit,
    would_exceed_token_limit,
)


class TestEstimateTokens:
    """Test the character-based token heuristic."""

    def test_openai_four_chars_per_token(self):
        """OpenAI text is counted at four characters per token."""
        estimate = estimate_tokens("a" * 400, "openai")
        assert estimate.tokens == 100
        assert estimate.characters == 400
        assert estimate.is_approximate

    def test_anthropic_three_and_a_half_chars_per_token(self):
        """Anthropic text is counted at 3.5 characters per token."""
        assert estimate_tokens("a" * 350, "anthropic").tokens == 100

    def test_rounds_up(self):
        """Partial tokens count as a whole token."""
        assert estimate_tokens("abcde", "openai").tokens == 2

    def test_mock_provider_counts_like_openai(self):
        """Providers without their own ratio use the OpenAI ratio."""
        assert estimate_tokens("a" * 40, "mock").tokens == 10

    def test_empty_text(self):
        """Empty text has no tokens."""
        assert estimate_tokens("").tokens == 0


class TestLimits:
    """Test the per-request limit helpers."""

    def test_would_exceed_with_default_reserve(self):
        """The default reserve for the response is 2000 tokens."""
        prompt = "a" * 4000  # 1000 tokens
        assert not would_exceed_token_limit(prompt, 3000)
        assert would_exceed_token_limit(prompt, 2999)

    def test_would_exceed_with_custom_reserve(self):
        """A smaller reserve leaves more room for the prompt."""
        assert not would_exceed_token_limit("a" * 4000, 1500, reserve_for_response=500)

    def test_max_tokens_after_prompt(self):
        """Response budget is the model limit minus prompt and overhead."""
        assert calculate_max_tokens_for_request("a" * 400, 8192) == 8192 - 100 - 100

    def test_max_tokens_floor(self):
        """The response budget never drops below 500."""
        assert calculate_max_tokens_for_request("a" * 40000, 4096) == 500

    def test_model_limits(self):
        """Known models report their context size, unknown ones the default."""
        assert get_model_token_limit("gpt-4") == 8192
        assert get_model_token_limit("gpt-4o") == 128000
        assert get_model_token_limit("claude-3-sonnet-20240229") == 200000
        assert get_model_token_limit("some-new-model") == 4096


class TestChunkText:
    """Test line-based text splitting."""

    def test_splits_on_line_boundaries(self):
        """Lines are grouped until the next one would overflow the limit."""
        text = "\n".join(["a" * 39] * 5)  # each line plus newline is 10 tokens
        chunks = chunk_text_by_tokens(text, 20)
        assert len(chunks) == 3
        assert "\n".join(chunks) == text

    def test_long_line_kept_whole(self):
        """A line longer than the limit becomes its own chunk."""
        text = "short\n" + "b" * 400 + "\nshort"
        chunks = chunk_text_by_tokens(text, 10)
        assert "b" * 400 in chunks

    def test_small_text_single_chunk(self):
        """Text under the limit is returned unchanged."""
        assert chunk_text_by_tokens("one\ntwo", 100) == ["one\ntwo"]


class TestTokenBudget:
    """Test how many requests a response target needs."""

    def test_fits_in_one_request(self):
        """A target that fits alongside the prompt needs one chunk."""
        budget = calculate_token_budget("a" * 4000, 8192, 4000)
        assert budget.chunks_needed == 1
        assert budget.prompt_tokens == 1000
        assert budget.tokens_per_chunk == 4000
        assert budget.total_tokens == 8192 - 200

    def test_splits_large_target(self):
        """A target larger than the headroom is divided evenly."""
        budget = calculate_token_budget("a" * 4000, 4096, 8000)
        # headroom is 4096 - 200 - 1000 = 2896 tokens per request
        assert budget.chunks_needed == 3
        assert budget.tokens_per_chunk == 8000 // 3
        assert budget.response_tokens == 8000
        assert budget.total_tokens == 4096 - 200

    def test_prompt_larger_than_model(self):
        """Even an oversized prompt gets at least the minimum response per chunk."""
        budget = calculate_token_budget("a" * 40000, 4096, 1000)
        assert budget.chunks_needed == 2
        assert budget.tokens_per_chunk == 500
