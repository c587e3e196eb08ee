"""
Unit tests for the text-generation providers.

Gemini requests go through httpx.MockTransport; OpenAI gets a fake SDK client.
"""

import json
from types import SimpleNamespace
from unittest.mock import patch

import httpx
import pytest
from openai import OpenAIError

from app.agent.llm import GeminiGenerator, OpenAIGenerator, build_generator
from app.core.errors import StartupConfigurationError, UpstreamError


def _gemini(handler) -> GeminiGenerator:
    return GeminiGenerator(
        "test-key",
        model="gemini-2.5-flash",
        api_base="https://gemini.test/v1beta",
        transport=httpx.MockTransport(handler),
    )


class TestGeminiGenerator:
    """Tests for GeminiGenerator.generate()."""

    def test_posts_instruction_and_prompt_and_returns_text(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Hello!"}]}}]})

        assert _gemini(handler).generate("the prompt", "be nice") == "Hello!"
        request = seen[0]
        assert str(request.url) == "https://gemini.test/v1beta/models/gemini-2.5-flash:generateContent"
        assert request.headers["x-goog-api-key"] == "test-key"
        body = json.loads(request.content)
        assert body["systemInstruction"] == {"parts": [{"text": "be nice"}]}
        assert body["contents"] == [{"role": "user", "parts": [{"text": "the prompt"}]}]

    def test_joins_text_parts_of_first_candidate(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            parts = [{"text": "Part one, "}, {"inlineData": {}}, {"text": "part two."}]
            return httpx.Response(200, json={"candidates": [{"content": {"parts": parts}}, {"content": {}}]})

        assert _gemini(handler).generate("p", "i") == "Part one, part two."

    def test_error_status_raises_with_provider_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}},
            )

        with pytest.raises(UpstreamError) as exc_info:
            _gemini(handler).generate("p", "i")
        assert exc_info.value.message == "API key not valid."

    def test_error_status_without_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="upstream unavailable")

        with pytest.raises(UpstreamError) as exc_info:
            _gemini(handler).generate("p", "i")
        assert exc_info.value.message == "HTTP 503: upstream unavailable"

    @pytest.mark.parametrize("body", [{}, {"candidates": []}, {"candidates": [{"content": {"parts": []}}]}])
    def test_missing_candidate_text_is_malformed(self, body: dict) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=body)

        with pytest.raises(UpstreamError, match="Malformed response"):
            _gemini(handler).generate("p", "i")

    def test_network_failure_raises_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        with pytest.raises(UpstreamError) as exc_info:
            _gemini(handler).generate("p", "i")
        assert exc_info.value.message == "name resolution failed"


class TestGeminiTimeout:
    """The configured timeout reaches every request; a timeout is an upstream failure."""

    def test_read_timeout_raises_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamError) as exc_info:
            _gemini(handler).generate("p", "i")
        assert exc_info.value.message == "timed out"

    def test_request_carries_configured_timeout(self) -> None:
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.extensions["timeout"])
            return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "ok"}]}}]})

        gen = GeminiGenerator(
            "k",
            api_base="https://gemini.test/v1beta",
            timeout=7.5,
            transport=httpx.MockTransport(handler),
        )
        gen.generate("p", "i")
        assert seen[0] == {"connect": 7.5, "read": 7.5, "write": 7.5, "pool": 7.5}


class _FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.kwargs: dict = {}

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        choices = [] if self.content is None else [SimpleNamespace(message=SimpleNamespace(content=self.content))]
        return SimpleNamespace(choices=choices)


def _openai(completions: _FakeCompletions) -> OpenAIGenerator:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIGenerator("sk-test", model="gpt-4o-mini", client=client)


class TestOpenAIGenerator:
    """Tests for OpenAIGenerator.generate()."""

    def test_sends_system_and_user_messages(self) -> None:
        completions = _FakeCompletions(content="Sure.")
        assert _openai(completions).generate("the prompt", "be nice") == "Sure."
        assert completions.kwargs["model"] == "gpt-4o-mini"
        assert completions.kwargs["messages"] == [
            {"role": "system", "content": "be nice"},
            {"role": "user", "content": "the prompt"},
        ]

    def test_sdk_error_raises_upstream_error(self) -> None:
        completions = _FakeCompletions(error=OpenAIError("Rate limit reached"))
        with pytest.raises(UpstreamError) as exc_info:
            _openai(completions).generate("p", "i")
        assert exc_info.value.message == "Rate limit reached"

    def test_no_choices_is_malformed(self) -> None:
        with pytest.raises(UpstreamError, match="Malformed response"):
            _openai(_FakeCompletions(content=None)).generate("p", "i")


class TestOpenAIClientSettings:
    """The SDK client is built with the configured timeout and without retries."""

    def test_client_timeout_and_no_retries(self) -> None:
        gen = OpenAIGenerator("sk-test", timeout=12.0)
        assert gen._client.timeout == 12.0
        assert gen._client.max_retries == 0


class TestBuildGenerator:
    """Tests for build_generator()."""

    def test_gemini_requires_key(self) -> None:
        with patch("app.agent.llm.GEMINI_API_KEY", ""):
            with pytest.raises(StartupConfigurationError, match="GEMINI_API_KEY"):
                build_generator("gemini")

    def test_gemini_with_key(self) -> None:
        with patch("app.agent.llm.GEMINI_API_KEY", "k"):
            assert isinstance(build_generator("gemini"), GeminiGenerator)

    def test_openai_requires_key(self) -> None:
        with patch("app.agent.llm.OPENAI_API_KEY", ""):
            with pytest.raises(StartupConfigurationError, match="OPENAI_API_KEY"):
                build_generator("openai")

    def test_openai_with_key(self) -> None:
        with patch("app.agent.llm.OPENAI_API_KEY", "sk-test"):
            assert isinstance(build_generator("openai"), OpenAIGenerator)

    def test_unknown_provider(self) -> None:
        with pytest.raises(StartupConfigurationError, match="Unknown LLM_PROVIDER"):
            build_generator("cohere")

    def test_defaults_to_configured_provider(self) -> None:
        with patch("app.agent.llm.LLM_PROVIDER", "openai"), patch("app.agent.llm.OPENAI_API_KEY", "sk-test"):
            assert isinstance(build_generator(), OpenAIGenerator)

    def test_passes_configured_timeout_to_gemini(self) -> None:
        with patch("app.agent.llm.GEMINI_API_KEY", "k"), patch("app.agent.llm.LLM_API_TIMEOUT", 5.0):
            gen = build_generator("gemini")
        assert gen.timeout == 5.0

    def test_passes_configured_timeout_to_openai(self) -> None:
        with patch("app.agent.llm.OPENAI_API_KEY", "sk-test"), patch("app.agent.llm.LLM_API_TIMEOUT", 5.0):
            gen = build_generator("openai")
        assert gen._client.timeout == 5.0
        assert gen._client.max_retries == 0
