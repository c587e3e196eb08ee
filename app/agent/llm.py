"""
Text generation providers behind one narrow interface: generate(prompt, instruction) -> str.

Gemini (default) is called over its REST API with httpx; OpenAI goes through the
openai SDK. Every failure is raised as UpstreamError carrying the provider's message.
"""

import logging
from typing import Any, Protocol

import httpx
from openai import OpenAI, OpenAIError

from app.core.config import (
    GEMINI_API_BASE,
    GEMINI_API_KEY,
    GEMINI_MODEL,
    LLM_API_TIMEOUT,
    LLM_PROVIDER,
    OPENAI_API_KEY,
    OPENAI_LLM_MODEL,
)
from app.core.errors import StartupConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that turns (prompt, system instruction) into generated text."""

    model: str

    def generate(self, prompt: str, instruction: str) -> str: ...


def _gemini_error_message(response: httpx.Response) -> str:
    """Pull error.message out of a Gemini error body; fall back to status + raw text."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
    return f"HTTP {response.status_code}: {response.text[:200]}"


class GeminiGenerator:
    """Calls models/{model}:generateContent with a system instruction and one user turn."""

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        api_base: str = GEMINI_API_BASE,
        timeout: float = LLM_API_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.url = f"{api_base.rstrip('/')}/models/{model}:generateContent"
        self.timeout = timeout
        self._transport = transport

    def generate(self, prompt: str, instruction: str) -> str:
        logger.info("[llm:gemini] IN  model=%s prompt_len=%d", self.model, len(prompt))
        logger.debug("[llm:gemini] prompt_sample=%r", prompt[:500])
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        payload = {
            "systemInstruction": {"parts": [{"text": instruction}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("[llm:gemini] request failed: %s", e)
            raise UpstreamError(str(e) or e.__class__.__name__) from e
        if response.status_code != 200:
            message = _gemini_error_message(response)
            logger.warning("[llm:gemini] error %s: %s", response.status_code, message)
            raise UpstreamError(message)
        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("Malformed response from Gemini API: body is not JSON") from e
        out = _extract_gemini_text(data)
        if out is None:
            raise UpstreamError("Malformed response from Gemini API: no candidate text")
        logger.info("[llm:gemini] OUT response_len=%d", len(out))
        return out


def _extract_gemini_text(data: Any) -> str | None:
    """Join the text parts of the first candidate, or None when there are none."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return None
    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    if not texts:
        return None
    return "".join(texts)


class OpenAIGenerator:
    """Chat completions with the instruction as the system message."""

    def __init__(
        self,
        api_key: str,
        model: str = OPENAI_LLM_MODEL,
        timeout: float = LLM_API_TIMEOUT,
        client: Any = None,
    ) -> None:
        self.model = model
        self._client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def generate(self, prompt: str, instruction: str) -> str:
        logger.info("[llm:openai] IN  model=%s prompt_len=%d", self.model, len(prompt))
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": instruction},
                    {"role": "user", "content": prompt},
                ],
            )
        except OpenAIError as e:
            logger.warning("[llm:openai] request failed: %s", e)
            raise UpstreamError(str(e) or e.__class__.__name__) from e
        msg = response.choices[0].message if response.choices else None
        if msg is None or msg.content is None:
            raise UpstreamError("Malformed response from OpenAI API: no message content")
        logger.info("[llm:openai] OUT response_len=%d", len(msg.content))
        return msg.content


def build_generator(provider: str | None = None) -> TextGenerator:
    """
    Build the configured provider. Called once at startup.
    Raises StartupConfigurationError when the provider is unknown or its API key is not set.
    """
    provider = (provider or LLM_PROVIDER).strip().lower()
    if provider == "gemini":
        if not GEMINI_API_KEY:
            raise StartupConfigurationError("GEMINI_API_KEY is not set in the environment or .env")
        return GeminiGenerator(GEMINI_API_KEY, timeout=LLM_API_TIMEOUT)
    if provider == "openai":
        if not OPENAI_API_KEY:
            raise StartupConfigurationError("OPENAI_API_KEY is not set in the environment or .env")
        return OpenAIGenerator(OPENAI_API_KEY, timeout=LLM_API_TIMEOUT)
    raise StartupConfigurationError(f"Unknown LLM_PROVIDER {provider!r}; expected 'gemini' or 'openai'")
