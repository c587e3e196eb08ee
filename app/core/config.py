"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from app.core.errors import StartupConfigurationError

load_dotenv()


def _float_env(name: str, default: float) -> float:
    """Read a positive float from the environment; bad values stop startup."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise StartupConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from e
    if value <= 0:
        raise StartupConfigurationError(f"{name} must be greater than 0, got {raw!r}")
    return value


# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Knowledge record (profile JSON). Defaults to the copy packaged with the app.
DEFAULT_KNOWLEDGE_FILE: Path = Path(__file__).resolve().parent.parent / "data" / "profile.json"
KNOWLEDGE_FILE: str = os.getenv("KNOWLEDGE_FILE", "").strip() or str(DEFAULT_KNOWLEDGE_FILE)

# Which provider answers questions: "gemini" (default) or "openai"
LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "gemini").strip().lower() or "gemini"

# Google Gemini (REST generateContent)
GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "").strip()
GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash").strip() or "gemini-2.5-flash"
GEMINI_API_BASE: str = (
    os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta").strip().rstrip("/")
    or "https://generativelanguage.googleapis.com/v1beta"
)

# OpenAI (alternate provider)
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"
)

# API timeouts (seconds)
LLM_API_TIMEOUT: float = _float_env("LLM_API_TIMEOUT", 60.0)

# CORS: comma-separated origins, "*" allows any
CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
] or ["*"]

# HTTP surface
ASK_PATH: str = "/api/ask-ai"
