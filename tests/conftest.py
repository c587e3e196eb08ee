"""Shared fixtures: a recording stand-in for the text-generation provider."""

import threading

import pytest
from fastapi.testclient import TestClient

from app.main import create_app


class RecordingGenerator:
    """Returns a canned reply (or raises) and records every (prompt, instruction) it receives."""

    model = "fake-model"

    def __init__(self, reply: str = "canned answer", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def generate(self, prompt: str, instruction: str) -> str:
        with self._lock:
            self.calls.append((prompt, instruction))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def generator() -> RecordingGenerator:
    return RecordingGenerator()


@pytest.fixture
def client(generator: RecordingGenerator) -> TestClient:
    return TestClient(create_app(generator=generator))
