"""Shared test fixtures."""

from __future__ import annotations

import asyncio

import pytest

from chunk_gate.config.settings import Settings
from chunk_gate.models.domain import Chunk
from chunk_gate.protocols.llm import CompletionOptions


class FakeCompletionProvider:
    """Returns a fixed response and records every prompt it receives."""

    def __init__(self, response: str = "0.5", delay: float = 0.0) -> None:
        self.response = response
        self.delay = delay
        self.prompts: list[str] = []
        self.options: list[CompletionOptions | None] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: str, options: CompletionOptions | None = None) -> str:
        self.prompts.append(prompt)
        self.options.append(options)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        return self.response

    async def stream(self, prompt: str, options: CompletionOptions | None = None):
        yield await self.complete(prompt, options)


class FailingCompletionProvider:
    """Always raises, like an unreachable model endpoint."""

    def __init__(self) -> None:
        self.calls = 0

    async def complete(self, prompt: str, options: CompletionOptions | None = None) -> str:
        self.calls += 1
        raise RuntimeError("model endpoint unavailable")

    async def stream(self, prompt: str, options: CompletionOptions | None = None):
        raise RuntimeError("model endpoint unavailable")
        yield ""  # pragma: no cover


@pytest.fixture
def settings():
    return Settings(google_api_key="test-key")


@pytest.fixture
def fake_llm():
    return FakeCompletionProvider("0.5")


@pytest.fixture
def failing_llm():
    return FailingCompletionProvider()


@pytest.fixture
def sample_chunks():
    """Chunks of varying quality, indexed in document order."""
    contents = [
        "# Introduction\nMachine learning is a subset of AI that learns patterns from data.",
        "Gradient descent updates model_weights by stepping against the gradient. "
        "Learning rates such as 0.01 are common in practice.",
        "bad bad bad bad bad bad bad bad bad bad bad bad",
        "Short.",
        "The weather today is sunny with a light breeze over the hills and valleys.",
        "| model | accuracy |\n| --- | --- |\n| svm | 0.91 |",
    ]
    return [
        Chunk(id=str(i + 1), content=content, metadata={"index": i})
        for i, content in enumerate(contents)
    ]


@pytest.fixture
def make_llm():
    """Factory for fake providers with a chosen response."""
    return FakeCompletionProvider
