"""Tests for the Gemini completion provider (no network)."""

from types import SimpleNamespace

import pytest

from chunk_gate.config.settings import Settings
from chunk_gate.exceptions import CompletionError, ConfigurationError
from chunk_gate.generation.gemini_provider import GeminiProvider
from chunk_gate.protocols.llm import CompletionOptions


class _FakeModels:
    def __init__(self, text: str | None = None, error: Exception | None = None) -> None:
        self._text = text
        self._error = error
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append((model, contents, config))
        if self._error:
            raise self._error
        return SimpleNamespace(text=self._text)

    async def generate_content_stream(self, model, contents, config):
        self.calls.append((model, contents, config))
        if self._error:
            raise self._error
        return _fragments(self._text.split("|") if self._text else [])


async def _fragments(parts):
    for part in parts:
        yield SimpleNamespace(text=part)


def _provider_with(models: _FakeModels) -> GeminiProvider:
    provider = GeminiProvider(api_key="test-key", model="gemini-test")
    provider._client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return provider


def test_missing_api_key_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        GeminiProvider.from_settings(Settings(google_api_key=""))


def test_config_maps_completion_options():
    provider = GeminiProvider(api_key="test-key", temperature=0.2, max_tokens=32)
    config = provider._config(
        CompletionOptions(system_prompt="be brief", max_tokens=5, json_mode=True)
    )
    assert config.temperature == 0.2
    assert config.max_output_tokens == 5
    assert "be brief" in str(config.system_instruction)
    assert config.response_mime_type == "application/json"


async def test_complete_returns_text():
    models = _FakeModels(text="0.8")
    provider = _provider_with(models)
    assert await provider.complete("rate this") == "0.8"
    assert models.calls[0][0] == "gemini-test"


async def test_complete_handles_empty_response():
    provider = _provider_with(_FakeModels(text=None))
    assert await provider.complete("rate this") == ""


async def test_complete_wraps_sdk_errors():
    provider = _provider_with(_FakeModels(error=RuntimeError("quota exceeded")))
    with pytest.raises(CompletionError, match="quota exceeded"):
        await provider.complete("rate this")


async def test_stream_yields_non_empty_fragments():
    models = _FakeModels(text="0.|8||")
    provider = _provider_with(models)
    fragments = [part async for part in provider.stream("rate this")]
    assert fragments == ["0.", "8"]
    assert models.calls[0][1] == "rate this"


async def test_stream_wraps_sdk_errors():
    provider = _provider_with(_FakeModels(error=RuntimeError("stream reset")))
    with pytest.raises(CompletionError, match="stream reset"):
        async for _ in provider.stream("rate this"):
            pass
