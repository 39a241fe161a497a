"""Google Gemini completion provider using the google-genai SDK."""

from __future__ import annotations

from collections.abc import AsyncIterator

from google import genai
from google.genai import types

from chunk_gate.config.settings import Settings
from chunk_gate.exceptions import CompletionError, ConfigurationError
from chunk_gate.observability.logger import get_logger
from chunk_gate.protocols.llm import CompletionOptions

logger = get_logger("gemini")


class GeminiProvider:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.0,
        max_tokens: int = 16,
    ) -> None:
        if not api_key:
            raise ConfigurationError("a Google API key is required for the Gemini provider")
        self._client = genai.Client(api_key=api_key)
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    @classmethod
    def from_settings(cls, settings: Settings) -> GeminiProvider:
        return cls(
            api_key=settings.google_api_key,
            model=settings.gemini_model,
            temperature=settings.gemini_temperature,
            max_tokens=settings.gemini_max_tokens,
        )

    def _config(self, options: CompletionOptions | None) -> types.GenerateContentConfig:
        options = options or CompletionOptions()
        kwargs = {
            "temperature": (
                options.temperature if options.temperature is not None else self._temperature
            ),
            "max_output_tokens": options.max_tokens or self._max_tokens,
        }
        if options.system_prompt:
            kwargs["system_instruction"] = options.system_prompt
        if options.json_mode:
            kwargs["response_mime_type"] = "application/json"
        return types.GenerateContentConfig(**kwargs)

    async def complete(
        self,
        prompt: str,
        options: CompletionOptions | None = None,
    ) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=self._config(options),
            )
            return response.text or ""
        except Exception as e:
            raise CompletionError(f"Gemini completion failed: {e}") from e

    async def stream(
        self,
        prompt: str,
        options: CompletionOptions | None = None,
    ) -> AsyncIterator[str]:
        try:
            response_stream = await self._client.aio.models.generate_content_stream(
                model=self._model,
                contents=prompt,
                config=self._config(options),
            )
            async for chunk in response_stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            logger.warning("gemini_stream_failed", error=str(e))
            raise CompletionError(f"Gemini streaming failed: {e}") from e
