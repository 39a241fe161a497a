"""Protocol for text completion providers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CompletionOptions:
    system_prompt: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    json_mode: bool = False


class CompletionProvider(Protocol):
    async def complete(
        self,
        prompt: str,
        options: CompletionOptions | None = None,
    ) -> str: ...

    def stream(
        self,
        prompt: str,
        options: CompletionOptions | None = None,
    ) -> AsyncIterator[str]: ...
