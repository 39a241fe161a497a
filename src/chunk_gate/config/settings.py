"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    google_api_key: str = ""

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.0
    gemini_max_tokens: int = 16

    # Relevance probe
    probe_preview_chars: int = 500

    # Filtering defaults
    filter_min_relevance_score: float = 0.6
    filter_quality_weight: float = 0.3
    filter_batch_size: int = 5
    filter_max_chunks: int | None = None
    filter_preserve_order: bool = False
    filter_use_self_reflection: bool = True
    filter_use_critic_validation: bool = True

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_file": ".env", "env_prefix": "CHUNK_GATE_"}
