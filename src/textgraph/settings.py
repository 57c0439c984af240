from __future__ import annotations

from pydantic import Field

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except Exception as e:  # pragma: no cover
    raise RuntimeError(
        "pydantic-settings is required. Install with: pip install pydantic-settings"
    ) from e


class TextgraphSettings(BaseSettings):
    """Unified configuration for textgraph.

    Environment variables are prefixed with TEXTGRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="TEXTGRAPH_", extra="ignore")

    # --- Core ---
    log_level: str = Field(default="INFO", description="Python logging level")

    # --- Extraction ---
    min_label_len: int = Field(default=3, description="Shorter entity spans are discarded")
    confidence_low: float = 0.7
    confidence_high: float = 1.0
    confidence_seed: int | None = Field(
        default=None, description="Seed for the random confidence scorer (reproducible runs)"
    )

    # --- Sources ---
    wikipedia_base_url: str = Field(default="https://en.wikipedia.org/api/rest_v1")
    http_max_attempts: int = 5
    user_agent: str = "textgraph/0.1"

    # --- HTTP ---
    bind_host: str = "127.0.0.1"
    bind_port: int = 8090


settings = TextgraphSettings()
