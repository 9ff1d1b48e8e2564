"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Ingestion settings, populated from ``DOCS_INGEST_*`` env vars or a .env file."""

    # Input / output
    source_dir: Path = Field(
        default=Path("ingest/markdown/clockwork"),
        description="Root directory holding the pre-downloaded markup files",
    )
    output_dir: Path = Field(
        default=Path("data"),
        description="Directory the finished index is written to",
    )

    # Chunking
    chunk_size: int = Field(default=8000, gt=0, description="Maximum characters per chunk")
    chunk_overlap: int = Field(default=100, ge=0, description="Characters shared by consecutive chunks")

    # Embedding
    embedding_provider: Literal["openai", "huggingface"] = "openai"
    embedding_model: str = "text-embedding-ada-002"
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("OPENAI_API_KEY", "DOCS_INGEST_OPENAI_API_KEY"),
        description="OpenAI API key (left to the client's own env lookup when empty)",
    )
    openai_base_url: str = Field(
        default="",
        description="Base URL for an OpenAI-compatible embedding endpoint; empty for OpenAI cloud",
    )

    # Vector index
    index_backend: Literal["faiss", "chroma"] = "faiss"
    distance_space: Literal["ip", "l2", "cosine"] = "ip"

    # Throttling of embedding requests
    throttle: Literal["fixed", "rate", "none"] = "fixed"
    throttle_delay_seconds: float = Field(
        default=45.0,
        ge=0,
        description="Pause after every embedding request (fixed policy)",
    )
    rate_limit_requests: int = Field(default=3, gt=0, description="Requests allowed per window (rate policy)")
    rate_limit_period_seconds: float = Field(default=60.0, gt=0, description="Window length in seconds (rate policy)")

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DOCS_INGEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be < chunk_size ({self.chunk_size})"
            )
        return self


# Singleton — import `settings` wherever needed.
settings = Settings()
