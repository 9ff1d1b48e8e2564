"""Unit tests for settings and the embedding-client factory."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from docs_ingest.config import Settings
from docs_ingest.ingestion.embedder import get_embeddings


def test_reference_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    settings = Settings(_env_file=None)

    assert settings.source_dir == Path("ingest/markdown/clockwork")
    assert settings.output_dir == Path("data")
    assert (settings.chunk_size, settings.chunk_overlap) == (8000, 100)
    assert settings.throttle == "fixed"
    assert settings.throttle_delay_seconds == 45.0
    assert settings.index_backend == "faiss"
    assert settings.distance_space == "ip"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCS_INGEST_SOURCE_DIR", "/srv/docs")
    monkeypatch.setenv("DOCS_INGEST_CHUNK_SIZE", "1000")
    monkeypatch.setenv("DOCS_INGEST_THROTTLE", "rate")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

    settings = Settings(_env_file=None)

    assert settings.source_dir == Path("/srv/docs")
    assert settings.chunk_size == 1000
    assert settings.throttle == "rate"
    assert settings.openai_api_key == "sk-test"


def test_overlap_must_be_smaller_than_size() -> None:
    with pytest.raises(ValidationError, match="chunk_overlap"):
        Settings(_env_file=None, chunk_size=100, chunk_overlap=100)


def test_unknown_backend_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, index_backend="pinecone")


def test_openai_embeddings_configured_from_settings() -> None:
    from langchain_openai import OpenAIEmbeddings

    settings = Settings(
        _env_file=None,
        openai_api_key="sk-test",
        openai_base_url="http://localhost:9000/v1",
        embedding_model="text-embedding-3-small",
    )

    embeddings = get_embeddings(settings)

    assert isinstance(embeddings, OpenAIEmbeddings)
    assert embeddings.model == "text-embedding-3-small"
    assert embeddings.openai_api_base == "http://localhost:9000/v1"
