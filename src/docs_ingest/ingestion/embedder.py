"""Embedding client initialisation — single place to swap providers.

Supports two providers:

1. **OpenAI** (default) — set ``OPENAI_API_KEY``.  Setting
   ``DOCS_INGEST_OPENAI_BASE_URL`` points the client at any
   OpenAI-compatible ``/v1/embeddings`` endpoint instead.
2. **HuggingFace** — local sentence-transformer model, no service call.
   Requires the ``huggingface`` extra.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from docs_ingest.config import Settings

logger = logging.getLogger(__name__)


def get_embeddings(settings: Settings) -> Embeddings:
    """Return the embedding client selected by ``settings.embedding_provider``."""
    if settings.embedding_provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs: dict = {"model": settings.embedding_model}
        if settings.openai_api_key:
            kwargs["api_key"] = settings.openai_api_key
        if settings.openai_base_url:
            logger.info("Using OpenAI-compatible endpoint: %s", settings.openai_base_url)
            kwargs["base_url"] = settings.openai_base_url
        return OpenAIEmbeddings(**kwargs)

    if settings.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=settings.embedding_model)

    raise ValueError(
        f"Unsupported embedding_provider={settings.embedding_provider!r}. "
        "Choose from: openai, huggingface."
    )
