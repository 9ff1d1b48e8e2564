"""
Store — the similarity index that accumulates embedded chunks.

Public surface
--------------
- :class:`VectorIndex` — abstract backend (subclass for other libraries).
- :class:`FaissVectorIndex` — default FAISS backend.
- :class:`ChromaVectorIndex` — Chroma backend.
- :func:`create_index` — backend factory driven by settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docs_ingest.store.base import VectorIndex

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from docs_ingest.config import Settings

__all__ = [
    "ChromaVectorIndex",
    "FaissVectorIndex",
    "VectorIndex",
    "create_index",
]


def create_index(settings: Settings, embeddings: Embeddings) -> VectorIndex:
    """Return an empty index for ``settings.index_backend``."""
    if settings.index_backend == "faiss":
        from docs_ingest.store.faiss_store import FaissVectorIndex

        return FaissVectorIndex(embeddings, space=settings.distance_space)
    if settings.index_backend == "chroma":
        from docs_ingest.store.chroma_store import ChromaVectorIndex

        return ChromaVectorIndex(space=settings.distance_space)
    raise ValueError(
        f"Unsupported index_backend={settings.index_backend!r}. Choose from: faiss, chroma."
    )


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import backends to avoid pulling in faiss / chromadb at import time."""
    if name == "FaissVectorIndex":
        from docs_ingest.store.faiss_store import FaissVectorIndex

        return FaissVectorIndex
    if name == "ChromaVectorIndex":
        from docs_ingest.store.chroma_store import ChromaVectorIndex

        return ChromaVectorIndex
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
