"""FAISS implementation of the similarity-index abstraction.

Wraps LangChain's :class:`~langchain_community.vectorstores.FAISS` store.
The raw ``faiss`` index is only created on the first insert, once the
embedding dimension is known.  Nothing touches the disk until
:meth:`FaissVectorIndex.save`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import faiss
from langchain_community.docstore.in_memory import InMemoryDocstore
from langchain_community.vectorstores import FAISS
from langchain_community.vectorstores.utils import DistanceStrategy

from docs_ingest.store.base import VectorIndex

if TYPE_CHECKING:
    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)

INDEX_NAME = "index"

_SPACES = ("ip", "l2", "cosine")


def _strategy(space: str) -> DistanceStrategy:
    if space == "l2":
        return DistanceStrategy.EUCLIDEAN_DISTANCE
    return DistanceStrategy.MAX_INNER_PRODUCT


class FaissVectorIndex(VectorIndex):
    """In-memory FAISS index persisted with ``save_local``.

    Parameters
    ----------
    embeddings:
        Embedding client stored alongside the index so that a reloaded
        index can answer text queries.  It is never called while building.
    space:
        ``"ip"`` (inner product), ``"l2"`` (euclidean) or ``"cosine"``
        (inner product over L2-normalised vectors).
    """

    def __init__(self, embeddings: Embeddings, *, space: str = "ip") -> None:
        if space not in _SPACES:
            raise ValueError(f"Unsupported space={space!r}. Choose from: {', '.join(_SPACES)}.")
        self.space = space
        self._embeddings = embeddings
        self._store: FAISS | None = None

    @property
    def dimension(self) -> int | None:
        """Vector dimension, or ``None`` before the first insert."""
        return self._store.index.d if self._store is not None else None

    def _create_store(self, dim: int) -> FAISS:
        index = faiss.IndexFlatL2(dim) if self.space == "l2" else faiss.IndexFlatIP(dim)
        logger.debug("Created FAISS index (space=%s, dim=%d)", self.space, dim)
        return FAISS(
            embedding_function=self._embeddings,
            index=index,
            docstore=InMemoryDocstore(),
            index_to_docstore_id={},
            normalize_L2=self.space == "cosine",
            distance_strategy=_strategy(self.space),
        )

    # -- VectorIndex overrides ------------------------------------------------

    def add(self, vector: list[float], document: Document) -> str:
        if not vector:
            raise ValueError("Cannot index an empty vector")
        if self._store is None:
            self._store = self._create_store(len(vector))
        elif len(vector) != self.dimension:
            raise ValueError(
                f"Vector dimension {len(vector)} does not match index dimension {self.dimension}"
            )
        ids = self._store.add_embeddings(
            [(document.page_content, list(vector))],
            metadatas=[dict(document.metadata)],
        )
        return ids[0]

    def save(self, path: str | Path) -> Path:
        if self._store is None:
            raise ValueError("Cannot save an empty index: no vectors were added")
        folder = Path(path)
        self._store.save_local(str(folder), index_name=INDEX_NAME)
        logger.info("Saved %d vectors to %s", len(self), folder)
        return folder

    def similarity_search(self, vector: list[float], *, k: int = 4) -> list[dict[str, Any]]:
        if self._store is None:
            return []
        hits: list[dict[str, Any]] = []
        for doc, score in self._store.similarity_search_with_score_by_vector(vector, k=k):
            hits.append(
                {
                    "id": doc.id,
                    "content": doc.page_content,
                    "score": float(score),
                    "metadata": doc.metadata,
                }
            )
        return hits

    def __len__(self) -> int:
        return self._store.index.ntotal if self._store is not None else 0

    # -- persistence ----------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path, embeddings: Embeddings, *, space: str = "ip") -> FaissVectorIndex:
        """Reopen an index previously written by :meth:`save`.

        The docstore is pickled, so only load directories this tool wrote.
        """
        instance = cls(embeddings, space=space)
        instance._store = FAISS.load_local(
            str(path),
            embeddings,
            index_name=INDEX_NAME,
            allow_dangerous_deserialization=True,
            normalize_L2=space == "cosine",
            distance_strategy=_strategy(space),
        )
        return instance
