"""Chroma implementation of the similarity-index abstraction."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import chromadb

from docs_ingest.store.base import VectorIndex

if TYPE_CHECKING:
    from langchain_core.documents import Document

logger = logging.getLogger(__name__)


def _flat_metadata(metadata: dict[str, Any]) -> dict[str, Any] | None:
    """Chroma metadata values must be flat str/int/float/bool; others are JSON-encoded."""
    meta: dict[str, Any] = {}
    for key, value in metadata.items():
        if value is None:
            logger.warning("Dropping metadata key %r: Chroma cannot store None", key)
        elif isinstance(value, (str, int, float, bool)):
            meta[key] = value
        else:
            meta[key] = json.dumps(value, default=str)
    return meta or None


def _collection_names(client: Any) -> set[str]:
    # list_collections() returns names on chromadb >= 0.6, Collection objects before.
    return {c if isinstance(c, str) else c.name for c in client.list_collections()}


class ChromaVectorIndex(VectorIndex):
    """Chroma-backed index built in memory and persisted in one pass.

    Parameters
    ----------
    collection_name:
        Name of the collection written by :meth:`save`.
    space:
        HNSW distance function (``ip`` | ``l2`` | ``cosine``).
    upsert_batch_size:
        Max records per upsert call when persisting.
    """

    def __init__(
        self,
        collection_name: str = "docs_ingest",
        *,
        space: str = "ip",
        upsert_batch_size: int = 5000,
    ) -> None:
        self.collection_name = collection_name
        self.space = space
        self.upsert_batch_size = upsert_batch_size
        self._client = chromadb.EphemeralClient()
        # Ephemeral clients share one in-process system; keep instances apart.
        self._collection = self._client.get_or_create_collection(
            f"{collection_name}-{uuid4().hex[:8]}",
            metadata={"hnsw:space": space},
            embedding_function=None,
        )

    # -- VectorIndex overrides ------------------------------------------------

    def add(self, vector: list[float], document: Document) -> str:
        entry_id = uuid4().hex
        self._collection.add(
            ids=[entry_id],
            embeddings=[list(vector)],
            documents=[document.page_content],
            metadatas=[_flat_metadata(document.metadata)],
        )
        return entry_id

    def save(self, path: str | Path) -> Path:
        folder = Path(path)
        records = self._collection.get(include=["embeddings", "documents", "metadatas"])
        ids = records["ids"]
        if not ids:
            raise ValueError("Cannot save an empty index: no vectors were added")

        client = chromadb.PersistentClient(path=str(folder))
        if self.collection_name in _collection_names(client):
            logger.info("Replacing existing collection %r in %s", self.collection_name, folder)
            client.delete_collection(self.collection_name)
        target = client.get_or_create_collection(
            self.collection_name,
            metadata={"hnsw:space": self.space},
            embedding_function=None,
        )
        for start in range(0, len(ids), self.upsert_batch_size):
            end = start + self.upsert_batch_size
            target.upsert(
                ids=ids[start:end],
                embeddings=records["embeddings"][start:end],
                documents=records["documents"][start:end],
                metadatas=records["metadatas"][start:end],
            )
        logger.info("Saved %d vectors to %s (collection %r)", len(ids), folder, self.collection_name)
        return folder

    def similarity_search(self, vector: list[float], *, k: int = 4) -> list[dict[str, Any]]:
        count = self._collection.count()
        if count == 0:
            return []
        results = self._collection.query(
            query_embeddings=[list(vector)],
            n_results=min(k, count),
            include=["documents", "metadatas", "distances"],
        )

        hits: list[dict[str, Any]] = []
        ids = results.get("ids", [[]])[0]
        docs = results.get("documents", [[]])[0]
        metas = results.get("metadatas", [[]])[0]
        distances = results.get("distances", [[]])[0]

        for entry_id, content, meta, dist in zip(ids, docs, metas, distances):
            hits.append(
                {
                    "id": entry_id,
                    "content": content or "",
                    "score": float(dist),
                    "metadata": meta or {},
                }
            )
        return hits

    def __len__(self) -> int:
        return self._collection.count()
