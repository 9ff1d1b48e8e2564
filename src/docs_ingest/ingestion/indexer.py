"""Embedding and index construction, one chunk at a time."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docs_ingest.ingestion.throttle import NoThrottle, ThrottlePolicy

if TYPE_CHECKING:
    from pathlib import Path

    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from docs_ingest.store.base import VectorIndex

__all__ = ["IndexBuilder", "build_index"]

logger = logging.getLogger(__name__)


class IndexBuilder:
    """Fill a :class:`VectorIndex` with freshly embedded chunks.

    Every chunk gets exactly one embedding request, issued right before its
    insertion; vectors are never batched or reused.  The throttle policy is
    consulted around every request.  Errors from the embedding client or
    the index propagate unchanged.

    Usage::

        builder = IndexBuilder(embeddings, FaissVectorIndex(embeddings),
                               FixedDelayThrottle(45))
        index = builder.build(chunks)
        index.save("data")
    """

    def __init__(
        self,
        embeddings: Embeddings,
        index: VectorIndex,
        throttle: ThrottlePolicy | None = None,
    ) -> None:
        self.embeddings = embeddings
        self.index = index
        self.throttle = throttle or NoThrottle()

    def build(self, chunks: list[Document]) -> VectorIndex:
        """Embed and insert *chunks* in order; return the filled index."""
        total = len(chunks)
        logger.info("Estimated time: %.0f seconds for %d chunks", self.throttle.estimate(total), total)

        for position, chunk in enumerate(chunks, 1):
            self.throttle.before_request()
            vector = self.embeddings.embed_documents([chunk.page_content])[0]
            self.index.add(vector, chunk)
            logger.info("Indexed chunk %d/%d (%d chars)", position, total, len(chunk.page_content))
            self.throttle.after_request()

        return self.index


def build_index(
    chunks: list[Document],
    embeddings: Embeddings,
    index: VectorIndex,
    output_dir: str | Path,
    throttle: ThrottlePolicy | None = None,
) -> VectorIndex:
    """Build the index from *chunks* and save it to *output_dir* once.

    Nothing is written if any embedding or insertion fails.
    """
    built = IndexBuilder(embeddings, index, throttle).build(chunks)
    built.save(output_dir)
    return built
