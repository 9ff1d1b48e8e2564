"""Ingestion pipeline — walk → extract → chunk → embed & index → save.

Run with no arguments; everything is read from :mod:`docs_ingest.config`::

    python -m docs_ingest
"""

from __future__ import annotations

import logging
import sys
import time
from typing import TYPE_CHECKING

from docs_ingest import config
from docs_ingest.ingestion.chunker import chunk_documents
from docs_ingest.ingestion.embedder import get_embeddings
from docs_ingest.ingestion.indexer import build_index
from docs_ingest.ingestion.loader import load_directory
from docs_ingest.ingestion.throttle import build_throttle
from docs_ingest.models import IngestSummary
from docs_ingest.store import create_index

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from docs_ingest.config import Settings
    from docs_ingest.ingestion.extractor import TextExtractor
    from docs_ingest.ingestion.throttle import ThrottlePolicy
    from docs_ingest.store.base import VectorIndex

logger = logging.getLogger(__name__)


def run(
    settings: Settings | None = None,
    *,
    extractor: TextExtractor | None = None,
    embeddings: Embeddings | None = None,
    index: VectorIndex | None = None,
    throttle: ThrottlePolicy | None = None,
) -> IngestSummary:
    """Execute the full ingestion run.

    Collaborators not passed in are built from *settings*.  The embedding
    client is only constructed once the source tree has been read, so a
    missing directory aborts before any service is contacted.
    """
    settings = settings or config.settings

    t0 = time.monotonic()

    raw_docs = load_directory(settings.source_dir, extractor)
    chunks = chunk_documents(raw_docs, settings.chunk_size, settings.chunk_overlap)
    summary = IngestSummary(source_dir=settings.source_dir, documents=len(raw_docs))
    if not chunks:
        logger.warning("No chunks produced from %s; no index written", settings.source_dir)
        summary.elapsed_seconds = time.monotonic() - t0
        return summary

    logger.info("Creating vector store...")
    if embeddings is None:
        embeddings = get_embeddings(settings)
    if index is None:
        index = create_index(settings, embeddings)
    if throttle is None:
        throttle = build_throttle(settings)

    build_index(chunks, embeddings, index, settings.output_dir, throttle)

    summary.output_dir = settings.output_dir
    summary.chunks = len(chunks)
    summary.elapsed_seconds = time.monotonic() - t0
    return summary


def main() -> int:
    """Console entry point; returns the process exit status."""
    logging.basicConfig(
        level=config.settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        summary = run()
    except Exception:
        logger.exception("Ingestion failed")
        return 1
    logger.info("%s", summary)
    logger.info("done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
