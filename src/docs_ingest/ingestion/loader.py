"""Document loader — recursive directory walk producing LangChain documents."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from langchain_core.document_loaders import BaseLoader
from langchain_core.documents import Document

from docs_ingest.ingestion.extractor import MarkupTextExtractor, TextExtractor

__all__ = ["DirectoryReadError", "RepoLoader", "load_directory"]

logger = logging.getLogger(__name__)


class DirectoryReadError(RuntimeError):
    """Raised when a directory of the source tree cannot be listed."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Could not read directory: {path}. Did you run `sh download.sh`?"
        )


def _list_directory(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as exc:
        raise DirectoryReadError(directory) from exc


def _walk(directory: Path, extractor: TextExtractor) -> Iterator[Document]:
    for entry in _list_directory(directory):
        if entry.is_dir():
            yield from _walk(entry, extractor)
        elif entry.is_file():
            text = extractor.extract_text(entry.read_bytes())
            logger.debug("Loaded %s (%d chars)", entry, len(text))
            yield Document(page_content=text, metadata={"source": str(entry)})
        else:
            logger.debug("Skipping %s: not a regular file", entry)


class RepoLoader(BaseLoader):
    """Load every regular file below *path* as one :class:`Document`.

    Parameters
    ----------
    path:
        Root directory of the pre-downloaded markup files.
    extractor:
        Converts raw file bytes to text.  Defaults to
        :class:`MarkupTextExtractor`.

    Each document's ``metadata["source"]`` holds the file path.  Entries are
    visited in sorted order within each directory; subdirectories are
    descended into at their position in that order.
    """

    def __init__(self, path: str | Path, extractor: TextExtractor | None = None) -> None:
        self.path = Path(path)
        self.extractor = extractor or MarkupTextExtractor()

    def lazy_load(self) -> Iterator[Document]:
        yield from _walk(self.path, self.extractor)


def load_directory(
    path: str | Path,
    extractor: TextExtractor | None = None,
) -> list[Document]:
    """Recursively load all files from *path*.

    Parameters
    ----------
    path:
        Root directory containing source documents.
    extractor:
        Optional :class:`TextExtractor` override.

    Returns
    -------
    list[Document]
        Flat list of LangChain ``Document`` objects with ``source`` metadata.

    Raises
    ------
    DirectoryReadError
        If *path* (or any directory below it) cannot be listed.
    """
    docs = RepoLoader(path, extractor).load()
    logger.info("Loaded %d documents from %s", len(docs), path)
    return docs
