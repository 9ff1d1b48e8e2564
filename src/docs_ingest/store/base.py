"""Abstract base class for similarity-index backends.

Adding a new backend only requires subclassing :class:`VectorIndex` and
implementing the abstract methods.  The index builder never needs to know
which library holds the vectors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from langchain_core.documents import Document


class VectorIndex(ABC):
    """Accumulates (vector, chunk) pairs and serialises them once at the end."""

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def add(self, vector: list[float], document: Document) -> str:
        """Insert one precomputed *vector* together with its source *document*.

        Returns the identifier assigned to the entry.
        """
        ...

    @abstractmethod
    def save(self, path: str | Path) -> Path:
        """Write the whole index below the directory *path* and return it."""
        ...

    @abstractmethod
    def similarity_search(self, vector: list[float], *, k: int = 4) -> list[dict[str, Any]]:
        """Return the *k* entries nearest to *vector*.

        Each result dict contains:

        * ``"id"`` – entry identifier
        * ``"content"`` – the chunk text
        * ``"score"`` – raw score reported by the backend
        * ``"metadata"`` – the chunk's metadata dict
        """
        ...

    @abstractmethod
    def __len__(self) -> int:
        """Number of vectors inserted so far."""
        ...
