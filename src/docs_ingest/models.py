"""Run summary returned by the ingestion pipeline."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class IngestSummary(BaseModel):
    """Outcome of one ingestion run.

    Attributes
    ----------
    source_dir:
        Root directory that was walked.
    output_dir:
        Directory the index was written to, or ``None`` when nothing was saved.
    documents:
        Number of files loaded.
    chunks:
        Number of chunks embedded and indexed.
    elapsed_seconds:
        Wall-clock duration of the run.
    """

    source_dir: Path
    output_dir: Path | None = None
    documents: int = 0
    chunks: int = 0
    elapsed_seconds: float = 0.0

    def __str__(self) -> str:  # noqa: D105
        target = self.output_dir if self.output_dir is not None else "nothing saved"
        return (
            f"Ingested {self.chunks} chunks from {self.documents} documents "
            f"→ {target} in {self.elapsed_seconds:.1f}s"
        )
