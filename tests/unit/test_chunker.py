"""Unit tests for the chunker module."""

import pytest
from langchain_core.documents import Document

from docs_ingest.ingestion.chunker import chunk_documents


def test_chunk_documents_splits_long_text() -> None:
    """A document longer than chunk_size should be split."""
    long_text = "word " * 500  # ~2500 chars
    docs = [Document(page_content=long_text, metadata={"source": "test"})]
    chunks = chunk_documents(docs, chunk_size=256, chunk_overlap=32)
    assert len(chunks) > 1
    assert all(len(c.page_content) <= 256 for c in chunks)


def test_chunk_documents_preserves_metadata() -> None:
    """Metadata from the source document should be preserved in chunks."""
    docs = [Document(page_content="Short text. " * 100, metadata={"source": "test.md"})]
    chunks = chunk_documents(docs, chunk_size=256, chunk_overlap=0)
    assert len(chunks) > 1
    assert all(c.metadata == {"source": "test.md"} for c in chunks)


def test_chunk_documents_empty_input() -> None:
    """An empty list should return an empty list."""
    assert chunk_documents([]) == []


def test_default_sizes_give_two_chunks_for_8500_chars() -> None:
    """8500 chars at 8000/100 → two chunks, the second starting inside the first's tail."""
    text = " ".join(f"w{i:04d}" for i in range(1417))
    assert len(text) == 8501
    chunks = chunk_documents([Document(page_content=text, metadata={"source": "big.md"})])

    assert len(chunks) == 2
    first, second = (c.page_content for c in chunks)
    assert len(first) <= 8000
    head = second[:20]
    assert first.rfind(head) >= len(first) - 100


def test_adjacent_chunks_overlap() -> None:
    """Consecutive chunks from one source share a short suffix/prefix."""
    text = " ".join(f"token{i}" for i in range(400))
    chunks = chunk_documents([Document(page_content=text)], chunk_size=200, chunk_overlap=40)

    for prev, nxt in zip(chunks, chunks[1:]):
        first_word = nxt.page_content.split(" ")[0]
        assert first_word in prev.page_content[-40:]


def test_chunks_keep_source_order() -> None:
    """Chunks of the first document come before those of the second."""
    docs = [
        Document(page_content="alpha " * 100, metadata={"source": "a.md"}),
        Document(page_content="beta " * 100, metadata={"source": "b.md"}),
    ]
    sources = [c.metadata["source"] for c in chunk_documents(docs, chunk_size=120, chunk_overlap=10)]
    assert sources == sorted(sources)
    assert set(sources) == {"a.md", "b.md"}


@pytest.mark.parametrize(("size", "overlap"), [(100, 100), (100, 150), (0, 0)])
def test_invalid_sizes_raise(size: int, overlap: int) -> None:
    with pytest.raises(ValueError):
        chunk_documents([Document(page_content="x")], chunk_size=size, chunk_overlap=overlap)
