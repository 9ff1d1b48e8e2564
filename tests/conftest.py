"""Shared pytest configuration and fixtures."""

import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring a live embedding service")


@pytest.fixture()
def embeddings() -> DeterministicFakeEmbedding:
    """Offline stand-in for the embedding service (8-dimensional vectors)."""
    return DeterministicFakeEmbedding(size=8)
