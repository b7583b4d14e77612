"""Test configuration and fixtures."""

import pytest

from agora.persistence.repository.inmemory import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory tables for tests that wire repositories by hand."""
    return InMemoryStore()
