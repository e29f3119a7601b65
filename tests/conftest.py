from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.forms'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture(autouse=True)
def _fresh_settings():
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class CountingStore:
    """DocumentStore wrapper that records how often load/save run."""

    def __init__(self, inner):
        self.inner = inner
        self.loads = 0
        self.saves = 0

    def load(self):
        self.loads += 1
        return self.inner.load()

    def save(self, document):
        self.saves += 1
        self.inner.save(document)


@pytest.fixture
def storage():
    from storage.media import MemoryStorage
    return MemoryStorage()


@pytest.fixture
def store(storage):
    from storage.document_store import DocumentStore
    return CountingStore(DocumentStore(storage))


@pytest.fixture
def demo_store(store):
    from services.seed import demo_document
    store.inner.save(demo_document())
    return store
