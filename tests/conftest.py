"""Pytest configuration and fixtures for index sync tests."""

import asyncio
import os
from typing import Any, Sequence
from unittest.mock import patch

import pytest

from config.settings import refresh_settings
from indexer.errors import (
    CollectionAlreadyExistsError,
    CollectionNotFoundError,
    EmbeddingError,
)
from indexer.interfaces import DocumentConverter, EmbeddingProvider, VectorStoreClient
from indexer.models import COSINE, CollectionInfo, ContentSection, IndexedFile
from indexer.vector_index import VectorIndex


DIMENSIONS = 4


@pytest.fixture(autouse=True)
def reset_settings():
    """Reset settings cache before each test."""
    refresh_settings()
    yield
    refresh_settings()


@pytest.fixture
def mock_env_vars():
    """Provide mock environment variables for testing."""
    env_vars = {
        "QDRANT_URL": "http://localhost:6333",
        "QDRANT_API_KEY": "test_qdrant_key_12345",
        "GEMINI_API_KEY": "test_gemini_key_12345",
        "EMBEDDING_DIMENSIONS": str(DIMENSIONS),
        "EMBEDDING_BATCH_SIZE": "2",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, env_vars, clear=False):
        refresh_settings()
        yield env_vars


class FakeVectorStore(VectorStoreClient):
    """In-memory VectorStoreClient that records every mutating call."""

    def __init__(self) -> None:
        self.collections: dict[str, dict] = {}
        self.create_calls: list[tuple[str, int, str]] = []
        self.upsert_calls: list[dict] = []
        self.delete_calls: list[tuple[str, str, Any]] = []

    def points(self, name: str) -> dict:
        return self.collections[name]["points"]

    async def get_collection(self, name: str) -> CollectionInfo:
        exists = name in self.collections
        # Yield so concurrent callers can both observe the same state
        await asyncio.sleep(0)
        if not exists:
            raise CollectionNotFoundError(name)
        collection = self.collections[name]
        return CollectionInfo(
            name=name,
            vector_size=collection["size"],
            distance=collection["distance"],
            points_count=len(collection["points"]),
        )

    async def create_collection(self, name: str, vector_size: int, distance: str = COSINE) -> None:
        self.create_calls.append((name, vector_size, distance))
        if name in self.collections:
            raise CollectionAlreadyExistsError(name)
        self.collections[name] = {"size": vector_size, "distance": distance, "points": {}}

    async def delete_collection(self, name: str) -> None:
        if name not in self.collections:
            raise CollectionNotFoundError(name)
        del self.collections[name]

    async def upsert(self, name: str, ids, vectors, payloads) -> None:
        self.upsert_calls.append(
            {"name": name, "ids": list(ids), "vectors": list(vectors), "payloads": list(payloads)}
        )
        if name not in self.collections:
            raise CollectionNotFoundError(name)
        for point_id, vector, payload in zip(ids, vectors, payloads):
            self.points(name)[point_id] = (vector, payload)

    async def delete_by_filter(self, name: str, field: str, value: Any) -> None:
        self.delete_calls.append((name, field, value))
        if name not in self.collections:
            raise CollectionNotFoundError(name)
        points = self.points(name)
        for point_id in [pid for pid, (_, p) in points.items() if p.get(field) == value]:
            del points[point_id]


class FakeEmbeddingProvider(EmbeddingProvider):
    """Deterministic embeddings; set fail=True to simulate a provider outage."""

    def __init__(self, dimensions: int = DIMENSIONS, fail: bool = False) -> None:
        self._dimensions = dimensions
        self.fail = fail
        self.batches: list[int] = []

    @property
    def dimensionality(self) -> int:
        return self._dimensions

    async def embed_batch(self, sections: Sequence[ContentSection]) -> list[ContentSection]:
        self.batches.append(len(sections))
        if self.fail:
            raise EmbeddingError("embedding quota exceeded")
        for section in sections:
            section.embedding = [float(len(section.content))] * self._dimensions
        return list(sections)


class FakeConverter(DocumentConverter):
    """Splits UTF-8 text into one section per non-empty line."""

    async def convert(self, filename: str, data: bytes, type: str, category: str) -> list[ContentSection]:
        lines = [line for line in data.decode("utf-8").splitlines() if line.strip()]
        return [
            ContentSection(
                id=f"{filename}-{i}",
                content=line,
                category=category,
                sourcepage=f"{filename}#page={i + 1}",
                sourcefile=filename,
            )
            for i, line in enumerate(lines)
        ]


@pytest.fixture
def make_file():
    """Provide a factory for IndexedFile with one section per line of text."""

    def _make_file(filename: str = "f.pdf", text: str = "alpha\nbeta\ngamma") -> IndexedFile:
        return IndexedFile(
            filename=filename,
            data=text.encode("utf-8"),
            type="application/pdf",
            category="manual",
        )

    return _make_file


@pytest.fixture
def store():
    """Provide an empty in-memory vector store."""
    return FakeVectorStore()


@pytest.fixture
def embedder():
    """Provide a deterministic embedding provider."""
    return FakeEmbeddingProvider()


@pytest.fixture
def vector_index(store, embedder):
    """Provide a VectorIndex wired to the fakes."""
    return VectorIndex(store=store, embedding_provider=embedder, converter=FakeConverter())
