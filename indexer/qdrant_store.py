"""Qdrant implementation of the vector store transport.

Wraps AsyncQdrantClient and translates its exceptions into the typed
errors in indexer.errors. Retries and connection pooling stay inside
qdrant-client.
"""

import logging
import uuid
from typing import Any, Optional, Sequence, Union

import httpx
from qdrant_client import AsyncQdrantClient
from qdrant_client.http.exceptions import ApiException, UnexpectedResponse
from qdrant_client.models import (
    Batch,
    Distance,
    FieldCondition,
    Filter,
    FilterSelector,
    MatchValue,
    VectorParams,
)

from config.settings import Settings, get_settings
from indexer.errors import (
    CollectionAlreadyExistsError,
    CollectionNotFoundError,
    ConfigurationError,
    IndexSyncError,
    TransportError,
    ValidationError,
)
from indexer.interfaces import VectorStoreClient
from indexer.models import COSINE, CollectionInfo

logger = logging.getLogger(__name__)

# Namespace for deriving point ids from section ids that are not UUIDs
SECTION_ID_NAMESPACE = uuid.UUID("3b4f2a8e-5d61-4c0b-9e7a-1f2d3c4b5a69")

HTTP_NOT_FOUND = 404
HTTP_CONFLICT = 409


def to_point_id(section_id: Union[str, int, uuid.UUID]) -> Union[str, int]:
    """Map a section id onto a valid Qdrant point id.

    Qdrant accepts unsigned integers and UUIDs only. Other strings are
    mapped with uuid5, which is stable across processes.
    """
    if isinstance(section_id, bool):
        raise ValidationError("Section id must not be a bool", field="id")
    if isinstance(section_id, int):
        if section_id < 0:
            raise ValidationError(f"Section id {section_id} is negative", field="id")
        return section_id
    if isinstance(section_id, uuid.UUID):
        return str(section_id)
    try:
        return str(uuid.UUID(section_id))
    except ValueError:
        return str(uuid.uuid5(SECTION_ID_NAMESPACE, section_id))


def translate_error(exc: Exception, name: str) -> IndexSyncError:
    """Classify a qdrant-client or httpx exception by status code."""
    if isinstance(exc, UnexpectedResponse):
        if exc.status_code == HTTP_NOT_FOUND:
            return CollectionNotFoundError(name)
        if exc.status_code == HTTP_CONFLICT:
            return CollectionAlreadyExistsError(name)
        return TransportError(
            f"Qdrant returned {exc.status_code} for collection {name}: {exc.reason_phrase}",
            status_code=exc.status_code,
        )
    return TransportError(f"Qdrant request failed for collection {name}: {exc}")


class QdrantVectorStore(VectorStoreClient):
    """VectorStoreClient backed by a Qdrant server."""

    def __init__(self, client: AsyncQdrantClient, wait: bool = True) -> None:
        """Initialize the store.

        Args:
            client: Process-scoped async Qdrant client.
            wait: Block until upserts and deletes have been applied.
        """
        self._client = client
        self._wait = wait

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "QdrantVectorStore":
        """Build a store from QDRANT_* settings.

        Raises:
            ConfigurationError: If Qdrant is not configured.
        """
        settings = settings or get_settings()
        if not settings.is_qdrant_configured():
            raise ConfigurationError("Qdrant not configured. Check QDRANT_URL.")
        client = AsyncQdrantClient(
            url=settings.qdrant_url,
            api_key=settings.qdrant_api_key or None,
            timeout=settings.qdrant_timeout,
        )
        return cls(client, wait=settings.qdrant_wait)

    async def close(self) -> None:
        """Release the underlying HTTP connections."""
        await self._client.close()

    async def get_collection(self, name: str) -> CollectionInfo:
        try:
            info = await self._client.get_collection(collection_name=name)
        except (ApiException, httpx.HTTPError) as e:
            raise translate_error(e, name) from e

        vectors = info.config.params.vectors
        if isinstance(vectors, VectorParams):
            vector_size, distance = vectors.size, vectors.distance.value
        else:
            # Named vectors; reported without a size so ensure_search_index rejects them
            vector_size, distance = None, COSINE
        return CollectionInfo(
            name=name,
            vector_size=vector_size,
            distance=distance,
            points_count=info.points_count,
        )

    async def create_collection(
        self, name: str, vector_size: int, distance: str = COSINE
    ) -> None:
        try:
            await self._client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(size=vector_size, distance=Distance(distance)),
            )
        except (ApiException, httpx.HTTPError) as e:
            raise translate_error(e, name) from e

    async def delete_collection(self, name: str) -> None:
        try:
            deleted = await self._client.delete_collection(collection_name=name)
        except (ApiException, httpx.HTTPError) as e:
            raise translate_error(e, name) from e
        if not deleted:
            raise CollectionNotFoundError(name)

    async def upsert(
        self,
        name: str,
        ids: Sequence[Union[str, int, uuid.UUID]],
        vectors: Sequence[Sequence[float]],
        payloads: Sequence[dict[str, Any]],
    ) -> None:
        batch = Batch(
            ids=[to_point_id(i) for i in ids],
            vectors=[[float(x) for x in v] for v in vectors],
            payloads=list(payloads),
        )
        try:
            await self._client.upsert(collection_name=name, points=batch, wait=self._wait)
        except (ApiException, httpx.HTTPError) as e:
            raise translate_error(e, name) from e

    async def delete_by_filter(self, name: str, field: str, value: Any) -> None:
        selector = FilterSelector(
            filter=Filter(must=[FieldCondition(key=field, match=MatchValue(value=value))])
        )
        try:
            await self._client.delete(
                collection_name=name, points_selector=selector, wait=self._wait
            )
        except (ApiException, httpx.HTTPError) as e:
            raise translate_error(e, name) from e
