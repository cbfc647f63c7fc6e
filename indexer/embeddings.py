"""Gemini embedding provider.

Embeds section content with the google.genai SDK using the async (aio)
client. One embed_batch call may fan out into several API requests of at
most embedding_batch_size texts each.
"""

import dataclasses
import logging
import time
from typing import Optional, Sequence

from google import genai
from google.genai import types

from config.settings import Settings, get_settings
from indexer.errors import EmbeddingError
from indexer.interfaces import EmbeddingProvider
from indexer.models import ContentSection

logger = logging.getLogger(__name__)

TASK_TYPE = "RETRIEVAL_DOCUMENT"


class GeminiEmbeddingProvider(EmbeddingProvider):
    """EmbeddingProvider backed by the Gemini embedding API."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize provider with lazy client creation."""
        self._settings = settings or get_settings()
        self._client: Optional[genai.Client] = None

    @property
    def dimensionality(self) -> int:
        return self._settings.embedding_dimensions

    def _get_client(self) -> genai.Client:
        """Get or create GenAI client for embeddings.

        Raises:
            EmbeddingError: If Gemini API is not configured.
        """
        if self._client is None:
            if not self._settings.is_gemini_configured():
                raise EmbeddingError("Gemini API not configured. Check GEMINI_API_KEY.")
            self._client = genai.Client(api_key=self._settings.gemini_api_key)
        return self._client

    async def _embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed one request's worth of texts."""
        client = self._get_client()
        try:
            response = await client.aio.models.embed_content(
                model=self._settings.embedding_model,
                contents=texts,
                config=types.EmbedContentConfig(
                    task_type=TASK_TYPE,
                    output_dimensionality=self.dimensionality,
                ),
            )
        except Exception as e:
            raise EmbeddingError(f"Gemini embedding request failed: {e}") from e

        embeddings = response.embeddings or []
        if len(embeddings) != len(texts):
            raise EmbeddingError(
                f"Gemini returned {len(embeddings)} embeddings for {len(texts)} texts"
            )
        vectors = [list(e.values or []) for e in embeddings]
        for vector in vectors:
            if len(vector) != self.dimensionality:
                raise EmbeddingError(
                    f"Expected {self.dimensionality}-dimensional embedding, got {len(vector)}"
                )
        return vectors

    async def embed_batch(
        self, sections: Sequence[ContentSection]
    ) -> list[ContentSection]:
        if not sections:
            return []

        start_time = time.time()
        batch_size = self._settings.embedding_batch_size
        vectors: list[list[float]] = []
        for offset in range(0, len(sections), batch_size):
            chunk = sections[offset:offset + batch_size]
            vectors.extend(await self._embed_texts([s.content for s in chunk]))

        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug("Embedded %d sections in %dms", len(sections), duration_ms)

        return [
            dataclasses.replace(section, embedding=vector)
            for section, vector in zip(sections, vectors)
        ]
