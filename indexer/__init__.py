"""Document index synchronization against a Qdrant collection."""

from indexer.embeddings import GeminiEmbeddingProvider
from indexer.models import CollectionInfo, ContentSection, IndexedFile
from indexer.qdrant_store import QdrantVectorStore
from indexer.vector_index import VectorIndex, build_vector_index

__all__ = [
    "CollectionInfo",
    "ContentSection",
    "GeminiEmbeddingProvider",
    "IndexedFile",
    "QdrantVectorStore",
    "VectorIndex",
    "build_vector_index",
]
