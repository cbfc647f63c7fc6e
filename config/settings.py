"""Application settings with environment variable loading.

Supports both local development (.env) and deployment (environment variables).
"""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings


load_dotenv()


class Settings(BaseSettings):
    """Index sync configuration loaded from environment variables.

    Attributes:
        qdrant_url: Qdrant REST endpoint.
        qdrant_api_key: Qdrant API key (optional for local instances).
        qdrant_timeout: Request timeout for Qdrant calls in seconds.
        qdrant_wait: Wait for upserts/deletes to be applied before returning.
        gemini_api_key: Google Gemini API key used for embeddings.
        embedding_model: Gemini embedding model identifier.
        embedding_dimensions: Output dimensionality of the embedding model.
        embedding_batch_size: Maximum texts per embedding request.
        index_name: Default collection name.
        log_level: Application logging level.
    """

    # Qdrant Configuration
    qdrant_url: str = Field(default="", alias="QDRANT_URL")
    qdrant_api_key: str = Field(default="", alias="QDRANT_API_KEY")
    qdrant_timeout: int = Field(default=30, ge=1, le=300, alias="QDRANT_TIMEOUT")
    qdrant_wait: bool = Field(
        default=True,
        alias="QDRANT_WAIT",
        description="Block until Qdrant has applied upserts and deletes",
    )

    # Embedding Configuration
    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    embedding_model: str = Field(default="gemini-embedding-001", alias="EMBEDDING_MODEL")
    embedding_dimensions: int = Field(
        default=768,
        ge=1,
        le=3072,
        alias="EMBEDDING_DIMENSIONS",
        description="Vector size of created collections",
    )
    embedding_batch_size: int = Field(
        default=100,
        ge=1,
        le=250,
        alias="EMBEDDING_BATCH_SIZE",
        description="Maximum number of texts sent in one embedding request",
    )

    # Index Configuration
    index_name: str = Field(default="documents", alias="INDEX_NAME")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("gemini_api_key", "qdrant_api_key", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from API keys."""
        return v.strip() if v else ""

    def is_gemini_configured(self) -> bool:
        """Check if Gemini API is configured.

        Returns:
            True if Gemini API key is set.
        """
        return bool(self.gemini_api_key)

    def is_qdrant_configured(self) -> bool:
        """Check if Qdrant is configured.

        The API key is optional so that unauthenticated local instances work.

        Returns:
            True if Qdrant URL is set.
        """
        return bool(self.qdrant_url)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance with loaded configuration.
    """
    return Settings()


def refresh_settings() -> Settings:
    """Clear settings cache and reload.

    Useful for testing or when environment changes.

    Returns:
        Fresh Settings instance.
    """
    get_settings.cache_clear()
    return get_settings()
