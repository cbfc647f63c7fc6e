"""Data model for indexed documents."""

from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

COSINE = "Cosine"


@dataclass(slots=True)
class ContentSection:
    """A section of a document, addressable in the index by its id.

    Attributes:
        id: Stable identifier, unique within an index. Re-indexing the same
            logical section must produce the same id.
        content: Text payload.
        category: Classification tag inherited from the file.
        sourcepage: Locator within the source file (e.g. "report.pdf#page=3").
        sourcefile: Name of the file the section was derived from.
        embedding: Vector for the content, None until computed.
    """

    id: Union[str, UUID]
    content: str
    category: str
    sourcepage: str
    sourcefile: str
    embedding: Optional[list[float]] = None

    def to_payload(self) -> dict:
        """Payload stored next to the vector in the index."""
        return {
            "content": self.content,
            "category": self.category,
            "sourcepage": self.sourcepage,
            "sourcefile": self.sourcefile,
        }


@dataclass(slots=True)
class IndexedFile:
    """A raw file handed to the index for one add_to_index call.

    Attributes:
        filename: Unique key of the file; becomes each section's sourcefile.
        data: Raw file bytes.
        type: Content-type hint (e.g. "application/pdf").
        category: Classification tag.
    """

    filename: str
    data: bytes
    type: str
    category: str


@dataclass(slots=True)
class CollectionInfo:
    """Metadata of a remote vector collection."""

    name: str
    vector_size: Optional[int] = None
    distance: str = COSINE
    points_count: Optional[int] = None
