"""
Sneaker record models.

Pydantic models for the documents stored in the sneaker collection. Stored
field names are camelCase (``isFavorite``, ``sneakerHistory.dateAdded``) so
documents written here stay readable by the mobile client; Python code uses
the snake_case attribute names.

Example:
    >>> sneaker = Sneaker(name="Air Max 1", brand="Nike")
    >>> sneaker.to_document()["isFavorite"]
    False
    >>> Sneaker.from_document(sneaker.document_id, sneaker.to_document()) == sneaker
    True
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SneakerHistory(BaseModel):
    """
    Wear history for a sneaker.

    Attributes:
        date_added: When the pair was added to the collection (sort key)
        date_last_worn: When the pair was last worn, if ever
        times_worn: Number of recorded wears
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    date_added: datetime = Field(
        default_factory=_utcnow,
        alias="dateAdded",
        description="Timestamp the pair was added",
    )
    date_last_worn: Optional[datetime] = Field(
        default=None, alias="dateLastWorn", description="Timestamp of last wear"
    )
    times_worn: int = Field(
        default=0, ge=0, alias="timesWorn", description="Number of recorded wears"
    )


class Sneaker(BaseModel):
    """
    A sneaker record.

    The identifier is assigned once at creation and doubles as the Firestore
    document key. Two records are equal when their identifiers are equal,
    whatever their other fields hold.

    Attributes:
        id: Stable identifier, stored as an uppercase UUID string like the
            mobile client writes it
        name: Model name
        brand: Brand name
        colorway: Optional colorway description
        size: Optional size
        notes: Optional free-form notes
        is_favorite: Whether the pair is marked as a favorite
        sneaker_history: Wear history, including the creation timestamp
    """

    model_config = ConfigDict(
        populate_by_name=True, validate_assignment=True, extra="ignore"
    )

    id: UUID = Field(default_factory=uuid4, frozen=True)
    name: str = Field(..., description="Model name")
    brand: str = Field(..., description="Brand name")
    colorway: Optional[str] = Field(default=None, description="Colorway")
    size: Optional[float] = Field(default=None, gt=0, description="Shoe size")
    notes: Optional[str] = Field(default=None, description="Free-form notes")
    is_favorite: bool = Field(default=False, alias="isFavorite")
    sneaker_history: SneakerHistory = Field(
        default_factory=SneakerHistory, alias="sneakerHistory"
    )

    @field_serializer("id")
    def _serialize_id(self, value: UUID) -> str:
        return str(value).upper()

    @property
    def document_id(self) -> str:
        """Document key for this record, an uppercase hyphenated UUID."""
        return str(self.id).upper()

    def to_document(self, partial: bool = False) -> Dict[str, Any]:
        """
        Render the record as Firestore document fields.

        Args:
            partial: If True, leave out fields holding None at any depth,
                     for use with merge writes. Fields that hold a value,
                     defaults included, are always written.

        Returns:
            Dictionary keyed by stored field names.
        """
        document = self.model_dump(by_alias=True, exclude_none=partial)
        document["id"] = self.document_id
        return document

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> "Sneaker":
        """
        Build a record from a stored document.

        Raises:
            pydantic.ValidationError: If the document does not decode.
        """
        fields = dict(data)
        fields.setdefault("id", doc_id)
        return cls.model_validate(fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sneaker):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
