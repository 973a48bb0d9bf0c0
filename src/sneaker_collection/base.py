"""
Sneaker Repository Abstract Base Class.

Provides the abstract interface for sneaker collection storage. Every
operation is a coroutine and every call round-trips to the backing store;
implementations keep no in-memory cache.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

from .models import Sneaker


@dataclass(frozen=True)
class SkippedDocument:
    """A stored document left out of a fetch because it failed to decode."""

    doc_id: str
    reason: str


@dataclass
class FetchResult:
    """
    Outcome of fetching the whole collection.

    Attributes:
        sneakers: Decoded records, newest first
        skipped: Documents that could not be decoded
    """

    sneakers: List[Sneaker] = field(default_factory=list)
    skipped: List[SkippedDocument] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when no document was skipped."""
        return not self.skipped


class SneakerRepository(ABC):
    """
    Abstract base class for sneaker collection repositories.

    Implementations must provide:
    - fetch_all: Retrieve every record, newest first
    - add: Create or overwrite a record
    - update: Merge a record's present fields into the stored document
    - delete: Remove a record
    - toggle_favorite: Persist a record's favorite flag

    Failures of the backing store are raised as StoreError.
    """

    @abstractmethod
    async def fetch_all(self) -> List[Sneaker]:
        """
        Fetch all records.

        Returns:
            Records ordered by ``sneaker_history.date_added``, newest first.

        Raises:
            StoreError: On transport, permission or query failure.
        """
        pass

    @abstractmethod
    async def add(self, sneaker: Sneaker) -> None:
        """
        Create the document for ``sneaker``, overwriting any existing one.

        Raises:
            StoreError: If the write is rejected.
        """
        pass

    @abstractmethod
    async def update(self, sneaker: Sneaker) -> None:
        """
        Merge the fields of ``sneaker`` that hold a value into its stored document.

        Stored fields that are None on ``sneaker`` are left untouched.

        Raises:
            StoreError: If the write is rejected.
        """
        pass

    @abstractmethod
    async def delete(self, sneaker: Sneaker) -> None:
        """
        Remove the document for ``sneaker``.

        Deleting a document that does not exist is not an error.

        Raises:
            StoreError: On transport failure.
        """
        pass

    @abstractmethod
    async def toggle_favorite(self, sneaker: Sneaker) -> None:
        """
        Persist ``sneaker.is_favorite`` and nothing else.

        The caller flips the flag before calling; this only writes it.

        Raises:
            StoreError: If the write is rejected.
        """
        pass

    async def fetch_report(self) -> FetchResult:
        """
        Fetch all records along with any documents that failed to decode.

        Default implementation wraps fetch_all() and reports no skips.
        Backends that decode stored documents should override this.
        """
        return FetchResult(sneakers=list(await self.fetch_all()))

    async def close(self) -> None:
        """
        Close the repository and release resources.

        Default implementation does nothing.
        """
        pass

    async def __aenter__(self) -> "SneakerRepository":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
