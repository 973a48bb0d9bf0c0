"""
Collection states used to script the stub repository.

``CollectionState`` is a closed union of four variants. It mirrors what a
screen showing the collection can be in: still loading, failed, showing
records, or showing nothing.

Example:
    >>> from sneaker_collection.stub import StubSneakerRepository
    >>> repo = StubSneakerRepository(Error(ConnectionError("offline")))
"""

from dataclasses import dataclass, field
from typing import List, Union

from .models import Sneaker


@dataclass(frozen=True)
class Loading:
    """The collection never finishes loading."""


@dataclass(frozen=True)
class Error:
    """Fetching fails with ``error``."""

    error: BaseException


@dataclass(frozen=True)
class Data:
    """Fetching returns ``sneakers`` unchanged."""

    sneakers: List[Sneaker] = field(default_factory=list)


@dataclass(frozen=True)
class Empty:
    """Fetching returns no records."""


CollectionState = Union[Loading, Error, Data, Empty]
