"""
Stub sneaker repository for previews and tests.

Fetch behavior is scripted by a fixed CollectionState; writes do nothing.
Not meant for production wiring.
"""

import asyncio
import logging
from typing import List

from .base import SneakerRepository
from .errors import PreviewTimeoutError
from .models import Sneaker
from .state import CollectionState, Data, Empty, Error, Loading

logger = logging.getLogger(__name__)

DEFAULT_LOADING_DELAY = 10.0


class StubSneakerRepository(SneakerRepository):
    """
    Repository double driven by a CollectionState.

    - Loading: waits ``loading_delay`` seconds, then raises PreviewTimeoutError
    - Error: raises the wrapped error immediately
    - Data: returns the wrapped records unchanged
    - Empty: returns an empty list

    Example:
        >>> repo = StubSneakerRepository(Empty())
        >>> asyncio.run(repo.fetch_all())
        []
    """

    def __init__(
        self, state: CollectionState, loading_delay: float = DEFAULT_LOADING_DELAY
    ):
        self.state = state
        self.loading_delay = loading_delay

    async def _simulate(self) -> List[Sneaker]:
        state = self.state
        if isinstance(state, Loading):
            await asyncio.sleep(self.loading_delay)
            raise PreviewTimeoutError("Timeout exceeded for 'loading' case preview")
        if isinstance(state, Error):
            raise state.error
        if isinstance(state, Data):
            return state.sneakers
        if isinstance(state, Empty):
            return []
        raise TypeError(f"Unknown collection state: {state!r}")

    async def fetch_all(self) -> List[Sneaker]:
        return await self._simulate()

    async def add(self, sneaker: Sneaker) -> None:
        logger.debug(f"Stub ignoring add of {sneaker.document_id}")

    async def update(self, sneaker: Sneaker) -> None:
        logger.debug(f"Stub ignoring update of {sneaker.document_id}")

    async def delete(self, sneaker: Sneaker) -> None:
        logger.debug(f"Stub ignoring delete of {sneaker.document_id}")

    async def toggle_favorite(self, sneaker: Sneaker) -> None:
        logger.debug(f"Stub ignoring favorite of {sneaker.document_id}")
