"""
Sneaker collection data access.

Provides a repository for the sneaker records of the sneaker game app,
backed by Cloud Firestore, plus a scripted stub for previews and tests.

Example YAML:
    repository:
      backend: firestore               # firestore | stub
      collection: "sneaker_collection"

Usage:
    >>> from sneaker_collection import create_sneaker_repository, Sneaker
    >>>
    >>> repo = create_sneaker_repository({"backend": "stub"})
    >>> asyncio.run(repo.fetch_all())
    []
    >>>
    >>> repo = create_sneaker_repository({
    ...     "backend": "firestore",
    ...     "project": "sneaker-game",
    ... })
    >>> await repo.add(Sneaker(name="Air Jordan 1", brand="Nike"))
"""

import logging
from typing import Any, Dict, Optional

from .base import FetchResult, SkippedDocument, SneakerRepository
from .client import (
    FIRESTORE_AVAILABLE,
    FirestoreClientWrapper,
    clear_firestore_cache,
    get_firestore_client,
)
from .completion import await_completion, dispatch
from .errors import PreviewTimeoutError, StoreError, StoreErrorCode
from .firestore_repository import DEFAULT_COLLECTION, FirestoreSneakerRepository
from .models import Sneaker, SneakerHistory
from .settings import (
    RepositoryBackendType,
    RepositorySettings,
    load_settings_file,
    parse_repository_settings,
)
from .state import CollectionState, Data, Empty, Error, Loading
from .stub import StubSneakerRepository

logger = logging.getLogger(__name__)


def create_sneaker_repository(
    config: Dict[str, Any],
    state: Optional[CollectionState] = None,
) -> SneakerRepository:
    """
    Factory function to create a sneaker repository from configuration.

    Args:
        config: Repository configuration dictionary with keys:
            - backend: Backend type ("firestore" | "stub")
            - collection: Firestore collection name (optional)
            - project, emulator_host, credentials_path: Firestore options
            - client: Pre-built Firestore client (optional)
        state: Collection state for the stub backend. Defaults to Empty().

    Returns:
        SneakerRepository instance

    Raises:
        ValueError: If backend type is invalid or unavailable
    """
    backend_type = config.get("backend", RepositoryBackendType.FIRESTORE.value)

    if isinstance(backend_type, RepositoryBackendType):
        backend_type = backend_type.value

    backend_type = backend_type.lower()

    if backend_type == "stub":
        return StubSneakerRepository(state if state is not None else Empty())

    elif backend_type == "firestore":
        client = config.get("client")
        if client is None and not FIRESTORE_AVAILABLE:
            raise ValueError(
                "Firestore backend requires firebase-admin package. "
                "Install with: pip install firebase-admin"
            )
        return FirestoreSneakerRepository(
            collection=config.get("collection") or DEFAULT_COLLECTION,
            client=client,
            project=config.get("project"),
            emulator_host=config.get("emulator_host"),
            credentials_path=config.get("credentials_path"),
        )

    else:
        valid_backends = [e.value for e in RepositoryBackendType]
        raise ValueError(
            f"Unknown repository backend: '{backend_type}'. "
            f"Valid options: {valid_backends}"
        )


def create_sneaker_repository_from_settings(
    settings: RepositorySettings,
    state: Optional[CollectionState] = None,
) -> SneakerRepository:
    """Create a sneaker repository from a validated RepositorySettings."""
    return create_sneaker_repository(settings.model_dump(), state=state)


__all__ = [
    # Interface
    "SneakerRepository",
    "FetchResult",
    "SkippedDocument",
    # Models
    "Sneaker",
    "SneakerHistory",
    "CollectionState",
    "Loading",
    "Error",
    "Data",
    "Empty",
    # Repositories
    "FirestoreSneakerRepository",
    "StubSneakerRepository",
    # Errors
    "StoreError",
    "StoreErrorCode",
    "PreviewTimeoutError",
    # Completion bridge
    "await_completion",
    "dispatch",
    # Settings
    "RepositorySettings",
    "RepositoryBackendType",
    "parse_repository_settings",
    "load_settings_file",
    # Client
    "FirestoreClientWrapper",
    "get_firestore_client",
    "clear_firestore_cache",
    # Factory functions
    "create_sneaker_repository",
    "create_sneaker_repository_from_settings",
    # Availability flags
    "FIRESTORE_AVAILABLE",
]
