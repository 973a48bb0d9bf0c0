"""
Firestore client factory for the sneaker collection.

Provides lazily initialized, cached Firestore clients. Supports production
Firebase projects and the Firestore emulator.

Requirements:
    pip install firebase-admin

Environment Variables:
    FIRESTORE_EMULATOR_HOST: Firestore emulator address (e.g., "localhost:8080")
    GOOGLE_APPLICATION_CREDENTIALS: Path to service account JSON file
    FIREBASE_PROJECT_ID: Default project ID if not specified

Usage:
    >>> from sneaker_collection.client import get_firestore_client
    >>> client = get_firestore_client(project="sneaker-game")
    >>> client.collection("sneaker_collection")
"""

import logging
import os
from threading import Lock
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

try:
    import firebase_admin
    from firebase_admin import credentials, firestore

    FIRESTORE_AVAILABLE = True
except ImportError:
    FIRESTORE_AVAILABLE = False
    firebase_admin = None  # type: ignore
    credentials = None  # type: ignore
    firestore = None  # type: ignore

_INSTALL_HINT = (
    "firebase-admin is required for Firestore operations. "
    "Install with: pip install firebase-admin"
)

# cache key -> FirestoreClientWrapper
_client_cache: Dict[str, "FirestoreClientWrapper"] = {}
_cache_lock = Lock()


class FirestoreClientWrapper:
    """
    Lazily initialized Firestore client.

    The firebase-admin app and client are created on first access, under a
    lock, using a Firebase app name unique to this wrapper so several projects
    can be used from one process.

    Attributes:
        project_id: Firebase project ID, if configured
        emulator_host: Firestore emulator address, if configured
        credentials_path: Service account JSON path, if configured
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        emulator_host: Optional[str] = None,
        credentials_path: Optional[str] = None,
    ):
        if not FIRESTORE_AVAILABLE:
            raise ImportError(_INSTALL_HINT)

        self.project_id = project_id or os.environ.get("FIREBASE_PROJECT_ID")
        self.emulator_host = emulator_host or os.environ.get("FIRESTORE_EMULATOR_HOST")
        self.credentials_path = credentials_path or os.environ.get(
            "GOOGLE_APPLICATION_CREDENTIALS"
        )

        self._client = None
        self._app = None
        self._init_lock = Lock()

    @property
    def is_emulator(self) -> bool:
        return bool(self.emulator_host)

    def _credential(self) -> Any:
        if self.credentials_path and os.path.exists(self.credentials_path):
            logger.debug(f"Using credentials from: {self.credentials_path}")
            return credentials.Certificate(self.credentials_path)
        if self.emulator_host:
            logger.debug("Using emulator without credentials")
            return None
        try:
            return credentials.ApplicationDefault()
        except Exception as e:
            logger.warning(f"No application default credentials available: {e}")
            return None

    @property
    def client(self) -> Any:
        """Firestore client, created on first access."""
        if self._client is not None:
            return self._client

        with self._init_lock:
            if self._client is not None:
                return self._client

            # must be set before the client is created
            if self.emulator_host:
                os.environ["FIRESTORE_EMULATOR_HOST"] = self.emulator_host
                logger.info(f"Using Firestore emulator at: {self.emulator_host}")

            app_name = f"{self.project_id or 'default'}_sneakers_{id(self)}"
            try:
                self._app = firebase_admin.get_app(app_name)
            except ValueError:
                options = {"projectId": self.project_id} if self.project_id else None
                self._app = firebase_admin.initialize_app(
                    credential=self._credential(), options=options, name=app_name
                )
                logger.info(
                    f"Initialized Firebase app: {app_name} "
                    f"(project: {self.project_id or 'default'})"
                )

            self._client = firestore.client(app=self._app)
            return self._client

    def collection(self, name: str) -> Any:
        """Get a collection reference."""
        return self.client.collection(name)

    def close(self) -> None:
        """Delete the Firebase app. Safe to call multiple times."""
        if self._app is None:
            return
        try:
            firebase_admin.delete_app(self._app)
            logger.debug(f"Deleted Firebase app: {self._app.name}")
        except ValueError as e:
            logger.warning(f"Error closing Firebase app: {e}")
        finally:
            self._app = None
            self._client = None


def get_firestore_client(
    project: Optional[str] = None,
    emulator_host: Optional[str] = None,
    credentials_path: Optional[str] = None,
) -> FirestoreClientWrapper:
    """
    Get or create a cached Firestore client.

    One wrapper is cached per (project, emulator host, credentials path).

    Raises:
        ImportError: If firebase-admin is not installed
    """
    if not FIRESTORE_AVAILABLE:
        raise ImportError(_INSTALL_HINT)

    resolved_project = project or os.environ.get("FIREBASE_PROJECT_ID", "default")
    cache_key = f"{resolved_project}:{emulator_host or ''}:{credentials_path or ''}"

    with _cache_lock:
        wrapper = _client_cache.get(cache_key)
        if wrapper is None:
            wrapper = FirestoreClientWrapper(
                project_id=project,
                emulator_host=emulator_host,
                credentials_path=credentials_path,
            )
            _client_cache[cache_key] = wrapper
            logger.debug(f"Created new Firestore client for: {cache_key}")
        return wrapper


def clear_firestore_cache() -> int:
    """
    Close and forget all cached clients.

    Returns:
        Number of clients cleared
    """
    with _cache_lock:
        count = len(_client_cache)
        for wrapper in _client_cache.values():
            wrapper.close()
        _client_cache.clear()
    logger.info(f"Cleared {count} cached Firestore clients")
    return count
