"""
Firestore Sneaker Repository Implementation.

Stores each sneaker as one document in a Firestore collection, keyed by the
sneaker's identifier. The firebase-admin SDK is blocking, so reads run on a
worker thread and writes go through the completion bridge.

Requirements:
    - firebase-admin package installed
    - Firebase project initialized (via GOOGLE_APPLICATION_CREDENTIALS,
      FIRESTORE_EMULATOR_HOST, or an explicit client)
"""

import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, List, Optional

from pydantic import ValidationError

from .base import FetchResult, SkippedDocument, SneakerRepository
from .client import FIRESTORE_AVAILABLE, get_firestore_client
from .completion import await_completion, dispatch
from .errors import StoreError
from .models import Sneaker

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "sneaker_collection"
ORDER_FIELD = "sneakerHistory.dateAdded"
FAVORITE_FIELD = "isFavorite"

# google.cloud.firestore_v1.Query.DESCENDING
DESCENDING = "DESCENDING"


class FirestoreSneakerRepository(SneakerRepository):
    """
    Firestore-backed sneaker repository.

    Every call round-trips to Firestore; nothing is cached. Client failures
    are raised as StoreError with the client exception as its cause.

    Example:
        >>> repo = FirestoreSneakerRepository(project="sneaker-game")
        >>> await repo.add(Sneaker(name="Dunk Low", brand="Nike"))
        >>> [s.name for s in await repo.fetch_all()]
        ['Dunk Low']

    Attributes:
        collection: Firestore collection name
    """

    def __init__(
        self,
        collection: str = DEFAULT_COLLECTION,
        client: Optional[Any] = None,
        project: Optional[str] = None,
        emulator_host: Optional[str] = None,
        credentials_path: Optional[str] = None,
        executor: Optional[Executor] = None,
    ):
        """
        Initialize the Firestore repository.

        Args:
            collection: Firestore collection name for sneaker documents
            client: Optional Firestore client. If None, a cached client is
                    obtained for ``project``/``emulator_host``/``credentials_path``.
            project: Firebase project ID
            emulator_host: Firestore emulator address
            credentials_path: Path to a service account JSON file
            executor: Executor for blocking SDK calls. If None, the repository
                      creates and owns a small thread pool.

        Raises:
            ImportError: If no client is given and firebase-admin is not installed
        """
        if client is None:
            if not FIRESTORE_AVAILABLE:
                raise ImportError(
                    "firebase-admin package is required for FirestoreSneakerRepository. "
                    "Install with: pip install firebase-admin"
                )
            client = get_firestore_client(
                project=project,
                emulator_host=emulator_host,
                credentials_path=credentials_path,
            )

        self.collection = collection
        self._collection_ref = client.collection(collection)
        self._executor = executor
        self._owns_executor = executor is None
        logger.debug(
            f"FirestoreSneakerRepository initialized with collection: {collection}"
        )

    def _get_executor(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=4, thread_name_prefix="sneaker-store"
            )
        return self._executor

    def _query_documents(self) -> List[Any]:
        query = self._collection_ref.order_by(ORDER_FIELD, direction=DESCENDING)
        return list(query.stream())

    async def fetch_report(self) -> FetchResult:
        """
        Fetch all sneakers, newest first, with any undecodable documents.

        Documents that fail validation are left out of ``sneakers`` and
        listed in ``skipped``.

        Raises:
            StoreError: If the query fails.
        """
        loop = asyncio.get_running_loop()
        try:
            snapshots = await loop.run_in_executor(
                self._get_executor(), self._query_documents
            )
        except Exception as e:
            logger.error(f"Failed to fetch sneakers from {self.collection}: {e}")
            raise StoreError.from_exception(e, collection=self.collection) from e

        result = FetchResult()
        for snapshot in snapshots:
            try:
                sneaker = Sneaker.from_document(snapshot.id, snapshot.to_dict() or {})
            except ValidationError as e:
                logger.warning(f"Skipping undecodable sneaker {snapshot.id}: {e}")
                result.skipped.append(
                    SkippedDocument(doc_id=snapshot.id, reason=str(e))
                )
                continue
            result.sneakers.append(sneaker)

        logger.debug(
            f"Fetched {len(result.sneakers)} sneakers from {self.collection} "
            f"({len(result.skipped)} skipped)"
        )
        return result

    async def fetch_all(self) -> List[Sneaker]:
        """
        Fetch all sneakers, newest first.

        Undecodable documents are dropped; use fetch_report() to see them.
        """
        result = await self.fetch_report()
        return result.sneakers

    async def _write(
        self,
        action: str,
        doc_id: str,
        func: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> None:
        executor = self._get_executor()
        try:
            await await_completion(
                lambda done: dispatch(executor, func, *args, callback=done, **kwargs)
            )
        except Exception as e:
            logger.error(f"Failed to {action} sneaker {doc_id}: {e}")
            raise StoreError.from_exception(
                e, collection=self.collection, document=doc_id
            ) from e
        logger.debug(f"Sneaker {doc_id} {action} committed to {self.collection}")

    async def add(self, sneaker: Sneaker) -> None:
        doc_id = sneaker.document_id
        doc_ref = self._collection_ref.document(doc_id)
        await self._write("add", doc_id, doc_ref.set, sneaker.to_document())

    async def update(self, sneaker: Sneaker) -> None:
        doc_id = sneaker.document_id
        doc_ref = self._collection_ref.document(doc_id)
        await self._write(
            "update", doc_id, doc_ref.set, sneaker.to_document(partial=True), merge=True
        )

    async def delete(self, sneaker: Sneaker) -> None:
        doc_id = sneaker.document_id
        doc_ref = self._collection_ref.document(doc_id)
        await self._write("delete", doc_id, doc_ref.delete)

    async def toggle_favorite(self, sneaker: Sneaker) -> None:
        doc_id = sneaker.document_id
        doc_ref = self._collection_ref.document(doc_id)
        await self._write(
            "favorite",
            doc_id,
            doc_ref.set,
            {FAVORITE_FIELD: bool(sneaker.is_favorite)},
            merge=True,
        )

    async def close(self) -> None:
        """
        Shut down the owned thread pool.

        The Firestore client is shared through the client cache and is not
        closed here; use clear_firestore_cache() for that.
        """
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None
