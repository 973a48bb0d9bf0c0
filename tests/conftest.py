import pytest

from fake_firestore import FakeFirestoreClient

from sneaker_collection import FirestoreSneakerRepository


@pytest.fixture
def fake_client():
    """An empty in-memory Firestore client."""
    return FakeFirestoreClient()


@pytest.fixture
def fake_collection(fake_client):
    return fake_client.collection("sneaker_collection")


@pytest.fixture
def repository(fake_client):
    """A Firestore repository wired to the in-memory client."""
    repo = FirestoreSneakerRepository(client=fake_client)
    yield repo
    if repo._executor is not None:
        repo._executor.shutdown(wait=True)
