"""
Tests for StubSneakerRepository and CollectionState.
"""

import asyncio
import dataclasses
import time

import pytest

from sneaker_collection import (
    Data,
    Empty,
    Error,
    Loading,
    PreviewTimeoutError,
    Sneaker,
    SneakerRepository,
    StubSneakerRepository,
)


class NetworkError(Exception):
    pass


@pytest.fixture
def sneakers():
    return [
        Sneaker(name="Jordan 4", brand="Nike"),
        Sneaker(name="990v6", brand="New Balance"),
    ]


class TestFetchAll:
    """Tests for scripted fetch behavior."""

    def test_is_a_repository(self):
        assert isinstance(StubSneakerRepository(Empty()), SneakerRepository)

    def test_error_raises_immediately(self):
        error = NetworkError("offline")
        repo = StubSneakerRepository(Error(error), loading_delay=60)

        start = time.monotonic()
        with pytest.raises(NetworkError) as excinfo:
            asyncio.run(repo.fetch_all())

        assert excinfo.value is error
        assert time.monotonic() - start < 1

    def test_empty_returns_empty_list(self):
        repo = StubSneakerRepository(Empty())
        assert asyncio.run(repo.fetch_all()) == []

    def test_data_returned_unchanged(self, sneakers):
        repo = StubSneakerRepository(Data(sneakers))

        result = asyncio.run(repo.fetch_all())

        assert result is sneakers

    def test_loading_raises_after_delay(self):
        repo = StubSneakerRepository(Loading(), loading_delay=0.01)

        with pytest.raises(PreviewTimeoutError, match="loading"):
            asyncio.run(repo.fetch_all())

    def test_loading_does_not_return_in_practice(self):
        repo = StubSneakerRepository(Loading())

        async def scenario():
            await asyncio.wait_for(repo.fetch_all(), timeout=0.05)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(scenario())

    def test_fetch_report_wraps_fetch_all(self, sneakers):
        repo = StubSneakerRepository(Data(sneakers))

        report = asyncio.run(repo.fetch_report())

        assert report.sneakers == sneakers
        assert report.complete

    def test_unknown_state_rejected(self):
        repo = StubSneakerRepository("loading")

        with pytest.raises(TypeError, match="Unknown collection state"):
            asyncio.run(repo.fetch_all())


class TestWrites:
    """Writes are accepted and ignored."""

    @pytest.mark.parametrize(
        "state", [Loading(), Error(NetworkError()), Data([]), Empty()]
    )
    def test_writes_succeed_in_every_state(self, state):
        repo = StubSneakerRepository(state, loading_delay=60)
        sneaker = Sneaker(name="Gel-Kayano 14", brand="ASICS")

        async def scenario():
            await repo.add(sneaker)
            await repo.update(sneaker)
            await repo.toggle_favorite(sneaker)
            await repo.delete(sneaker)

        asyncio.run(asyncio.wait_for(scenario(), timeout=1))

    def test_writes_do_not_change_data(self, sneakers):
        repo = StubSneakerRepository(Data(sneakers))
        extra = Sneaker(name="Gel-Kayano 14", brand="ASICS")

        async def scenario():
            await repo.add(extra)
            await repo.delete(sneakers[0])
            return await repo.fetch_all()

        assert asyncio.run(scenario()) == sneakers

    def test_context_manager(self):
        async def scenario():
            async with StubSneakerRepository(Empty()) as repo:
                return await repo.fetch_all()

        assert asyncio.run(scenario()) == []


class TestCollectionState:
    """Tests for the CollectionState variants."""

    def test_variants_are_frozen(self):
        state = Data([])
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.sneakers = []

    def test_equality(self):
        assert Empty() == Empty()
        assert Loading() == Loading()
        assert Empty() != Loading()

    def test_data_defaults_to_no_records(self):
        assert Data().sneakers == []
