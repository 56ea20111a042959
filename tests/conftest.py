import itertools

import pytest
from sqlalchemy.orm import sessionmaker

from core.persistence import BlobStore
from core.repository import InventoryRepository
from core.service import InventoryService
from db.database import create_db_and_tables, make_engine

START = 1_700_000_000_000


class FakeClock:
    """Deterministic millisecond clock; advance it explicitly."""

    def __init__(self, now: int = START):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1000) -> int:
        self.now += ms
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def id_factory():
    counter = itertools.count(1)
    return lambda: f"item-{next(counter)}"


@pytest.fixture()
def engine():
    engine = make_engine("sqlite://")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def store(engine, clock):
    return BlobStore(sessionmaker(engine, expire_on_commit=False), "test-items", clock=clock)


@pytest.fixture()
def repository(store, clock, id_factory):
    return InventoryRepository(store=store, clock=clock, id_factory=id_factory)


@pytest.fixture()
def service(repository):
    return InventoryService(repository)
