from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.config import settings


class Base(DeclarativeBase):
    pass


def make_engine(url: str, echo: bool = False) -> Engine:
    """Create a synchronous engine; in-memory SQLite shares one connection."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo)


engine = make_engine(settings.database_url, settings.database_echo)
session_maker = sessionmaker(engine, expire_on_commit=False)


def create_db_and_tables(bind: Engine = engine) -> None:
    # register the mapped tables before create_all
    from db import blob  # noqa: F401

    Base.metadata.create_all(bind)


def get_session() -> Generator[Session, None, None]:
    with session_maker() as session:
        yield session
