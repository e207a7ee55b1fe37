from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """ORM base for every model."""
    pass


def make_engine(echo: bool = False) -> Engine:
    """
    Build a private in-memory SQLite engine.
    The database lives as long as its connection, so a single shared
    connection (StaticPool) keeps the data for the whole life of the engine
    and drops it on dispose().
    """
    engine = create_engine(
        "sqlite://",
        echo=echo,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """
    Wrap one operation on a long-lived session:
    - commit if everything went fine
    - rollback on exceptions
    The session itself stays open; its owner closes it.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
