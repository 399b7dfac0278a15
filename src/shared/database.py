"""Relational store access.

A ``Database`` owns one SQLAlchemy engine and its connection pool. Request
handlers receive the handle explicitly and open a ``transaction()`` scope for
each unit of work; the pooled connection is returned on every exit path.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import Connection, Engine, MetaData, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from shared.config import Settings
from shared.errors import PersistenceError

logger = structlog.get_logger(__name__)

metadata = MetaData()


def _load_tables() -> None:
    """Import every context's table definitions so they register on ``metadata``."""
    import catalogue.tables  # noqa: F401
    import identity.tables  # noqa: F401
    import ordering.tables  # noqa: F401


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # noqa: ARG001
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    url = make_url(settings.database_url)

    if url.get_backend_name() == "sqlite":
        engine = create_engine(
            url,
            echo=settings.database_echo,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        echo=settings.database_echo,
        pool_size=settings.database_pool_size,
        pool_timeout=settings.database_pool_timeout,
        pool_pre_ping=True,
    )


class Database:
    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_engine(settings))

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a pooled connection inside BEGIN; commit on exit, roll back on any error."""
        try:
            with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            logger.exception("Transaction rolled back after storage failure")
            raise PersistenceError() from exc

    def dispose(self) -> None:
        self.engine.dispose()


def setup_db(database: Database) -> None:
    """Create all tables."""
    _load_tables()
    metadata.create_all(database.engine)


def drop_db(database: Database) -> None:
    """Drop all tables."""
    _load_tables()
    metadata.drop_all(database.engine)
