"""
Store handle: engine and session factory construction.

There is no process-wide session. The app factory (or a test fixture) builds
one ``Database`` from a URL and hands its sessions to repositories explicitly.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _mask_url_password(url: str) -> str:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "<unparseable url>"


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine configured for the URL's backend.

    PostgreSQL gets production pooling; SQLite gets foreign-key enforcement
    and, for ``:memory:`` URLs, a single shared connection so DDL survives
    across sessions.
    """
    url = make_url(database_url)

    if url.drivername.startswith("postgres"):
        engine = create_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,  # Detects and refreshes stale connections
            pool_recycle=3600,
            connect_args={
                "application_name": "clinic_backend",  # Visible in pg_stat_activity
                "connect_timeout": 10,
            },
            echo=echo,
        )
    elif url.drivername.startswith("sqlite"):
        if url.database in (None, "", ":memory:"):
            engine = create_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                database_url, echo=echo, connect_args={"check_same_thread": False}
            )

        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    else:
        engine = create_engine(database_url, echo=echo)

    logger.debug(
        "SQLAlchemy engine created",
        extra={
            "context": {
                "url": _mask_url_password(database_url),
                "dialect": engine.dialect.name,
            }
        },
    )
    return engine


class Database:
    """Explicit store handle shared by one application instance."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.url = database_url
        self.engine = build_engine(database_url, echo=echo)
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    def session(self) -> Session:
        """Return a new session; the caller owns closing it."""
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session and always close it."""
        session = self.session()
        try:
            yield session
        finally:
            session.close()

    def create_tables(self) -> None:
        # Import models so Base.metadata is populated
        from clinic.db import base  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        from clinic.db import base  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(
                "Database connection failed",
                extra={"context": {"error": str(e)}},
                exc_info=True,
            )
            return False

    def dispose(self) -> None:
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"<Database url={_mask_url_password(self.url)!r}>"


def get_database(database_url: Optional[str] = None, echo: bool = False) -> Database:
    """Build a Database from an explicit URL or from DATABASE_URL."""
    if database_url is None:
        from clinic.core.config import get_database_url

        database_url = get_database_url()
    return Database(database_url, echo=echo)
