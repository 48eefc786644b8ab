"""Database handle for Jai Metro.

One ``Database`` is constructed and connected at process startup and handed
to request handlers through a FastAPI dependency. Nothing here opens a
connection at import time.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from jaimetro.core.errors import StorageError, StorageNotConnectedError
from jaimetro.db.models import Base


def _is_postgresql(url: str) -> bool:
    lowered = url.lower()
    return "postgresql" in lowered or "postgres" in lowered


def _engine_kwargs(url: str) -> dict:
    """Engine options per backend."""
    lowered = url.lower()
    if lowered.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live inside one connection, share it across threads
        if ":memory:" in lowered or lowered in {"sqlite://", "sqlite:///"}:
            kwargs["poolclass"] = StaticPool
        return kwargs
    if _is_postgresql(url):
        return {
            "connect_args": {"connect_timeout": 10, "application_name": "jaimetro"},
            "pool_pre_ping": True,  # Verify connections before using (important for cloud DBs)
            "pool_recycle": 3600,
        }
    return {"pool_pre_ping": True}


class Database:
    """Explicitly connected storage client.

    Attributes:
        url: SQLAlchemy database URL
    """

    def __init__(self, url: str):
        self.url = url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StorageNotConnectedError("Database.connect() has not been called")
        return self._engine

    def connect(self, create_tables: bool = True) -> None:
        """Create the engine and session factory.

        Args:
            create_tables: Create missing tables after connecting
        """
        if self._engine is not None:
            logger.debug("[DB] connect() called on an already connected database")
            return

        if _is_postgresql(self.url):
            logger.info("[DB] Using PostgreSQL database")
        else:
            logger.warning("[DB] Using SQLite database (local development only)")

        self._engine = create_engine(self.url, echo=False, **_engine_kwargs(self.url))
        self._session_factory = sessionmaker(bind=self._engine, autocommit=False, autoflush=False, expire_on_commit=False)
        logger.info("[DB] Database engine initialized")

        if create_tables:
            Base.metadata.create_all(bind=self._engine)
            logger.info("[DB] Database tables verified")

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("[DB] Database engine disposed")
        self._engine = None
        self._session_factory = None

    def ping(self) -> bool:
        """Run a trivial query, returning False when the database is unreachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, StorageNotConnectedError) as e:
            logger.error(f"[DB] Database connection test failed: {e}")
            return False
        return True

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Get a database session that commits on success and rolls back on error.

        SQLAlchemy failures are re-raised as StorageError so callers can tell
        storage trouble apart from their own validation errors.
        """
        if self._session_factory is None:
            raise StorageNotConnectedError("Database.connect() has not been called")

        session = self._session_factory()
        try:
            yield session
            if session.dirty or session.new or session.deleted:
                session.commit()
                logger.debug("[DB] Database session committed")
        except SQLAlchemyError as e:
            logger.error(f"[DB] Database session error, rolling back: {type(e).__name__}: {e}")
            session.rollback()
            raise StorageError(str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
