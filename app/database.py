"""
SQLAlchemy storage client for the shared ledger API.

The engine (and its connection pool) is owned by a ``Database`` instance that
``create_app()`` constructs once per process and stores on
``app.state.database``.  Request handlers obtain sessions through the
``get_db`` dependency, which reads the client from the running application
instead of a module-level global.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the SQLAlchemy engine and the session factory bound to it.

    Args:
        url: SQLAlchemy database URL.  ``postgres://`` URLs (as issued by
             some hosting providers) are rewritten to ``postgresql://``.
        **engine_kwargs: Extra keyword arguments for ``create_engine``
                         (e.g. ``poolclass=StaticPool`` in tests).
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)

        connect_args: dict[str, Any] = {}
        if url.startswith("sqlite"):
            connect_args = {"check_same_thread": False}

        self.url = url
        self.engine = create_engine(
            url,
            connect_args=connect_args,
            pool_pre_ping=True,
            **engine_kwargs,
        )
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )

    def session(self) -> Session:
        return self.SessionLocal()

    def create_all(self) -> None:
        """Create every table registered on ``Base.metadata``."""
        # Register all mappers before emitting DDL
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ensured on %s", self.engine.url.render_as_string())

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency yielding a session from the application's storage client."""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
