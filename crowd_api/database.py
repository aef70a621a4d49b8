from __future__ import annotations

from collections.abc import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import Settings, get_settings


class Base(DeclarativeBase):
    pass


def create_engine_from_settings(settings: Settings) -> Engine:
    """Create the process-wide engine with a bounded connection pool."""

    url = make_url(settings.database_url)
    options: dict[str, object] = {"future": True, "echo": False, "pool_pre_ping": True}
    # In-memory SQLite runs on a single-connection pool that takes no sizing.
    if not (url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")):
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return create_engine(url, **options)


ENGINE = create_engine_from_settings(get_settings())
SessionLocal = sessionmaker(bind=ENGINE, autoflush=False, autocommit=False, future=True)


def get_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
