"""Declarative base, engine and session helpers."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from seeder.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def create_db_engine(url: str | None = None, **kwargs) -> Engine:
    url = url or settings.DATABASE_URL
    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE clauses unless foreign keys are switched on
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    logger.debug(f"Engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Yield a session, commit on success, roll back on error."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(engine: Engine) -> None:
    """Create every table known to the models."""
    import seeder.models  # noqa: F401

    Base.metadata.create_all(engine)
    logger.info("Database schema created")


def drop_db(engine: Engine) -> None:
    import seeder.models  # noqa: F401

    Base.metadata.drop_all(engine)
    logger.info("Database schema dropped")


def has_tables(session: Session, *tables: str) -> bool:
    inspector = inspect(session.get_bind())
    return all(inspector.has_table(table) for table in tables)
