"""
Database engine, session factory and request-scoped session dependency
"""
import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import DB_POOL_SIZE

logger = logging.getLogger(__name__)

# Create base class for models
Base = declarative_base()


def set_utc_time_zone(dbapi_connection, connection_record):
    """Pin every new MySQL session to UTC"""
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("SET time_zone = '+00:00'")
    finally:
        cursor.close()


def create_db_engine(database_url: str, pool_size: int = DB_POOL_SIZE) -> Engine:
    """
    Build the connection pool.

    Non-SQLite backends get a hard cap of `pool_size` connections with no
    overflow, so callers wait for a free connection once the cap is reached.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            future=True,
            connect_args={"check_same_thread": False},
        )

    engine = create_engine(
        database_url,
        future=True,
        pool_size=pool_size,
        max_overflow=0,
    )

    if engine.dialect.name == "mysql":
        event.listen(engine, "connect", set_utc_time_zone)

    logger.info("Connection pool created: dialect=%s pool_size=%s", engine.dialect.name, pool_size)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency to get database session
def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
