"""Database engine and session factory."""

import logging
import time
from typing import Callable

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""

    pass


class DatabaseUnavailableError(Exception):
    """Database could not be reached after all retries."""

    pass


def create_db_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for the given URL."""
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True, pool_recycle=3600)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def wait_for_database(
    engine: Engine,
    retries: int = 5,
    delay: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Probe the database until it answers or retries run out.

    Args:
        engine: Engine to probe
        retries: Number of attempts
        delay: Seconds to wait between attempts
        sleep: Sleep function (overridable in tests)

    Raises:
        DatabaseUnavailableError: If every attempt fails
    """
    for attempt in range(1, retries + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connected successfully")
            return
        except OperationalError as e:
            logger.error(f"Database connection attempt {attempt}/{retries} failed: {e}")
            if attempt < retries:
                logger.info(f"Retrying database connection in {delay}s...")
                sleep(delay)

    raise DatabaseUnavailableError(f"Database unreachable after {retries} attempts")

