import logging
import os
import time
from typing import Callable, TypeVar

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

load_dotenv()

logger = logging.getLogger(__name__)

T = TypeVar("T")

DATABASE_URL = os.getenv("SIM_DEVICE_DATABASE_URL", "sqlite:///./sim_device_commands.db")

# Default bounded-retry settings for mutating store calls
DEFAULT_RETRY_ATTEMPTS = 6
DEFAULT_RETRY_DELAY_SECONDS = 0.1

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None) -> None:
    """Create any missing tables. Alembic owns schema changes in deployments."""
    from models import Base

    Base.metadata.create_all(bind=bind or engine)


def with_retry(
    operation: Callable[[], T],
    max_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    delay: float = DEFAULT_RETRY_DELAY_SECONDS,
) -> T:
    """
    Run a store operation, retrying on transient contention.

    Only OperationalError (e.g. SQLite "database is locked") is retried; any
    other error propagates immediately. After the last attempt the final
    error is re-raised.

    Args:
        operation: Zero-argument callable performing the store call
        max_attempts: Total number of attempts (at least one is made)
        delay: Seconds to sleep between attempts

    Returns:
        Whatever the operation returns
    """
    attempts = max(1, max_attempts)
    attempt = 0
    while True:
        try:
            return operation()
        except OperationalError as e:
            attempt += 1
            if attempt >= attempts:
                raise
            logger.warning(
                "Transient store error, retrying (attempt %s/%s): %s",
                attempt, attempts, e,
            )
            time.sleep(delay)
