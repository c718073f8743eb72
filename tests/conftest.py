"""
Shared fixtures: an in-memory SQLite store and a registry service bound to it.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db import init_db
from services.sim_device_command_service import SimDeviceCommandService


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across sessions of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def service(session_factory):
    """Registry service with a fast retry budget"""
    return SimDeviceCommandService(session_factory, max_attempts=3, retry_delay=0)
