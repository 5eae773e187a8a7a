"""Pytest configuration and fixtures."""

import os
import tempfile

import pytest

# Keep test logs out of the working tree; must be set before taskbrain is imported
os.environ.setdefault("LOG_FILE_PATH", os.path.join(tempfile.gettempdir(), "taskbrain-tests", "taskbrain.log"))
os.environ.setdefault("DEFAULT_TZ", "Europe/Oslo")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from taskbrain.core.recurring_task_service import RecurringTaskService
from taskbrain.domain.schemas.database import Base
from taskbrain.infrastructure.persistence.recurring_task_repository import (
    RecurringTaskRepository,
    TaskRepository,
)


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def service(session_factory):
    return RecurringTaskService(
        repo=RecurringTaskRepository(session_factory),
        task_repo=TaskRepository(session_factory),
    )
