"""
Shared fixtures.

Dates are pinned: "now" is Monday 2026-01-05 10:00.
"""
import pytest
from datetime import datetime, timedelta

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lifetrack import models  # noqa: F401  (registers the documents table)
from lifetrack.database import Base
from lifetrack.schemas import CleaningTask, FixedRecurrence, HabitTemplate
from lifetrack.storage import InMemoryDocumentStore, SqlDocumentStore


@pytest.fixture
def store():
    """Empty in-memory document store"""
    return InMemoryDocumentStore()


@pytest.fixture
def sql_store():
    """Document store over an in-memory SQLite database"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield SqlDocumentStore(session_factory)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def now():
    return datetime(2026, 1, 5, 10, 0, 0)


@pytest.fixture
def today(now):
    return now.date()


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


@pytest.fixture
def make_task(now):
    """Factory for cleaning tasks created a week before now"""
    def _make_task(title="Task", kind="weekly", last_completed=None, snoozed_until=None,
                   created_at=None, is_active=True, recurrence=None):
        return CleaningTask(
            title=title,
            recurrence=recurrence or FixedRecurrence(kind=kind),
            last_completed_date=last_completed,
            snoozed_until=snoozed_until,
            is_active=is_active,
            created_at=created_at or now - timedelta(days=7),
        )
    return _make_task


@pytest.fixture
def daily_habit():
    return HabitTemplate(title="Read a chapter")
