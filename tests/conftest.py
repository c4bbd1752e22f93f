"""
Shared fixtures: a fresh in-memory SQLite database per test.
"""

import pytest
from sqlalchemy.orm import Session

from core.preferences import PreferenceStore
from core.store import VocabularyStore
from db.database import init_db, make_engine


@pytest.fixture
def session():
    """Create a fresh in-memory SQLite database for each test."""
    engine = make_engine("sqlite:///:memory:")
    init_db(engine)
    with Session(engine, expire_on_commit=False) as s:
        yield s
    engine.dispose()


@pytest.fixture
def store(session):
    return VocabularyStore(session)


@pytest.fixture
def prefs(session):
    return PreferenceStore(session)
