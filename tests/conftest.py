import os
import sys
from datetime import datetime

import pytest

# Path setup before any project imports
ROOT = os.path.dirname(__file__)
PARENT = os.path.abspath(os.path.join(ROOT, ".."))
if PARENT not in sys.path:  # pragma: no cover - environment dependent
    sys.path.insert(0, PARENT)

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from config.database import create_all  # noqa: E402
from models.repositories import WeeklyShopRepository  # noqa: E402
from services.stores.sql import SqlStore  # noqa: E402
from tests.factories import FakeStore, RecordingNotifier  # noqa: E402


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def repository(fake_store):
    return WeeklyShopRepository(fake_store)


@pytest.fixture
def fixed_now():
    """Wednesday 10 January 2024, noon local time."""
    return datetime(2024, 1, 10, 12, 0)


@pytest.fixture
def session_factory():
    """Sessions on a private in-memory SQLite database with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False)
    engine.dispose()


@pytest.fixture
def sql_store(session_factory):
    return SqlStore(session_factory)


