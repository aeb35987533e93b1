"""
Database setup for the SQL store backend.

The engine is created lazily from settings so that importing the entity
models never opens a connection.
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config.settings import get_settings

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite needs cross-thread access under Streamlit."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


@lru_cache
def get_engine() -> Engine:
    """Engine for the configured DATABASE_URL."""
    return build_engine(get_settings().database_url)


@lru_cache
def get_sessionmaker() -> sessionmaker:
    """Session factory bound to the configured engine, built once."""
    return sessionmaker(bind=get_engine(), autoflush=False)


def SessionLocal():
    """Open a session bound to the configured engine."""
    return get_sessionmaker()()


def get_db():
    """Yield a session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_all(engine: Engine = None):
    """Create all tables known to the entity models."""
    # Entities register themselves on Base when imported
    import models.entities  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
