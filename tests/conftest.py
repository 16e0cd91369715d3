# FILE: tests/conftest.py
"""
Pytest configuration for the capability sync test suite.

Configures:
- pytest-asyncio for async test support
- In-memory SQLite session with the catalog table created
"""
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Configure pytest-asyncio to use auto mode
pytest_plugins = ["pytest_asyncio"]


@pytest.fixture
def db_engine():
    """Single-connection in-memory engine, shareable across threads (TestClient)."""
    from app.db import Base
    from app.catalog import models  # noqa: F401

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seed_models(db_session):
    """Insert catalog rows: seed_models([(id, image_gen, web_search), ...])."""
    from app.catalog.models import CatalogModel

    def _seed(rows, enabled=True):
        for model_id, image_gen, web_search in rows:
            db_session.add(CatalogModel(
                id=model_id,
                name=model_id.split("/", 1)[-1],
                provider=model_id.split("/", 1)[0],
                pricing_image_gen=image_gen,
                pricing_web_search=web_search,
                is_enabled=enabled,
            ))
        db_session.commit()

    return _seed
