"""Pytest configuration and shared fixtures."""

import os
import tempfile

# Configure settings BEFORE importing application code.
_TEST_DIR = tempfile.mkdtemp(prefix="housepoints-tests-")
os.environ["HOUSEPOINTS_DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["HOUSEPOINTS_STUDENT_EMAIL_DOMAIN"] = "student.nhlstenden.com"
os.environ.pop("HOUSEPOINTS_MIRROR_DIR", None)

import pytest
from fastapi.testclient import TestClient

from housepoints.core.database import Base, SessionLocal, engine, init_db
from housepoints.main import app


@pytest.fixture(autouse=True)
def _schema():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client():
    return TestClient(app)
