import os

# Must be set before the app (and its settings) are imported
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from timetrack.core.database import Base, get_db
from timetrack.models import Project, TaskName, TimeEntry
from main import app

# Test database
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

T0 = datetime(2026, 3, 10, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def test_project(db):
    project = Project(name="P", color="#112233")
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def make_entry(db):
    """Insert a time entry directly, bypassing the single-timer guard"""
    def _make_entry(project, task="T", start=T0, seconds=None):
        task_name = db.query(TaskName).filter(TaskName.name == task).first()
        if task_name is None:
            task_name = TaskName(name=task)
            db.add(task_name)
            db.flush()
        entry = TimeEntry(
            project_id=project.id,
            task_name_id=task_name.id,
            start_time=start,
        )
        if seconds is not None:
            entry.end_time = start + timedelta(seconds=seconds)
            entry.duration = seconds
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry
    return _make_entry
