"""Shared fixtures: an in-memory database, a fixed clock and an authenticated client."""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models import Goal, Task, TaskList, TimeLog, TimeLogCategory, User
from app.services.record_store import RecordStore
from app.utils.auth import get_current_user
from app.utils.clock import get_clock
from main import app

NOW = datetime(2025, 3, 14, 15, 0, 0)


class FakeClock:
    """Deterministic time source that tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return RecordStore(db)


@pytest.fixture
def clock():
    return FakeClock(NOW)


def _persist(db, instance):
    db.add(instance)
    db.commit()
    db.refresh(instance)
    return instance


@pytest.fixture
def user(db):
    return _persist(db, User(name="Ada", email="ada@example.com", is_active=True))


@pytest.fixture
def other_user(db):
    return _persist(db, User(name="Grace", email="grace@example.com", is_active=True))


@pytest.fixture
def make_goal(db, user):
    def _make(title="Run a marathon", owner=None, **kwargs):
        kwargs.setdefault("target_date", datetime(2025, 12, 31))
        return _persist(db, Goal(user_id=(owner or user).id, title=title, **kwargs))
    return _make


@pytest.fixture
def make_task_list(db):
    def _make(goal, name="Training plan"):
        return _persist(db, TaskList(name=name, goal_id=goal.id, user_id=goal.user_id))
    return _make


@pytest.fixture
def make_task(db):
    def _make(task_list, title="Long run"):
        return _persist(db, Task(title=title, list_id=task_list.id, user_id=task_list.user_id))
    return _make


@pytest.fixture
def make_time_log(db):
    def _make(goal, duration, created_at, category=TimeLogCategory.EXECUTION, **kwargs):
        return _persist(db, TimeLog(
            user_id=goal.user_id,
            goal_id=goal.id,
            duration=duration,
            start_time=created_at - timedelta(minutes=duration),
            end_time=created_at,
            category=category,
            created_at=created_at,
            **kwargs,
        ))
    return _make


@pytest.fixture
def client(session_factory, user, clock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
