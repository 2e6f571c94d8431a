# app/dependencies.py
"""Service factories for FastAPI's Depends(), one instance per request."""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.goal_deletion import GoalDeletionCoordinator
from app.services.record_store import RecordStore
from app.services.time_log_service import TimeLogService
from app.services.time_stats import TimeStatsService
from app.utils.clock import Clock, get_clock


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_time_log_service(
    store: RecordStore = Depends(get_record_store),
    clock: Clock = Depends(get_clock),
) -> TimeLogService:
    return TimeLogService(store, clock)


def get_time_stats_service(
    store: RecordStore = Depends(get_record_store),
    clock: Clock = Depends(get_clock),
) -> TimeStatsService:
    return TimeStatsService(store, clock)


def get_goal_deletion_coordinator(store: RecordStore = Depends(get_record_store)) -> GoalDeletionCoordinator:
    return GoalDeletionCoordinator(store)
