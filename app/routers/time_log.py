# app/routers/time_log.py
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from datetime import datetime

from app.config.settings import app_config
from app.dependencies import get_time_log_service, get_time_stats_service
from app.models.user import User
from app.schemas.time_log import (
    TimeLogCreate, TimeLogUpdate, TimeLogOut, TimeLogPage, TimeStatsOut, DailyTimeStatsOut,
)
from app.services.exceptions import TimeTrackingError
from app.services.time_log_service import TimeLogService
from app.services.time_stats import TimeStatsService
from app.utils.auth import get_current_user
from app.utils.clock import to_naive_utc

router = APIRouter(prefix="/timelogs", tags=["time-logs"])

@router.get("/", response_model=TimeLogPage)
def get_time_logs(
    page: int = Query(1, ge=1, le=10000),
    limit: Optional[int] = Query(None, ge=1, description="Page size, capped by configuration"),
    goal_id: Optional[int] = None,
    task_list_id: Optional[int] = None,
    task_id: Optional[int] = None,
    start_date: Optional[datetime] = Query(None, description="Earliest created_at, inclusive"),
    end_date: Optional[datetime] = Query(None, description="Latest created_at, inclusive"),
    service: TimeLogService = Depends(get_time_log_service),
    current_user: User = Depends(get_current_user)
):
    """Get the current user's time logs, newest first"""
    time_logs, pagination = service.list(
        current_user.id,
        page=page,
        limit=limit,
        goal_id=goal_id,
        task_list_id=task_list_id,
        task_id=task_id,
        start_date=to_naive_utc(start_date) if start_date else None,
        end_date=to_naive_utc(end_date) if end_date else None,
    )
    return TimeLogPage(
        time_logs=[TimeLogOut.model_validate(time_log) for time_log in time_logs],
        **pagination
    )

@router.get("/stats", response_model=List[TimeStatsOut])
def get_time_stats(
    goal_id: Optional[int] = None,
    period: str = Query(app_config.TIME_LOGS['default_period'], description="day, week or month"),
    service: TimeStatsService = Depends(get_time_stats_service),
    current_user: User = Depends(get_current_user)
):
    """Totals, averages and category breakdown per goal for a recent period"""
    return service.period_stats(current_user.id, goal_id=goal_id, period=period)

@router.get("/daily/{goal_id}", response_model=DailyTimeStatsOut)
def get_daily_time_stats(
    goal_id: int,
    days: int = Query(app_config.TIME_LOGS['default_daily_days'], ge=0, le=3650),
    service: TimeStatsService = Depends(get_time_stats_service),
    current_user: User = Depends(get_current_user)
):
    """Per-calendar-day totals for one goal, most recent day first"""
    try:
        return service.daily_stats(current_user.id, goal_id, days=days)
    except TimeTrackingError as e:
        raise e.to_http()

@router.post("/", response_model=TimeLogOut, status_code=status.HTTP_201_CREATED)
def create_time_log(
    log_data: TimeLogCreate,
    service: TimeLogService = Depends(get_time_log_service),
    current_user: User = Depends(get_current_user)
):
    """Log time against a goal, optionally narrowed to a task list and task"""
    try:
        time_log = service.create(current_user.id, **log_data.model_dump())
    except TimeTrackingError as e:
        raise e.to_http()
    return TimeLogOut.model_validate(time_log)

@router.put("/{time_log_id}", response_model=TimeLogOut)
def update_time_log(
    time_log_id: int,
    log_update: TimeLogUpdate,
    service: TimeLogService = Depends(get_time_log_service),
    current_user: User = Depends(get_current_user)
):
    """Update a time log; moving either end recomputes the duration"""
    try:
        time_log = service.update(time_log_id, current_user.id, log_update.model_dump(exclude_unset=True))
    except TimeTrackingError as e:
        raise e.to_http()
    return TimeLogOut.model_validate(time_log)

@router.delete("/{time_log_id}")
def delete_time_log(
    time_log_id: int,
    service: TimeLogService = Depends(get_time_log_service),
    current_user: User = Depends(get_current_user)
):
    """Delete a time log"""
    try:
        service.delete(time_log_id, current_user.id)
    except TimeTrackingError as e:
        raise e.to_http()
    return {"message": "Time log deleted successfully"}
