# app/services/time_log_service.py
"""
Create, update, delete and list time logs for one owner.

Creation validates the goal -> task list -> task ownership chain and resolves
the interval; updates may only move the interval, in which case the duration
is derived again from the new pair.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import logging
import math

from app.config.settings import app_config
from app.models import TimeLog, TimeLogCategory
from app.services.exceptions import NotFoundError
from app.services.interval import resolve_interval, round_minutes
from app.services.record_store import RecordStore
from app.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "task_list_id",
    "task_id",
    "start_time",
    "end_time",
    "description",
    "category",
    "is_timer_session",
)

# Nullable references; every other field ignores an explicit null
CLEARABLE_FIELDS = ("task_list_id", "task_id")


class TimeLogService:
    def __init__(self, store: RecordStore, clock: Clock = utcnow):
        self.store = store
        self.clock = clock

    def _check_references(
        self,
        owner_id: int,
        goal_id: int,
        task_list_id: Optional[int],
        task_id: Optional[int],
    ) -> None:
        if self.store.find_goal(goal_id, owner_id) is None:
            raise NotFoundError("Goal")

        if task_list_id is not None and self.store.find_task_list(task_list_id, owner_id, goal_id=goal_id) is None:
            raise NotFoundError("Task list")

        if task_id is not None and self.store.find_task(task_id, owner_id, list_id=task_list_id) is None:
            raise NotFoundError("Task")

    def create(
        self,
        owner_id: int,
        goal_id: int,
        task_list_id: Optional[int] = None,
        task_id: Optional[int] = None,
        duration: Optional[float] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        description: Optional[str] = None,
        category: Optional[TimeLogCategory] = None,
        is_timer_session: bool = False,
    ) -> TimeLog:
        self._check_references(owner_id, goal_id, task_list_id, task_id)

        now = self.clock()
        interval = resolve_interval(duration, start_time, end_time, now)

        time_log = TimeLog(
            user_id=owner_id,
            goal_id=goal_id,
            task_list_id=task_list_id,
            task_id=task_id,
            duration=interval.duration,
            start_time=interval.start_time,
            end_time=interval.end_time,
            description=(description or "").strip(),
            category=category or TimeLogCategory.EXECUTION,
            is_timer_session=bool(is_timer_session),
            created_at=now,
            updated_at=now,
        )
        self.store.add(time_log)

        logger.info(
            f"Time log {time_log.id} created for goal {goal_id} by user {owner_id}: "
            f"{time_log.duration} min ({'timer' if time_log.is_timer_session else 'manual'})"
        )
        return time_log

    def update(self, time_log_id: int, owner_id: int, updates: Dict[str, Any]) -> TimeLog:
        time_log = self.store.find_time_log(time_log_id, owner_id)
        if time_log is None:
            raise NotFoundError("Time log")

        changes = {}
        for field in UPDATABLE_FIELDS:
            if field not in updates:
                continue
            value = updates[field]
            if value is None and field not in CLEARABLE_FIELDS:
                continue
            changes[field] = value.strip() if isinstance(value, str) else value

        if "task_list_id" in changes or "task_id" in changes:
            self._check_references(
                owner_id,
                time_log.goal_id,
                changes.get("task_list_id", time_log.task_list_id),
                changes.get("task_id", time_log.task_id),
            )

        if "start_time" in changes or "end_time" in changes:
            start_time = changes.get("start_time", time_log.start_time)
            end_time = changes.get("end_time", time_log.end_time)
            # Derived without the one-minute floor or interval check applied on create
            changes["duration"] = round_minutes(end_time - start_time)
            if changes["duration"] < 1:
                logger.warning(
                    f"Time log {time_log_id} updated to a non-positive duration "
                    f"({changes['duration']} min) by user {owner_id}"
                )

        for field, value in changes.items():
            setattr(time_log, field, value)
        time_log.updated_at = self.clock()
        self.store.save(time_log)

        logger.info(f"Time log {time_log_id} updated by user {owner_id}: {sorted(changes)}")
        return time_log

    def delete(self, time_log_id: int, owner_id: int) -> None:
        if not self.store.delete_time_log(time_log_id, owner_id):
            raise NotFoundError("Time log")
        logger.info(f"Time log {time_log_id} deleted by user {owner_id}")

    def list(
        self,
        owner_id: int,
        page: int = 1,
        limit: Optional[int] = None,
        goal_id: Optional[int] = None,
        task_list_id: Optional[int] = None,
        task_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Tuple[List[TimeLog], Dict[str, int]]:
        limit = min(limit or app_config.TIME_LOGS['page_size'], app_config.TIME_LOGS['max_page_size'])
        time_logs, total = self.store.query_time_logs(
            owner_id,
            offset=(page - 1) * limit,
            limit=limit,
            goal_id=goal_id,
            task_list_id=task_list_id,
            task_id=task_id,
            start_date=start_date,
            end_date=end_date,
        )
        return time_logs, {
            "total_pages": math.ceil(total / limit),
            "current_page": page,
            "total": total,
        }
