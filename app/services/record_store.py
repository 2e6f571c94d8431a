# app/services/record_store.py
"""
Persistence boundary for goals, task lists, tasks and time logs.

Every lookup and mutation is scoped by the owning user's id. Grouped
aggregation queries and the all-or-nothing transactional block used by the
goal cascade live here as well, so services never build SQL themselves.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Hashable, Iterable, List, Optional, Tuple
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Goal, Task, TaskList, TimeLog, TimeLogCategory
from app.services.group_key import GroupKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupTotals:
    key: Hashable
    total_minutes: int
    total_sessions: int
    avg_session_length: float


@dataclass(frozen=True)
class CategoryTotal:
    key: Hashable
    category: TimeLogCategory
    minutes: int


class RecordStore:
    """Owner-scoped data access over a request's SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    # Transactions

    @contextmanager
    def atomic(self):
        """Commit everything done inside the block, or roll all of it back"""
        try:
            yield self
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def add(self, instance):
        self.db.add(instance)
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def save(self, instance):
        self.db.commit()
        self.db.refresh(instance)
        return instance

    def delete(self, instance):
        self.db.delete(instance)
        self.db.commit()

    # Goals, task lists, tasks

    def find_goal(self, goal_id: int, owner_id: int) -> Optional[Goal]:
        return self.db.query(Goal).filter(Goal.id == goal_id, Goal.user_id == owner_id).first()

    def goals_by_ids(self, goal_ids: Iterable[int], owner_id: int) -> Dict[int, Goal]:
        goal_ids = list(goal_ids)
        if not goal_ids:
            return {}
        goals = self.db.query(Goal).filter(Goal.id.in_(goal_ids), Goal.user_id == owner_id).all()
        return {goal.id: goal for goal in goals}

    def list_goals(self, owner_id: int, offset: int, limit: int) -> Tuple[List[Goal], int]:
        query = self.db.query(Goal).filter(Goal.user_id == owner_id)
        total = query.count()
        goals = query.order_by(Goal.created_at.desc(), Goal.id.desc()).offset(offset).limit(limit).all()
        return goals, total

    def find_task_list(self, task_list_id: int, owner_id: int, goal_id: Optional[int] = None) -> Optional[TaskList]:
        query = self.db.query(TaskList).filter(TaskList.id == task_list_id, TaskList.user_id == owner_id)
        if goal_id is not None:
            query = query.filter(TaskList.goal_id == goal_id)
        return query.first()

    def task_lists_for_owner(self, owner_id: int, goal_id: Optional[int] = None) -> List[TaskList]:
        query = self.db.query(TaskList).filter(TaskList.user_id == owner_id)
        if goal_id is not None:
            query = query.filter(TaskList.goal_id == goal_id)
        return query.order_by(TaskList.created_at.desc(), TaskList.id.desc()).all()

    def find_task(self, task_id: int, owner_id: int, list_id: Optional[int] = None) -> Optional[Task]:
        query = self.db.query(Task).filter(Task.id == task_id, Task.user_id == owner_id)
        if list_id is not None:
            query = query.filter(Task.list_id == list_id)
        return query.first()

    def tasks_in_list(self, list_id: int, owner_id: int) -> List[Task]:
        return (
            self.db.query(Task)
            .filter(Task.list_id == list_id, Task.user_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .all()
        )

    # Bulk deletes; callers decide whether they share a transaction

    def task_list_ids_for_goal(self, goal_id: int, owner_id: int) -> List[int]:
        rows = self.db.query(TaskList.id).filter(TaskList.goal_id == goal_id, TaskList.user_id == owner_id).all()
        return [row.id for row in rows]

    def delete_tasks_in_lists(self, list_ids: List[int], owner_id: int) -> int:
        return (
            self.db.query(Task)
            .filter(Task.list_id.in_(list_ids), Task.user_id == owner_id)
            .delete(synchronize_session=False)
        )

    def delete_task_lists_for_goal(self, goal_id: int, owner_id: int) -> int:
        return (
            self.db.query(TaskList)
            .filter(TaskList.goal_id == goal_id, TaskList.user_id == owner_id)
            .delete(synchronize_session=False)
        )

    def delete_goal(self, goal_id: int, owner_id: int) -> int:
        return (
            self.db.query(Goal)
            .filter(Goal.id == goal_id, Goal.user_id == owner_id)
            .delete(synchronize_session=False)
        )

    def delete_task_list_with_tasks(self, list_id: int, owner_id: int) -> None:
        """Two separate commits: a crash in between leaves orphaned tasks behind"""
        self.delete_tasks_in_lists([list_id], owner_id)
        self.db.commit()
        self.db.query(TaskList).filter(
            TaskList.id == list_id, TaskList.user_id == owner_id
        ).delete(synchronize_session=False)
        self.db.commit()

    # Time logs

    def find_time_log(self, time_log_id: int, owner_id: int) -> Optional[TimeLog]:
        return self.db.query(TimeLog).filter(TimeLog.id == time_log_id, TimeLog.user_id == owner_id).first()

    def delete_time_log(self, time_log_id: int, owner_id: int) -> bool:
        deleted = (
            self.db.query(TimeLog)
            .filter(TimeLog.id == time_log_id, TimeLog.user_id == owner_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def query_time_logs(
        self,
        owner_id: int,
        offset: int,
        limit: int,
        goal_id: Optional[int] = None,
        task_list_id: Optional[int] = None,
        task_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Tuple[List[TimeLog], int]:
        query = self.db.query(TimeLog).filter(TimeLog.user_id == owner_id)
        if goal_id is not None:
            query = query.filter(TimeLog.goal_id == goal_id)
        if task_list_id is not None:
            query = query.filter(TimeLog.task_list_id == task_list_id)
        if task_id is not None:
            query = query.filter(TimeLog.task_id == task_id)
        if start_date is not None:
            query = query.filter(TimeLog.created_at >= start_date)
        if end_date is not None:
            query = query.filter(TimeLog.created_at <= end_date)

        total = query.count()
        time_logs = (
            query.order_by(TimeLog.created_at.desc(), TimeLog.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return time_logs, total

    # Grouped aggregation

    def _scoped_time_logs(self, owner_id: int, since: datetime, goal_id: Optional[int]):
        filters = [TimeLog.user_id == owner_id, TimeLog.created_at >= since]
        if goal_id is not None:
            filters.append(TimeLog.goal_id == goal_id)
        return filters

    def aggregate_time_logs(
        self,
        owner_id: int,
        since: datetime,
        group_key: GroupKey,
        goal_id: Optional[int] = None,
    ) -> List[GroupTotals]:
        """Sum, count and average of durations per group"""
        key_columns = group_key.columns()
        query = self.db.query(
            *[expression.label(name) for name, expression in key_columns],
            func.sum(TimeLog.duration).label("total_minutes"),
            func.count(TimeLog.id).label("total_sessions"),
            func.avg(TimeLog.duration).label("avg_session_length"),
        ).filter(*self._scoped_time_logs(owner_id, since, goal_id))
        if key_columns:
            query = query.group_by(*[expression for _, expression in key_columns])

        results = []
        for row in query.all():
            values = row._mapping
            # An ungrouped aggregate over nothing still yields one all-NULL row
            if not values["total_sessions"]:
                continue
            results.append(GroupTotals(
                key=group_key.key_of(values),
                total_minutes=int(values["total_minutes"]),
                total_sessions=int(values["total_sessions"]),
                avg_session_length=float(values["avg_session_length"]),
            ))
        logger.debug(f"Aggregated {len(results)} time log groups for user {owner_id}")
        return results

    def aggregate_categories(
        self,
        owner_id: int,
        since: datetime,
        group_key: GroupKey,
        goal_id: Optional[int] = None,
    ) -> List[CategoryTotal]:
        """Minutes per category within each group"""
        key_columns = group_key.columns()
        group_by = [expression for _, expression in key_columns] + [TimeLog.category]
        query = (
            self.db.query(
                *[expression.label(name) for name, expression in key_columns],
                TimeLog.category.label("category"),
                func.sum(TimeLog.duration).label("minutes"),
            )
            .filter(*self._scoped_time_logs(owner_id, since, goal_id))
            .group_by(*group_by)
            .order_by(TimeLog.category)
        )
        return [
            CategoryTotal(
                key=group_key.key_of(row._mapping),
                category=row._mapping["category"],
                minutes=int(row._mapping["minutes"]),
            )
            for row in query.all()
        ]
