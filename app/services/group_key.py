# app/services/group_key.py
"""
Grouping keys for time log aggregation.

A key names the SQL expressions a grouped query selects and groups by, and
rebuilds the group identity from a result row. Three shapes exist: every
matching record in one group, one group per goal, and one group per calendar
day of ``created_at``.
"""

from datetime import date
from typing import Any, Hashable, List, Mapping, Tuple

from sqlalchemy import extract

from app.models.time_log import TimeLog


class GroupKey:
    def columns(self) -> List[Tuple[str, Any]]:
        """(label, expression) pairs to select and group by"""
        return []

    def key_of(self, row: Mapping[str, Any]) -> Hashable:
        raise NotImplementedError


class Overall(GroupKey):
    def key_of(self, row):
        return None


class ByGoal(GroupKey):
    def columns(self):
        return [("goal_id", TimeLog.goal_id)]

    def key_of(self, row):
        return row["goal_id"]


class ByCalendarDay(GroupKey):
    def columns(self):
        return [
            ("year", extract("year", TimeLog.created_at)),
            ("month", extract("month", TimeLog.created_at)),
            ("day", extract("day", TimeLog.created_at)),
        ]

    def key_of(self, row):
        return date(int(row["year"]), int(row["month"]), int(row["day"]))


OVERALL = Overall()
BY_GOAL = ByGoal()
BY_CALENDAR_DAY = ByCalendarDay()
