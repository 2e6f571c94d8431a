# app/services/time_stats.py
"""
Roll time logs up into statistics.

Two shapes are produced from the same grouped queries: totals for a recent
period (one group per goal, or a single group when a goal is given) and a
per-calendar-day series for one goal. ``created_at`` is the time axis for
both; the logged start/end instants play no part.
"""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Any, Dict, Hashable, List, Optional
import logging

from dateutil.relativedelta import relativedelta

from app.services.exceptions import NotFoundError
from app.services.group_key import BY_CALENDAR_DAY, BY_GOAL, OVERALL
from app.services.record_store import CategoryTotal, RecordStore
from app.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)

PERIODS = ("day", "week", "month")


def period_start(period: str, now: datetime) -> datetime:
    """Cutoff instant for a stats period; unknown periods fall back to a week"""
    if period == "day":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "month":
        return now - relativedelta(months=1)
    return now - timedelta(days=7)


def fold_categories(categories: List[Dict[str, Any]]) -> Dict[str, int]:
    breakdown: Dict[str, int] = {}
    for item in categories:
        breakdown[item["category"]] = breakdown.get(item["category"], 0) + item["duration"]
    return breakdown


def _categories_by_key(totals: List[CategoryTotal]) -> Dict[Hashable, List[Dict[str, Any]]]:
    grouped = defaultdict(list)
    for total in totals:
        grouped[total.key].append({"category": total.category.value, "duration": total.minutes})
    return grouped


def goal_projection(goal) -> Optional[Dict[str, Any]]:
    if goal is None:
        return None
    return {
        "id": goal.id,
        "title": goal.title,
        "category": goal.category,
        "priority": goal.priority.value,
    }


class TimeStatsService:
    def __init__(self, store: RecordStore, clock: Clock = utcnow):
        self.store = store
        self.clock = clock

    def period_stats(self, owner_id: int, goal_id: Optional[int] = None, period: str = "week") -> List[Dict[str, Any]]:
        since = period_start(period, self.clock())
        group_key = OVERALL if goal_id is not None else BY_GOAL

        totals = self.store.aggregate_time_logs(owner_id, since, group_key, goal_id=goal_id)
        categories = _categories_by_key(
            self.store.aggregate_categories(owner_id, since, group_key, goal_id=goal_id)
        )
        goals = {}
        if group_key is BY_GOAL:
            goals = self.store.goals_by_ids([group.key for group in totals], owner_id)

        stats = []
        for group in totals:
            group_categories = categories.get(group.key, [])
            stats.append({
                "goal_id": group.key,
                "goal": goal_projection(goals.get(group.key)),
                "total_minutes": group.total_minutes,
                "total_sessions": group.total_sessions,
                "avg_session_length": group.avg_session_length,
                "total_hours": group.total_minutes / 60,
                "avg_session_hours": group.avg_session_length / 60,
                "categories": group_categories,
                "category_breakdown": fold_categories(group_categories),
            })
        stats.sort(key=lambda item: item["total_minutes"], reverse=True)

        logger.info(f"Computed {period} stats for user {owner_id}: {len(stats)} group(s) since {since.isoformat()}")
        return stats

    def daily_stats(self, owner_id: int, goal_id: int, days: int = 30) -> Dict[str, Any]:
        goal = self.store.find_goal(goal_id, owner_id)
        if goal is None:
            raise NotFoundError("Goal")

        since = self.clock() - timedelta(days=days)
        totals = self.store.aggregate_time_logs(owner_id, since, BY_CALENDAR_DAY, goal_id=goal_id)
        categories = _categories_by_key(
            self.store.aggregate_categories(owner_id, since, BY_CALENDAR_DAY, goal_id=goal_id)
        )

        daily = []
        for group in totals:
            day_categories = categories.get(group.key, [])
            daily.append({
                "date": group.key,
                "total_minutes": group.total_minutes,
                "total_sessions": group.total_sessions,
                "total_hours": group.total_minutes / 60,
                "categories": day_categories,
                "category_breakdown": fold_categories(day_categories),
            })
        daily.sort(key=lambda item: item["date"], reverse=True)

        return {
            "goal": goal_projection(goal),
            "daily_stats": daily,
            "total_days": len(daily),
        }
