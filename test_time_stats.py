"""Period and daily aggregation of time logs."""

from datetime import date, datetime, timedelta

import pytest

from app.models import GoalPriority, TimeLogCategory
from app.services.exceptions import NotFoundError
from app.services.group_key import BY_CALENDAR_DAY, BY_GOAL, OVERALL
from app.services.time_stats import TimeStatsService, fold_categories, period_start
from conftest import NOW


class TestPeriodStart:
    def test_day_starts_at_midnight(self):
        assert period_start("day", NOW) == datetime(2025, 3, 14)

    def test_week(self):
        assert period_start("week", NOW) == NOW - timedelta(days=7)

    def test_month_is_a_calendar_month(self):
        assert period_start("month", NOW) == datetime(2025, 2, 14, 15, 0, 0)
        assert period_start("month", datetime(2025, 3, 31)) == datetime(2025, 2, 28)

    def test_unknown_period_falls_back_to_week(self):
        assert period_start("fortnight", NOW) == NOW - timedelta(days=7)


def test_fold_categories_sums_repeats():
    categories = [
        {"category": "planning", "duration": 10},
        {"category": "review", "duration": 5},
        {"category": "planning", "duration": 15},
    ]
    assert fold_categories(categories) == {"planning": 25, "review": 5}


class TestGroupedQueries:
    def test_empty_store_yields_no_groups(self, store, user):
        since = NOW - timedelta(days=7)
        for group_key in (OVERALL, BY_GOAL, BY_CALENDAR_DAY):
            assert store.aggregate_time_logs(user.id, since, group_key) == []
            assert store.aggregate_categories(user.id, since, group_key) == []

    def test_calendar_day_boundaries(self, store, user, make_goal, make_time_log):
        goal = make_goal()
        make_time_log(goal, 20, datetime(2025, 3, 12, 23, 59))
        make_time_log(goal, 30, datetime(2025, 3, 13, 0, 1))

        groups = store.aggregate_time_logs(user.id, NOW - timedelta(days=7), BY_CALENDAR_DAY)

        assert {group.key: group.total_minutes for group in groups} == {
            date(2025, 3, 12): 20,
            date(2025, 3, 13): 30,
        }


@pytest.fixture
def goals(make_goal):
    return make_goal("Run a marathon"), make_goal("Learn Spanish", priority=GoalPriority.HIGH)


@pytest.fixture
def seeded(goals, make_time_log):
    marathon, spanish = goals
    make_time_log(marathon, 30, NOW - timedelta(days=1))
    make_time_log(marathon, 20, NOW - timedelta(days=2), category=TimeLogCategory.PLANNING)
    make_time_log(marathon, 100, NOW - timedelta(days=10))
    make_time_log(spanish, 15, NOW - timedelta(hours=3), category=TimeLogCategory.REVIEW)
    return goals


class TestPeriodStats:
    def test_week_groups_by_goal(self, client, seeded):
        marathon, spanish = seeded

        stats = client.get("/timelogs/stats").json()

        assert [item["goal_id"] for item in stats] == [marathon.id, spanish.id]
        first = stats[0]
        assert first["total_minutes"] == 50
        assert first["total_sessions"] == 2
        assert first["avg_session_length"] == 25
        assert first["total_hours"] == pytest.approx(50 / 60)
        assert first["avg_session_hours"] == pytest.approx(25 / 60)
        assert first["category_breakdown"] == {"execution": 30, "planning": 20}
        assert first["goal"]["title"] == "Run a marathon"
        assert stats[1]["goal"]["priority"] == "high"

    def test_day_starts_at_midnight(self, client, seeded):
        stats = client.get("/timelogs/stats", params={"period": "day"}).json()

        assert len(stats) == 1
        assert stats[0]["total_minutes"] == 15
        assert stats[0]["category_breakdown"] == {"review": 15}

    def test_month_reaches_older_logs(self, client, seeded):
        stats = client.get("/timelogs/stats", params={"period": "month"}).json()

        assert stats[0]["total_minutes"] == 150
        assert stats[0]["total_sessions"] == 3

    def test_goal_filter_forms_one_group(self, client, seeded):
        marathon, _ = seeded

        stats = client.get("/timelogs/stats", params={"goal_id": marathon.id}).json()

        assert len(stats) == 1
        assert stats[0]["goal_id"] is None
        assert stats[0]["total_minutes"] == 50
        assert sorted(stats[0]["categories"], key=lambda item: item["category"]) == [
            {"category": "execution", "duration": 30},
            {"category": "planning", "duration": 20},
        ]

    def test_no_matching_logs(self, client, user):
        assert client.get("/timelogs/stats").json() == []

    def test_other_users_logs_are_invisible(self, client, make_goal, make_time_log, other_user):
        make_time_log(make_goal(owner=other_user), 45, NOW - timedelta(hours=1))

        assert client.get("/timelogs/stats").json() == []


class TestDailyStats:
    @pytest.fixture
    def goal(self, make_goal, make_time_log):
        goal = make_goal()
        make_time_log(goal, 20, datetime(2025, 3, 12, 23, 59))
        make_time_log(goal, 30, datetime(2025, 3, 13, 0, 1), category=TimeLogCategory.MEETING)
        make_time_log(goal, 20, datetime(2025, 3, 13, 18, 0))
        return goal

    def test_groups_by_calendar_day_most_recent_first(self, client, goal):
        body = client.get(f"/timelogs/daily/{goal.id}", params={"days": 7}).json()

        assert body["goal"]["id"] == goal.id
        assert body["total_days"] == 2
        assert [day["date"] for day in body["daily_stats"]] == ["2025-03-13", "2025-03-12"]
        latest, earlier = body["daily_stats"]
        assert latest["total_minutes"] == 50
        assert latest["total_sessions"] == 2
        assert latest["category_breakdown"] == {"execution": 20, "meeting": 30}
        assert latest["total_hours"] == pytest.approx(50 / 60)
        assert earlier["total_minutes"] == 20

    def test_days_window_cuts_off_older_logs(self, client, goal):
        body = client.get(f"/timelogs/daily/{goal.id}", params={"days": 1}).json()

        assert [day["total_minutes"] for day in body["daily_stats"]] == [20]

    def test_goal_without_logs(self, client, make_goal):
        body = client.get(f"/timelogs/daily/{make_goal(title='Idle').id}").json()

        assert body["daily_stats"] == []
        assert body["total_days"] == 0

    def test_goal_of_another_user(self, client, make_goal, other_user):
        response = client.get(f"/timelogs/daily/{make_goal(owner=other_user).id}")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "not_found"

    def test_service_raises_not_found(self, store, user, clock):
        with pytest.raises(NotFoundError):
            TimeStatsService(store, clock).daily_stats(user.id, goal_id=12345)
