"""Goal, task list and task endpoints."""

import pytest


@pytest.fixture
def goal_payload():
    return {
        "title": "  Run a marathon ",
        "description": "Sub four hours",
        "target_date": "2025-10-12T08:00:00",
        "priority": "high",
        "category": "health",
    }


class TestGoals:
    def test_create_and_fetch(self, client, goal_payload):
        created = client.post("/goals/", json=goal_payload)

        assert created.status_code == 201
        goal = created.json()
        assert goal["title"] == "Run a marathon"
        assert goal["priority"] == "high"
        assert goal["completed"] is False

        detail = client.get(f"/goals/{goal['id']}").json()
        assert detail["goal"]["id"] == goal["id"]
        assert detail["task_lists"] == []

    def test_blank_title_is_rejected(self, client, goal_payload):
        goal_payload["title"] = "   "
        assert client.post("/goals/", json=goal_payload).status_code == 422

    def test_paginated_listing(self, client, make_goal):
        for title in ("One", "Two", "Three"):
            make_goal(title)

        body = client.get("/goals/", params={"limit": 2}).json()

        assert body["total_goals"] == 3
        assert body["total_pages"] == 2
        assert len(body["goals"]) == 2

    def test_page_number_is_bounded(self, client):
        assert client.get("/goals/", params={"page": 10**19}).status_code == 422

    def test_partial_update(self, client, make_goal):
        goal = make_goal("Read more")

        response = client.put(f"/goals/{goal.id}", json={"completed": True})

        assert response.status_code == 200
        assert response.json()["completed"] is True
        assert response.json()["title"] == "Read more"

    def test_goal_of_another_user(self, client, make_goal, other_user):
        goal = make_goal(owner=other_user)

        assert client.get(f"/goals/{goal.id}").status_code == 404
        assert client.put(f"/goals/{goal.id}", json={"title": "Mine"}).status_code == 404


class TestTaskLists:
    def test_create_under_goal(self, client, make_goal):
        goal = make_goal()

        response = client.post("/tasks/lists", json={"name": " Week 1 ", "goal_id": goal.id})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Week 1"
        assert body["goal"]["title"] == goal.title

        lists = client.get(f"/tasks/goal/{goal.id}/lists").json()
        assert [item["id"] for item in lists] == [body["id"]]

    def test_create_under_foreign_goal(self, client, make_goal, other_user):
        goal = make_goal(owner=other_user)

        response = client.post("/tasks/lists", json={"name": "Week 1", "goal_id": goal.id})

        assert response.status_code == 404

    def test_all_lists_of_the_user(self, client, make_goal, make_task_list, other_user):
        make_task_list(make_goal("One"))
        make_task_list(make_goal("Two"))
        make_task_list(make_goal(owner=other_user))

        assert len(client.get("/tasks/lists").json()) == 2


class TestTasks:
    @pytest.fixture
    def task_list(self, make_goal, make_task_list):
        return make_task_list(make_goal())

    def test_create_update_delete(self, client, task_list):
        created = client.post("/tasks/", json={"title": "Long run", "list_id": task_list.id})
        assert created.status_code == 201
        task_id = created.json()["id"]

        updated = client.put(f"/tasks/{task_id}", json={"completed": True})
        assert updated.json()["completed"] is True

        assert [task["id"] for task in client.get(f"/tasks/list/{task_list.id}").json()] == [task_id]

        assert client.delete(f"/tasks/{task_id}").status_code == 200
        assert client.get(f"/tasks/list/{task_list.id}").json() == []

    def test_create_in_missing_list(self, client):
        response = client.post("/tasks/", json={"title": "Long run", "list_id": 999})
        assert response.status_code == 404
