"""
Integration tests for the backend API endpoints.

Tests the FastAPI routes:
- /api/tasks CRUD and error mapping
- mood, focus session, routine, reframe and emergency plan endpoints
- /api/analysis weekly, daily and estimation views
- / and /health
"""

from datetime import datetime, timezone

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Root and health
# ─────────────────────────────────────────────────────────────────────────────


class TestRootEndpoints:

    def test_root_lists_endpoints(self, test_client):
        data = test_client.get("/").json()
        assert data["name"] == "ADHD Planner API"
        assert data["endpoints"]["analysis"] == "/api/analysis/week"

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "storage": "MemoryAdapter"}


# ─────────────────────────────────────────────────────────────────────────────
# Tasks
# ─────────────────────────────────────────────────────────────────────────────


class TestTaskEndpoints:
    """Tests for /api/tasks."""

    def test_create_task(self, test_client):
        """POST /api/tasks assigns id and created_at."""
        response = test_client.post("/api/tasks", json={
            "title": "Write report",
            "priority": "urgent-important",
            "estimated_minutes": 30,
            "steps": [{"title": "Outline"}, {"title": "Draft", "estimated_minutes": 15}],
        })

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["status"] == "pending"
        assert data["created_at"] == "2024-03-13T10:00:00"
        assert data["completed_at"] is None
        assert [s["title"] for s in data["steps"]] == ["Outline", "Draft"]

    def test_get_task(self, test_client):
        task_id = test_client.post("/api/tasks", json={"title": "Read"}).json()["id"]
        response = test_client.get(f"/api/tasks/{task_id}")
        assert response.status_code == 200
        assert response.json()["title"] == "Read"

    def test_get_missing_task_is_404(self, test_client):
        assert test_client.get("/api/tasks/99").status_code == 404

    def test_complete_task_stamps_completed_at(self, test_client):
        task_id = test_client.post("/api/tasks", json={"title": "Read"}).json()["id"]
        response = test_client.patch(f"/api/tasks/{task_id}", json={"status": "completed", "actual_minutes": 20})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert data["actual_minutes"] == 20
        assert data["completed_at"] == "2024-03-13T10:00:00"
        assert data["title"] == "Read"

    def test_patch_missing_task_is_404(self, test_client):
        assert test_client.patch("/api/tasks/5", json={"title": "x"}).status_code == 404

    def test_delete_task(self, test_client):
        task_id = test_client.post("/api/tasks", json={"title": "Read"}).json()["id"]
        assert test_client.delete(f"/api/tasks/{task_id}").status_code == 204
        assert test_client.get(f"/api/tasks/{task_id}").status_code == 404
        assert test_client.delete(f"/api/tasks/{task_id}").status_code == 404

    def test_ids_not_reused_after_delete(self, test_client):
        first = test_client.post("/api/tasks", json={"title": "a"}).json()["id"]
        test_client.delete(f"/api/tasks/{first}")
        assert test_client.post("/api/tasks", json={"title": "b"}).json()["id"] == first + 1

    def test_list_filter_and_limit(self, test_client):
        for title in ("a", "b", "c"):
            test_client.post("/api/tasks", json={"title": title})
        test_client.patch("/api/tasks/2", json={"status": "completed"})

        completed = test_client.get("/api/tasks", params={"status": "completed"}).json()
        assert [t["title"] for t in completed] == ["b"]

        newest = test_client.get("/api/tasks", params={"limit": 2}).json()
        assert [t["title"] for t in newest] == ["c", "b"]

    def test_invalid_priority_is_422(self, test_client):
        response = test_client.post("/api/tasks", json={"title": "a", "priority": "whenever"})
        assert response.status_code == 422

    def test_missing_title_is_422(self, test_client):
        assert test_client.post("/api/tasks", json={}).status_code == 422

    def test_step_index_out_of_range_is_400(self, test_client):
        """Cross-field rules live in the store and surface as 400."""
        response = test_client.post("/api/tasks", json={
            "title": "a",
            "steps": [{"title": "only"}],
            "current_step_index": 3,
        })
        assert response.status_code == 400


# ─────────────────────────────────────────────────────────────────────────────
# Mood, focus, routine, reframes, emergency plans
# ─────────────────────────────────────────────────────────────────────────────


class TestMoodEndpoints:

    def test_log_mood(self, test_client):
        response = test_client.post("/api/mood-entries", json={"mood": "happy", "triggers": ["sleep"]})
        assert response.status_code == 201
        assert response.json()["timestamp"] == "2024-03-13T10:00:00"

    def test_unknown_mood_is_422(self, test_client):
        assert test_client.post("/api/mood-entries", json={"mood": "meh"}).status_code == 422

    def test_default_limit(self, test_client):
        for _ in range(12):
            test_client.post("/api/mood-entries", json={"mood": "neutral"})
        assert len(test_client.get("/api/mood-entries").json()) == 10
        assert len(test_client.get("/api/mood-entries", params={"limit": 3}).json()) == 3


class TestFocusSessionEndpoints:

    def test_filter_by_task(self, test_client):
        test_client.post("/api/pomodoro-sessions", json={"task_id": 1, "duration": 25})
        test_client.post("/api/pomodoro-sessions", json={"task_id": 2, "duration": 25})

        sessions = test_client.get("/api/pomodoro-sessions", params={"taskId": 1}).json()
        assert [s["task_id"] for s in sessions] == [1]

    def test_complete_session(self, test_client):
        session_id = test_client.post("/api/pomodoro-sessions", json={}).json()["id"]
        data = test_client.patch(f"/api/pomodoro-sessions/{session_id}", json={"completed": True}).json()
        assert data["completed"] is True
        assert data["completed_at"] is not None

    def test_invalid_type_is_422(self, test_client):
        response = test_client.post("/api/pomodoro-sessions", json={"type": "nap"})
        assert response.status_code == 422


class TestRoutineBlockEndpoints:

    @pytest.fixture
    def blocks(self, test_client):
        for week_of, activity in (("2024-03-11T00:00:00", "Gym"), ("2024-03-18T00:00:00", "Swim")):
            test_client.post("/api/routine-blocks", json={
                "day_of_week": 1, "start_hour": 7, "end_hour": 8,
                "activity": activity, "week_of": week_of,
            })

    def test_filter_by_week(self, test_client, blocks):
        data = test_client.get("/api/routine-blocks", params={"weekOf": "2024-03-11"}).json()
        assert [b["activity"] for b in data] == ["Gym"]

    def test_filter_ignores_time_of_day(self, test_client, blocks):
        data = test_client.get("/api/routine-blocks", params={"weekOf": "2024-03-18T15:30:00"}).json()
        assert [b["activity"] for b in data] == ["Swim"]

    def test_browser_week_of_with_utc_suffix(self, test_client):
        """Browser clients send week_of as toISOString(), e.g. "...Z"."""
        response = test_client.post("/api/routine-blocks", json={
            "day_of_week": 0, "start_hour": 9, "end_hour": 10,
            "activity": "Gym", "week_of": "2024-03-11T12:00:00.000Z",
        })
        assert response.status_code == 201

        data = test_client.get("/api/routine-blocks", params={"weekOf": "2024-03-11T12:00:00.000Z"}).json()
        assert [b["activity"] for b in data] == ["Gym"]

        analysis = test_client.get("/api/analysis/week", params={"date": "2024-03-13"})
        assert analysis.status_code == 200
        assert analysis.json()["metrics"]["routine"]["blocks"] == 1

    def test_utc_query_matches_local_anchor(self, test_client):
        local = datetime(2024, 3, 11, 12, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        test_client.post("/api/routine-blocks", json={
            "day_of_week": 0, "start_hour": 9, "end_hour": 10,
            "activity": "Gym", "week_of": local.isoformat(),
        })
        data = test_client.get("/api/routine-blocks", params={"weekOf": "2024-03-11T12:00:00.000Z"}).json()
        assert [b["activity"] for b in data] == ["Gym"]

    def test_end_before_start_is_400(self, test_client):
        response = test_client.post("/api/routine-blocks", json={
            "day_of_week": 1, "start_hour": 9, "end_hour": 8,
            "activity": "Gym", "week_of": "2024-03-11T00:00:00",
        })
        assert response.status_code == 400


class TestReframeEndpoints:

    def test_create_and_list(self, test_client):
        response = test_client.post("/api/cognitive-reframes", json={
            "negative_thought": "I never finish anything",
            "balanced_thought": "I finished two tasks yesterday",
        })
        assert response.status_code == 201
        assert len(test_client.get("/api/cognitive-reframes").json()) == 1


class TestEmergencyPlanEndpoints:

    def test_defaults_seeded(self, test_client):
        plans = test_client.get("/api/emergency-plans").json()
        assert {p["trigger"] for p in plans} == {"Feeling overwhelmed", "Procrastination spiral"}

    def test_inactive_hidden_by_default(self, test_client):
        test_client.patch("/api/emergency-plans/1", json={"is_active": False})
        assert len(test_client.get("/api/emergency-plans").json()) == 1
        assert len(test_client.get("/api/emergency-plans", params={"includeInactive": True}).json()) == 2

    def test_effectiveness_out_of_range_is_422(self, test_client):
        response = test_client.patch("/api/emergency-plans/1", json={"effectiveness": 9})
        assert response.status_code == 422


# ─────────────────────────────────────────────────────────────────────────────
# Analysis
# ─────────────────────────────────────────────────────────────────────────────


class TestAnalysisEndpoints:

    def test_empty_week(self, test_client):
        response = test_client.get("/api/analysis/week")
        assert response.status_code == 200
        data = response.json()
        assert data["window"]["start"] == "2024-03-11T00:00:00"
        assert data["recommendations"] == []
        assert data["insights"]["weekly_score"] == 18
        assert data["insights"]["advice"] == [
            "Keep logging consistently to identify more precise patterns"
        ]

    def test_week_with_activity(self, test_client):
        test_client.post("/api/tasks", json={"title": "a"})
        test_client.post("/api/mood-entries", json={"mood": "sad"})

        data = test_client.get("/api/analysis/week", params={"date": "2024-03-15"}).json()
        assert data["metrics"]["tasks"]["total"] == 1
        titles = [r["title"] for r in data["recommendations"]]
        assert "Improve task decomposition" in titles

    def test_other_week_is_empty(self, test_client):
        test_client.post("/api/tasks", json={"title": "a"})
        data = test_client.get("/api/analysis/week", params={"date": "2024-03-20"}).json()
        assert data["metrics"]["tasks"]["total"] == 0
        assert data["trends"]["total_tasks"]["direction"] == "down"

    def test_bad_date_is_422(self, test_client):
        assert test_client.get("/api/analysis/week", params={"date": "soon"}).status_code == 422

    def test_day(self, test_client):
        data = test_client.get("/api/analysis/day").json()
        assert data["window"]["start"] == "2024-03-13T00:00:00"
        assert data["insights"] is None

    def test_estimation(self, test_client):
        test_client.post("/api/tasks", json={
            "title": "a", "status": "completed", "estimated_minutes": 20, "actual_minutes": 20,
        })
        response = test_client.get("/api/analysis/estimation")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["average_accuracy"] == 100.0
