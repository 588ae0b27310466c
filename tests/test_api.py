"""HTTP-level tests for the routers, with services replaced by mocks."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from fastapi.testclient import TestClient

from api import app
from moodcoach.dependencies import (
    get_checkin_service,
    get_current_user_id,
    get_intervention_service,
    get_message_composer,
    get_trait_service,
)
from moodcoach.services.intervention.message_composer import MessageComposer

from factories import make_checkin


@pytest.fixture
def checkin_service():
    service = MagicMock()
    service.MAX_LIMIT = 100
    service.submit_checkin = AsyncMock()
    service.get_recent_checkins = AsyncMock(return_value=[])
    service.get_history = AsyncMock(return_value=[])
    service.get_total_count = AsyncMock(return_value=0)
    service.get_all_checkins = AsyncMock(return_value=[])
    return service


@pytest.fixture
def trait_service():
    service = MagicMock()
    service.get_latest_traits = AsyncMock(return_value=None)
    service.get_latest_assessment = AsyncMock(return_value=None)
    service.save_traits = AsyncMock()
    return service


@pytest.fixture
def intervention_service():
    service = MagicMock()
    service.get_last_intervention_time = AsyncMock(return_value=None)
    service.save_intervention = AsyncMock(return_value={"_id": ObjectId()})
    service.list_interventions = AsyncMock(return_value=[])
    service.get_all_interventions = AsyncMock(return_value=[])
    service.count = AsyncMock(return_value=0)
    service.update_feedback = AsyncMock(return_value=None)
    service.mark_viewed = AsyncMock(return_value=None)
    return service


@pytest.fixture
def client(checkin_service, trait_service, intervention_service):
    app.dependency_overrides[get_current_user_id] = lambda: "user-1"
    app.dependency_overrides[get_checkin_service] = lambda: checkin_service
    app.dependency_overrides[get_trait_service] = lambda: trait_service
    app.dependency_overrides[get_intervention_service] = lambda: intervention_service
    app.dependency_overrides[get_message_composer] = lambda: MessageComposer()

    # No context manager: the lifespan (MongoDB connect) is not run
    yield TestClient(app)

    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────────
# /checkins
# ─────────────────────────────────────────────────────────────────


class TestCheckinRoutes:
    def test_submit(self, client, checkin_service):
        current = make_checkin(mood=1, energy="low")
        checkin_service.submit_checkin.return_value = current
        checkin_service.get_recent_checkins.return_value = [current]

        response = client.post("/api/v1/checkins", json={"moodScore": 1, "energyLevel": "low"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["checkin"]["id"] == current.id
        assert body["data"]["intervention"]["templateType"] == "compassion"

    @pytest.mark.parametrize("payload", [
        {"moodScore": 0, "energyLevel": "low"},
        {"moodScore": 3, "energyLevel": "extreme"},
        {"moodScore": 3, "energyLevel": "mid", "freeText": "x" * 281},
    ])
    def test_submit_rejects_invalid_body(self, client, checkin_service, payload):
        response = client.post("/api/v1/checkins", json=payload)

        assert response.status_code == 422
        checkin_service.submit_checkin.assert_not_called()

    def test_list_paginates(self, client, checkin_service):
        checkin_service.get_history.return_value = [make_checkin(), make_checkin(days_ago=1)]
        checkin_service.get_total_count.return_value = 5

        response = client.get("/api/v1/checkins", params={"limit": 2, "includeAnalytics": "true"})

        body = response.json()
        assert len(body["data"]) == 2
        assert body["pagination"]["hasMore"] is True
        assert body["analytics"]["totalCheckins"] == 2

    def test_analytics(self, client):
        response = client.get("/api/v1/checkins/analytics")

        assert response.status_code == 200
        assert response.json()["data"]["averageMood"] == 0.0


# ─────────────────────────────────────────────────────────────────
# /assessment
# ─────────────────────────────────────────────────────────────────


class TestAssessmentRoutes:
    def test_questions_localized(self, client):
        response = client.get("/api/v1/assessment/questions", params={"locale": "vi"})

        questions = response.json()["data"]["questions"]
        assert questions[0]["text"] == "Hướng ngoại, nhiệt tình"

    def test_tipi_errors_listed(self, client, trait_service):
        responses = [{"questionId": i, "score": 9} for i in range(1, 11)]

        response = client.post("/api/v1/assessment/tipi", json={"responses": responses})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["code"] == "VALIDATION_ERROR"
        assert len(detail["details"]["errors"]) == 10
        trait_service.save_traits.assert_not_called()

    def test_results_null_when_missing(self, client):
        response = client.get("/api/v1/assessment/results")
        assert response.json() == {"success": True, "data": None}


# ─────────────────────────────────────────────────────────────────
# /interventions, /history, auth, health
# ─────────────────────────────────────────────────────────────────


class TestOtherRoutes:
    def test_feedback_not_found(self, client):
        response = client.post(f"/api/v1/interventions/{ObjectId()}/feedback", json={"score": 4})

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "INTERVENTION_NOT_FOUND"

    def test_feedback_score_range(self, client):
        response = client.post(f"/api/v1/interventions/{ObjectId()}/feedback", json={"score": 6})
        assert response.status_code == 422

    def test_history_invalid_type(self, client):
        response = client.get("/api/v1/history", params={"type": "moods"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "INVALID_FILTER"

    def test_history_template_filter_parsed(self, client, intervention_service):
        client.get("/api/v1/history", params={"templateTypes": "action, reflection", "includeStats": "false"})

        kwargs = intervention_service.get_all_interventions.call_args.kwargs
        assert kwargs["template_types"] == ["action", "reflection"]

    def test_missing_token(self, client):
        del app.dependency_overrides[get_current_user_id]

        response = client.get("/api/v1/checkins")

        assert response.status_code == 401

    def test_health_without_database(self, client):
        data = client.get("/health").json()["data"]

        assert data["database"] is False
        assert data["status"] == "degraded"
