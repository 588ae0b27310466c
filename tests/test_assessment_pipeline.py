"""Unit tests for the assessment pipeline and TraitService."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from common.utils.exceptions import ValidationException
from moodcoach.pipelines.assessment import (
    get_questions_pipeline,
    get_results_pipeline,
    submit_tipi_pipeline,
)
from moodcoach.services.assessment.trait_scorer import TraitScorer
from moodcoach.services.assessment.trait_service import TraitService

from factories import make_cursor, make_responses


@pytest.fixture
def trait_service():
    service = MagicMock()

    async def save_traits(user_id, scores, instrument="TIPI"):
        return {
            "_id": ObjectId(),
            "userId": user_id,
            "instrument": instrument,
            "traitsRaw": scores.raw.to_dict(),
            "traitsP01": scores.p01.to_dict(),
            "traitsT": scores.t.to_dict(),
            "administeredAt": datetime.now(timezone.utc),
        }

    service.save_traits = AsyncMock(side_effect=save_traits)
    service.get_latest_assessment = AsyncMock(return_value=None)
    return service


class TestQuestionsPipeline:
    def test_english_catalog(self):
        result = get_questions_pipeline("en")

        assert result["instrument"] == "TIPI"
        assert result["scale"] == {"min": 1, "max": 7}
        assert len(result["questions"]) == 10
        assert result["questions"][0]["text"] == "Extraverted, enthusiastic"

    def test_unknown_locale_falls_back(self):
        assert get_questions_pipeline("xx")["questions"][5]["text"] == "Reserved, quiet"


class TestSubmitTipiPipeline:
    @pytest.mark.asyncio
    async def test_scores_and_stores(self, trait_service):
        responses = make_responses([7, 1, 7, 1, 7, 1, 7, 1, 7, 1])

        result = await submit_tipi_pipeline(trait_service, "user-1", responses)

        trait_service.save_traits.assert_awaited_once()
        assert result["instrument"] == "TIPI"
        assert result["traitsRaw"]["extraversion"] == 7.0
        # neuroticism: item 4 scores 1, reverse item 9 scores 7 -> 1
        assert result["traitsRaw"]["neuroticism"] == 1.0
        assert result["traitsP01"]["extraversion"] == 1.0
        assert result["traitsT"]["extraversion"] == 70.0

    @pytest.mark.asyncio
    async def test_invalid_scores_report_every_error(self, trait_service):
        responses = make_responses([8] * 10)

        with pytest.raises(ValidationException) as exc:
            await submit_tipi_pipeline(trait_service, "user-1", responses)

        assert exc.value.status_code == 422
        assert len(exc.value.errors) == 10
        trait_service.save_traits.assert_not_called()

    @pytest.mark.asyncio
    async def test_incomplete_set(self, trait_service):
        with pytest.raises(ValidationException) as exc:
            await submit_tipi_pipeline(trait_service, "user-1", make_responses([4] * 9))

        assert "All 10 questions must be answered" in exc.value.errors


class TestResultsPipeline:
    @pytest.mark.asyncio
    async def test_none_when_never_assessed(self, trait_service):
        assert await get_results_pipeline(trait_service, "user-1") is None

    @pytest.mark.asyncio
    async def test_formats_latest(self, trait_service):
        doc_id = ObjectId()
        trait_service.get_latest_assessment.return_value = {
            "_id": doc_id,
            "instrument": "TIPI",
            "traitsRaw": {"openness": 4.0},
            "traitsP01": {"openness": 0.5},
            "traitsT": {"openness": 50.0},
            "administeredAt": datetime(2026, 3, 1, tzinfo=timezone.utc),
        }

        result = await get_results_pipeline(trait_service, "user-1")

        assert result["id"] == str(doc_id)
        assert result["traitsP01"] == {"openness": 0.5}


class TestTraitService:
    @pytest.mark.asyncio
    async def test_save_traits(self, mock_db, mock_collection):
        mock_collection.insert_one.return_value = MagicMock(inserted_id=ObjectId())
        scores = TraitScorer.score(make_responses([4] * 10))

        doc = await TraitService(mock_db).save_traits("user-1", scores)

        stored = mock_collection.insert_one.call_args.args[0]
        assert stored["userId"] == "user-1"
        assert stored["traitsP01"]["openness"] == 0.5
        assert doc["_id"] == mock_collection.insert_one.return_value.inserted_id

    @pytest.mark.asyncio
    async def test_latest_traits(self, mock_db, mock_collection):
        traits = {
            "extraversion": 0.1,
            "agreeableness": 0.2,
            "conscientiousness": 0.3,
            "neuroticism": 0.4,
            "openness": 0.5,
        }
        cursor = make_cursor([{"_id": ObjectId(), "traitsP01": traits}])
        mock_collection.find.return_value = cursor

        result = await TraitService(mock_db).get_latest_traits("user-1")

        cursor.sort.assert_called_once_with("administeredAt", -1)
        assert result.neuroticism == 0.4

    @pytest.mark.asyncio
    async def test_latest_traits_none(self, mock_db):
        assert await TraitService(mock_db).get_latest_traits("user-1") is None
