"""
Check-in CRUD service.

Handles check-in storage and retrieval operations.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import ValidationException
from moodcoach.services.checkin.checkin_validator import CheckinValidator
from moodcoach.types import CheckinRecord

logger = logging.getLogger(__name__)


class CheckInService:
    """
    Handles check-in storage and retrieval.
    Pure CRUD - no analytics or business logic.
    """

    MAX_LIMIT = 100

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize CheckInService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._checkins_collection = db["checkins"]

    async def submit_checkin(
        self,
        user_id: str,
        mood_score: int,
        energy_level: str,
        free_text: Optional[str] = None
    ) -> CheckinRecord:
        """
        Store a new check-in.

        Args:
            user_id: User's ID
            mood_score: Mood 1-5
            energy_level: low, mid or high
            free_text: Optional note (max 280 chars)

        Returns:
            Saved check-in

        Raises:
            ValidationException: Values out of range
        """
        errors = CheckinValidator.validate(mood_score, energy_level, free_text)
        if errors:
            raise ValidationException(message=errors[0], errors=errors)

        now = datetime.now(timezone.utc)
        doc = {
            "userId": user_id,
            "moodScore": mood_score,
            "energyLevel": energy_level,
            "freeText": CheckinValidator.normalize_free_text(free_text),
            "createdAt": now,
        }

        result = await self._checkins_collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info(f"Check-in {result.inserted_id} submitted for user {user_id}")
        return CheckinRecord.from_document(doc)

    @staticmethod
    def _build_query(
        user_id: str,
        since: Optional[datetime] = None,
        mood_min: Optional[int] = None,
        mood_max: Optional[int] = None
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {"userId": user_id}

        if since:
            query["createdAt"] = {"$gte": since}

        if mood_min is not None or mood_max is not None:
            query["moodScore"] = {}
            if mood_min is not None:
                query["moodScore"]["$gte"] = mood_min
            if mood_max is not None:
                query["moodScore"]["$lte"] = mood_max

        return query

    async def get_recent_checkins(
        self,
        user_id: str,
        limit: int = 7,
        since: Optional[datetime] = None
    ) -> List[CheckinRecord]:
        """
        Get the most recent check-ins, newest first.

        Args:
            user_id: User's ID
            limit: Max records to return
            since: Only check-ins created at or after this time

        Returns:
            List of CheckinRecord sorted by createdAt descending
        """
        limit = min(limit, self.MAX_LIMIT)

        cursor = self._checkins_collection.find(self._build_query(user_id, since))
        cursor = cursor.sort("createdAt", -1)
        cursor = cursor.limit(limit)

        docs = await cursor.to_list(length=limit)
        return [CheckinRecord.from_document(doc) for doc in docs]

    async def get_history(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
        since: Optional[datetime] = None,
        mood_min: Optional[int] = None,
        mood_max: Optional[int] = None
    ) -> List[CheckinRecord]:
        """
        Get paginated check-in history.

        Args:
            user_id: User's ID
            limit: Max records to return (capped at 100)
            offset: Number of records to skip
            since: Optional start of the date range
            mood_min: Optional lower mood bound (inclusive)
            mood_max: Optional upper mood bound (inclusive)

        Returns:
            List of CheckinRecord sorted by createdAt descending
        """
        limit = min(limit, self.MAX_LIMIT)
        query = self._build_query(user_id, since, mood_min, mood_max)

        cursor = self._checkins_collection.find(query)
        cursor = cursor.sort("createdAt", -1)
        cursor = cursor.skip(offset)
        cursor = cursor.limit(limit)

        docs = await cursor.to_list(length=limit)
        return [CheckinRecord.from_document(doc) for doc in docs]

    async def get_all_checkins(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        mood_min: Optional[int] = None,
        mood_max: Optional[int] = None
    ) -> List[CheckinRecord]:
        """
        Every check-in matching the filters, newest first.

        Not capped by MAX_LIMIT; callers bound the result with `since`.
        Used where statistics must cover the whole range.
        """
        query = self._build_query(user_id, since, mood_min, mood_max)

        cursor = self._checkins_collection.find(query).sort("createdAt", -1)
        docs = await cursor.to_list(length=None)
        return [CheckinRecord.from_document(doc) for doc in docs]

    async def get_total_count(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        mood_min: Optional[int] = None,
        mood_max: Optional[int] = None
    ) -> int:
        """Count check-ins matching the same filters as get_history."""
        query = self._build_query(user_id, since, mood_min, mood_max)
        return await self._checkins_collection.count_documents(query)

    async def get_checkin(self, user_id: str, checkin_id: str) -> Optional[CheckinRecord]:
        """
        Get a single check-in owned by the user.

        Returns:
            CheckinRecord or None when missing or owned by someone else
        """
        if not ObjectId.is_valid(checkin_id):
            return None

        doc = await self._checkins_collection.find_one({
            "_id": ObjectId(checkin_id),
            "userId": user_id
        })
        return CheckinRecord.from_document(doc) if doc else None
