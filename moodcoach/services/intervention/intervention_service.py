"""
Intervention CRUD service.

Handles intervention storage, feedback and view tracking.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any, Sequence

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from moodcoach.types import InterventionResult

logger = logging.getLogger(__name__)


class InterventionService:
    """
    Handles intervention storage and retrieval.
    Pure CRUD - generation lives in MessageComposer.
    """

    MAX_LIMIT = 100

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize InterventionService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._collection = db["interventions"]

    async def save_intervention(
        self,
        user_id: str,
        checkin_id: str,
        result: InterventionResult
    ) -> Dict[str, Any]:
        """
        Store a composed intervention.

        Args:
            user_id: User's ID
            checkin_id: Check-in that triggered it
            result: Composer output

        Returns:
            Created document
        """
        doc = {
            "userId": user_id,
            "checkinId": checkin_id,
            "templateType": result.template,
            "messagePayload": result.message.to_dict(),
            "fallback": result.fallback,
            "source": result.source,
            "viewed": False,
            "feedbackScore": None,
            "feedbackAt": None,
            "createdAt": datetime.now(timezone.utc),
        }

        inserted = await self._collection.insert_one(doc)
        doc["_id"] = inserted.inserted_id

        logger.info(
            f"Intervention {inserted.inserted_id} saved for user {user_id} "
            f"({result.template}, source={result.source})"
        )
        return doc

    async def get_last_intervention_time(self, user_id: str) -> Optional[datetime]:
        """Creation time of the user's most recent intervention, if any."""
        cursor = self._collection.find({"userId": user_id}, {"createdAt": 1})
        cursor = cursor.sort("createdAt", -1).limit(1)
        docs = await cursor.to_list(length=1)
        return docs[0]["createdAt"] if docs else None

    async def update_feedback(
        self,
        intervention_id: str,
        user_id: str,
        score: int
    ) -> Optional[Dict[str, Any]]:
        """
        Record a 1-5 feedback score.

        Returns:
            Updated document, or None when the intervention does not exist
            or belongs to another user
        """
        if not ObjectId.is_valid(intervention_id):
            return None

        result = await self._collection.find_one_and_update(
            {"_id": ObjectId(intervention_id), "userId": user_id},
            {"$set": {
                "feedbackScore": score,
                "feedbackAt": datetime.now(timezone.utc),
            }},
            return_document=True
        )

        if result:
            logger.info(f"Feedback {score} recorded for intervention {intervention_id}")
        return result

    async def mark_viewed(self, intervention_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Mark an intervention as viewed.

        Returns:
            Updated document, or None when not found for this user
        """
        if not ObjectId.is_valid(intervention_id):
            return None

        return await self._collection.find_one_and_update(
            {"_id": ObjectId(intervention_id), "userId": user_id},
            {"$set": {"viewed": True}},
            return_document=True
        )

    @staticmethod
    def _build_query(
        user_id: str,
        since: Optional[datetime] = None,
        template_types: Optional[Sequence[str]] = None
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {"userId": user_id}
        if since:
            query["createdAt"] = {"$gte": since}
        if template_types:
            query["templateType"] = {"$in": list(template_types)}
        return query

    async def list_interventions(
        self,
        user_id: str,
        limit: int = 20,
        offset: int = 0,
        since: Optional[datetime] = None,
        template_types: Optional[Sequence[str]] = None
    ) -> List[Dict[str, Any]]:
        """
        Get paginated interventions, newest first.

        Args:
            user_id: User's ID
            limit: Max records to return (capped at 100)
            offset: Number of records to skip
            since: Optional start of the date range
            template_types: Optional template filter

        Returns:
            List of intervention documents
        """
        limit = min(limit, self.MAX_LIMIT)

        cursor = self._collection.find(self._build_query(user_id, since, template_types))
        cursor = cursor.sort("createdAt", -1)
        cursor = cursor.skip(offset)
        cursor = cursor.limit(limit)

        return await cursor.to_list(length=limit)

    async def get_all_interventions(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        template_types: Optional[Sequence[str]] = None
    ) -> List[Dict[str, Any]]:
        """Every intervention matching the filters, newest first (uncapped)."""
        cursor = self._collection.find(self._build_query(user_id, since, template_types))
        cursor = cursor.sort("createdAt", -1)
        return await cursor.to_list(length=None)

    async def get_for_checkins(self, user_id: str, checkin_ids: Sequence[str]) -> List[Dict[str, Any]]:
        """Interventions attached to the given check-ins."""
        if not checkin_ids:
            return []

        cursor = self._collection.find({
            "userId": user_id,
            "checkinId": {"$in": list(checkin_ids)}
        })
        return await cursor.to_list(length=len(checkin_ids))

    async def count(
        self,
        user_id: str,
        since: Optional[datetime] = None,
        template_types: Optional[Sequence[str]] = None
    ) -> int:
        return await self._collection.count_documents(
            self._build_query(user_id, since, template_types)
        )

    async def average_feedback(self, user_id: str) -> Optional[float]:
        """
        Mean feedback score across rated interventions.

        Returns:
            Average score, or None when nothing has been rated
        """
        pipeline = [
            {"$match": {"userId": user_id, "feedbackScore": {"$ne": None}}},
            {"$group": {"_id": None, "average": {"$avg": "$feedbackScore"}}},
        ]

        results = await self._collection.aggregate(pipeline).to_list(length=1)
        if not results or results[0].get("average") is None:
            return None
        return float(results[0]["average"])
