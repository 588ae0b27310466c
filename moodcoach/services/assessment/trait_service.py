"""
Baseline trait storage service.

Persists scored assessments and returns the most recent one.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from moodcoach.types import BigFiveScores, TraitScores

logger = logging.getLogger(__name__)


class TraitService:
    """
    Handles baseline trait storage and retrieval.
    Pure CRUD - no business logic.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize TraitService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._collection = db["baseline_traits"]

    async def save_traits(
        self,
        user_id: str,
        scores: TraitScores,
        instrument: str = "TIPI",
        administered_at: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Store a scored assessment.

        Args:
            user_id: User's ID
            scores: Raw, p01 and T scores
            instrument: Instrument name
            administered_at: When the assessment was taken (default: now)

        Returns:
            Created document
        """
        doc = {
            "userId": user_id,
            "instrument": instrument,
            "traitsRaw": scores.raw.to_dict(),
            "traitsP01": scores.p01.to_dict(),
            "traitsT": scores.t.to_dict(),
            "administeredAt": administered_at or datetime.now(timezone.utc),
        }

        result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info(f"Baseline traits saved for user {user_id}: {result.inserted_id}")
        return doc

    async def get_latest_assessment(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the most recent assessment document.

        Args:
            user_id: User's ID

        Returns:
            Assessment document or None
        """
        cursor = self._collection.find({"userId": user_id})
        cursor = cursor.sort("administeredAt", -1).limit(1)
        docs = await cursor.to_list(length=1)
        return docs[0] if docs else None

    async def get_latest_traits(self, user_id: str) -> Optional[BigFiveScores]:
        """
        Get the most recent p01 trait scores.

        Args:
            user_id: User's ID

        Returns:
            BigFiveScores on the p01 scale, or None if never assessed
        """
        doc = await self.get_latest_assessment(user_id)
        if not doc or not doc.get("traitsP01"):
            return None
        return BigFiveScores.from_dict(doc["traitsP01"])
