"""
Async MongoDB connection manager.

Connects a Motor client once at startup and hands the database handle to
the persistence services, which work with raw collections.

Example:
    from common.database import MongoDB

    db = MongoDB()
    await db.connect(uri="mongodb://localhost:27017", database_name="moodcoach")
    checkins = db.db["checkins"]
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class MongoDB:
    """MongoDB connection manager."""

    def __init__(self, server_selection_timeout_ms: int = 5000):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None
        self._server_selection_timeout_ms = server_selection_timeout_ms

    async def connect(self, uri: str, database_name: str) -> None:
        """
        Open the client and verify the server answers a ping.

        Raises:
            PyMongoError: Server unreachable or authentication failed
        """
        # Hide credentials
        masked_uri = uri.split("@")[-1] if "@" in uri else uri
        logger.info(f"Connecting to MongoDB: {masked_uri}")

        # tz_aware: stored UTC timestamps come back as aware datetimes
        client = AsyncIOMotorClient(
            uri,
            tz_aware=True,
            serverSelectionTimeoutMS=self._server_selection_timeout_ms,
        )
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            client.close()
            raise

        self._client = client
        self._database_name = database_name
        logger.info(f"Connected to MongoDB database: {database_name}")

    async def disconnect(self) -> None:
        if self._client:
            logger.info(f"Disconnecting from MongoDB database: {self._database_name}")
            self._client.close()
            self._client = None
            self._database_name = None

    async def ping(self) -> bool:
        """True when connected and the server responds."""
        if not self._client:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Motor database handle for the connected database."""
        if not self._client or not self._database_name:
            raise RuntimeError("Database not connected")
        return self._client[self._database_name]
