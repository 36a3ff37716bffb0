"""
MongoDB connection manager and connection checks.

``MongoDB`` owns a Motor client and initializes Beanie with the document
models supplied at connection time. ``MongoComponents`` reports connection
state and server version for any Motor client.

Example:
    from service_components.database import MongoDB, MongoComponents

    db = MongoDB()
    await db.connect(
        uri="mongodb://localhost:27017",
        database_name="orders",
        document_models=[Order],
    )

    mongo = MongoComponents(db.client)
    state = await mongo.check_connection()
"""

import logging
from enum import Enum
from typing import List, Optional, Type

from beanie import Document, init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from service_components.utils.connection import ConnectionStatus
from service_components.utils.periodic import PeriodicTask

logger = logging.getLogger(__name__)


def mask_uri(uri: str) -> str:
    """Strip credentials from a connection string for logging."""
    return uri.split("@")[-1] if "@" in uri else uri


class MongoDB:
    """Generic MongoDB connection manager - works with any database."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database_name: Optional[str] = None
        self._initialized: bool = False

    async def connect(
        self,
        uri: str,
        database_name: str,
        document_models: Optional[List[Type[Document]]] = None,
    ) -> None:
        """
        Connect to MongoDB and initialize Beanie with provided models.

        Args:
            uri: MongoDB connection string
            database_name: Name of the database to use
            document_models: Beanie Document classes to initialize; Beanie is
                skipped when none are given
        """
        document_models = document_models or []
        logger.info(f"Connecting to MongoDB: {mask_uri(uri)}")
        logger.debug(f"Database name: {database_name}")
        logger.debug(f"Document models: {[m.__name__ for m in document_models]}")

        try:
            self._client = AsyncIOMotorClient(uri)
            self._database_name = database_name

            if document_models:
                logger.debug("Initializing Beanie ODM")
                await init_beanie(
                    database=self._client[database_name],
                    document_models=document_models,
                )
            self._initialized = True
            logger.info(f"Successfully connected to MongoDB database: {database_name}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def disconnect(self) -> None:
        """Close the MongoDB connection."""
        if self._client:
            logger.info(f"Disconnecting from MongoDB database: {self._database_name}")
            self._client.close()
            self._client = None
            self._database_name = None
            self._initialized = False
            logger.debug("MongoDB connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if database is connected and initialized."""
        return self._initialized

    @property
    def client(self) -> Optional[AsyncIOMotorClient]:
        """Get the underlying Motor client."""
        return self._client

    @property
    def database_name(self) -> Optional[str]:
        """Get the current database name."""
        return self._database_name

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Get the underlying Motor database instance."""
        if not self._client or not self._database_name:
            raise RuntimeError("Database not connected")
        return self._client[self._database_name]

    def get_collection(self, name: str):
        """
        Get a raw Motor collection for direct access.

        Args:
            name: Collection name

        Returns:
            AsyncIOMotorCollection instance
        """
        if not self._client or not self._database_name:
            logger.error("Attempted to get collection without database connection")
            raise RuntimeError("Database not connected")
        logger.debug(f"Getting collection: {name}")
        return self._client[self._database_name][name]


class MongoConnectionState(str, Enum):
    """Connection state reported by MongoComponents."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class MongoComponents:
    """Connection checks for a Motor client."""

    def __init__(self, client: Optional[AsyncIOMotorClient]):
        self.client = client

    async def check_connection(self) -> MongoConnectionState:
        """Ping the server; never raises."""
        if self.client is None:
            logger.error("Connection to mongo not found. Result: no client")
            return MongoConnectionState.DISCONNECTED

        try:
            result = await self.client.admin.command("ping")
        except Exception as e:
            logger.error(f"Connection to mongo failed: {e}")
            return MongoConnectionState.DISCONNECTED

        logger.debug(f"Connect to mongo have result: {result}")
        if result.get("ok") == 1:
            return MongoConnectionState.CONNECTED
        return MongoConnectionState.DISCONNECTED

    async def get_version(self) -> str:
        """Return the server version, or an error description."""
        if self.client is None:
            return "ERROR: No connect to Mongo database"
        try:
            info = await self.client.server_info()
        except Exception as e:
            logger.error(f"Get version from Mongo fail with error: {e}")
            return "ERROR: No connect to Mongo database"
        return str(info.get("version", "unknown"))

    async def get_mongo_status(self) -> ConnectionStatus:
        """Return ("Ok", 200) when connected, otherwise ("No connect to Mongo database.", 503)."""
        state = await self.check_connection()
        if state is MongoConnectionState.CONNECTED:
            return ConnectionStatus("Ok", 200)
        return ConnectionStatus("No connect to Mongo database.", 503)

    def schedule_repeated_task(self, seconds: float) -> PeriodicTask:
        """
        Ping MongoDB every `seconds` seconds, logging failures.

        Returns:
            The started PeriodicTask; stop it on shutdown
        """

        async def ping() -> None:
            logger.debug(f"Send ping to Mongo. Re-send after {seconds} seconds.")
            state = await self.check_connection()
            if state is not MongoConnectionState.CONNECTED:
                logger.error("Send ping to Mongo fail: disconnected")

        task = PeriodicTask("mongo-ping", seconds, ping)
        task.start()
        return task
