"""
Database connection manager module.

Provides a singleton DatabaseManager class owning the MongoDB client, its
connection pool and the Beanie initialization for the application.
"""

from __future__ import annotations

import logging
import re
import threading
from datetime import UTC
from typing import Any, Self

import certifi
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from config import (
    MONGODB_DATABASE,
    MONGODB_MAX_POOL_SIZE,
    MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    MONGODB_SOCKET_TIMEOUT_MS,
    MONGODB_URI,
)

logger = logging.getLogger(__name__)

_VALID_SCHEMES = ("mongodb://", "mongodb+srv://")
_PASSWORD_RE = re.compile(r":([^:@/]+)@")


def mask_mongo_uri(mongo_uri: str) -> str:
    """Hide the password of a MongoDB URI for logging."""
    return _PASSWORD_RE.sub(":***@", mongo_uri)


def validate_mongo_uri(mongo_uri: str) -> str:
    """Return the URI if it is usable, otherwise raise ValueError."""
    if not mongo_uri:
        msg = "MONGODB_URI is not set"
        raise ValueError(msg)
    if not mongo_uri.startswith(_VALID_SCHEMES):
        msg = "MONGODB_URI must start with mongodb:// or mongodb+srv://"
        raise ValueError(msg)
    return mongo_uri


class DatabaseManager:
    """
    Singleton class to manage the MongoDB client and database connection.

    The client is created lazily, bound once at application startup through
    ``init_beanie`` and released by ``cleanup_connections`` at shutdown.

    Configuration comes from ``config``:
        MONGODB_URI: MongoDB connection string
        MONGODB_DATABASE: Database name (default: map_places)
        MONGODB_MAX_POOL_SIZE: Connection pool size (default: 10)
        MONGODB_SERVER_SELECTION_TIMEOUT_MS: Server selection timeout (default: 30000)
        MONGODB_SOCKET_TIMEOUT_MS: Socket timeout (default: 45000)
    """

    _instance: DatabaseManager | None = None
    _lock = threading.Lock()

    def __new__(cls) -> Self:
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        """Initialize the database manager with configuration from environment."""
        if not getattr(self, "_initialized", False):
            self._client: AsyncIOMotorClient | None = None
            self._db: AsyncIOMotorDatabase | None = None
            self._beanie_initialized = False
            self._initialized = True

            self._mongo_uri = MONGODB_URI
            self._db_name = MONGODB_DATABASE
            self._max_pool_size = MONGODB_MAX_POOL_SIZE
            self._server_selection_timeout_ms = MONGODB_SERVER_SELECTION_TIMEOUT_MS
            self._socket_timeout_ms = MONGODB_SOCKET_TIMEOUT_MS

            logger.debug(
                "Database configuration initialized with pool size %s",
                self._max_pool_size,
            )

    def _initialize_client(self) -> None:
        """
        Initialize the MongoDB client with proper connection settings.

        Raises:
            ValueError: If the configured URI is invalid.
        """
        mongo_uri = validate_mongo_uri(self._mongo_uri)
        logger.info("Connecting to MongoDB at %s", mask_mongo_uri(mongo_uri))

        client_kwargs: dict[str, Any] = {
            "tz_aware": True,
            "tzinfo": UTC,
            "maxPoolSize": self._max_pool_size,
            "serverSelectionTimeoutMS": self._server_selection_timeout_ms,
            "socketTimeoutMS": self._socket_timeout_ms,
            "appname": "MapPlacesAPI",
        }

        # Atlas clusters require TLS
        if mongo_uri.startswith("mongodb+srv://"):
            client_kwargs.update(tls=True, tlsCAFile=certifi.where())

        self._client = AsyncIOMotorClient(mongo_uri, **client_kwargs)
        self._db = self._client[self._db_name]
        logger.info("MongoDB client initialized for database '%s'", self._db_name)

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """
        Get the database instance, initializing if necessary.

        Raises:
            RuntimeError: If database cannot be initialized.
        """
        if self._db is None:
            self._initialize_client()
        if self._db is None:
            msg = "Database instance could not be initialized."
            raise RuntimeError(msg)
        return self._db

    @property
    def client(self) -> AsyncIOMotorClient:
        """
        Get the client instance, initializing if necessary.

        Raises:
            RuntimeError: If client cannot be initialized.
        """
        if self._client is None:
            self._initialize_client()
        if self._client is None:
            msg = "MongoDB client could not be initialized."
            raise RuntimeError(msg)
        return self._client

    def get_collection(self, name: str):
        """Return a raw Motor collection from the managed database."""
        return self.db[name]

    async def ping(self) -> None:
        """Round-trip to the server so startup fails fast when it is unreachable."""
        await self.client.admin.command("ping")
        logger.info("Pinged MongoDB deployment successfully")

    async def init_beanie(self) -> None:
        """
        Initialize Beanie ODM with all document models.

        This should be called once during application startup.
        """
        if self._beanie_initialized:
            logger.debug("Beanie already initialized, skipping")
            return

        from beanie import init_beanie

        from db.models import ALL_DOCUMENT_MODELS

        await init_beanie(database=self.db, document_models=ALL_DOCUMENT_MODELS)
        self._beanie_initialized = True
        logger.info(
            "Beanie ODM initialized with %d document models",
            len(ALL_DOCUMENT_MODELS),
        )

    async def cleanup_connections(self) -> None:
        """Clean up MongoDB client connections."""
        if self._client:
            try:
                logger.info("Closing MongoDB client connections...")
                self._client.close()
            finally:
                self._client = None
                self._db = None
                self._beanie_initialized = False
                logger.info("MongoDB client state reset")


# Singleton instance
db_manager = DatabaseManager()
