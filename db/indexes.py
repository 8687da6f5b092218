"""Database index definitions and initialization.

Model-level indexes are created by Beanie. Indexes that Beanie does not
manage for us are ensured here, with conflicts logged rather than fatal.
"""

from __future__ import annotations

import logging
from typing import Any

import pymongo
from pymongo.errors import OperationFailure

from db.manager import db_manager

logger = logging.getLogger(__name__)

PLACES_TEXT_INDEX = "places_name_description_text_idx"


async def safe_create_index(
    collection_name: str,
    keys: list[tuple[str, Any]],
    **kwargs: Any,
) -> str | None:
    """Create an index, tolerating one that already exists in another form.

    Returns:
        The index name, or None if MongoDB refused it because of a conflict.
    """
    collection = db_manager.get_collection(collection_name)
    try:
        return await collection.create_index(keys, **kwargs)
    except OperationFailure as e:
        # 85/86: IndexOptionsConflict / IndexKeySpecsConflict
        if e.code in (85, 86):
            logger.warning(
                "Index %s on %s conflicts with an existing index: %s",
                kwargs.get("name"),
                collection_name,
                e,
            )
            return None
        raise


async def ensure_places_indexes() -> None:
    """Ensure indexes for the places collection.

    Creates indexes for:
    - name + description text search
    """
    logger.debug("Ensuring places collection indexes exist...")
    await safe_create_index(
        "places",
        [("name", pymongo.TEXT), ("description", pymongo.TEXT)],
        name=PLACES_TEXT_INDEX,
    )
    logger.info("Places collection indexes ensured/created successfully")


async def init_database() -> None:
    """Initialize the database with all required indexes.

    This is the main entry point for database initialization.
    Should be called at application startup after Beanie is initialized.
    """
    logger.info("Initializing database...")
    await ensure_places_indexes()
    logger.info("Database initialization complete")
