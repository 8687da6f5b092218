"""Database package for MongoDB operations using Beanie ODM.

Modules:
    manager: DatabaseManager singleton for connection handling
    models: Beanie Document models
    indexes: Index definitions and initialization
    errors: Translation of driver errors into application errors

Usage:
    from db.models import Place

    # Find a place
    place = await Place.find_one(Place.id == "place-1")

    # Insert
    place = Place(id="place-2", name="Lisbon", ...)
    await place.insert()
"""

from db.errors import translate_store_errors
from db.indexes import ensure_places_indexes, init_database
from db.manager import DatabaseManager, db_manager
from db.models import ALL_DOCUMENT_MODELS, Place, PlaceStatus

__all__ = [
    "ALL_DOCUMENT_MODELS",
    "DatabaseManager",
    "Place",
    "PlaceStatus",
    "db_manager",
    "ensure_places_indexes",
    "init_database",
    "translate_store_errors",
]
