"""Beanie ODM document models for MongoDB collections.

This module defines the document models using Beanie ODM, which provides:
- Automatic Pydantic validation
- Built-in async CRUD operations
- Index definitions at the model level

Usage:
    from db.models import Place, PlaceStatus

    # Find a place
    place = await Place.get("place-1700000000000-abc123def")

    # Query by status, newest first
    places = await Place.find(Place.status == PlaceStatus.VISITED).sort(
        -Place.created_at,
    ).to_list()

    # Update
    place.mark_visited("2024-05-01", "Sunny afternoon at the beach")
    await place.save()
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, DESCENDING, GEOSPHERE, IndexModel

from config import DEFAULT_PLACE_IMAGE


class PlaceStatus(StrEnum):
    """Visit status of a place."""

    PLANNED = "planned"
    VISITED = "visited"


# Fields that only make sense for one status; the others are removed.
STATUS_FIELDS: dict[PlaceStatus, tuple[str, ...]] = {
    PlaceStatus.PLANNED: ("plannedDate",),
    PlaceStatus.VISITED: ("visitDate", "visitDescription"),
}


class Place(Document):
    """Geolocated place the user plans to visit or has visited.

    ``coordinates`` is latitude first, as exposed by the API. ``location``
    mirrors it as a GeoJSON point (longitude first) for the 2dsphere index.
    """

    id: str | None = None
    name: str
    description: str
    image: str = DEFAULT_PLACE_IMAGE
    coordinates: list[float]
    location: dict[str, Any] | None = None
    status: PlaceStatus = PlaceStatus.PLANNED
    plannedDate: str | None = None
    visitDate: str | None = None
    visitDescription: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    class Settings:
        name = "places"
        # Unset fields are dropped from the stored document instead of
        # being written as null.
        keep_nulls = False
        indexes = [
            IndexModel([("status", ASCENDING)], name="places_status_idx"),
            IndexModel([("created_at", DESCENDING)], name="places_created_at_idx"),
            IndexModel([("location", GEOSPHERE)], name="places_location_2dsphere_idx"),
        ]

    @property
    def latitude(self) -> float:
        return self.coordinates[0]

    @property
    def longitude(self) -> float:
        return self.coordinates[1]

    def sync_location(self) -> None:
        """Rebuild the GeoJSON point from ``coordinates``."""
        self.location = {
            "type": "Point",
            "coordinates": [self.longitude, self.latitude],
        }

    def apply_status_invariant(self) -> None:
        """Clear the date fields that belong to the other status."""
        for status, fields in STATUS_FIELDS.items():
            if status == self.status:
                continue
            for field in fields:
                setattr(self, field, None)

    def missing_status_fields(self) -> list[str]:
        """Fields the current status requires that are empty."""
        return [
            field for field in STATUS_FIELDS[self.status] if not getattr(self, field)
        ]

    def mark_visited(self, visit_date: str, visit_description: str) -> None:
        """Move the place to ``visited``, dropping ``plannedDate``."""
        self.status = PlaceStatus.VISITED
        self.visitDate = visit_date
        self.visitDescription = visit_description
        self.apply_status_invariant()

    def mark_planned(self, planned_date: str) -> None:
        """Move the place to ``planned``, dropping the visit fields."""
        self.status = PlaceStatus.PLANNED
        self.plannedDate = planned_date
        self.apply_status_invariant()

    def touch(self) -> None:
        """Prepare the document for a write."""
        self.sync_location()
        self.apply_status_invariant()
        self.updated_at = datetime.now(UTC)


ALL_DOCUMENT_MODELS = [Place]
