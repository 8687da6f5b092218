"""Serialization utilities for place data."""

from typing import Any

from db.models import Place

PUBLIC_FIELDS = {
    "id",
    "name",
    "description",
    "image",
    "coordinates",
    "status",
    "plannedDate",
    "visitDate",
    "visitDescription",
}


def serialize_place(place: Place) -> dict[str, Any]:
    """Convert a Place document to its external JSON representation.

    Timestamps and the internal GeoJSON point are never exposed, and fields
    that are unset for the current status are omitted entirely.
    """
    return place.model_dump(mode="json", include=PUBLIC_FIELDS, exclude_none=True)


def serialize_places(places: list[Place]) -> list[dict[str, Any]]:
    """Serialize a list of Place documents."""
    return [serialize_place(place) for place in places]
