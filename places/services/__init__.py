"""Place services."""

from places.services.place_service import (
    PlaceService,
    build_nearby_filter,
    generate_place_id,
    visited_percentage,
)

__all__ = [
    "PlaceService",
    "build_nearby_filter",
    "generate_place_id",
    "visited_percentage",
]
