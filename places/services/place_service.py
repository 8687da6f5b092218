"""Business logic for place management."""

from __future__ import annotations

import logging
import math
import secrets
import string
import time
from typing import TYPE_CHECKING, Any

from config import NEARBY_DEFAULT_DISTANCE_M
from core.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from db.errors import translate_store_errors
from db.models import Place, PlaceStatus
from places.schemas import (
    MarkPlannedModel,
    MarkVisitedModel,
    NearbyQueryModel,
    PlaceCreateModel,
    PlaceUpdateModel,
    parse_payload,
)

if TYPE_CHECKING:
    from pydantic import BaseModel

    Payload = dict[str, Any] | BaseModel

logger = logging.getLogger(__name__)

PLACE_ID_PREFIX = "place-"
_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_place_id() -> str:
    """Build an id from the current epoch millis and a random base36 suffix."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{PLACE_ID_PREFIX}{int(time.time() * 1000)}-{suffix}"


def visited_percentage(visited: int, total: int) -> int:
    """Share of visited places as a whole percentage, 0 for an empty set.

    Halves round up, so 50.5 becomes 51.
    """
    if total <= 0:
        return 0
    return math.floor(visited / total * 100 + 0.5)


def build_nearby_filter(
    latitude: float,
    longitude: float,
    max_distance: float,
) -> dict[str, Any]:
    """MongoDB ``$near`` filter over the GeoJSON ``location`` field."""
    return {
        "location": {
            "$near": {
                "$geometry": {
                    "type": "Point",
                    "coordinates": [longitude, latitude],
                },
                "$maxDistance": max_distance,
            },
        },
    }


class PlaceService:
    """Service class for place operations.

    Created once the database is initialized and handed to the route
    handlers, which never touch the store directly.
    """

    def __init__(self, default_distance: float = NEARBY_DEFAULT_DISTANCE_M) -> None:
        self.default_distance = default_distance

    async def _get_or_raise(self, place_id: str) -> Place:
        with translate_store_errors("fetching place"):
            place = await Place.find_one(Place.id == place_id)
        if not place:
            msg = f"Place {place_id} not found"
            raise ResourceNotFoundException(msg)
        return place

    async def _save(self, place: Place, action: str) -> Place:
        place.touch()
        with translate_store_errors(action):
            await place.save()
        return place

    async def list_places(self) -> list[Place]:
        """
        Get all places, newest first.

        Returns:
            List of Place models sorted by creation time descending
        """
        with translate_store_errors("fetching places"):
            places = await Place.find_all().sort(-Place.created_at).to_list()
        logger.debug("Fetched %d places", len(places))
        return places

    async def get_place(self, place_id: str) -> Place:
        """
        Get a single place.

        Raises:
            ResourceNotFoundException: If no place has this id
        """
        return await self._get_or_raise(place_id)

    async def create_place(self, data: Payload) -> Place:
        """
        Create a new place.

        A missing ``id`` is generated. The pre-insert lookup only exists to
        give a clear error; the unique ``_id`` index is what prevents
        duplicates under concurrent inserts.

        Args:
            data: Place fields

        Returns:
            Created Place model

        Raises:
            ValidationException: If any field is invalid
            DuplicateResourceException: If a place with the id already exists
        """
        payload = parse_payload(PlaceCreateModel, data)
        place_id = payload.id or generate_place_id()

        with translate_store_errors("creating place"):
            existing = await Place.find_one(Place.id == place_id)
        if existing:
            msg = "A place with this ID already exists"
            raise DuplicateResourceException(msg)

        place = Place(
            id=place_id,
            **payload.model_dump(exclude={"id"}, exclude_none=True),
        )
        place.touch()
        with translate_store_errors("creating place"):
            await place.insert()

        logger.info("Created place %s (%s)", place.id, place.status)
        return place

    async def update_place(self, place_id: str, data: Payload) -> Place:
        """
        Update a place's fields.

        Only supplied fields change; an ``id`` in the payload is ignored.
        Date fields that do not match the resulting status are cleared.
        A status change must leave the new status's fields filled.

        Raises:
            ValidationException: If any field is invalid, or the new status
                lacks its required fields
            ResourceNotFoundException: If the place does not exist
        """
        payload = parse_payload(PlaceUpdateModel, data)
        place = await self._get_or_raise(place_id)
        previous_status = place.status

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in changes.items():
            setattr(place, key, value)

        if place.status != previous_status:
            missing = place.missing_status_fields()
            if missing:
                raise ValidationException(
                    "Invalid data",
                    errors=[
                        {
                            "field": field,
                            "message": f"{field} is required when status is "
                            f"{place.status}",
                        }
                        for field in missing
                    ],
                )

        return await self._save(place, "updating place")

    async def mark_visited(self, place_id: str, data: Payload) -> Place:
        """
        Mark a place as visited, removing its planned date.

        Raises:
            ValidationException: If visitDate or visitDescription is invalid
            ResourceNotFoundException: If the place does not exist
        """
        payload = parse_payload(MarkVisitedModel, data)
        place = await self._get_or_raise(place_id)
        place.mark_visited(payload.visitDate, payload.visitDescription)
        await self._save(place, "marking place as visited")
        logger.info("Place %s marked as visited on %s", place_id, payload.visitDate)
        return place

    async def mark_planned(self, place_id: str, data: Payload) -> Place:
        """
        Mark a place as planned, removing its visit date and description.

        Raises:
            ValidationException: If plannedDate is invalid
            ResourceNotFoundException: If the place does not exist
        """
        payload = parse_payload(MarkPlannedModel, data)
        place = await self._get_or_raise(place_id)
        place.mark_planned(payload.plannedDate)
        await self._save(place, "marking place as planned")
        logger.info("Place %s planned for %s", place_id, payload.plannedDate)
        return place

    async def delete_place(self, place_id: str) -> dict[str, Any]:
        """
        Delete a place permanently.

        Returns:
            Confirmation message and the deleted place

        Raises:
            ResourceNotFoundException: If the place does not exist
        """
        place = await self._get_or_raise(place_id)
        with translate_store_errors("deleting place"):
            await place.delete()

        logger.info("Deleted place %s", place_id)
        return {"message": "Place deleted successfully", "place": place}

    async def list_by_status(self, status: str) -> list[Place]:
        """
        Get places with the given status, newest first.

        Raises:
            ValidationException: If status is not planned or visited
        """
        try:
            place_status = PlaceStatus(status)
        except ValueError:
            msg = 'Status must be "planned" or "visited"'
            raise ValidationException(
                msg,
                errors=[{"field": "status", "message": msg}],
            ) from None

        with translate_store_errors("fetching places by status"):
            return (
                await Place.find(Place.status == place_status)
                .sort(-Place.created_at)
                .to_list()
            )

    async def list_nearby(
        self,
        latitude: float,
        longitude: float,
        max_distance: float | None = None,
        limit: int | None = None,
    ) -> list[Place]:
        """
        Get places within ``max_distance`` metres of a point, nearest first.

        Args:
            latitude: Latitude of the search centre
            longitude: Longitude of the search centre
            max_distance: Radius in metres, defaults to the configured radius
            limit: Optional cap on the number of results

        Raises:
            ValidationException: If the centre, radius or limit is invalid
        """
        query = parse_payload(
            NearbyQueryModel,
            {
                "lat": latitude,
                "lng": longitude,
                "distance": (
                    self.default_distance if max_distance is None else max_distance
                ),
                "limit": limit,
            },
        )

        cursor = Place.find(
            build_nearby_filter(query.latitude, query.longitude, query.max_distance),
        )
        if query.limit:
            cursor = cursor.limit(query.limit)

        with translate_store_errors("fetching nearby places"):
            return await cursor.to_list()

    async def get_stats(self) -> dict[str, int]:
        """
        Count places by status.

        Returns:
            Dict with total, visited, planned and the visited percentage
        """
        with translate_store_errors("computing place statistics"):
            total = await Place.find_all().count()
            visited = await Place.find(Place.status == PlaceStatus.VISITED).count()
            planned = await Place.find(Place.status == PlaceStatus.PLANNED).count()

        return {
            "total": total,
            "visited": visited,
            "planned": planned,
            "percentage": visited_percentage(visited, total),
        }
