"""API routes for place management."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, status

from core.api import api_route, success_response
from places.dependencies import get_place_service
from places.schemas import (
    MarkPlannedModel,
    MarkVisitedModel,
    PlaceCreateModel,
    PlaceUpdateModel,
)
from places.serializers import serialize_place, serialize_places
from places.services import PlaceService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/places")

Service = Annotated[PlaceService, Depends(get_place_service)]


@router.get("")
@api_route(logger)
async def get_places(service: Service) -> dict[str, Any]:
    """Get all places, newest first."""
    places = await service.list_places()
    return success_response(serialize_places(places), count=len(places))


@router.get("/stats")
@api_route(logger)
async def get_stats(service: Service) -> dict[str, Any]:
    """Get visited/planned counts and the visited percentage."""
    return success_response(await service.get_stats())


@router.get("/nearby")
@api_route(logger)
async def get_nearby_places(
    service: Service,
    lat: Annotated[float, Query(description="Latitude of the search centre")],
    lng: Annotated[float, Query(description="Longitude of the search centre")],
    distance: Annotated[
        float | None,
        Query(description="Search radius in metres"),
    ] = None,
    limit: Annotated[
        int | None,
        Query(description="Maximum number of places to return"),
    ] = None,
) -> dict[str, Any]:
    """Get places near a point, nearest first."""
    places = await service.list_nearby(lat, lng, max_distance=distance, limit=limit)
    return success_response(serialize_places(places), count=len(places))


@router.get("/status/{place_status}")
@api_route(logger)
async def get_places_by_status(place_status: str, service: Service) -> dict[str, Any]:
    """Get places that are planned or visited."""
    places = await service.list_by_status(place_status)
    return success_response(serialize_places(places), count=len(places))


@router.get("/{place_id}")
@api_route(logger)
async def get_place(place_id: str, service: Service) -> dict[str, Any]:
    """Get a single place by id."""
    place = await service.get_place(place_id)
    return success_response(serialize_place(place))


@router.post("", status_code=status.HTTP_201_CREATED)
@api_route(logger)
async def create_place(payload: PlaceCreateModel, service: Service) -> dict[str, Any]:
    """Create a new place."""
    place = await service.create_place(payload)
    return success_response(
        serialize_place(place),
        message="Place created successfully",
    )


@router.put("/{place_id}")
@api_route(logger)
async def update_place(
    place_id: str,
    payload: PlaceUpdateModel,
    service: Service,
) -> dict[str, Any]:
    """Update a place."""
    place = await service.update_place(place_id, payload)
    return success_response(
        serialize_place(place),
        message="Place updated successfully",
    )


@router.patch("/{place_id}/visit")
@api_route(logger)
async def mark_place_visited(
    place_id: str,
    payload: MarkVisitedModel,
    service: Service,
) -> dict[str, Any]:
    """Mark a place as visited."""
    place = await service.mark_visited(place_id, payload)
    return success_response(serialize_place(place), message="Place marked as visited")


@router.patch("/{place_id}/plan")
@api_route(logger)
async def mark_place_planned(
    place_id: str,
    payload: MarkPlannedModel,
    service: Service,
) -> dict[str, Any]:
    """Mark a place as planned."""
    place = await service.mark_planned(place_id, payload)
    return success_response(serialize_place(place), message="Place marked as planned")


@router.delete("/{place_id}")
@api_route(logger)
async def delete_place(place_id: str, service: Service) -> dict[str, Any]:
    """Delete a place."""
    result = await service.delete_place(place_id)
    return success_response(message=result["message"])
