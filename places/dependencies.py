"""FastAPI dependencies for the places routes."""

from fastapi import Request

from places.services import PlaceService


def get_place_service(request: Request) -> PlaceService:
    """Return the PlaceService created during application startup."""
    service = getattr(request.app.state, "place_service", None)
    if service is None:
        msg = "PlaceService has not been initialized"
        raise RuntimeError(msg)
    return service
