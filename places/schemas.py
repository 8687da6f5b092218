"""
Pydantic schemas for place request validation.

Every field rule lives here as a declarative constraint so that a single
``model_validate`` call reports all violated fields at once.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Annotated, Any, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError as PydanticValidationError,
    field_validator,
)
from pydantic_core import PydanticCustomError

from config import NEARBY_DEFAULT_DISTANCE_M
from core.exceptions import ValidationException
from db.models import PlaceStatus

ModelT = TypeVar("ModelT", bound=BaseModel)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MAX_NAME_LENGTH = 200
MAX_TEXT_LENGTH = 1000


def _check_date(value: str) -> str:
    if not DATE_PATTERN.match(value):
        raise PydanticCustomError("date_format", "Date must be in YYYY-MM-DD format")
    try:
        date.fromisoformat(value)
    except ValueError:
        raise PydanticCustomError(
            "date_value", "Date must be a valid calendar date"
        ) from None
    return value


def _check_coordinates(value: list[float]) -> list[float]:
    if len(value) != 2:
        raise PydanticCustomError(
            "coordinates_length",
            "Coordinates must contain exactly 2 numbers [latitude, longitude]",
        )
    latitude, longitude = value
    if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
        raise PydanticCustomError(
            "coordinates_range",
            "Coordinates must be [latitude, longitude] with valid ranges",
        )
    return value


Name = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_NAME_LENGTH),
]
Text = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_TEXT_LENGTH),
]
DateString = Annotated[str, AfterValidator(_check_date)]
Coordinates = Annotated[list[float], AfterValidator(_check_coordinates)]


class _RequestModel(BaseModel):
    # Unknown fields are dropped rather than rejected
    model_config = ConfigDict(extra="ignore")


class PlaceCreateModel(_RequestModel):
    """Fields accepted when creating a place."""

    id: str | None = None
    name: Name
    description: Text
    image: str | None = None
    coordinates: Coordinates
    status: PlaceStatus = PlaceStatus.PLANNED
    plannedDate: DateString | None = None
    visitDate: DateString | None = None
    visitDescription: Text | None = None

    @field_validator("id")
    @classmethod
    def blank_id_is_missing(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class PlaceUpdateModel(_RequestModel):
    """Fields accepted when updating a place; all optional, ``id`` ignored."""

    name: Name | None = None
    description: Text | None = None
    image: str | None = None
    coordinates: Coordinates | None = None
    status: PlaceStatus | None = None
    plannedDate: DateString | None = None
    visitDate: DateString | None = None
    visitDescription: Text | None = None


class MarkVisitedModel(_RequestModel):
    """Payload for moving a place to ``visited``."""

    visitDate: DateString
    visitDescription: Text


class MarkPlannedModel(_RequestModel):
    """Payload for moving a place to ``planned``."""

    plannedDate: DateString


class NearbyQueryModel(_RequestModel):
    """Parameters of a proximity search; distance is in metres."""

    latitude: float = Field(alias="lat", ge=-90, le=90)
    longitude: float = Field(alias="lng", ge=-180, le=180)
    max_distance: float = Field(
        alias="distance",
        default=NEARBY_DEFAULT_DISTANCE_M,
        gt=0,
    )
    limit: int | None = Field(default=None, ge=1)


def parse_payload(
    model: type[ModelT],
    payload: dict[str, Any] | BaseModel,
) -> ModelT:
    """Validate ``payload`` against ``model``.

    Raises:
        ValidationException: With one entry per invalid field.
    """
    if isinstance(payload, model):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationException.from_pydantic(e.errors()) from e
