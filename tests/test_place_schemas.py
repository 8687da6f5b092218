import pytest

from core.exceptions import ValidationException
from db.models import PlaceStatus
from places.schemas import (
    MarkPlannedModel,
    MarkVisitedModel,
    PlaceCreateModel,
    PlaceUpdateModel,
    parse_payload,
)


def _fields(exc: ValidationException) -> dict[str, str]:
    return {error["field"]: error["message"] for error in exc.errors}


@pytest.mark.parametrize(
    "coordinates",
    [[0, 0], [90, 180], [-90, -180], [45.5, -73.56]],
)
def test_create_accepts_coordinates_in_range(coordinates) -> None:
    payload = parse_payload(
        PlaceCreateModel,
        {"name": "n", "description": "d", "coordinates": coordinates},
    )
    assert payload.coordinates == coordinates
    assert payload.status == PlaceStatus.PLANNED


@pytest.mark.parametrize(
    "coordinates",
    [[90.1, 0], [-91, 0], [0, 180.5], [0, -181], [1.0], [1.0, 2.0, 3.0]],
)
def test_create_rejects_bad_coordinates(coordinates) -> None:
    with pytest.raises(ValidationException) as raised:
        parse_payload(
            PlaceCreateModel,
            {"name": "n", "description": "d", "coordinates": coordinates},
        )

    assert list(_fields(raised.value)) == ["coordinates"]


def test_create_collects_every_violation() -> None:
    with pytest.raises(ValidationException) as raised:
        parse_payload(
            PlaceCreateModel,
            {
                "name": "x" * 201,
                "coordinates": [100, 0],
                "status": "dreaming",
                "plannedDate": "15/01/2025",
            },
        )

    fields = _fields(raised.value)
    assert set(fields) == {
        "name",
        "description",
        "coordinates",
        "status",
        "plannedDate",
    }
    assert fields["plannedDate"] == "Date must be in YYYY-MM-DD format"


def test_create_trims_text_and_drops_unknown_fields() -> None:
    payload = parse_payload(
        PlaceCreateModel,
        {
            "name": "  Ouro Preto  ",
            "description": " Colonial town ",
            "coordinates": [-20.385, -43.503],
            "rating": 5,
        },
    )

    assert payload.name == "Ouro Preto"
    assert payload.description == "Colonial town"
    assert "rating" not in payload.model_dump()


def test_create_rejects_blank_name() -> None:
    with pytest.raises(ValidationException) as raised:
        parse_payload(
            PlaceCreateModel,
            {"name": "   ", "description": "d", "coordinates": [0, 0]},
        )

    assert "name" in _fields(raised.value)


def test_create_blank_id_is_treated_as_missing() -> None:
    payload = parse_payload(
        PlaceCreateModel,
        {"id": "  ", "name": "n", "description": "d", "coordinates": [0, 0]},
    )
    assert payload.id is None


def test_dates_must_exist_on_the_calendar() -> None:
    with pytest.raises(ValidationException) as raised:
        parse_payload(MarkPlannedModel, {"plannedDate": "2025-02-30"})

    assert _fields(raised.value) == {
        "plannedDate": "Date must be a valid calendar date",
    }


def test_mark_visited_requires_date_and_description() -> None:
    with pytest.raises(ValidationException) as raised:
        parse_payload(MarkVisitedModel, {})

    assert set(_fields(raised.value)) == {"visitDate", "visitDescription"}


def test_mark_visited_rejects_long_description() -> None:
    with pytest.raises(ValidationException) as raised:
        parse_payload(
            MarkVisitedModel,
            {"visitDate": "2024-03-01", "visitDescription": "x" * 1001},
        )

    assert set(_fields(raised.value)) == {"visitDescription"}


def test_update_ignores_id_and_keeps_only_supplied_fields() -> None:
    payload = parse_payload(PlaceUpdateModel, {"id": "other", "name": "New name"})

    assert payload.model_dump(exclude_unset=True) == {"name": "New name"}


def test_parse_payload_returns_existing_model_instance() -> None:
    model = MarkPlannedModel(plannedDate="2025-05-05")
    assert parse_payload(MarkPlannedModel, model) is model
