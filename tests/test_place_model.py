import pytest

from db.models import Place, PlaceStatus
from places.serializers import serialize_place

# Beanie documents can only be built once init_beanie has run
pytestmark = pytest.mark.usefixtures("beanie_db")


def _place(**overrides) -> Place:
    fields = {
        "id": "place-1",
        "name": "Cristo Redentor",
        "description": "Statue on Corcovado",
        "coordinates": [-22.9519, -43.2105],
    }
    fields.update(overrides)
    return Place(**fields)


async def test_place_defaults_to_planned_with_placeholder_image() -> None:
    place = _place()

    assert place.status == PlaceStatus.PLANNED
    assert place.image == "assets/praia.jpg"


async def test_sync_location_builds_longitude_first_point() -> None:
    place = _place()
    place.sync_location()

    assert place.location == {"type": "Point", "coordinates": [-43.2105, -22.9519]}


async def test_mark_visited_clears_planned_date() -> None:
    place = _place(plannedDate="2024-12-01")

    place.mark_visited("2024-12-24", "Christmas eve view")

    assert place.status == PlaceStatus.VISITED
    assert place.plannedDate is None
    assert place.visitDate == "2024-12-24"
    assert place.visitDescription == "Christmas eve view"


async def test_mark_planned_clears_visit_fields() -> None:
    place = _place(
        status=PlaceStatus.VISITED,
        visitDate="2024-12-24",
        visitDescription="Christmas eve view",
    )

    place.mark_planned("2025-06-01")

    assert place.status == PlaceStatus.PLANNED
    assert place.plannedDate == "2025-06-01"
    assert place.visitDate is None
    assert place.visitDescription is None


async def test_touch_enforces_status_fields_for_planned_place() -> None:
    place = _place(plannedDate="2025-01-01", visitDate="2024-01-01")

    place.touch()

    assert place.plannedDate == "2025-01-01"
    assert place.visitDate is None
    assert place.location is not None


async def test_serialize_place_hides_internal_fields_and_unset_dates() -> None:
    place = _place(plannedDate="2025-01-01")
    place.touch()

    data = serialize_place(place)

    assert data == {
        "id": "place-1",
        "name": "Cristo Redentor",
        "description": "Statue on Corcovado",
        "image": "assets/praia.jpg",
        "coordinates": [-22.9519, -43.2105],
        "status": "planned",
        "plannedDate": "2025-01-01",
    }


async def test_missing_status_fields_lists_empty_required_fields() -> None:
    place = _place(status=PlaceStatus.VISITED, visitDate="2024-12-24")

    assert place.missing_status_fields() == ["visitDescription"]
    assert _place(plannedDate="2025-01-01").missing_status_fields() == []
