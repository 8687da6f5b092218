import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from app_factory import build_app
from beanie import init_beanie
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from db.models import Place  # noqa: E402
from places.services import PlaceService  # noqa: E402


@pytest.fixture(autouse=True)
def _default_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("config.APP_ENV", "test")


@pytest.fixture
async def beanie_db():
    client = AsyncMongoMockClient()
    database = client["test_db"]
    await init_beanie(database=database, document_models=[Place])
    return database


@pytest.fixture
def place_service(beanie_db) -> PlaceService:
    return PlaceService()


@pytest.fixture
def client(place_service) -> TestClient:
    return TestClient(build_app(place_service))


@pytest.fixture
def place_data() -> dict:
    return {
        "name": "Praia do Forte",
        "description": "Beach with natural pools",
        "coordinates": [-12.5797, -38.0001],
        "plannedDate": "2025-01-15",
    }
