import json
import logging

import pytest
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from pymongo.errors import OperationFailure

from core.api import api_route, error_response, success_response
from core.exceptions import (
    DuplicateResourceException,
    ResourceNotFoundException,
    StoreException,
    ValidationException,
    format_validation_errors,
)
from db.errors import translate_store_errors

logger = logging.getLogger("tests.core_api")


def _body(response: JSONResponse) -> dict:
    return json.loads(response.body)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("exc", "expected_status", "expected_message"),
    [
        (ValidationException("bad input"), status.HTTP_400_BAD_REQUEST, "bad input"),
        (
            ResourceNotFoundException("missing"),
            status.HTTP_404_NOT_FOUND,
            "missing",
        ),
        (
            DuplicateResourceException("duplicate"),
            status.HTTP_409_CONFLICT,
            "duplicate",
        ),
        (
            StoreException("store down"),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "store down",
        ),
    ],
)
async def test_api_route_maps_domain_exceptions(
    exc: Exception,
    expected_status: int,
    expected_message: str,
) -> None:
    @api_route(logger)
    async def handler():
        raise exc

    response = await handler()

    assert response.status_code == expected_status
    body = _body(response)
    assert body["success"] is False
    assert body["message"] == expected_message
    assert "stack" not in body


@pytest.mark.asyncio
async def test_api_route_includes_field_errors_for_validation() -> None:
    errors = [
        {"field": "name", "message": "Field required"},
        {"field": "coordinates", "message": "Field required"},
    ]

    @api_route(logger)
    async def handler():
        raise ValidationException("Invalid data", errors=errors)

    response = await handler()

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert _body(response)["errors"] == errors


@pytest.mark.asyncio
async def test_api_route_allows_http_exception_passthrough() -> None:
    @api_route(logger)
    async def handler():
        raise HTTPException(status_code=418, detail="nope")

    with pytest.raises(HTTPException) as raised:
        await handler()

    assert raised.value.status_code == 418


@pytest.mark.asyncio
async def test_api_route_hides_unexpected_error_details() -> None:
    @api_route(logger)
    async def handler():
        raise RuntimeError("connection string leaked")

    response = await handler()

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert _body(response) == {"success": False, "message": "Internal server error"}


@pytest.mark.asyncio
async def test_api_route_adds_stack_in_development(monkeypatch) -> None:
    monkeypatch.setattr("config.APP_ENV", "development")

    @api_route(logger)
    async def handler():
        raise RuntimeError("boom")

    body = _body(await handler())

    assert "RuntimeError: boom" in body["stack"]


def test_success_response_omits_missing_keys() -> None:
    assert success_response() == {"success": True}
    assert success_response([1, 2], count=2) == {
        "success": True,
        "count": 2,
        "data": [1, 2],
    }
    assert success_response(message="done") == {"success": True, "message": "done"}


def test_error_response_without_errors_has_no_errors_key() -> None:
    body = _body(error_response(404, "missing"))
    assert body == {"success": False, "message": "missing"}


@pytest.mark.asyncio
async def test_api_route_keeps_driver_detail_out_of_store_errors() -> None:
    @api_route(logger)
    async def handler():
        with translate_store_errors("fetching places"):
            raise OperationFailure("auth failed for user admin@10.0.0.5")

    response = await handler()

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert _body(response) == {
        "success": False,
        "message": "Error while fetching places",
    }


def test_format_validation_errors_reports_malformed_json_as_body() -> None:
    errors = [
        {"type": "json_invalid", "loc": ("body", 12), "msg": "JSON decode error"},
        {"type": "missing", "loc": ("query", "lng"), "msg": "Field required"},
        {"type": "too_short", "loc": ("body", "coordinates", 1), "msg": "short"},
    ]

    assert format_validation_errors(errors) == [
        {"field": "body", "message": "JSON decode error"},
        {"field": "lng", "message": "Field required"},
        {"field": "coordinates", "message": "short"},
    ]
