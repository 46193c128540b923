"""
Integration tests for the engineers API.
"""

from uuid import uuid4

import pytest

from src.domain.value_objects.actor import UserRole
from src.domain.value_objects.geo_location import GeoPoint
from tests.factories import OTHER_AGENCY_ID, actor_headers, make_engineer

API = "/api/v1"

KORAMANGALA = {"latitude": 12.9352, "longitude": 77.6245}


def location_url(engineer_id) -> str:
    return f"{API}/engineers/{engineer_id}/location"


class TestLocationEndpoint:
    """Test cases for PATCH /engineers/{engineer_id}/location."""

    @pytest.mark.asyncio
    async def test_update_location(self, client, persisted, reload):
        (engineer,) = await persisted(make_engineer(current_location=None))

        response = await client.patch(
            location_url(engineer.id),
            json=KORAMANGALA,
            headers=actor_headers(UserRole.MANAGER),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(engineer.id)
        assert body["current_location"] == {"lat": 12.9352, "lng": 77.6245}
        assert body["availability_status"] == "available"
        assert body["last_location_update"] is not None

        stored = await reload(engineer)
        assert stored.current_location == GeoPoint(12.9352, 77.6245)
        assert stored.last_location_update is not None

    @pytest.mark.asyncio
    async def test_engineer_reports_own_location(self, client, persisted, reload):
        (engineer,) = await persisted(make_engineer())

        response = await client.patch(
            location_url(engineer.id),
            json=KORAMANGALA,
            headers=actor_headers(UserRole.ENGINEER, actor_id=engineer.id),
        )

        assert response.status_code == 200
        assert (await reload(engineer)).current_location == GeoPoint(12.9352, 77.6245)

    @pytest.mark.asyncio
    async def test_engineer_cannot_move_colleague(self, client, persisted, reload):
        (engineer,) = await persisted(make_engineer())

        response = await client.patch(
            location_url(engineer.id),
            json=KORAMANGALA,
            headers=actor_headers(UserRole.ENGINEER),
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == (
            "You do not have permission to update this engineer location"
        )
        assert (await reload(engineer)).current_location == engineer.current_location

    @pytest.mark.asyncio
    async def test_other_agency_engineer(self, client, persisted, reload):
        (engineer,) = await persisted(make_engineer(agency_id=OTHER_AGENCY_ID))

        response = await client.patch(
            location_url(engineer.id), json=KORAMANGALA, headers=actor_headers()
        )

        assert response.status_code == 403
        error = response.json()["error"]
        assert error["code"] == "FORBIDDEN"
        assert error["message"] == "You do not have access to this engineer"
        assert (await reload(engineer)).last_location_update is None

    @pytest.mark.asyncio
    async def test_viewer_may_not_update(self, client):
        response = await client.patch(
            location_url(uuid4()),
            json=KORAMANGALA,
            headers=actor_headers(UserRole.VIEWER),
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_missing_session_is_unauthorized(self, client):
        response = await client.patch(location_url(uuid4()), json=KORAMANGALA)

        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, field",
        [
            ({"latitude": 90.5, "longitude": 77.6}, "latitude"),
            ({"latitude": -91, "longitude": 77.6}, "latitude"),
            ({"latitude": 12.9, "longitude": 180.1}, "longitude"),
            ({"latitude": 12.9}, "longitude"),
        ],
    )
    async def test_out_of_range_coordinates(self, client, persisted, payload, field):
        (engineer,) = await persisted(make_engineer())

        response = await client.patch(
            location_url(engineer.id), json=payload, headers=actor_headers()
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert field in error["details"]

    @pytest.mark.asyncio
    async def test_unknown_engineer(self, client):
        response = await client.patch(
            location_url(uuid4()), json=KORAMANGALA, headers=actor_headers()
        )

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Engineer not found"

    @pytest.mark.asyncio
    async def test_invalid_engineer_id(self, client):
        response = await client.patch(location_url("not-a-uuid"), json={})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_ID"
        assert error["message"] == "Invalid engineer ID format"
