"""
Unit tests for the Google Distance Matrix provider.
"""

import httpx
import pytest

from src.application.interfaces.services import DistanceEstimate
from src.domain.value_objects.geo_location import GeoPoint
from src.infrastructure.external.distance_matrix import GoogleDistanceMatrixProvider

ORIGINS = [
    GeoPoint(latitude=12.9716, longitude=77.5946),
    GeoPoint(latitude=12.9352, longitude=77.6245),
]
DESTINATION = GeoPoint(latitude=12.9591, longitude=77.6974)


def element(meters: int, seconds: int) -> dict:
    return {
        "status": "OK",
        "distance": {"value": meters, "text": f"{meters / 1000} km"},
        "duration": {"value": seconds, "text": f"{seconds // 60} mins"},
    }


def provider_for(handler) -> GoogleDistanceMatrixProvider:
    return GoogleDistanceMatrixProvider(
        api_key="test-key",
        url="https://maps.example.test/distancematrix/json",
        transport=httpx.MockTransport(handler),
    )


class TestGoogleDistanceMatrixProvider:
    """Test cases for GoogleDistanceMatrixProvider."""

    @pytest.mark.asyncio
    async def test_parses_rows_in_origin_order(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["params"] = dict(request.url.params)
            return httpx.Response(
                200,
                json={
                    "status": "OK",
                    "rows": [
                        {"elements": [element(14250, 1830)]},
                        {"elements": [element(9100, 1250)]},
                    ],
                },
            )

        estimates = await provider_for(handler).get_distances(ORIGINS, DESTINATION)

        assert estimates == [
            DistanceEstimate(distance_km=14.25, duration_minutes=30),
            DistanceEstimate(distance_km=9.1, duration_minutes=21),
        ]
        assert captured["params"]["origins"] == "12.9716,77.5946|12.9352,77.6245"
        assert captured["params"]["destinations"] == "12.9591,77.6974"
        assert captured["params"]["key"] == "test-key"
        assert captured["params"]["units"] == "metric"

    @pytest.mark.asyncio
    async def test_element_without_route_is_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "status": "OK",
                    "rows": [
                        {"elements": [{"status": "ZERO_RESULTS"}]},
                        {"elements": [element(5000, 600)]},
                    ],
                },
            )

        estimates = await provider_for(handler).get_distances(ORIGINS, DESTINATION)

        assert estimates[0] is None
        assert estimates[1] == DistanceEstimate(distance_km=5.0, duration_minutes=10)

    @pytest.mark.asyncio
    async def test_error_status_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"status": "REQUEST_DENIED", "error_message": "bad key"}
            )

        assert await provider_for(handler).get_distances(ORIGINS, DESTINATION) is None

    @pytest.mark.asyncio
    async def test_http_error_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        assert await provider_for(handler).get_distances(ORIGINS, DESTINATION) is None

    @pytest.mark.asyncio
    async def test_transport_error_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        assert await provider_for(handler).get_distances(ORIGINS, DESTINATION) is None

    @pytest.mark.asyncio
    async def test_row_count_mismatch_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"status": "OK", "rows": [{"elements": [element(1000, 60)]}]}
            )

        assert await provider_for(handler).get_distances(ORIGINS, DESTINATION) is None

    @pytest.mark.asyncio
    async def test_missing_api_key_skips_request(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        provider = GoogleDistanceMatrixProvider(
            api_key="", transport=httpx.MockTransport(handler)
        )

        assert await provider.get_distances(ORIGINS, DESTINATION) is None
