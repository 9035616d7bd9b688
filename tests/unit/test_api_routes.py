from __future__ import annotations

import httpx
import pytest

from src.adapters.api.dependencies import AppContext
from src.main import app


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_with_coordinates_returns_no_options(
    api_context: AppContext,
) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/routes",
            json={
                "origin": {"lat": 45.0630, "lon": 7.6790},
                "destination": {"lat": 45.0635, "lon": 7.6950},
            },
        )

    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_resolves_stop_names(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        ok = await client.post(
            "/routes",
            json={
                "origin_stop_name": "porta nuova station",
                "destination_stop_name": "Gran Madre",
            },
        )
        unknown = await client.post(
            "/routes",
            json={
                "origin_stop_name": "Nowhere",
                "destination": {"lat": 45.0635, "lon": 7.6950},
            },
        )

    assert ok.status_code == 200
    assert ok.json() == []
    assert unknown.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_routes_requires_both_ends(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post(
            "/routes", json={"origin": {"lat": 45.0630, "lon": 7.6790}}
        )

    assert resp.status_code == 422
