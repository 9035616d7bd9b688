from __future__ import annotations

from datetime import datetime

import httpx
import pytest

from src.adapters.api.dependencies import AppContext, build_context
from src.adapters.config import RuntimeConfig
from src.main import app


@pytest.mark.unit
@pytest.mark.anyio
async def test_health(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.unit
@pytest.mark.anyio
async def test_nearby_stops_around_turin_center(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get(
            "/stops/nearby", params={"lat": 45.0703, "lon": 7.6869, "radius_m": 1000}
        )

    assert resp.status_code == 200
    payload = resp.json()
    ids = [s["stop_id"] for s in payload]
    assert "GTT-1502" in ids
    assert "GTT-2780" not in ids
    assert ids[0] == "GTT-205"

    distances = [s["distance_m"] for s in payload]
    assert distances == sorted(distances)
    assert all(d <= 1000.0 for d in distances)


@pytest.mark.unit
@pytest.mark.anyio
async def test_nearby_stops_limit_keeps_the_closest(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get(
            "/stops/nearby",
            params={"lat": 45.0703, "lon": 7.6869, "radius_m": 1000, "limit": 2},
        )

    assert resp.status_code == 200
    payload = resp.json()
    assert len(payload) == 2
    assert payload[0]["stop_id"] == "GTT-205"


@pytest.mark.unit
@pytest.mark.anyio
async def test_nearby_stops_default_radius_comes_from_config() -> None:
    app.state.context = build_context(RuntimeConfig(nearby_radius_m=150.0))
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport, base_url="http://test"
        ) as client:
            resp = await client.get(
                "/stops/nearby", params={"lat": 45.0703, "lon": 7.6869}
            )
    finally:
        app.state.context = None

    assert resp.status_code == 200
    assert [s["stop_id"] for s in resp.json()] == ["GTT-205"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_nearby_stops_marks_favorites(api_context: AppContext) -> None:
    await api_context.favorites.add_favorite("GTT-1502")

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/stops/nearby", params={"lat": 45.0703, "lon": 7.6869})

    flags = {s["stop_id"]: s["is_favorite"] for s in resp.json()}
    assert flags["GTT-1502"] is True
    assert flags["GTT-205"] is False


@pytest.mark.unit
@pytest.mark.anyio
async def test_nearby_stops_rejects_invalid_latitude(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/stops/nearby", params={"lat": 95.0, "lon": 7.6869})

    assert resp.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_get_stop_and_unknown_stop(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        ok = await client.get("/stops/GTT-1213")
        missing = await client.get("/stops/GTT-0")

    assert ok.status_code == 200
    assert ok.json()["name"] == "Gran Madre"
    assert ok.json()["location"] == {"lat": 45.0635, "lon": 7.695}
    assert missing.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_arrival_board_is_ordered(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/stops/GTT-1502/arrivals")

    assert resp.status_code == 200
    board = resp.json()
    assert board["stop"]["stop_id"] == "GTT-1502"

    times = [datetime.fromisoformat(a["effective_time"]) for a in board["arrivals"]]
    assert times == sorted(times)
    for row in board["arrivals"]:
        assert row["route_id"].startswith("Line-")
        assert row["severity"] in {"on_time", "slight_delay", "significant_delay"}
        assert row["label"]
        assert not row["label"].startswith("in ")


@pytest.mark.unit
@pytest.mark.anyio
async def test_arrivals_for_unknown_stop_is_404(api_context: AppContext) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/stops/NOPE/arrivals")

    assert resp.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_backend_failure_is_a_retryable_503() -> None:
    app.state.context = build_context(
        RuntimeConfig(stops_failure_rate=1.0, arrivals_failure_rate=1.0)
    )
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport, base_url="http://test"
        ) as client:
            stops = await client.get(
                "/stops/nearby", params={"lat": 45.0703, "lon": 7.6869}
            )
            arrivals = await client.get("/stops/GTT-1502/arrivals")
    finally:
        app.state.context = None

    for resp in (stops, arrivals):
        assert resp.status_code == 503
        assert resp.json()["retryable"] is True
