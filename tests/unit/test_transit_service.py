from __future__ import annotations

import asyncio
import random
from datetime import datetime, timedelta, timezone

import pytest

from src.adapters.persistence import FixtureStopCatalog
from src.app.services.simulated_transport import SimulatedTransport
from src.app.services.transit_service import TransitDataService, build_arrival_board
from src.domain.algorithms.arrival_simulator import ArrivalSimulator
from src.domain.exceptions import DataFetchError, StopNotFoundError
from src.domain.models import ArrivalEvent, DelaySeverity, GeoPoint

NOW = datetime(2026, 3, 14, 8, 0, 0, tzinfo=timezone.utc)
TURIN_CENTER = GeoPoint(lat=45.0703, lon=7.6869)


def _service(**kwargs) -> TransitDataService:
    return TransitDataService(
        catalog=FixtureStopCatalog(),
        simulator=ArrivalSimulator(rng=random.Random(11), clock=lambda: NOW),
        **kwargs,
    )


def test_get_nearby_stops_uses_catalog() -> None:
    stops = asyncio.run(_service().get_nearby_stops(TURIN_CENTER, 1000.0))

    ids = {s.id for s in stops}
    assert "GTT-1502" in ids
    assert "GTT-2780" not in ids


def test_get_stop_and_unknown_stop() -> None:
    svc = _service()
    assert svc.get_stop("GTT-1213").name == "Gran Madre"
    with pytest.raises(StopNotFoundError):
        svc.get_stop("GTT-0")


def test_realtime_arrivals_are_ordered() -> None:
    for seed in range(20):
        svc = TransitDataService(
            catalog=FixtureStopCatalog(),
            simulator=ArrivalSimulator(rng=random.Random(seed), clock=lambda: NOW),
        )
        events = asyncio.run(svc.get_realtime_arrivals("GTT-1502"))

        times = [e.effective_time for e in events]
        assert times == sorted(times)


def test_arrival_board_rows_carry_severity_and_label() -> None:
    events = (
        ArrivalEvent(
            trip_id="late",
            route_id="Line-4",
            scheduled_time=NOW + timedelta(minutes=3),
            delay_s=120,
            headsign="Falchera",
        ),
        ArrivalEvent(
            trip_id="now",
            route_id="Line-10",
            scheduled_time=NOW - timedelta(seconds=40),
            delay_s=15,
        ),
        ArrivalEvent(trip_id="broken", route_id="Line-13", scheduled_time=None),
    )

    rows = build_arrival_board(events, now=NOW)

    assert [r.trip_id for r in rows] == ["now", "late", "broken"]
    assert rows[0].label == "Arriving now"
    assert rows[0].severity is DelaySeverity.SLIGHT_DELAY
    assert rows[1].label == "5 min"
    assert rows[1].severity is DelaySeverity.SIGNIFICANT_DELAY
    assert rows[2].label == "Invalid time"
    assert rows[2].effective_time is None


def test_get_arrival_board_uses_given_now() -> None:
    rows = asyncio.run(_service().get_arrival_board("GTT-205", now=NOW))

    assert all(r.label not in {"Departed", "Invalid time"} for r in rows)


def test_find_routes_is_a_placeholder(caplog) -> None:
    out = asyncio.run(
        _service().find_routes(TURIN_CENTER, GeoPoint(lat=45.0635, lon=7.6950))
    )

    assert out == ()
    assert "not implemented" in caplog.text


def test_resolve_stop_by_name_is_case_insensitive() -> None:
    stops = FixtureStopCatalog().list_stops()

    stop = TransitDataService.resolve_stop_by_name("  porta NUOVA station ", stops)
    assert stop.id == "GTT-1501"
    with pytest.raises(StopNotFoundError):
        TransitDataService.resolve_stop_by_name("Porta", stops)


def test_simulated_transport_failure_surfaces_as_data_fetch_error() -> None:
    svc = _service(
        stops_transport=SimulatedTransport(failure_rate=1.0),
        arrivals_transport=SimulatedTransport(failure_rate=1.0),
    )

    with pytest.raises(DataFetchError):
        asyncio.run(svc.get_nearby_stops(TURIN_CENTER, 1000.0))
    with pytest.raises(DataFetchError):
        asyncio.run(svc.get_realtime_arrivals("GTT-1502"))


def test_simulated_transport_sleeps_within_latency_range(monkeypatch) -> None:
    slept: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        slept.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    transport = SimulatedTransport(latency_ms=(300.0, 800.0), rng=random.Random(1))

    for _ in range(20):
        asyncio.run(transport.round_trip("test"))

    assert len(slept) == 20
    assert all(0.3 <= s <= 0.8 for s in slept)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"latency_ms": (-1.0, 10.0)},
        {"latency_ms": (10.0, 5.0)},
        {"failure_rate": 1.5},
        {"failure_rate": -0.1},
    ],
)
def test_simulated_transport_rejects_bad_settings(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        SimulatedTransport(**kwargs)
