from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from fastapi import Depends, Request

from src.adapters.config import RuntimeConfig
from src.adapters.persistence import (
    DynamoDbKeyValueStore,
    FixtureStopCatalog,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from src.app.ports.output import IKeyValueStore
from src.app.services.favorites_service import FavoritesService
from src.app.services.nearby_stops_session import NearbyStopsSession
from src.app.services.simulated_transport import SimulatedTransport
from src.app.services.transit_service import TransitDataService
from src.domain.algorithms.arrival_simulator import ArrivalSimulator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AppContext:
    """Everything one running app instance owns; built at startup."""

    config: RuntimeConfig
    transit: TransitDataService
    favorites: FavoritesService

    def new_map_session(self) -> NearbyStopsSession:
        return NearbyStopsSession(
            transit=self.transit,
            radius_m=self.config.nearby_radius_m,
            requery_threshold_m=self.config.requery_threshold_m,
        )


def build_key_value_store(config: RuntimeConfig) -> IKeyValueStore:
    if config.favorites_backend == "file":
        return JsonFileKeyValueStore(path=config.favorites_path)
    if config.favorites_backend == "dynamodb":
        return DynamoDbKeyValueStore(table_name=config.favorites_table)
    return InMemoryKeyValueStore()


def build_context(config: RuntimeConfig) -> AppContext:
    rng = random.Random(config.arrivals_seed)

    stops_transport = None
    arrivals_transport = None
    if config.latency_ms[1] > 0 or config.stops_failure_rate > 0:
        stops_transport = SimulatedTransport(
            latency_ms=config.latency_ms,
            failure_rate=config.stops_failure_rate,
            rng=random.Random(),
        )
    if config.latency_ms[1] > 0 or config.arrivals_failure_rate > 0:
        arrivals_transport = SimulatedTransport(
            latency_ms=config.latency_ms,
            failure_rate=config.arrivals_failure_rate,
            rng=random.Random(),
        )

    transit = TransitDataService(
        catalog=FixtureStopCatalog(),
        simulator=ArrivalSimulator(rng=rng),
        stops_transport=stops_transport,
        arrivals_transport=arrivals_transport,
    )
    favorites = FavoritesService(store=build_key_value_store(config))

    logger.info(
        "Context ready: %d stops, favorites backend=%s",
        len(transit.catalog.list_stops()),
        config.favorites_backend,
    )
    return AppContext(config=config, transit=transit, favorites=favorites)


def get_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context not initialised")
    return context


def get_transit_service(
    context: AppContext = Depends(get_context),
) -> TransitDataService:
    return context.transit


def get_favorites_service(
    context: AppContext = Depends(get_context),
) -> FavoritesService:
    return context.favorites


def get_runtime_config(
    context: AppContext = Depends(get_context),
) -> RuntimeConfig:
    return context.config
