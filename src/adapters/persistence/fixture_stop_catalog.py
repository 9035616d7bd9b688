from __future__ import annotations

from dataclasses import dataclass, field

from src.app.ports.output import IStopCatalog
from src.domain.models import GeoPoint, Stop

# (stop_id, name, lat, lon) of a handful of GTT stops in central Turin.
TURIN_STOPS: tuple[tuple[str, str, float, float], ...] = (
    ("GTT-1501", "Porta Nuova Station", 45.0630, 7.6790),
    ("GTT-1502", "Vittorio Emanuele II", 45.0672, 7.6835),
    ("GTT-244", "Massimo D'Azeglio", 45.0560, 7.6870),
    ("GTT-591", "Porta Susa Station", 45.0715, 7.6640),
    ("GTT-472", "Bertola", 45.0720, 7.6830),
    ("GTT-342", "Solferino", 45.0680, 7.6750),
    ("GTT-765", "Statuto Nord", 45.0790, 7.6710),
    ("GTT-205", "Castello", 45.0710, 7.6860),
    ("GTT-2780", "Carducci Molinette", 45.0455, 7.6775),
    ("GTT-123", "Politecnico", 45.0628, 7.6612),
    ("GTT-456", "Vinzaglio", 45.0695, 7.6688),
    ("GTT-789", "Re Umberto", 45.0655, 7.6760),
    ("GTT-1011", "San Carlo", 45.0690, 7.6845),
    ("GTT-1213", "Gran Madre", 45.0635, 7.6950),
)


def _build_stops(
    rows: tuple[tuple[str, str, float, float], ...],
) -> tuple[Stop, ...]:
    stops = tuple(
        Stop(id=stop_id, name=name, location=GeoPoint(lat=lat, lon=lon))
        for stop_id, name, lat, lon in rows
    )
    ids = [s.id for s in stops]
    if len(ids) != len(set(ids)):
        raise ValueError("Duplicate stop ids in fixture catalog")
    return stops


@dataclass(frozen=True, slots=True)
class FixtureStopCatalog(IStopCatalog):
    """Static in-memory stop catalog, built once at startup."""

    stops: tuple[Stop, ...] = field(default_factory=lambda: _build_stops(TURIN_STOPS))

    def list_stops(self) -> tuple[Stop, ...]:
        return self.stops
