from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Literal

FavoritesBackend = Literal["memory", "file", "dynamodb"]


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def parse_latency_range(
    raw: str | None, *, name: str = "SIMULATED_LATENCY_MS"
) -> tuple[float, float]:
    """Parse "300-800" (min-max ms) or "500" (fixed ms); empty means no latency."""

    text = (raw or "").strip()
    if not text:
        return (0.0, 0.0)
    try:
        if "-" in text:
            lo_raw, hi_raw = text.split("-", 1)
            lo, hi = float(lo_raw), float(hi_raw)
        else:
            lo = hi = float(text)
    except ValueError as exc:
        raise ValueError(
            f"{name} must be 'min-max' or a fixed number of ms, got {raw!r}"
        ) from exc
    if not (math.isfinite(lo) and math.isfinite(hi)) or lo < 0 or hi < lo:
        raise ValueError(f"{name} is not a valid latency range: {raw!r}")
    return (lo, hi)


def _check_range(
    name: str, value: float, *, lo: float = 0.0, hi: float = math.inf
) -> float:
    if not math.isfinite(value) or not (lo <= value <= hi):
        bounds = f"between {lo} and {hi}" if math.isfinite(hi) else f">= {lo}"
        raise ValueError(f"{name} must be a finite number {bounds}, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Process configuration, read from the environment.

    Env vars:
      - NEARBY_RADIUS_M (default 1000)
      - REQUERY_THRESHOLD_M (default 200)
      - SIMULATED_LATENCY_MS: "min-max" or fixed ms (default: none)
      - SIMULATED_FAILURE_RATE: nearby stops lookups (default 0)
      - SIMULATED_ARRIVALS_FAILURE_RATE: arrivals fetches (default 0)
      - ARRIVALS_SEED: seed for the arrival simulator (default: time-seeded)
      - FAVORITES_BACKEND: memory | file | dynamodb (default memory)
      - FAVORITES_PATH, FAVORITES_TABLE: backend specific
    """

    nearby_radius_m: float = 1000.0
    requery_threshold_m: float = 200.0
    latency_ms: tuple[float, float] = (0.0, 0.0)
    stops_failure_rate: float = 0.0
    arrivals_failure_rate: float = 0.0
    arrivals_seed: int | None = None
    favorites_backend: FavoritesBackend = "memory"
    favorites_path: str = "data/favorites.json"
    favorites_table: str = "torinogo-kv"

    @staticmethod
    def from_env() -> "RuntimeConfig":
        backend = (os.getenv("FAVORITES_BACKEND") or "memory").strip().lower()
        if backend not in {"memory", "file", "dynamodb"}:
            raise ValueError(f"Unsupported FAVORITES_BACKEND: {backend}")

        seed_raw = (os.getenv("ARRIVALS_SEED") or "").strip()

        return RuntimeConfig(
            nearby_radius_m=_check_range(
                "NEARBY_RADIUS_M", _env_float("NEARBY_RADIUS_M", 1000.0)
            ),
            requery_threshold_m=_check_range(
                "REQUERY_THRESHOLD_M", _env_float("REQUERY_THRESHOLD_M", 200.0)
            ),
            latency_ms=parse_latency_range(os.getenv("SIMULATED_LATENCY_MS")),
            stops_failure_rate=_check_range(
                "SIMULATED_FAILURE_RATE",
                _env_float("SIMULATED_FAILURE_RATE", 0.0),
                hi=1.0,
            ),
            arrivals_failure_rate=_check_range(
                "SIMULATED_ARRIVALS_FAILURE_RATE",
                _env_float("SIMULATED_ARRIVALS_FAILURE_RATE", 0.0),
                hi=1.0,
            ),
            arrivals_seed=int(seed_raw) if seed_raw else None,
            favorites_backend=backend,  # type: ignore[arg-type]
            favorites_path=os.getenv("FAVORITES_PATH") or "data/favorites.json",
            favorites_table=os.getenv("FAVORITES_TABLE") or "torinogo-kv",
        )
