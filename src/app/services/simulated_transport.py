from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field

from src.domain.exceptions import DataFetchError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulatedTransport:
    """Fakes a network round-trip in front of the fixture data.

    Adds a random latency and fails a fraction of calls with DataFetchError so
    the retry and last-known-good paths of callers get exercised in demos.
    """

    latency_ms: tuple[float, float] = (0.0, 0.0)
    failure_rate: float = 0.0
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        lo, hi = self.latency_ms
        if lo < 0 or hi < lo:
            raise ValueError(f"Invalid latency range: {self.latency_ms}")
        if not (0.0 <= self.failure_rate <= 1.0):
            raise ValueError(f"Invalid failure rate: {self.failure_rate}")

    async def round_trip(self, operation: str) -> None:
        lo, hi = self.latency_ms
        if hi > 0:
            await asyncio.sleep(self.rng.uniform(lo, hi) / 1000.0)

        if self.failure_rate and self.rng.random() < self.failure_rate:
            logger.error("Simulated backend error during %s", operation)
            raise DataFetchError(f"Simulated network error during {operation}")
