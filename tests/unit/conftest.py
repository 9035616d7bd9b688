from __future__ import annotations

from typing import Iterator

import pytest

from src.adapters.api.dependencies import AppContext, build_context
from src.adapters.config import RuntimeConfig
from src.main import app


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def api_context() -> Iterator[AppContext]:
    """Install a fresh app context; ASGITransport does not run the lifespan."""

    context = build_context(RuntimeConfig(arrivals_seed=7))
    app.state.context = context
    yield context
    app.state.context = None
    app.dependency_overrides.clear()
