"""Pytest configuration and shared fixtures."""

import asyncio
import json
import random
from typing import Any, Dict

import pytest

from tambola_caller.config.defaults import EngineParams
from tambola_caller.engine import SessionEngine
from tambola_caller.persistence.store import MemoryStore

# One auto-draw "second" lasts 50ms in engine tests
TIME_SCALE = 0.05


def run(coro):
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


async def ready_engine(store: MemoryStore = None, seed: int = 7, **kwargs) -> SessionEngine:
    """Build and hydrate an engine over a memory store."""
    engine = SessionEngine(
        store if store is not None else MemoryStore(),
        rng=random.Random(seed),
        time_scale=TIME_SCALE,
        **kwargs,
    )
    await engine.hydrate()
    return engine


@pytest.fixture
def engine_params() -> EngineParams:
    """Default engine parameters."""
    return EngineParams()


@pytest.fixture
def small_params() -> EngineParams:
    """Engine parameters with a small pool for exhaustion tests."""
    return EngineParams(pool_size=5)


@pytest.fixture
def sample_session_record() -> Dict[str, Any]:
    """Session record as stored after three draws."""
    return {
        "currentNumber": 42,
        "generatedNumbers": [17, 3, 42],
        "isPaused": False,
    }


@pytest.fixture
def sample_settings_record() -> Dict[str, Any]:
    """Settings record with auto mode on."""
    return {
        "isAutoMode": True,
        "autoSpeed": 5,
    }


@pytest.fixture
def seeded_store(sample_session_record, sample_settings_record) -> MemoryStore:
    """Memory store holding both sample records."""
    return MemoryStore({
        "session": json.dumps(sample_session_record),
        "settings": json.dumps(sample_settings_record),
    })
