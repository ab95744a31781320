"""Shared fixtures for arena and ipinfo tests."""
import pytest

from workloads.app import ArenaService, create_app
from workloads.game.config import ArenaConfig


class FixedRng:
    """Stands in for random.Random; always picks the same computer move."""

    def __init__(self, move: str):
        self.move = move

    def choice(self, seq):
        assert self.move in seq
        return self.move


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> ArenaConfig:
    return ArenaConfig()


@pytest.fixture
def rng() -> FixedRng:
    return FixedRng("scissors")


@pytest.fixture
def svc(config, rng, clock) -> ArenaService:
    return ArenaService(config, rng=rng, clock=clock)


@pytest.fixture
async def client(aiohttp_client, config, svc):
    return await aiohttp_client(create_app(config, svc=svc))
