"""Tests for backend.registry - session lifecycle and idle expiry."""

import pytest

from backend.registry import SessionRegistry


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(make_api, clock) -> SessionRegistry:
    counter = iter(range(1, 100))
    return SessionRegistry(lambda: make_api(gameId=f"game-{next(counter)}"),
                           ttl_seconds=60, clock=clock)


async def test_create_registers_by_game_id(registry: SessionRegistry) -> None:
    session = await registry.create()
    assert session.game_id == "game-1"
    assert registry.get("game-1") is session
    assert len(registry) == 1


async def test_each_session_gets_its_own_api(registry: SessionRegistry) -> None:
    a = await registry.create()
    b = await registry.create()
    assert a.game_id != b.game_id
    assert registry.ids() == ["game-1", "game-2"]


def test_unknown_id(registry: SessionRegistry) -> None:
    assert registry.get("nope") is None
    assert registry.remove("nope") is False


async def test_remove(registry: SessionRegistry) -> None:
    await registry.create()
    assert registry.remove("game-1") is True
    assert registry.get("game-1") is None


async def test_idle_sessions_expire(registry: SessionRegistry, clock: FakeClock) -> None:
    await registry.create()
    clock.now += 61
    assert registry.expire_idle() == ["game-1"]
    assert len(registry) == 0


async def test_access_keeps_session_alive(registry: SessionRegistry, clock: FakeClock) -> None:
    await registry.create()
    clock.now += 50
    assert registry.get("game-1") is not None
    clock.now += 50
    assert registry.get("game-1") is not None
    clock.now += 61
    assert registry.get("game-1") is None
