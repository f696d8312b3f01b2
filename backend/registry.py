"""In-memory registry of served game sessions, keyed by game id.

Sessions idle for longer than the TTL are dropped the next time the registry
is touched. Nothing is persisted: restarting the server forgets every game.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from mugloar.client import GameApi
from mugloar.session import GameSession
from mugloar.shopping import DEFAULT_RULES, ShoppingRules


@dataclass
class _Entry:
    session: GameSession
    last_used: float


class SessionRegistry:
    def __init__(
        self,
        api_factory: Callable[[], GameApi],
        *,
        ttl_seconds: float = 3600,
        rules: ShoppingRules = DEFAULT_RULES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._api_factory = api_factory
        self._ttl = ttl_seconds
        self._rules = rules
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def create(self) -> GameSession:
        """Start a new game and register it under its server-issued id."""
        self.expire_idle()
        session = GameSession(self._api_factory(), self._rules)
        state = await session.start()
        self._entries[state.game_id] = _Entry(session, self._clock())
        return session

    def get(self, game_id: str) -> GameSession | None:
        self.expire_idle()
        entry = self._entries.get(game_id)
        if entry is None:
            return None
        entry.last_used = self._clock()
        return entry.session

    def remove(self, game_id: str) -> bool:
        return self._entries.pop(game_id, None) is not None

    def expire_idle(self) -> list[str]:
        """Drop sessions idle past the TTL. Returns the dropped ids."""
        cutoff = self._clock() - self._ttl
        expired = [gid for gid, e in self._entries.items() if e.last_used <= cutoff]
        for gid in expired:
            del self._entries[gid]
        return expired

    def ids(self) -> list[str]:
        self.expire_idle()
        return list(self._entries)
