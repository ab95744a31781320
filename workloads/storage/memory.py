"""In-memory runtime state: game ledger + player directory.

Neither structure locks on its own; ArenaService serializes access.
"""

from __future__ import annotations

import dataclasses
from collections import deque
from itertools import islice
from typing import Iterator

from workloads.game.records import GameRecord, PlayerAggregate
from workloads.game.rules import DRAW, LOSS, WIN


class GameLedger:
    """Sliding window over the most recent games."""

    def __init__(self, cap: int):
        if cap < 1:
            raise ValueError("ledger cap must be >= 1")
        self.cap = int(cap)
        self._games: deque[GameRecord] = deque(maxlen=self.cap)
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._games)

    @property
    def last_id(self) -> int:
        return self._last_id

    def record(self, entry: GameRecord) -> GameRecord:
        self._last_id += 1
        stored = dataclasses.replace(entry, id=self._last_id)
        # deque(maxlen) drops from the left once full.
        self._games.append(stored)
        return stored

    def recent(self, k: int) -> list[GameRecord]:
        if k <= 0:
            return []
        return list(islice(reversed(self._games), k))


class PlayerDirectory:
    def __init__(self):
        self._players: dict[str, PlayerAggregate] = {}

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, name: str) -> bool:
        return name in self._players

    def __iter__(self) -> Iterator[PlayerAggregate]:
        return iter(list(self._players.values()))

    def get(self, name: str) -> PlayerAggregate | None:
        return self._players.get(name)

    def upsert(self, name: str) -> PlayerAggregate:
        cur = self._players.get(name)
        if cur is None:
            cur = PlayerAggregate(name=name)
            self._players[name] = cur
        return cur

    def apply(self, name: str, outcome: str, timestamp: float) -> PlayerAggregate:
        if outcome not in (WIN, LOSS, DRAW):
            raise ValueError(f"unknown outcome: {outcome!r}")
        p = self.upsert(name)
        p.total += 1
        p.last_active = timestamp
        if outcome == WIN:
            p.wins += 1
        elif outcome == LOSS:
            p.losses += 1
        else:
            p.draws += 1
        return p

    def remove(self, name: str) -> None:
        self._players.pop(name, None)

    def leaderboard(self, limit: int) -> list[PlayerAggregate]:
        vals = [dataclasses.replace(p) for p in self._players.values()]
        # Stable: equal (rate, total) pairs keep first-seen order.
        vals.sort(key=lambda p: (p.win_rate, p.total), reverse=True)
        return vals[: max(0, int(limit))]
