"""All-time counters, updated per game instead of rescanning history."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from workloads.game.rules import MOVES, OUTCOMES


@dataclass(frozen=True)
class CacheSnapshot:
    total_games: int
    move_stats: dict[str, int] = field(default_factory=dict)
    win_stats: dict[str, int] = field(default_factory=dict)
    last_updated: float = 0.0


class StatsCache:
    """Counters behind their own lock.

    Callers holding the service RWLock may take this lock; never the other
    way round.
    """

    def __init__(self, now: float | None = None):
        self._lock = threading.Lock()
        self._total_games = 0
        self._move_stats: dict[str, int] = {m: 0 for m in MOVES}
        self._win_stats: dict[str, int] = {o: 0 for o in OUTCOMES}
        self._last_updated = time.time() if now is None else now

    def apply(self, move: str, outcome: str, now: float | None = None) -> None:
        with self._lock:
            self._total_games += 1
            self._move_stats[move] = self._move_stats.get(move, 0) + 1
            self._win_stats[outcome] = self._win_stats.get(outcome, 0) + 1
            self._last_updated = time.time() if now is None else now

    def snapshot(self) -> CacheSnapshot:
        with self._lock:
            return CacheSnapshot(
                total_games=self._total_games,
                move_stats=dict(self._move_stats),
                win_stats=dict(self._win_stats),
                last_updated=self._last_updated,
            )
