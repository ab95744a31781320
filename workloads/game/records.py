"""Game records, player aggregates, stats read model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def iso_utc(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class GameRecord:
    id: int
    player_name: str
    player_move: str
    computer_move: str
    result: str
    timestamp: float
    player_ip: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "player_name": self.player_name,
            "player_move": self.player_move,
            "computer_move": self.computer_move,
            "result": self.result,
            "timestamp": iso_utc(self.timestamp),
            "player_ip": self.player_ip,
        }


@dataclass
class PlayerAggregate:
    name: str
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total: int = 0
    last_active: float = 0.0

    @property
    def win_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.wins / self.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "wins": self.wins,
            "losses": self.losses,
            "draws": self.draws,
            "total": self.total,
            "last_active": iso_utc(self.last_active),
        }


@dataclass(frozen=True)
class StatsSnapshot:
    total_games: int
    total_players: int
    recent_games: list[GameRecord] = field(default_factory=list)
    leaderboard: list[PlayerAggregate] = field(default_factory=list)
    move_stats: dict[str, int] = field(default_factory=dict)
    win_stats: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_games": self.total_games,
            "total_players": self.total_players,
            "recent_games": [g.to_dict() for g in self.recent_games],
            "leaderboard": [p.to_dict() for p in self.leaderboard],
            "move_stats": dict(self.move_stats),
            "win_stats": dict(self.win_stats),
        }
