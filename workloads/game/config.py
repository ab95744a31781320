"""Ports, caps, retention windows."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

PACKAGE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


@dataclass
class ArenaConfig:
    # Network
    host: str = "0.0.0.0"
    port: int = 8080
    gzip_enabled: bool = True

    # Logging
    log_level: str = "INFO"

    # History / directory caps
    max_games_history: int = 1000
    max_players: int = 500
    # Players idle longer than this are the first to go once over max_players.
    player_inactivity_sec: float = 24 * 60 * 60.0

    # Read model
    recent_games_limit: int = 10
    leaderboard_limit: int = 10

    # Assets
    templates_dir: str = field(default_factory=lambda: os.path.join(PACKAGE_DIR, "templates"))
    static_dir: str = field(default_factory=lambda: os.path.join(PACKAGE_DIR, "static"))

    def validate(self) -> None:
        if self.max_games_history < 1:
            raise ValueError("max_games_history must be >= 1")
        if self.max_players < 1:
            raise ValueError("max_players must be >= 1")
        if self.player_inactivity_sec <= 0:
            raise ValueError("player_inactivity_sec must be > 0")
        if self.recent_games_limit < 0 or self.leaderboard_limit < 0:
            raise ValueError("read model limits must be >= 0")

    @staticmethod
    def _parse_bool(v: str | None, default: bool) -> bool:
        if v is None:
            return default
        return v.strip().lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _parse_int(v: str | None, default: int) -> int:
        if not v:
            return default
        try:
            return int(v)
        except ValueError:
            return default

    @staticmethod
    def _parse_float(v: str | None, default: float) -> float:
        if not v:
            return default
        try:
            return float(v)
        except ValueError:
            return default

    @classmethod
    def from_env(cls) -> "ArenaConfig":
        cfg = cls()
        cfg.host = os.environ.get("HOST", cfg.host)
        cfg.port = cls._parse_int(os.environ.get("PORT"), cfg.port)
        cfg.log_level = os.environ.get("LOG_LEVEL", cfg.log_level)
        cfg.gzip_enabled = cls._parse_bool(os.environ.get("RPS_GZIP"), cfg.gzip_enabled)
        cfg.max_games_history = cls._parse_int(os.environ.get("RPS_MAX_GAMES"), cfg.max_games_history)
        cfg.max_players = cls._parse_int(os.environ.get("RPS_MAX_PLAYERS"), cfg.max_players)
        cfg.player_inactivity_sec = cls._parse_float(
            os.environ.get("RPS_INACTIVITY_SEC"), cfg.player_inactivity_sec
        )
        cfg.recent_games_limit = cls._parse_int(os.environ.get("RPS_RECENT_LIMIT"), cfg.recent_games_limit)
        cfg.leaderboard_limit = cls._parse_int(os.environ.get("RPS_LEADERBOARD_LIMIT"), cfg.leaderboard_limit)
        cfg.validate()
        return cfg
