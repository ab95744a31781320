"""Request schemas + validation.

Play body:
  {"player_name": "alice", "player_move": "rock"}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from workloads.game.rules import is_valid_move


class ProtocolError(Exception):
    pass


def loads(text: str | bytes) -> dict[str, Any]:
    try:
        obj = json.loads(text)
    except ValueError:
        raise ProtocolError("Invalid JSON")
    if not isinstance(obj, dict):
        raise ProtocolError("Invalid JSON")
    return obj


def _str(v: Any) -> str:
    if v is None:
        return ""
    if not isinstance(v, str):
        # Same class of failure as an undecodable body.
        raise ProtocolError("Invalid JSON")
    return v


@dataclass
class PlayRequest:
    player_name: str
    player_move: str

    @classmethod
    def parse(cls, data: dict[str, Any]) -> "PlayRequest":
        name = _str(data.get("player_name"))
        move = _str(data.get("player_move"))
        if not name or not move:
            raise ProtocolError("Player name and move are required")
        if not is_valid_move(move):
            raise ProtocolError("Invalid move")
        return cls(player_name=name, player_move=move)
