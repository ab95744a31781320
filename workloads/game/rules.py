"""Moves, outcomes, computer opponent."""

from __future__ import annotations

import random

ROCK = "rock"
PAPER = "paper"
SCISSORS = "scissors"

MOVES: tuple[str, ...] = (ROCK, PAPER, SCISSORS)

WIN = "win"
LOSS = "loss"
DRAW = "draw"

OUTCOMES: tuple[str, ...] = (WIN, LOSS, DRAW)

# move -> the move it beats
BEATS: dict[str, str] = {
    ROCK: SCISSORS,
    PAPER: ROCK,
    SCISSORS: PAPER,
}


def is_valid_move(move: object) -> bool:
    return isinstance(move, str) and move in BEATS


def resolve_outcome(player_move: str, opponent_move: str) -> str:
    """Outcome from the first mover's perspective. Inputs are assumed validated."""
    if player_move == opponent_move:
        return DRAW
    if BEATS[player_move] == opponent_move:
        return WIN
    return LOSS


def random_move(rng: random.Random | None = None) -> str:
    return (rng or random).choice(MOVES)
