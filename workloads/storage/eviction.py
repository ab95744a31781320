"""Player directory size bound."""

from __future__ import annotations

import logging

from workloads.storage.memory import PlayerDirectory

logger = logging.getLogger(__name__)


def evict_players(directory: PlayerDirectory, max_players: int, inactivity_sec: float, now: float) -> list[str]:
    """Bring the directory back to at most `max_players` entries.

    Stale players (idle longer than `inactivity_sec`) go first. If that is not
    enough, the least recently active of the rest are dropped until the cap
    holds. Caller must hold the write lock.
    """
    if len(directory) <= max_players:
        return []

    cutoff = now - inactivity_sec
    evicted: list[str] = []

    for p in directory:
        if p.last_active < cutoff:
            directory.remove(p.name)
            evicted.append(p.name)
    stale = len(evicted)

    overflow = len(directory) - max_players
    if overflow > 0:
        by_activity = sorted(directory, key=lambda p: p.last_active)
        for p in by_activity[:overflow]:
            directory.remove(p.name)
            evicted.append(p.name)

    logger.info(
        "Evicted %d players (%d inactive, %d least recent); %d remain",
        len(evicted),
        stale,
        len(evicted) - stale,
        len(directory),
    )
    return evicted
