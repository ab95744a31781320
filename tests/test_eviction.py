"""Player directory eviction policy."""
from workloads.storage.eviction import evict_players
from workloads.storage.memory import PlayerDirectory

DAY = 24 * 60 * 60.0
NOW = 1_000_000.0


def _directory(activity: dict[str, float]) -> PlayerDirectory:
    d = PlayerDirectory()
    for name, ts in activity.items():
        d.apply(name, "win", ts)
    return d


class TestEvictPlayers:
    def test_noop_under_cap(self):
        d = _directory({"a": 0.0, "b": 0.0})
        assert evict_players(d, max_players=2, inactivity_sec=DAY, now=NOW) == []
        assert len(d) == 2

    def test_stale_go_first_then_oldest(self):
        max_players = 5
        activity = {
            # three stale
            "stale1": NOW - 3 * DAY,
            "stale2": NOW - 2 * DAY,
            "stale3": NOW - DAY - 1,
        }
        # seven fresh, increasing activity
        for i in range(7):
            activity[f"fresh{i}"] = NOW - 100.0 + i
        d = _directory(activity)
        assert len(d) == max_players + 5

        evicted = evict_players(d, max_players=max_players, inactivity_sec=DAY, now=NOW)

        assert evicted[:3] == ["stale1", "stale2", "stale3"]
        assert evicted[3:] == ["fresh0", "fresh1"]
        assert len(d) == max_players
        assert sorted(p.name for p in d) == [f"fresh{i}" for i in range(2, 7)]

    def test_stale_removed_even_if_that_undershoots(self):
        d = _directory({"old1": 0.0, "old2": 0.0, "new": NOW})
        evicted = evict_players(d, max_players=2, inactivity_sec=DAY, now=NOW)
        assert sorted(evicted) == ["old1", "old2"]
        assert [p.name for p in d] == ["new"]

    def test_hard_cap_with_no_stale(self):
        d = _directory({f"p{i}": NOW - i for i in range(10)})
        evict_players(d, max_players=1, inactivity_sec=DAY, now=NOW)
        assert [p.name for p in d] == ["p0"]
