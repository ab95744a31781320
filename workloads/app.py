"""HTTP entrypoint for the Rock Paper Scissors arena.

Serves the HTML home page, the play/stats JSON API and static assets.
"""

from __future__ import annotations

import logging
import random
import time
from datetime import datetime, timezone
from typing import Callable

import jinja2
from aiohttp import web

from workloads.game import protocol
from workloads.game.config import ArenaConfig
from workloads.game.records import GameRecord, PlayerAggregate, StatsSnapshot
from workloads.game.rules import MOVES, is_valid_move, random_move, resolve_outcome
from workloads.log import configure_logging
from workloads.net.client_ip import client_ip
from workloads.net.locks import RWLock
from workloads.net.middleware import gzip_middleware, request_logger_middleware, security_headers_middleware
from workloads.storage.eviction import evict_players
from workloads.storage.memory import GameLedger, PlayerDirectory
from workloads.storage.stats_cache import StatsCache

logger = logging.getLogger(__name__)


class ArenaService:
    """Owns the ledger, player directory and stats cache.

    Lock order: `_lock` (RWLock) before the cache's own lock.
    """

    def __init__(
        self,
        config: ArenaConfig,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ):
        config.validate()
        self.config = config
        self.rng = rng or random.Random()
        self._clock = clock or time.time
        self.start_time = self.now()

        self._lock = RWLock()
        self.ledger = GameLedger(config.max_games_history)
        self.players = PlayerDirectory()
        self.cache = StatsCache(now=self.start_time)

    def now(self) -> float:
        return self._clock()

    def play(self, player_name: str, player_move: str, player_ip: str) -> GameRecord:
        if not player_name or not player_move:
            raise protocol.ProtocolError("Player name and move are required")
        if not is_valid_move(player_move):
            raise protocol.ProtocolError("Invalid move")

        computer_move = random_move(self.rng)
        result = resolve_outcome(player_move, computer_move)

        with self._lock.write_locked():
            now = self.now()
            game = self.ledger.record(
                GameRecord(
                    id=0,
                    player_name=player_name,
                    player_move=player_move,
                    computer_move=computer_move,
                    result=result,
                    timestamp=now,
                    player_ip=player_ip,
                )
            )
            self.players.apply(player_name, result, now)
            self.cache.apply(player_move, result, now)
            evict_players(self.players, self.config.max_players, self.config.player_inactivity_sec, now)

        logger.debug(
            "Game %d: %s played %s vs %s -> %s", game.id, player_name, player_move, computer_move, result
        )
        return game

    def stats(self) -> StatsSnapshot:
        with self._lock.read_locked():
            cached = self.cache.snapshot()
            return StatsSnapshot(
                total_games=cached.total_games,
                total_players=len(self.players),
                recent_games=self.ledger.recent(self.config.recent_games_limit),
                leaderboard=self.players.leaderboard(self.config.leaderboard_limit),
                move_stats=cached.move_stats,
                win_stats=cached.win_stats,
            )


SVC_KEY = web.AppKey("svc", ArenaService)


def win_rate_pct(p: PlayerAggregate) -> float:
    return p.win_rate * 100.0


def result_label(result: str) -> str:
    if result == "win":
        return "WIN"
    if result == "loss":
        return "LOSS"
    return "DRAW"


def clock_time(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%H:%M:%S")


def make_template_env(config: ArenaConfig) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(config.templates_dir),
        autoescape=jinja2.select_autoescape(["html"]),
    )
    env.filters["win_rate"] = win_rate_pct
    env.filters["result_label"] = result_label
    env.filters["clock"] = clock_time
    return env


def create_app(config: ArenaConfig, svc: ArenaService | None = None) -> web.Application:
    middlewares = [request_logger_middleware, security_headers_middleware]
    if config.gzip_enabled:
        middlewares.insert(0, gzip_middleware)
    app = web.Application(middlewares=middlewares)
    svc = svc or ArenaService(config)

    app[SVC_KEY] = svc

    # Parsed once; a missing template fails here rather than per request.
    home_template = make_template_env(config).get_template("index.html")

    async def on_startup(_: web.Application):
        logger.info("Rock Paper Scissors Arena starting on port %s", config.port)

    async def on_cleanup(_: web.Application):
        logger.info("Shutting down server... (%d games played)", svc.stats().total_games)
        logger.info("Server exiting")

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)

    async def home(_: web.Request):
        stats = svc.stats()
        try:
            body = home_template.render(stats=stats, moves=MOVES)
        except jinja2.TemplateError:
            logger.exception("Template execution error")
            raise web.HTTPInternalServerError(text="Template execution error")
        return web.Response(text=body, content_type="text/html")

    async def play(request: web.Request):
        try:
            data = protocol.loads(await request.read())
            req = protocol.PlayRequest.parse(data)
        except protocol.ProtocolError as e:
            raise web.HTTPBadRequest(text=str(e))
        game = svc.play(req.player_name, req.player_move, client_ip(request))
        return web.json_response(game.to_dict())

    async def stats(_: web.Request):
        return web.json_response(svc.stats().to_dict())

    async def health(_: web.Request):
        return web.Response(text="OK")

    app.router.add_get("/", home)
    app.router.add_post("/play", play)
    app.router.add_get("/api/stats", stats)
    app.router.add_get("/health", health)
    app.router.add_static("/static/", config.static_dir)

    return app


def main() -> None:
    config = ArenaConfig.from_env()
    configure_logging(config.log_level)
    app = create_app(config)
    web.run_app(app, host=config.host, port=config.port, print=None)


if __name__ == "__main__":
    main()
