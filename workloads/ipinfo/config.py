"""IP info service settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from workloads.game.config import PACKAGE_DIR


@dataclass
class IpInfoConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    # Outbound target used only to learn which local interface routes out.
    probe_host: str = "8.8.8.8"
    probe_port: int = 80

    templates_dir: str = field(default_factory=lambda: os.path.join(PACKAGE_DIR, "templates"))

    @classmethod
    def from_env(cls) -> "IpInfoConfig":
        cfg = cls()
        cfg.host = os.environ.get("HOST", cfg.host)
        cfg.port = int(os.environ.get("PORT") or str(cfg.port))
        cfg.log_level = os.environ.get("LOG_LEVEL", cfg.log_level)
        return cfg
