"""HTTP entrypoint for the IP information service.

Reflects what the server sees about the caller: address, headers, user agent,
plus the server's own address and hostname.
"""

from __future__ import annotations

import json
import logging
import socket
from dataclasses import asdict, dataclass, field

import jinja2
from aiohttp import web

from workloads.ipinfo.config import IpInfoConfig
from workloads.log import configure_logging
from workloads.net.client_ip import remote_addr, resolve_reflected_ip

logger = logging.getLogger(__name__)


@dataclass
class IPInfo:
    client_ip: str
    server_ip: str
    hostname: str
    user_agent: str
    headers: dict[str, str] = field(default_factory=dict)

    def to_dict(self):
        return asdict(self)


def server_ip(probe_host: str = "8.8.8.8", probe_port: int = 80) -> str:
    # UDP connect sends nothing; it only selects the outbound interface.
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect((probe_host, probe_port))
            return s.getsockname()[0]
    except OSError:
        return "unknown"


def header_map(request: web.Request) -> dict[str, str]:
    out: dict[str, str] = {}
    for name in request.headers.keys():
        if name not in out:
            out[name] = ", ".join(request.headers.getall(name))
    return out


def collect_ip_info(request: web.Request, config: IpInfoConfig) -> IPInfo:
    return IPInfo(
        client_ip=resolve_reflected_ip(request.headers, remote_addr(request, with_port=False)),
        server_ip=server_ip(config.probe_host, config.probe_port),
        hostname=socket.gethostname(),
        user_agent=request.headers.get("User-Agent", ""),
        headers=header_map(request),
    )


def create_app(config: IpInfoConfig) -> web.Application:
    app = web.Application()

    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(config.templates_dir),
        autoescape=jinja2.select_autoescape(["html"]),
    )
    page = env.get_template("ipinfo.html")

    async def on_startup(_: web.Application):
        logger.info("Server starting on port %s", config.port)

    app.on_startup.append(on_startup)

    async def home(request: web.Request):
        info = collect_ip_info(request, config)
        try:
            body = page.render(info=info, info_json=json.dumps(info.to_dict(), indent=2, sort_keys=True))
        except jinja2.TemplateError:
            logger.exception("Template execution error")
            raise web.HTTPInternalServerError(text="Template execution error")
        return web.Response(text=body, content_type="text/html")

    async def api(request: web.Request):
        return web.json_response(collect_ip_info(request, config).to_dict())

    async def health(_: web.Request):
        return web.Response(text="OK")

    app.router.add_get("/", home)
    app.router.add_get("/api", api)
    app.router.add_get("/health", health)

    return app


def main() -> None:
    config = IpInfoConfig.from_env()
    configure_logging(config.log_level)
    app = create_app(config)
    web.run_app(app, host=config.host, port=config.port, print=None)


if __name__ == "__main__":
    main()
