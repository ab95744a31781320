"""Request logging, security headers, gzip."""

from __future__ import annotations

import logging
import time

from aiohttp import web

logger = logging.getLogger(__name__)

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "no-referrer-when-downgrade",
    "Permissions-Policy": "geolocation=(self), microphone=(), camera=()",
    "Content-Security-Policy": "default-src 'self'; img-src 'self' data:; script-src 'self'; style-src 'self';",
}


@web.middleware
async def request_logger_middleware(request: web.Request, handler):
    start = time.perf_counter()
    try:
        return await handler(request)
    finally:
        logger.info("%s %s %.3fms", request.method, request.path, (time.perf_counter() - start) * 1000.0)


@web.middleware
async def security_headers_middleware(request: web.Request, handler):
    try:
        resp = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(SECURITY_HEADERS)
        raise
    resp.headers.update(SECURITY_HEADERS)
    return resp


@web.middleware
async def gzip_middleware(request: web.Request, handler):
    # Mounted by create_app only when gzip_enabled is set.
    resp = await handler(request)
    # File responses negotiate their own encoding.
    if not isinstance(resp, web.Response):
        return resp
    if "gzip" not in request.headers.get("Accept-Encoding", ""):
        return resp
    resp.enable_compression(web.ContentCoding.gzip)
    resp.headers["Vary"] = "Accept-Encoding"
    return resp
