"""Caller address resolution behind proxies."""

from __future__ import annotations

from typing import Any, Mapping

from aiohttp import web


def format_peer(peername: Any) -> str:
    """host:port, IPv6 hosts bracketed (`[::1]:8080`)."""
    if isinstance(peername, (tuple, list)) and len(peername) >= 2:
        host, port = peername[0], peername[1]
        if ":" in str(host):
            return f"[{host}]:{port}"
        return f"{host}:{port}"
    if peername:
        return str(peername)
    return ""


def resolve_client_ip(headers: Mapping[str, str], remote_addr: str) -> str:
    """X-Forwarded-For first entry, then X-Real-IP, then the connection address."""
    forwarded = headers.get("X-Forwarded-For", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("X-Real-IP", "")
    if real_ip:
        return real_ip.strip()

    return remote_addr


def resolve_reflected_ip(headers: Mapping[str, str], remote_host: str) -> str:
    """IP info service variant: any X-Forwarded-For wins, even an empty first entry.

    X-Real-IP is returned as sent.
    """
    forwarded = headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = headers.get("X-Real-IP", "")
    if real_ip:
        return real_ip

    return remote_host


def remote_addr(request: web.Request, *, with_port: bool = True) -> str:
    if with_port and request.transport is not None:
        addr = format_peer(request.transport.get_extra_info("peername"))
        if addr:
            return addr
    return request.remote or ""


def client_ip(request: web.Request, *, with_port: bool = True) -> str:
    return resolve_client_ip(request.headers, remote_addr(request, with_port=with_port))
