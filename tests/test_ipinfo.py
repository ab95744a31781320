"""IP information service."""
import socket

import pytest

from workloads.ipinfo import app as ipinfo_app
from workloads.ipinfo.app import create_app, server_ip
from workloads.ipinfo.config import IpInfoConfig


@pytest.fixture
def stub_server_ip(monkeypatch):
    monkeypatch.setattr(ipinfo_app, "server_ip", lambda *args: "192.0.2.10")


@pytest.fixture
async def ip_client(aiohttp_client, stub_server_ip):
    return await aiohttp_client(create_app(IpInfoConfig()))


class TestApi:
    @pytest.mark.asyncio
    async def test_reflects_request(self, ip_client):
        resp = await ip_client.get("/api", headers={"User-Agent": "probe/1.0", "X-Custom": "abc"})
        assert resp.status == 200
        info = await resp.json()
        assert info["client_ip"] == "127.0.0.1"
        assert info["server_ip"] == "192.0.2.10"
        assert info["hostname"] == socket.gethostname()
        assert info["user_agent"] == "probe/1.0"
        assert info["headers"]["X-Custom"] == "abc"

    @pytest.mark.asyncio
    async def test_forwarded_client(self, ip_client):
        resp = await ip_client.get("/api", headers={"X-Forwarded-For": "203.0.113.9, 10.1.1.1"})
        assert (await resp.json())["client_ip"] == "203.0.113.9"

    @pytest.mark.asyncio
    async def test_empty_forwarded_entry_kept(self, ip_client):
        resp = await ip_client.get("/api", headers={"X-Forwarded-For": ", 10.1.1.1", "X-Real-IP": "198.51.100.4"})
        assert (await resp.json())["client_ip"] == ""

    @pytest.mark.asyncio
    async def test_real_ip_client(self, ip_client):
        resp = await ip_client.get("/api", headers={"X-Real-IP": "198.51.100.4"})
        assert (await resp.json())["client_ip"] == "198.51.100.4"


class TestPages:
    @pytest.mark.asyncio
    async def test_home(self, ip_client):
        resp = await ip_client.get("/", headers={"User-Agent": "<script>"})
        assert resp.status == 200
        html = await resp.text()
        assert "IP Information Service" in html
        assert "192.0.2.10" in html
        assert "&lt;script&gt;" in html
        assert "<script>" not in html

    @pytest.mark.asyncio
    async def test_health(self, ip_client):
        resp = await ip_client.get("/health")
        assert resp.status == 200
        assert await resp.text() == "OK"


class TestServerIp:
    def test_unknown_when_probe_fails(self, monkeypatch):
        class BrokenSocket:
            def __init__(self, *args):
                pass

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def connect(self, addr):
                raise OSError("network unreachable")

        monkeypatch.setattr(ipinfo_app.socket, "socket", BrokenSocket)
        assert server_ip() == "unknown"
