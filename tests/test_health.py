# tests/test_health.py
from catalog.api.v1.routers import health
from catalog.core.config import get_settings


class PingDB:
    def __init__(self, ok=True):
        self.ok = ok

    async def command(self, name):
        if not self.ok:
            raise ConnectionError("down")
        return {"ok": 1.0}


def test_root_message(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "running" in r.json()["message"]


def test_health_reports_mongo_ok(client, ctx):
    ctx.db = PingDB()
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["checks"]["mongodb"] == "ok"
    assert "uptime_seconds" in body["checks"]


def test_health_reports_mongo_error(client, ctx):
    ctx.db = PingDB(ok=False)
    body = client.get("/health").json()
    assert body["status"] == "error"
    assert body["checks"]["mongodb"] == "error: ConnectionError"


def test_git_sha_is_resolved_once(client, ctx, monkeypatch):
    calls = []

    def fake_check_output(cmd, **kw):
        calls.append(cmd)
        return b"abc1234\n"

    monkeypatch.setattr(get_settings(), "GIT_SHA", "unknown")
    monkeypatch.setattr(health.subprocess, "check_output", fake_check_output)
    health._git_sha.cache_clear()
    ctx.db = PingDB()
    try:
        for _ in range(3):
            assert client.get("/health").json()["checks"]["version"] == "abc1234"
    finally:
        health._git_sha.cache_clear()
    assert len(calls) == 1
