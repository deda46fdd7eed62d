# tests/conftest.py
import asyncio
import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from catalog.api.deps import get_context
from catalog.core.context import build_context
from catalog.core.errors import UploadFailed
from catalog.main import app

ADMIN_PASSWORD = "s3cret"
ADMIN = {"password": ADMIN_PASSWORD}
HOSTED_URL = "https://res.cloudinary.com/demo/image/upload/v1/kaly-products/a.png"


class TickingClock:
    """Deterministic UTC clock; every call moves one second forward."""

    def __init__(self, start=datetime(2026, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


class FakeMedia:
    """Records what the upload service hands over to the media host."""

    def __init__(self, url=HOSTED_URL):
        self.url = url
        self.fail = False
        self.paths = []
        self.payloads = []

    async def upload(self, path):
        assert os.path.exists(path)
        self.paths.append(path)
        with open(path, "rb") as fh:
            self.payloads.append(fh.read())
        if self.fail:
            raise UploadFailed()
        return self.url

    async def aclose(self):
        pass


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def db():
    return AsyncMongoMockClient()["catalog_test"]


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def media():
    return FakeMedia()


@pytest.fixture
def ctx(db, media, clock):
    return build_context(db, media=media, admin_secret=ADMIN_PASSWORD, clock=clock)


@pytest.fixture
def client(ctx):
    asyncio.run(ctx.promos.repo.ensure_indexes())
    app.dependency_overrides[get_context] = lambda: ctx
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_product(client):
    def _make(**fields):
        body = {"name": "Robe", "price": 49.9, "category": "robes", **fields}
        r = client.post("/api/products", json=body, headers=ADMIN)
        assert r.status_code == 201, r.text
        return r.json()
    return _make
