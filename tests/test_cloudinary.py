# tests/test_cloudinary.py
import hashlib

import httpx
import pytest

from catalog.clients.cloudinary import CloudinaryUploader, sign_params
from catalog.core.errors import UploadFailed


def test_sign_params_sorts_and_appends_secret():
    sig = sign_params({"timestamp": 1315060510, "folder": "kaly-products"}, "abcd")
    expected = hashlib.sha1(b"folder=kaly-products&timestamp=1315060510abcd").hexdigest()
    assert sig == expected


def test_sign_params_skips_empty_values():
    assert sign_params({"timestamp": 1, "folder": ""}, "s") == hashlib.sha1(b"timestamp=1s").hexdigest()


def _uploader(handler, **kw):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CloudinaryUploader(
        cloud_name=kw.get("cloud_name", "demo"),
        api_key="key",
        api_secret="secret",
        folder="kaly-products",
        client=client,
    )


@pytest.fixture
def image(tmp_path):
    p = tmp_path / "robe.png"
    p.write_bytes(b"fake-image-bytes")
    return str(p)


@pytest.mark.anyio
async def test_upload_posts_signed_form_and_returns_secure_url(image):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/x.png", "url": "http://x"})

    up = _uploader(handler)
    url = await up.upload(image)
    await up.aclose()

    assert url == "https://res.cloudinary.com/demo/x.png"
    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    body = seen["body"]
    assert b'name="api_key"' in body
    assert b'name="signature"' in body
    assert b"kaly-products" in body
    assert b"fake-image-bytes" in body


@pytest.mark.anyio
async def test_upload_error_status_raises(image):
    up = _uploader(lambda request: httpx.Response(401, json={"error": {"message": "Invalid Signature"}}))
    with pytest.raises(UploadFailed):
        await up.upload(image)


@pytest.mark.anyio
async def test_upload_transport_error_raises(image):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    up = _uploader(handler)
    with pytest.raises(UploadFailed):
        await up.upload(image)


@pytest.mark.anyio
async def test_upload_without_secure_url_raises(image):
    up = _uploader(lambda request: httpx.Response(200, json={"public_id": "x"}))
    with pytest.raises(UploadFailed):
        await up.upload(image)


@pytest.mark.anyio
async def test_unconfigured_uploader_raises_without_calling_out(image):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"secure_url": "x"})

    up = _uploader(handler, cloud_name="")
    with pytest.raises(UploadFailed):
        await up.upload(image)
    assert calls == []
