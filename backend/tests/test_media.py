import hashlib
import hmac

import pytest
import requests
from fastapi.testclient import TestClient

from catalog_admin.adapters.media import (
    IMAGEKIT_UPLOAD_URL,
    ImageKitMediaAdapter,
    MediaError,
    MockMediaAdapter,
    optimized_url,
)
from catalog_admin.main import app

client = TestClient(app)


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self._body


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return self.response

    def delete(self, url, **kwargs):
        self.calls.append(("DELETE", url, kwargs))
        return self.response


def test_mock_upload_and_revoke():
    media = MockMediaAdapter(url_endpoint="https://cdn.test/")
    res = media.upload(b"\x89PNG", "front.png", folder="variants")
    assert set(res) == {"url", "fileId", "name", "size", "filePath"}
    assert res["size"] == 4
    assert res["url"].startswith("https://cdn.test/variants/")
    assert res["name"].endswith("_front.png")

    media.delete(res["fileId"])
    with pytest.raises(MediaError):
        media.delete(res["fileId"])


def test_imagekit_upload_maps_response():
    body = {
        "url": "https://ik.imagekit.io/shop/products/1_a.jpg",
        "fileId": "abc123",
        "name": "1_a.jpg",
        "size": 3,
        "filePath": "/products/1_a.jpg",
        "height": 10,
    }
    http = FakeSession(FakeResponse(200, body))
    media = ImageKitMediaAdapter("pub", "priv", "https://ik.imagekit.io/shop", session=http)

    res = media.upload(b"abc", "a.jpg", folder="products")

    assert res == {k: body[k] for k in ("url", "fileId", "name", "size", "filePath")}
    method, url, kwargs = http.calls[0]
    assert (method, url) == ("POST", IMAGEKIT_UPLOAD_URL)
    assert kwargs["auth"] == ("priv", "")
    assert kwargs["data"]["folder"] == "products"
    assert kwargs["data"]["useUniqueFileName"] == "true"


def test_imagekit_errors_become_media_errors():
    media = ImageKitMediaAdapter(
        "pub", "priv", "https://ik.imagekit.io/shop", session=FakeSession(FakeResponse(500))
    )
    with pytest.raises(MediaError):
        media.upload(b"abc", "a.jpg")
    with pytest.raises(MediaError):
        media.delete("abc123")


def test_imagekit_delete_targets_file_id():
    http = FakeSession(FakeResponse(204))
    media = ImageKitMediaAdapter("pub", "priv", "https://ik.imagekit.io/shop", session=http)
    media.delete("abc123")
    assert http.calls[0][:2] == ("DELETE", "https://api.imagekit.io/v1/files/abc123")


def test_imagekit_auth_signature():
    media = ImageKitMediaAdapter("pub", "secret", "https://ik.imagekit.io/shop")
    params = media.auth_parameters(token="tok", expire=1700000000)
    expected = hmac.new(b"secret", b"tok1700000000", hashlib.sha1).hexdigest()
    assert params == {"token": "tok", "expire": 1700000000, "signature": expected}


def test_optimized_url():
    endpoint = "https://ik.imagekit.io/shop"
    url = f"{endpoint}/products/a.jpg"
    assert optimized_url(url, endpoint, width=400) == (
        "https://ik.imagekit.io/shop/tr:q-80,f-auto,w-400/products/a.jpg"
    )
    assert optimized_url(url, endpoint, height=200, quality=60, fmt="webp") == (
        "https://ik.imagekit.io/shop/tr:q-60,f-webp,h-200/products/a.jpg"
    )
    assert optimized_url("https://elsewhere.test/a.jpg", endpoint) == "https://elsewhere.test/a.jpg"


def test_upload_route_and_revoke_route():
    res = client.post(
        "/api/media/upload",
        files=[
            ("files", ("a.jpg", b"abc", "image/jpeg")),
            ("files", ("b.png", b"defg", "image/png")),
        ],
        data={"folder": "variants"},
    )
    assert res.status_code == 200
    uploaded = res.json()
    assert [u["size"] for u in uploaded] == [3, 4]
    assert all("/variants/" in u["filePath"] for u in uploaded)

    res = client.delete(f"/api/media/{uploaded[0]['fileId']}")
    assert res.status_code == 200
    assert res.json() == {"success": True}

    res = client.delete(f"/api/media/{uploaded[0]['fileId']}")
    assert res.status_code == 502


def test_auth_route():
    res = client.get("/api/media/auth")
    assert res.status_code == 200
    assert set(res.json()) == {"token", "expire", "signature"}
