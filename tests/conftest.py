import base64
from urllib.parse import parse_qs

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.main import create_app

IMGBB_URL = "https://i.ibb.co/abc123/recibo.png"
IMGBB_THUMB = "https://i.ibb.co/abc123/recibo-thumb.png"
IMGBB_DELETE = "https://ibb.co/abc123/deletehash"
IMAGE_BYTES = b"\x89PNG\r\n\x1a\nfake-image-content"


class FakeImageHost:
    """Responde como ImgBB y como el servidor de las imágenes alojadas"""

    def __init__(self):
        self.uploads = []
        self.fail_upload = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.imgbb.com":
            form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
            self.uploads.append({"key": request.url.params.get("key"), **form})
            if self.fail_upload:
                return httpx.Response(
                    400,
                    json={"status_code": 400, "error": {"message": "Invalid API v1 key.", "code": 100}}
                )
            return httpx.Response(200, json={
                "data": {
                    "url": IMGBB_URL,
                    "delete_url": IMGBB_DELETE,
                    "thumb": {"url": IMGBB_THUMB}
                },
                "success": True,
                "status": 200
            })

        if request.url.host == "i.ibb.co":
            return httpx.Response(200, content=IMAGE_BYTES, headers={"content-type": "image/png"})

        return httpx.Response(404, text="Not Found")


def build_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "imgbb_api_key": "test-key",
        "environment": "development",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def fake_host():
    return FakeImageHost()


@pytest.fixture
def make_client(fake_host):
    clients = []

    def _make(raise_server_exceptions=True, **overrides):
        app = create_app(build_settings(**overrides), image_transport=httpx.MockTransport(fake_host))
        client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    client = make_client()
    # Usuario por defecto al que se asignan los gastos
    response = client.post("/api/users", json={
        "name": "Tesorería",
        "email": "tesoreria@espacionova.org",
        "password": "secreto123"
    })
    assert response.status_code == 201
    return client


@pytest.fixture
def expense(client):
    response = client.post("/api/expenses", json={
        "amount": 50.25,
        "description": "Paper",
        "category": "Office",
        "date": "2024-01-01"
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def receipt(client, expense):
    response = client.post("/api/receipts", json={
        "url": "https://i.ibb.co/abc123/recibo.png",
        "filename": "recibo.png",
        "expenseId": expense["id"]
    })
    assert response.status_code == 201
    return response.json()


def encoded_image() -> str:
    return base64.b64encode(IMAGE_BYTES).decode("ascii")
