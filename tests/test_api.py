"""Tests for API endpoints."""

import re

import httpx
import pytest

from shortlink.config import Config
from shortlink.database.memory import MemoryStore
from shortlink.qr import QRCodeClient
from shortlink.service import URLShortenerService
from shortlink.shortcode import ShortCodeGenerator
from web_app import create_app
from web_app.errors import FALLBACK_TEXT

from helpers import ScriptedRandom, make_client


CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, PUT, DELETE, OPTIONS",
    "access-control-allow-headers": "Content-Type, Authorization",
}


def assert_cors(response):
    for header, value in CORS.items():
        assert response.headers.get(header) == value


def qr_handler(request):
    if request.url.params["data"] == "https://broken.example":
        return httpx.Response(500)
    return httpx.Response(200, content=b"png-bytes", headers={"content-type": "image/png"})


@pytest.fixture
def qr_client():
    return QRCodeClient(http_client=httpx.AsyncClient(transport=httpx.MockTransport(qr_handler)))


@pytest.fixture
def app(service, config, qr_client):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config, qr_client=qr_client)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with make_client(app) as ac:
        yield ac


@pytest.mark.asyncio
class TestShortenEndpoint:
    """Test POST /api/shorten."""

    async def test_shorten_url(self, client, sample_urls):
        response = await client.post("/api/shorten", json={"url": sample_urls[0]})

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"id", "shortCode", "shortUrl", "originalUrl"}
        assert re.match(r"^[A-Za-z0-9]{6}$", data["shortCode"])
        assert data["shortUrl"] == f"http://testserver/{data['shortCode']}"
        assert data["originalUrl"] == sample_urls[0]
        assert_cors(response)

    async def test_short_url_uses_forwarded_headers(self, client, sample_urls):
        response = await client.post(
            "/api/shorten",
            json={"url": sample_urls[0]},
            headers={"X-Forwarded-Proto": "https", "X-Forwarded-Host": "sho.rt"},
        )

        data = response.json()
        assert data["shortUrl"] == f"https://sho.rt/{data['shortCode']}"

    async def test_short_url_uses_path_prefix(self, service, qr_client, sample_urls):
        app = create_app(
            service_instance=service,
            config=Config(base_url="http://testserver", path_prefix="/s"),
            qr_client=qr_client,
        )
        async with make_client(app) as client:
            response = await client.post("/api/shorten", json={"url": sample_urls[0]})

        data = response.json()
        assert data["shortUrl"] == f"http://testserver/s/{data['shortCode']}"

    @pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": "not a url"}, {"url": "ftp://x"}])
    async def test_invalid_url(self, client, body):
        response = await client.post("/api/shorten", json=body)

        assert response.status_code == 400
        assert "error" in response.json()
        assert_cors(response)

    async def test_missing_url_message(self, client):
        response = await client.post("/api/shorten", json={})

        assert response.json() == {"error": "URL is required"}

    async def test_body_not_json(self, client):
        response = await client.post(
            "/api/shorten",
            content="url=https://example.com",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request")

    async def test_url_wrong_type(self, client):
        response = await client.post("/api/shorten", json={"url": ["https://example.com"]})

        assert response.status_code == 400

    async def test_exhausted_retries(self, config, qr_client):
        store = MemoryStore({"aaaaaa": "https://taken.example"})
        generator = ShortCodeGenerator(default_length=6, rng=ScriptedRandom(["aaaaaa"]))
        service = URLShortenerService(store=store, short_code_generator=generator)
        app = create_app(service_instance=service, config=config, qr_client=qr_client)

        async with make_client(app) as client:
            response = await client.post("/api/shorten", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate unique short code"}
        assert_cors(response)


@pytest.mark.asyncio
class TestListEndpoint:
    """Test GET /api/urls."""

    async def test_empty(self, client):
        response = await client.get("/api/urls")

        assert response.status_code == 200
        assert response.json() == {"urls": []}

    async def test_lists_created_urls(self, client, sample_urls):
        created = [
            (await client.post("/api/shorten", json={"url": url})).json()
            for url in sample_urls
        ]

        response = await client.get("/api/urls")

        urls = response.json()["urls"]
        assert [u["shortCode"] for u in urls] == [c["shortCode"] for c in created]
        first = urls[0]
        assert first["id"] == created[0]["id"]
        assert first["originalUrl"] == sample_urls[0]
        assert first["shortUrl"] == created[0]["shortUrl"]
        assert first["clicks"] == 0
        assert first["createdAt"]
        assert_cors(response)


@pytest.mark.asyncio
class TestResolveEndpoint:
    """Test GET /api/resolve/{code}."""

    async def test_resolve(self, client, sample_urls):
        code = (await client.post("/api/shorten", json={"url": sample_urls[2]})).json()["shortCode"]

        response = await client.get(f"/api/resolve/{code}")

        assert response.status_code == 200
        assert response.json() == {"originalUrl": sample_urls[2], "shortCode": code}

    async def test_resolve_counts_click(self, client, sample_urls):
        code = (await client.post("/api/shorten", json={"url": sample_urls[0]})).json()["shortCode"]

        await client.get(f"/api/resolve/{code}")

        urls = (await client.get("/api/urls")).json()["urls"]
        assert urls[0]["clicks"] == 1

    async def test_not_found(self, client):
        response = await client.get("/api/resolve/doesNotExist")

        assert response.status_code == 404
        assert response.json() == {"error": "URL not found"}
        assert_cors(response)


@pytest.mark.asyncio
class TestQREndpoint:
    """Test POST /api/qr."""

    async def test_qr(self, client):
        response = await client.post("/api/qr", json={"url": "https://example.com", "size": 120})

        assert response.status_code == 200
        data = response.json()
        assert data["url"] == "https://example.com"
        assert data["qrCode"] == "data:image/png;base64,cG5nLWJ5dGVz"

    async def test_qr_missing_url(self, client):
        response = await client.post("/api/qr", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

    async def test_qr_bad_size(self, client):
        response = await client.post("/api/qr", json={"url": "https://example.com", "size": 0})

        assert response.status_code == 400

    async def test_qr_upstream_failure(self, client):
        response = await client.post("/api/qr", json={"url": "https://broken.example"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate QR code"}

    async def test_qr_disabled(self, service, config):
        app = create_app(service_instance=service, config=config)

        async with make_client(app) as client:
            response = await client.post("/api/qr", json={"url": "https://example.com"})

        assert response.status_code == 404


@pytest.mark.asyncio
class TestRouting:
    """Test CORS, redirects and fallbacks."""

    @pytest.mark.parametrize("path", ["/api/shorten", "/api/urls", "/anything", "/"])
    async def test_options(self, client, path):
        response = await client.options(path)

        assert response.status_code == 200
        assert response.content == b""
        assert_cors(response)

    async def test_cors_preflight_from_browser(self, client):
        response = await client.options(
            "/api/shorten",
            headers={
                "Origin": "https://frontend.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert_cors(response)

    async def test_unknown_api_endpoint(self, client):
        response = await client.get("/api/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "API endpoint not found"}

    async def test_wrong_method_on_api_endpoint(self, client):
        response = await client.get("/api/shorten")

        assert response.status_code == 404
        assert response.json() == {"error": "API endpoint not found"}

    async def test_landing_page(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "URL Shortener" in response.text
        assert_cors(response)

    async def test_redirect(self, client, sample_urls):
        code = (await client.post("/api/shorten", json={"url": sample_urls[1]})).json()["shortCode"]

        response = await client.get(f"/{code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[1]
        assert_cors(response)

    async def test_redirect_counts_click(self, client, sample_urls):
        code = (await client.post("/api/shorten", json={"url": sample_urls[1]})).json()["shortCode"]

        await client.get(f"/{code}", follow_redirects=False)

        urls = (await client.get("/api/urls")).json()["urls"]
        assert urls[0]["clicks"] == 1

    async def test_redirect_not_found(self, client):
        response = await client.get("/doesNotExist", follow_redirects=False)

        assert response.status_code == 404
        assert response.text == "URL not found"
        assert response.headers["content-type"].startswith("text/plain")

    async def test_dotted_path_is_not_a_code(self, client, store):
        await store.put("favicon", "https://example.com/icon")

        response = await client.get("/favicon.ico", follow_redirects=False)

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.parametrize("method, path", [("POST", "/foo"), ("PUT", "/"), ("DELETE", "/abc"), ("PATCH", "/a/b")])
    async def test_other_methods_fall_back(self, client, method, path):
        response = await client.request(method, path)

        assert response.status_code == 404
        assert response.text == FALLBACK_TEXT
        assert_cors(response)

    async def test_nested_path_fallback(self, client):
        response = await client.get("/a/b")

        assert response.status_code == 404
        assert "api/shorten" in response.text


class UnreachableStore(MemoryStore):
    async def health_check(self):
        return False


@pytest.mark.asyncio
class TestHealthEndpoint:
    """Test GET /api/health."""

    async def test_healthy(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"] == "healthy"
        assert "timestamp" in data

    async def test_unhealthy_store(self, config):
        service = URLShortenerService(store=UnreachableStore())
        app = create_app(service_instance=service, config=config)

        async with make_client(app) as client:
            response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
        assert response.json()["store"] == "unhealthy"
