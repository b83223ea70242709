import httpx
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from centscape.core.config import settings
from centscape.core.models import ExtractedMetadata, FallbackMetadata, PriceInfo, ResolvedMetadata
from centscape.dependencies.metadata_deps import get_image_proxy, get_metadata_service
from centscape.main import create_app
from centscape.services.cache_service import NullCache
from centscape.services.exceptions import HTTPFetchError, ParseError
from centscape.services.image_proxy import ImageProxy
from centscape.services.metadata_extractor import MetadataExtractorInterface
from centscape.services.metadata_service import MetadataService
from centscape.services.url_normalizer import UrlNormalizer
from centscape.routers.root_routes import parse_version


def _metadata(url: str) -> ExtractedMetadata:
    return ExtractedMetadata(
        url=url,
        timestamp="2024-01-01T00:00:00+00:00",
        open_graph={"og_title": "Kettle"},
        twitter_card=None,
        fallback=FallbackMetadata(title="Kettle"),
        resolved=ResolvedMetadata(
            title="Kettle",
            image="https://example.com/kettle.jpg",
            price=PriceInfo("€25.00", 25.0, "EUR"),
            site_name="Example"
        )
    )


class TestAPI:
    """Endpoint tests with the extractor mocked out"""

    def setup_method(self):
        self.mock_extractor = MagicMock(spec=MetadataExtractorInterface)
        service = MetadataService(UrlNormalizer(), self.mock_extractor, NullCache())

        app = create_app()
        app.dependency_overrides[get_metadata_service] = lambda: service
        app.dependency_overrides[get_image_proxy] = lambda: ImageProxy(transport=httpx.MockTransport(self._image_upstream))
        self.upstream_requests = []
        self.client = TestClient(app)

    def _image_upstream(self, request: httpx.Request) -> httpx.Response:
        self.upstream_requests.append(request)
        if request.url.path == "/missing.png":
            return httpx.Response(404)
        return httpx.Response(200, content=b"\x89PNG-bytes", headers={"Content-Type": "image/png"})

    def test_health(self):
        response = self.client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["status"] == "OK"
        assert body["data"]["version"] == settings.api_version

    def test_version_headers(self):
        response = self.client.get("/version")

        assert response.headers["X-API-Version"] == settings.api_version
        assert response.headers["X-Environment"] == settings.environment
        assert isinstance(response.json()["data"]["major"], int)

    def test_server_info(self):
        response = self.client.get("/server-info")

        assert response.json()["baseurl"] == "http://testserver"

    def test_normalize_url(self):
        # Act
        response = self.client.post(
            "/normalize-url", json={"url": "https://www.amazon.in/Some-Phone/dp/B0CHX1W1XY/ref=sr_1_1"}
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["data"] == {
            "original": "https://www.amazon.in/Some-Phone/dp/B0CHX1W1XY/ref=sr_1_1",
            "normalized": "https://www.amazon.in/dp/B0CHX1W1XY",
            "cleaned": True,
            "productId": "B0CHX1W1XY",
            "hostname": "www.amazon.in",
        }

    def test_normalize_url_missing(self):
        response = self.client.post("/normalize-url", json={})

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_URL"

    def test_extract_metadata(self):
        # Arrange
        self.mock_extractor.extract_metadata.return_value = _metadata("https://example.com/kettle")

        # Act
        response = self.client.post("/extract-metadata", json={"url": "https://example.com/kettle?utm_medium=ad"})

        # Assert
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["resolved"]["title"] == "Kettle"
        assert data["resolved"]["price"] == {"raw": "€25.00", "amount": 25.0, "currency": "EUR"}
        assert data["urlTransformation"]["normalized"] == "https://example.com/kettle"
        assert data["cached"] is False
        self.mock_extractor.extract_metadata.assert_called_once_with("https://example.com/kettle")

    @pytest.mark.parametrize("payload, code", [
        ({}, "MISSING_URL"),
        ({"url": "   "}, "MISSING_URL"),
        ({"url": "not a url"}, "INVALID_URL"),
        ({"url": "ftp://example.com/file"}, "INVALID_URL"),
    ])
    def test_extract_metadata_bad_input(self, payload, code):
        response = self.client.post("/extract-metadata", json=payload)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["code"] == code
        self.mock_extractor.extract_metadata.assert_not_called()

    @pytest.mark.parametrize("error", [
        HTTPFetchError("https://example.com/", 403),
        ParseError("https://example.com/", "unreadable"),
    ])
    def test_extract_metadata_fetch_failed(self, error):
        self.mock_extractor.extract_metadata.side_effect = error

        response = self.client.post("/extract-metadata", json={"url": "https://example.com/"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "FETCH_FAILED"
        assert body["details"] == {"url": "https://example.com/"}

    def test_extract_metadata_schema_error(self):
        response = self.client.post("/extract-metadata", json={"url": 123})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert response.json()["details"]["errors"][0]["field"] == "url"

    def test_preview_with_raw_html(self):
        # Arrange
        self.mock_extractor.extract.return_value = _metadata("https://example.com/kettle")

        # Act
        response = self.client.post(
            "/preview", json={"url": "https://example.com/kettle", "raw_html": "<html></html>"}
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "title": "Kettle",
            "image": "https://example.com/kettle.jpg",
            "price": "€25.00",
            "currency": "EUR",
            "siteName": "Example",
            "sourceUrl": "https://example.com/kettle",
        }

    def test_preview_without_content(self):
        response = self.client.post("/preview", json={})

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_CONTENT"

    def test_unknown_endpoint(self):
        response = self.client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Endpoint not found", "code": "NOT_FOUND"}

    def test_version_with_prerelease_suffix(self, monkeypatch):
        monkeypatch.setattr(settings, "api_version", "1.4.2-beta")

        response = self.client.get("/version")

        assert response.status_code == 200
        data = response.json()["data"]
        assert (data["major"], data["minor"], data["patch"]) == (1, 4, 2)

    def test_proxy_image(self):
        # Act
        response = self.client.get("/proxy-image", params={"url": "https://cdn.example.com/a/shoe.png"})

        # Assert
        assert response.status_code == 200
        assert response.content == b"\x89PNG-bytes"
        assert response.headers["content-type"] == "image/png"
        assert response.headers["cache-control"] == "public, max-age=3600"
        assert self.upstream_requests[0].headers["Referer"] == "https://cdn.example.com"

    @pytest.mark.parametrize("params, status, code", [
        ({}, 400, "MISSING_IMAGE_URL"),
        ({"url": "not a url"}, 400, "INVALID_IMAGE_URL"),
        ({"url": "http://169.254.169.254/latest"}, 400, "INVALID_IMAGE_URL"),
        ({"url": "https://cdn.example.com/missing.png"}, 500, "PROXY_ERROR"),
    ])
    def test_proxy_image_errors(self, params, status, code):
        response = self.client.get("/proxy-image", params=params)

        assert response.status_code == status
        assert response.json()["code"] == code

    def test_extract_metadata_private_host(self):
        response = self.client.post("/extract-metadata", json={"url": "http://127.0.0.1:3000/health"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_URL"
        self.mock_extractor.extract_metadata.assert_not_called()


@pytest.mark.parametrize("version, expected", [
    ("1.0.0", (1, 0, 0)),
    ("2.3", (2, 3, 0)),
    ("v3.1.4", (3, 1, 4)),
    ("1.0.0-beta", (1, 0, 0)),
    ("dev", (0, 0, 0)),
])
def test_parse_version(version, expected):
    assert parse_version(version) == expected
