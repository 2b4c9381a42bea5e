import re

import pytest
from fastapi.testclient import TestClient

from maintgate.maintenance import ConfigurationError

REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{8,64}$")


def _create_client(config=None):
    from maintgate.main import create_app

    return TestClient(create_app(config))


def test_health_forwarded_with_request_id(make_config):
    client = _create_client(make_config())

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "interceptor": "maintenance"}
    assert REQUEST_ID_RE.fullmatch(response.headers.get("X-Request-Id", ""))


def test_request_id_passthrough(make_config):
    client = _create_client(make_config())

    response = client.get("/health", headers={"X-Request-Id": "test-req-1234"})
    assert response.headers.get("X-Request-Id") == "test-req-1234"


def test_unknown_route_error_contract(make_config):
    client = _create_client(make_config())

    response = client.get("/anything")
    assert response.status_code == 404
    body = response.json()
    assert set(body.keys()) == {"code", "message", "request_id"}
    assert body["code"] == "NOT_FOUND"
    assert body["request_id"] == response.headers.get("X-Request-Id")


def test_method_not_allowed_error_contract(make_config):
    client = _create_client(make_config())

    response = client.post("/health")
    assert response.status_code == 405
    assert response.json()["code"] == "METHOD_NOT_ALLOWED"


def test_maintenance_page_replaces_every_route(make_config, site):
    client = _create_client(make_config())
    site["trigger"].touch()

    for path in ["/health", "/anything", "/openapi.json"]:
        response = client.get(path)
        assert response.status_code == 503
        assert response.headers["Content-Type"] == "text/html; charset=utf-8"
        assert response.content == b"<h1>down</h1>"
        assert "X-Request-Id" not in response.headers


def test_image_route_forwarded_when_inactive(make_config):
    client = _create_client(make_config())

    response = client.get("/maintenance-image.png")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_create_app_reads_environment(monkeypatch, site):
    monkeypatch.setenv("MAINTGATE_ENABLED", "on")
    monkeypatch.setenv("MAINTGATE_FILENAME", str(site["html"]))
    monkeypatch.setenv("MAINTGATE_TRIGGER_FILENAME", str(site["trigger"]))
    monkeypatch.setenv("MAINTGATE_HTTP_RESPONSE_CODE", "502")
    monkeypatch.setenv("MAINTGATE_HTTP_CONTENT_TYPE", "text/html")
    monkeypatch.setenv("MAINTGATE_IMAGE_FILE", str(site["image"]))
    monkeypatch.setenv("MAINTGATE_NAME", "edge")
    client = _create_client()

    assert client.get("/health").json()["interceptor"] == "edge"

    site["trigger"].touch()
    response = client.get("/health")
    assert response.status_code == 502
    assert response.headers["Content-Type"] == "text/html"
    image = client.get("/maintenance-image.png")
    assert image.status_code == 200
    assert image.content == site["image"].read_bytes()


def test_create_app_fails_without_page(make_config, site):
    config = make_config(filename=str(site["dir"] / "missing.html"))

    with pytest.raises(ConfigurationError):
        _create_client(config)


def test_create_app_rejects_invalid_environment(monkeypatch, site):
    monkeypatch.setenv("MAINTGATE_FILENAME", str(site["html"]))
    monkeypatch.setenv("MAINTGATE_HTTP_RESPONSE_CODE", "not-a-code")

    with pytest.raises(ConfigurationError):
        _create_client()


def test_resolve_request_id():
    from maintgate.middleware.request_id import resolve_request_id

    assert resolve_request_id("abcdefgh") == "abcdefgh"
    for incoming in [None, "", "short", "bad id with spaces", "x" * 65]:
        assert REQUEST_ID_RE.fullmatch(resolve_request_id(incoming))
        assert resolve_request_id(incoming) != incoming


@pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json"])
def test_documentation_routes_not_exposed(make_config, path):
    client = _create_client(make_config())

    response = client.get(path)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
