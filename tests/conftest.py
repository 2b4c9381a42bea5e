import pytest

from maintgate.maintenance.config import MaintenanceConfig

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00"
PAGE_HTML = b"<h1>down</h1>"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in [
        "MAINTGATE_ENABLED",
        "MAINTGATE_FILENAME",
        "MAINTGATE_TRIGGER_FILENAME",
        "MAINTGATE_HTTP_RESPONSE_CODE",
        "MAINTGATE_HTTP_CONTENT_TYPE",
        "MAINTGATE_IMAGE_FILE",
        "MAINTGATE_ASSETS",
        "MAINTGATE_NAME",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def site(tmp_path):
    html = tmp_path / "maintenance.html"
    html.write_bytes(PAGE_HTML)
    image = tmp_path / "maintenance-image.png"
    image.write_bytes(PNG_BYTES)
    return {
        "html": html,
        "trigger": tmp_path / "maintenance.trigger",
        "image": image,
        "dir": tmp_path,
    }


@pytest.fixture
def make_config(site):
    def _make(**overrides) -> MaintenanceConfig:
        options = {
            "enabled": True,
            "filename": str(site["html"]),
            "triggerFilename": str(site["trigger"]),
            "httpResponseCode": 503,
            "httpContentType": "text/html; charset=utf-8",
            "imageFile": str(site["image"]),
        }
        options.update(overrides)
        return MaintenanceConfig.from_options(options)

    return _make
