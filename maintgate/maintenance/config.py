import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from maintgate.maintenance.errors import ConfigurationError

ENV_OPTIONS: dict[str, str] = {
    "MAINTGATE_ENABLED": "enabled",
    "MAINTGATE_FILENAME": "filename",
    "MAINTGATE_TRIGGER_FILENAME": "triggerFilename",
    "MAINTGATE_HTTP_RESPONSE_CODE": "httpResponseCode",
    "MAINTGATE_HTTP_CONTENT_TYPE": "httpContentType",
    "MAINTGATE_IMAGE_FILE": "imageFile",
}
ASSETS_ENV = "MAINTGATE_ASSETS"


class MaintenanceConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    enabled: bool = True
    filename: Path = Path("/path/to/maintenance.html")
    trigger_filename: Path = Field(default=Path("/path/to/maintenance.trigger"), alias="triggerFilename")
    http_response_code: int = Field(default=503, ge=100, le=599, alias="httpResponseCode")
    http_content_type: str = Field(default="text/html; charset=utf-8", min_length=1, alias="httpContentType")
    image_file: Path = Field(
        default=Path("/path/to/maintenance-image.png"),
        validation_alias=AliasChoices("imageFile", "ImageFile", "image_file"),
    )
    assets: dict[str, Path] = Field(default_factory=dict)

    @field_validator("assets")
    @classmethod
    def check_asset_routes(cls, value: dict[str, Path]) -> dict[str, Path]:
        for url_path in value:
            if not url_path.startswith("/"):
                raise ValueError(f"asset route must start with '/': {url_path!r}")
        return value

    @field_validator("http_content_type")
    @classmethod
    def check_header_value(cls, value: str) -> str:
        try:
            value.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise ValueError("content type must be latin-1 encodable") from exc
        if any(ord(char) < 0x20 or ord(char) == 0x7F for char in value):
            raise ValueError("content type must not contain control characters")
        return value

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "MaintenanceConfig":
        """Validate a host-supplied option mapping (camelCase or field names)."""
        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid maintenance configuration: {exc}") from exc


def parse_assets(raw: str) -> dict[str, str]:
    assets: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        url_path, sep, file_path = item.partition("=")
        if not sep or not url_path.strip() or not file_path.strip():
            raise ConfigurationError(f"Invalid {ASSETS_ENV} entry: {item!r}")
        assets[url_path.strip()] = file_path.strip()
    return assets


def load_config() -> MaintenanceConfig:
    options: dict[str, Any] = {}
    for env_name, option in ENV_OPTIONS.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            options[option] = raw.strip()
    raw_assets = os.getenv(ASSETS_ENV, "")
    if raw_assets.strip():
        options["assets"] = parse_assets(raw_assets)
    return MaintenanceConfig.from_options(options)
