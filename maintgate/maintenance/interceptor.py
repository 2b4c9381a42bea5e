"""
Pure ASGI middleware that puts the wrapped application into maintenance mode.

While the trigger file exists, every HTTP request is answered with the
maintenance page (or one of the asset routes such as the page's image)
and never reaches the wrapped application. Removing the trigger file
restores normal forwarding without a restart.
"""

import logging
import mimetypes
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

import anyio
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp, Receive, Scope, Send

from maintgate.maintenance.config import MaintenanceConfig
from maintgate.maintenance.errors import NotFoundError
from maintgate.maintenance.resources import LoadOnceResource, PolledResource
from maintgate.observability.logging import log_event

DEFAULT_IMAGE_PATH = "/maintenance-image.png"
DEFAULT_IMAGE_CONTENT_TYPE = "image/png"
FALLBACK_CONTENT_TYPE = "application/octet-stream"

logger = logging.getLogger("maintgate.maintenance")


@dataclass(frozen=True)
class AssetRoute:
    resource: PolledResource
    content_type: str


def build_asset_routes(config: MaintenanceConfig) -> Mapping[str, AssetRoute]:
    routes = {
        DEFAULT_IMAGE_PATH: AssetRoute(PolledResource(config.image_file), DEFAULT_IMAGE_CONTENT_TYPE),
    }
    for url_path, file_path in config.assets.items():
        content_type = mimetypes.guess_type(str(file_path))[0] or FALLBACK_CONTENT_TYPE
        routes[url_path] = AssetRoute(PolledResource(file_path), content_type)
    return MappingProxyType(routes)


class MaintenanceInterceptor:
    """
    Serve a cached maintenance page instead of the wrapped app while the
    trigger file is present.

    The page is read once here and a ``ConfigurationError`` propagates if
    it cannot be read. The trigger file is checked and asset files are read
    on every request.
    """

    __slots__ = (
        "_app",
        "_name",
        "_enabled",
        "_http_response_code",
        "_http_content_type",
        "_page",
        "_trigger",
        "_assets",
    )

    def __init__(self, app: ASGIApp, config: MaintenanceConfig, name: str = "maintenance") -> None:
        self._app = app
        self._name = name
        self._enabled = config.enabled
        self._http_response_code = config.http_response_code
        self._http_content_type = config.http_content_type
        self._page = LoadOnceResource(config.filename)
        self._trigger = PolledResource(config.trigger_filename)
        self._assets = build_asset_routes(config)

        log_event(
            logger,
            {
                "event": "maintenance.interceptor.ready",
                "interceptor": self._name,
                "enabled": self._enabled,
                "trigger_filename": str(self._trigger.path),
                "asset_routes": sorted(self._assets),
            },
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def http_response_code(self) -> int:
        return self._http_response_code

    @property
    def http_content_type(self) -> str:
        return self._http_content_type

    async def is_active(self) -> bool:
        if not self._enabled:
            return False
        return await anyio.to_thread.run_sync(self._trigger.exists)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not await self.is_active():
            await self._app(scope, receive, send)
            return

        path = scope["path"]
        route = self._assets.get(path)
        if route is not None:
            response = await self._serve_asset(path, route)
        else:
            response = self._serve_page()

        log_event(
            logger,
            {
                "event": "maintenance.served",
                "interceptor": self._name,
                "method": scope.get("method", ""),
                "path": path,
                "status_code": response.status_code,
            },
        )
        await response(scope, receive, send)

    def _serve_page(self) -> Response:
        return Response(
            content=self._page.content,
            status_code=self._http_response_code,
            headers={"Content-Type": self._http_content_type},
        )

    async def _serve_asset(self, path: str, route: AssetRoute) -> Response:
        try:
            content = await anyio.to_thread.run_sync(route.resource.read)
        except NotFoundError:
            log_event(
                logger,
                {
                    "event": "maintenance.asset_not_found",
                    "interceptor": self._name,
                    "path": path,
                    "file": str(route.resource.path),
                },
                level=logging.WARNING,
            )
            return PlainTextResponse(
                "Image not found\n",
                status_code=404,
                headers={"X-Content-Type-Options": "nosniff"},
            )
        return Response(content=content, status_code=200, headers={"Content-Type": route.content_type})
