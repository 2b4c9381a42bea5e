import os

from dotenv import load_dotenv
from fastapi import FastAPI

from maintgate.api.exception_handlers import install_exception_handlers
from maintgate.maintenance.config import MaintenanceConfig, load_config
from maintgate.maintenance.interceptor import MaintenanceInterceptor
from maintgate.middleware.observability import install_observability_middleware
from maintgate.middleware.request_id import install_request_id_middleware
from maintgate.observability.logging import setup_logging
from maintgate.schemas import HealthResponse


def create_downstream_app(name: str) -> FastAPI:
    app = FastAPI(title="maintgate", version="0.1.0", docs_url=None, redoc_url=None, openapi_url=None)
    install_observability_middleware(app)
    install_request_id_middleware(app)
    install_exception_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", interceptor=name)

    return app


def create_app(config: MaintenanceConfig | None = None) -> MaintenanceInterceptor:
    """Assemble the request pipeline: maintenance interceptor in front of the app.

    Raises ``ConfigurationError`` when the configuration is invalid or the
    maintenance page cannot be read.
    """
    load_dotenv()
    setup_logging()
    if config is None:
        config = load_config()
    name = os.getenv("MAINTGATE_NAME", "maintenance").strip() or "maintenance"

    downstream = create_downstream_app(name)
    return MaintenanceInterceptor(downstream, config, name=name)
