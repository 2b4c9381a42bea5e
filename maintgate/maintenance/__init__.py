from maintgate.maintenance.config import MaintenanceConfig, load_config
from maintgate.maintenance.errors import ConfigurationError, NotFoundError
from maintgate.maintenance.interceptor import DEFAULT_IMAGE_PATH, MaintenanceInterceptor
from maintgate.maintenance.resources import LoadOnceResource, PolledResource

__all__ = [
    "ConfigurationError",
    "DEFAULT_IMAGE_PATH",
    "LoadOnceResource",
    "MaintenanceConfig",
    "MaintenanceInterceptor",
    "NotFoundError",
    "PolledResource",
    "load_config",
]
