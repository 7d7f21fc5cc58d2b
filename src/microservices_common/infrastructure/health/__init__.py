"""Health check framework for microservices."""

from .health_check import HealthCheck, HealthStatus
from .health_check_service import HealthCheckService
from .basic_health_checks import (
    ConfigurationHealthCheck,
    ServiceStartupHealthCheck,
    SystemResourcesHealthCheck,
)

__all__ = [
    "ConfigurationHealthCheck",
    "HealthCheck",
    "HealthCheckService",
    "HealthStatus",
    "ServiceStartupHealthCheck",
    "SystemResourcesHealthCheck",
]
