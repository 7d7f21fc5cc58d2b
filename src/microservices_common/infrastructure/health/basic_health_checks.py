"""
Checks registered for every service by the runtime wiring.
"""

import logging
import time
from typing import Any, Dict, List, Optional

import psutil

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.infrastructure.health.health_check import (
    HealthCheck,
    HealthStatus,
)

logger = logging.getLogger(__name__)

_GIB = 1024 ** 3


class SystemResourcesHealthCheck(HealthCheck):
    """Host CPU and memory usage; degraded above either threshold (percent)."""

    def __init__(
        self,
        cpu_threshold: float = 90.0,
        memory_threshold: float = 90.0,
        name: str = "system_resources",
    ):
        super().__init__(name)
        self.cpu_threshold = cpu_threshold
        self.memory_threshold = memory_threshold

    def check(self) -> Dict[str, Any]:
        try:
            cpu = psutil.cpu_percent(interval=0.1)
            memory = psutil.virtual_memory()
        except Exception as e:
            logger.error(f"Could not sample system resources: {e}")
            return self.result(HealthStatus.UNHEALTHY, f"Failed to check system resources: {e}")

        warnings = []
        if cpu > self.cpu_threshold:
            warnings.append(f"High CPU usage: {cpu:.1f}%")
        if memory.percent > self.memory_threshold:
            warnings.append(f"High memory usage: {memory.percent:.1f}%")

        details = {
            "cpu_percent": cpu,
            "memory_percent": memory.percent,
            "memory_available_gb": round(memory.available / _GIB, 2),
            "thresholds": {
                "cpu_threshold": self.cpu_threshold,
                "memory_threshold": self.memory_threshold,
            },
        }
        if warnings:
            return self.result(HealthStatus.DEGRADED, "; ".join(warnings), details)
        return self.result(HealthStatus.HEALTHY, "System resources healthy", details)


class ServiceStartupHealthCheck(HealthCheck):
    """
    Unhealthy until the runtime wiring reports the end of startup.

    Keeps the readiness check failing while the service is Initializing.
    """

    def __init__(self, name: str = "service_startup"):
        super().__init__(name)
        self.startup_completed = False
        self.startup_time: Optional[float] = None
        self.startup_errors: List[str] = []

    def mark_startup_completed(
        self, success: bool = True, error_message: Optional[str] = None
    ) -> None:
        self.startup_completed = True
        self.startup_time = time.time()
        if not success and error_message:
            self.startup_errors.append(error_message)

    def check(self) -> Dict[str, Any]:
        if not self.startup_completed:
            return self.result(HealthStatus.UNHEALTHY, "Service startup not completed")
        if self.startup_errors:
            return self.result(
                HealthStatus.UNHEALTHY,
                f"Service startup failed: {'; '.join(self.startup_errors)}",
            )
        return self.result(
            HealthStatus.HEALTHY,
            "Service startup completed successfully",
            {
                "startup_time": self.startup_time,
                "uptime_seconds": time.time() - (self.startup_time or time.time()),
            },
        )


class ConfigurationHealthCheck(HealthCheck):
    """The loaded configuration names the service and its stage."""

    REQUIRED_ATTRIBUTES = ("app_name", "stage")

    def __init__(self, config: Optional[BaseApplicationConfig], name: str = "configuration"):
        super().__init__(name)
        self.config = config

    def check(self) -> Dict[str, Any]:
        if self.config is None:
            return self.result(HealthStatus.UNHEALTHY, "Configuration not loaded")

        missing = [attr for attr in self.REQUIRED_ATTRIBUTES if not getattr(self.config, attr, None)]
        if missing:
            return self.result(
                HealthStatus.UNHEALTHY,
                f"Missing required configuration attributes: {', '.join(missing)}",
            )
        return self.result(
            HealthStatus.HEALTHY,
            "Configuration is valid",
            {
                "app_name": self.config.app_name,
                "stage": self.config.stage,
                "version": self.config.version,
            },
        )
