"""Dependency injection module binding the infrastructure every service shares."""
from typing import NewType, Sequence, Tuple

from injector import Module, provider, singleton

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.infrastructure.health.basic_health_checks import (
    ServiceStartupHealthCheck,
)
from microservices_common.infrastructure.health.health_check_service import (
    HealthCheckService,
)

ProcessArguments = NewType("ProcessArguments", Tuple[str, ...])


class CommonModule(Module):
    """Binds the loaded configuration, process arguments and health services."""

    def __init__(self, config: BaseApplicationConfig, arguments: Sequence[str] = ()):
        self.config = config
        self.arguments = ProcessArguments(tuple(arguments))

    @provider
    @singleton
    def provide_application_config(self) -> BaseApplicationConfig:
        return self.config

    @provider
    @singleton
    def provide_process_arguments(self) -> ProcessArguments:
        return self.arguments

    @provider
    @singleton
    def provide_health_check_service(self) -> HealthCheckService:
        return HealthCheckService()

    @provider
    @singleton
    def provide_startup_health_check(self) -> ServiceStartupHealthCheck:
        return ServiceStartupHealthCheck()
