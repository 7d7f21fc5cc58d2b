"""
Review service bootstrap using the ServiceBootstrap framework.
"""

import logging
from typing import List, Optional, Sequence

from injector import Module

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.infrastructure.bootstrap.service_bootstrap import ServiceBootstrap
from microservices_common.infrastructure.bootstrap.signal_source import SignalSourceInterface
from microservices_common.infrastructure.health.basic_health_checks import (
    SystemResourcesHealthCheck,
)
from microservices_common.infrastructure.health.health_check import HealthCheck
from microservices_common.infrastructure.wiring.runtime_wiring_interface import (
    RuntimeWiringInterface,
)
from microservices_review.application.config.review_config import ReviewConfig
from microservices_review.application.di.review_module import ReviewModule

logger = logging.getLogger(__name__)

SERVICE_NAME = "review"


class ReviewServiceBootstrap(ServiceBootstrap):
    """Bootstrap implementation for the review service."""

    def __init__(
        self,
        wiring: Optional[RuntimeWiringInterface] = None,
        signal_source: Optional[SignalSourceInterface] = None,
    ) -> None:
        super().__init__(
            service_name=SERVICE_NAME,
            config_class=ReviewConfig,
            wiring=wiring,
            signal_source=signal_source,
        )

    def get_dependency_modules(self, app_config: BaseApplicationConfig) -> List[Module]:
        if not isinstance(app_config, ReviewConfig):
            raise TypeError(f"Expected ReviewConfig, got {type(app_config).__name__}")
        return [ReviewModule(app_config)]

    def get_health_checks(self, app_config: BaseApplicationConfig) -> List[HealthCheck]:
        return [
            SystemResourcesHealthCheck(
                name="review_system_resources",
                cpu_threshold=90.0,
                memory_threshold=85.0,
            ),
        ]


def bootstrap_review_service(arguments: Sequence[str] = ()) -> None:
    """Bootstrap the review service; blocks until termination is requested."""
    bootstrap = ReviewServiceBootstrap()
    bootstrap.start(arguments)
