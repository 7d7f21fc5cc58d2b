"""
Recommendation service bootstrap using the ServiceBootstrap framework.
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
from microservices_recommendation.application.config.recommendation_config import (
    RecommendationConfig,
)
from microservices_recommendation.application.di.recommendation_module import (
    RecommendationModule,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "recommendation"


class RecommendationServiceBootstrap(ServiceBootstrap):
    """Bootstrap implementation for the recommendation service.

    Infrastructure responsibilities only: provide the DI modules and the
    service health checks. Recommendation logic lives behind the modules.
    """

    def __init__(
        self,
        wiring: Optional[RuntimeWiringInterface] = None,
        signal_source: Optional[SignalSourceInterface] = None,
    ) -> None:
        super().__init__(
            service_name=SERVICE_NAME,
            config_class=RecommendationConfig,
            wiring=wiring,
            signal_source=signal_source,
        )

    def get_dependency_modules(self, app_config: BaseApplicationConfig) -> List[Module]:
        """Return DI modules using the already-loaded config instance."""
        if not isinstance(app_config, RecommendationConfig):
            raise TypeError(f"Expected RecommendationConfig, got {type(app_config).__name__}")
        return [RecommendationModule(app_config)]

    def get_health_checks(self, app_config: BaseApplicationConfig) -> List[HealthCheck]:
        return [
            SystemResourcesHealthCheck(
                name="recommendation_system_resources",
                cpu_threshold=85.0,
                memory_threshold=90.0,
            ),
        ]


def bootstrap_recommendation_service(arguments: Sequence[str] = ()) -> None:
    """
    Bootstrap the recommendation service using the standardized pattern.

    Blocks until the process is asked to terminate.
    """
    bootstrap = RecommendationServiceBootstrap()
    bootstrap.start(arguments)
