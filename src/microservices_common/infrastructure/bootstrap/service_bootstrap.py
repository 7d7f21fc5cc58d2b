"""
Service Bootstrap Framework.

Standardized process entry point for every deployable microservice: creates
the process-wide runtime context, delegates wiring to a collaborator, then
blocks until the hosting environment asks the process to terminate.
"""

from abc import ABC, abstractmethod
import logging
import sys
from typing import List, Optional, Sequence, Type

from injector import Module

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.errors import InitializationError, LifecycleError
from microservices_common.infrastructure.bootstrap.signal_source import (
    ProcessSignalSource,
    SignalSourceInterface,
)
from microservices_common.infrastructure.health.health_check import HealthCheck
from microservices_common.infrastructure.web.generic_flask_app_factory import RouteRegistrar
from microservices_common.infrastructure.wiring.injector_runtime_wiring import (
    InjectorRuntimeWiring,
)
from microservices_common.infrastructure.wiring.runtime_wiring_interface import (
    RuntimeWiringInterface,
)
from microservices_common.lifecycle.lifecycle_state import LifecycleState
from microservices_common.lifecycle.runtime_context import ServiceRuntimeContext

logger = logging.getLogger(__name__)

EXIT_INITIALIZATION_FAILURE = 1


class ServiceBootstrap(ABC):
    """
    Abstract base class for standardized service bootstrapping.

    Lifecycle driven by `start`:
        Uninitialized -> Initializing -> Running -> ShuttingDown -> Stopped
    with a single failure exit Initializing -> Stopped when wiring fails.

    Subclasses provide the service's explicit DI registry through
    `get_dependency_modules`; the default wiring collaborator turns it into
    an Injector together with configuration, logging, health checks and the
    web interface.
    """

    def __init__(
        self,
        service_name: str,
        config_class: Type[BaseApplicationConfig],
        wiring: Optional[RuntimeWiringInterface] = None,
        signal_source: Optional[SignalSourceInterface] = None,
    ):
        """
        Initialize service bootstrap.

        Args:
            service_name: Name of the service (e.g., "recommendation", "review")
            config_class: Configuration class for this service
            wiring: Runtime wiring collaborator (defaults to InjectorRuntimeWiring)
            signal_source: Termination source (defaults to SIGTERM/SIGINT)
        """
        self.service_name = service_name
        self.config_class = config_class
        self.wiring = wiring or InjectorRuntimeWiring(
            config_class,
            module_factory=self.get_dependency_modules,
            health_check_factory=self.get_health_checks,
            route_registrar=self.get_route_registrar(),
        )
        self.signal_source = signal_source or ProcessSignalSource()
        self.context: Optional[ServiceRuntimeContext] = None

    @property
    def is_running(self) -> bool:
        return self.context is not None and self.context.is_running

    def start(self, arguments: Sequence[str] = ()) -> None:
        """
        Start the service and block until termination is requested.

        Args:
            arguments: Process arguments, handed to the wiring collaborator unmodified

        Raises:
            LifecycleError: if the bootstrap (or another one in this process) already started
            SystemExit: with a non-zero code when wiring fails
        """
        if self.context is not None:
            raise LifecycleError(f"{self.service_name} service has already been started")
        self.context = ServiceRuntimeContext.create(self.service_name)

        self.signal_source.install()
        try:
            self.context.transition(LifecycleState.INITIALIZING)
            logger.info(f"Starting {self.service_name} service...")
            try:
                self.wiring.wire(self.service_name, arguments)
            except InitializationError as e:
                logger.error(f"Failed to start {self.service_name}: {e}")
                self.context.transition(LifecycleState.STOPPED)
                sys.exit(EXIT_INITIALIZATION_FAILURE)
            except Exception:
                logger.exception(f"Unexpected error while wiring {self.service_name}")
                self.context.transition(LifecycleState.STOPPED)
                raise

            self.context.transition(LifecycleState.RUNNING)
            logger.info(f"{self.service_name} service started successfully")

            self.signal_source.await_termination()
            self._shutdown()
        finally:
            self.signal_source.restore()

    def stop(self, reason: str = "stop requested") -> None:
        """Request a graceful stop; `start` returns once teardown is complete."""
        self.signal_source.request_termination(reason)

    def _shutdown(self) -> None:
        if self.context is None:
            return
        self.context.transition(LifecycleState.SHUTTING_DOWN)
        logger.info(f"Stopping {self.service_name} service...")
        try:
            self.wiring.shutdown()
        except Exception as e:
            logger.error(f"Error while shutting down {self.service_name}: {e}", exc_info=True)
        self.context.transition(LifecycleState.STOPPED)
        logger.info(f"{self.service_name} service stopped")

    @abstractmethod
    def get_dependency_modules(self, app_config: BaseApplicationConfig) -> List[Module]:
        """
        Return dependency injection modules for this service.

        Example:
            return [RecommendationModule(app_config)]
        """
        pass

    def get_health_checks(self, app_config: BaseApplicationConfig) -> List[HealthCheck]:
        """Return service-specific health checks (optional override)."""
        return []

    def get_route_registrar(self) -> Optional[RouteRegistrar]:
        """Return a registrar for service-specific routes (optional override)."""
        return None
