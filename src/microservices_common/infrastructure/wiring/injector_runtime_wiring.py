"""
Default runtime wiring built on the `injector` container.

Replaces framework component scanning with an explicit registry: each
service hands over its DI modules and health checks, and this class runs
the startup phases in a fixed order:

1. config                - load application.yaml / stage file / overrides
2. logging               - apply ServiceLogger, retire bootstrap logger
3. dependency_injection  - build the Injector from CommonModule + service modules
4. health_checks         - register startup, configuration and service checks
5. web_interface         - create the Flask app and bind the listener
"""

import errno
import logging
import threading
from typing import Callable, List, Optional, Sequence, Type

from injector import Injector, Module

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.config.service_config_loader import ServiceConfigLoader
from microservices_common.errors import InitializationError
from microservices_common.infrastructure.bootstrap.startup_context import StartupContext
from microservices_common.infrastructure.di.common_module import CommonModule
from microservices_common.infrastructure.health.basic_health_checks import (
    ConfigurationHealthCheck,
    ServiceStartupHealthCheck,
)
from microservices_common.infrastructure.health.health_check import HealthCheck
from microservices_common.infrastructure.health.health_check_service import (
    HealthCheckService,
)
from microservices_common.infrastructure.web.generic_flask_app_factory import (
    GenericFlaskAppFactory,
    RouteRegistrar,
)
from microservices_common.infrastructure.web.web_server import WebServer
from microservices_common.infrastructure.wiring.runtime_wiring_interface import (
    RuntimeWiringInterface,
)
from microservices_common.logging.bootstrap_logging import retire_bootstrap_logger
from microservices_common.logging.service_logger import ServiceLogger

logger = logging.getLogger(__name__)

ModuleFactory = Callable[[BaseApplicationConfig], List[Module]]
HealthCheckFactory = Callable[[BaseApplicationConfig], List[HealthCheck]]


class InjectorRuntimeWiring(RuntimeWiringInterface):
    """Wires a service through configuration, logging, DI, health checks and web."""

    def __init__(
        self,
        config_class: Type[BaseApplicationConfig],
        module_factory: ModuleFactory,
        health_check_factory: Optional[HealthCheckFactory] = None,
        route_registrar: Optional[RouteRegistrar] = None,
    ) -> None:
        self.config_class = config_class
        self.module_factory = module_factory
        self.health_check_factory = health_check_factory
        self.route_registrar = route_registrar
        self.config: Optional[BaseApplicationConfig] = None
        self.injector: Optional[Injector] = None
        self.web_server: Optional[WebServer] = None
        self.startup_context: Optional[StartupContext] = None
        self._wired = False
        self._lock = threading.Lock()

    def wire(self, service_name: str, arguments: Sequence[str]) -> None:
        if self._wired:
            raise InitializationError(f"{service_name} has already been wired")
        self._wired = True

        ctx = StartupContext(service_name)
        self.startup_context = ctx
        ctx.attribute("argument_count", len(arguments))
        try:
            with ctx.phase("config"):
                self.config = ServiceConfigLoader.load_config(
                    self.config_class, service_name=service_name, arguments=arguments
                )
                ctx.attribute("stage", self.config.stage)
                ctx.attribute("version", self.config.version)

            with ctx.phase("logging"):
                self._setup_logging(service_name, self.config)

            with ctx.phase("dependency_injection"):
                modules: List[Module] = [CommonModule(self.config, arguments)]
                modules.extend(self.module_factory(self.config))
                self.injector = Injector(modules)
                logger.info(
                    f"Dependency injection container initialized with {len(modules)} module(s)"
                )

            with ctx.phase("health_checks"):
                self._setup_health_checks(self.injector, self.config)

            with ctx.phase("web_interface"):
                self._setup_web_interface(service_name, ctx)
        except Exception as e:
            self._release()
            ctx.emit_summary(logger)
            if isinstance(e, InitializationError):
                raise
            raise InitializationError(self._describe_failure(e)) from e

        self.injector.get(ServiceStartupHealthCheck).mark_startup_completed(success=True)
        ctx.emit_summary(logger)

    def shutdown(self) -> None:
        self._release()

    def _setup_logging(self, service_name: str, config: BaseApplicationConfig) -> None:
        # Retire the bootstrap logger first to avoid duplicate handlers
        retire_bootstrap_logger(service_name)
        ServiceLogger(service_name=service_name, stage=config.stage, config=config.logging).configure()

    def _setup_health_checks(self, injector: Injector, config: BaseApplicationConfig) -> None:
        checks: List[HealthCheck] = [
            injector.get(ServiceStartupHealthCheck),
            ConfigurationHealthCheck(config, f"{config.app_name}_configuration"),
        ]
        if self.health_check_factory:
            checks.extend(self.health_check_factory(config))
        injector.get(HealthCheckService).register_checks(checks)
        logger.info("Health checks configured")

    def _setup_web_interface(self, service_name: str, ctx: StartupContext) -> None:
        if self.config is None or self.injector is None:
            raise RuntimeError("Configuration and injector must be initialized before the web interface")
        webapi = self.config.webapi
        ctx.attribute("web_interface_enabled", webapi.enabled)
        if not webapi.enabled:
            logger.info("Web interface disabled by configuration")
            return

        app = GenericFlaskAppFactory.create_app(
            service_name=service_name,
            injector=self.injector,
            config=self.config,
            route_registrar=self.route_registrar,
        )
        server = WebServer(
            app,
            host=webapi.host,
            port=webapi.port,
            threaded=webapi.threaded,
            shutdown_timeout_seconds=webapi.shutdown_timeout_seconds,
        )
        try:
            server.start()
        except OSError as e:
            ctx.add_dependency_status(
                name="web_listener", healthy=False, mandatory=True, message=str(e)
            )
            raise
        self.web_server = server
        ctx.attribute("web_port", server.bound_port)
        ctx.add_dependency_status(
            name="web_listener",
            healthy=True,
            mandatory=True,
            message=f"Listening on {webapi.host}:{server.bound_port}",
        )

    def _release(self) -> None:
        with self._lock:
            server, self.web_server = self.web_server, None
        if server is not None:
            server.stop()

    def _describe_failure(self, error: Exception) -> str:
        if isinstance(error, OSError) and error.errno == errno.EADDRINUSE:
            port = self.config.webapi.port if self.config else "?"
            return f"port in use: {port}"
        return f"{error.__class__.__name__}: {error}"
