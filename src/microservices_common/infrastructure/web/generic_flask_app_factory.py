"""
Generic Flask application factory for microservices.

Infrastructure-level Flask application creation shared by every service:
JSON error handlers, request logging with correlation ids and the standard
health check endpoints.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from flask import Flask, Response, g, jsonify, request
from injector import Injector

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.infrastructure.health.health_check_service import (
    HealthCheckService,
)
from microservices_common.logging.service_log_context import ServiceLogContext

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RouteRegistrar(ABC):
    """Hook through which a service adds its own endpoints next to the health checks."""

    @abstractmethod
    def register_routes(self, app: Flask, injector: Injector) -> bool:
        """Add routes to `app`; return False when only part of them could be added."""
        pass


class DefaultRouteRegistrar(RouteRegistrar):
    """Route registrar that registers no additional routes."""

    def register_routes(self, app: Flask, injector: Injector) -> bool:
        return True


class GenericFlaskAppFactory:
    """Factory for creating and configuring the Flask application of a service."""

    @staticmethod
    def create_app(
        service_name: str,
        injector: Injector,
        config: Optional[BaseApplicationConfig] = None,
        route_registrar: Optional[RouteRegistrar] = None,
    ) -> Flask:
        """
        Build the Flask app of a service: settings, JSON errors, correlation
        ids, health checks and the routes of `route_registrar`.

        `config` defaults to the BaseApplicationConfig bound in `injector`.
        """
        app = Flask(f"{service_name}-service")

        if config is None:
            config = injector.get(BaseApplicationConfig)

        GenericFlaskAppFactory._configure_flask_settings(app, config)
        GenericFlaskAppFactory._configure_error_handling(app, service_name)
        GenericFlaskAppFactory._configure_logging(app, service_name)
        GenericFlaskAppFactory._register_health_endpoints(app, injector, service_name)

        if route_registrar and not route_registrar.register_routes(app, injector):
            logger.warning(
                f"Some routes could not be registered for {service_name} "
                "(service may have limited functionality)"
            )

        logger.info(f"Flask application created and configured for {service_name}")
        return app

    @staticmethod
    def _configure_flask_settings(app: Flask, config: BaseApplicationConfig) -> None:
        app.config.update(
            {
                "DEBUG": False,
                "TESTING": False,
                "SERVICE_VERSION": config.version,
                "SERVICE_STAGE": config.stage,
            }
        )
        app.json.sort_keys = False  # type: ignore[attr-defined]

    @staticmethod
    def _configure_error_handling(app: Flask, service_name: str) -> None:

        @app.errorhandler(404)
        def not_found(error):  # type: ignore[no-untyped-def]
            return jsonify({"error": "Endpoint not found", "service": service_name}), 404

        @app.errorhandler(500)
        def internal_error(error):  # type: ignore[no-untyped-def]
            logger.error(f"Internal server error: {str(error)}")
            return jsonify({"error": "Internal server error", "service": service_name}), 500

    @staticmethod
    def _configure_logging(app: Flask, service_name: str) -> None:
        """Request logging; every request carries a correlation id."""

        @app.before_request
        def bind_correlation_id() -> None:
            correlation_id = request.headers.get(CORRELATION_HEADER)
            if correlation_id:
                ServiceLogContext.set_correlation_id(correlation_id)
            else:
                correlation_id = ServiceLogContext.generate_new_correlation_id(service_name)
            g.correlation_id = correlation_id
            logger.debug(f"Request: {request.method} {request.url}")

        @app.after_request
        def log_response_info(response: Response) -> Response:
            response.headers[CORRELATION_HEADER] = g.get("correlation_id", "")
            logger.debug(f"Response: {response.status_code}")
            return response

        @app.teardown_request
        def clear_log_context(exc: Optional[BaseException]) -> None:
            ServiceLogContext.clear()

    @staticmethod
    def _register_health_endpoints(app: Flask, injector: Injector, service_name: str) -> None:
        """Register standardized health check endpoints."""

        @app.route("/health")
        def health():  # type: ignore[no-untyped-def]
            result = injector.get(HealthCheckService).check_health()
            status_code = 200 if result["status"] != "unhealthy" else 503
            return jsonify({"service": service_name, **result}), status_code

        @app.route("/health/ready")
        def readiness():  # type: ignore[no-untyped-def]
            result = injector.get(HealthCheckService).check_readiness()
            status_code = 200 if result["ready"] else 503
            return jsonify({"service": service_name, **result}), status_code

        @app.route("/health/live")
        def liveness():  # type: ignore[no-untyped-def]
            return jsonify({"status": "alive", "service": service_name}), 200
