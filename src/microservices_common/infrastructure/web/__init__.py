"""Web interface adapters (Flask application factory and server)."""

from .generic_flask_app_factory import DefaultRouteRegistrar, GenericFlaskAppFactory, RouteRegistrar
from .web_server import WebServer

__all__ = ["DefaultRouteRegistrar", "GenericFlaskAppFactory", "RouteRegistrar", "WebServer"]
