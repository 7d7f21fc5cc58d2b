"""Standardized logging for microservices."""

from .bootstrap_logging import get_bootstrap_logger, retire_bootstrap_logger
from .service_log_context import ServiceLogContext
from .service_logger import ServiceLogger

__all__ = [
    "ServiceLogContext",
    "ServiceLogger",
    "get_bootstrap_logger",
    "retire_bootstrap_logger",
]
