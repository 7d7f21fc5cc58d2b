"""
Logging setup applied by the runtime wiring once configuration is loaded.

One ServiceLogger per process configures, through `logging.config.dictConfig`:

- the service logger (named after the service) and the
  ``microservices_common`` / ``microservices_{service}`` package loggers
- console and optional rotating-file handlers
- JSON output for cicd/prod stages, column output otherwise
- levels for noisy third-party loggers such as werkzeug
"""

import logging
import logging.config
import os
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional

from microservices_common.config.service_logging_config import ServiceLoggingConfig
from microservices_common.logging.service_formatters import (
    ServiceHumanReadableFormatter,
    ServiceStructuredFormatter,
    install_short_name_record_factory,
)
from microservices_common.logging.service_log_context import ServiceLogContext

_ENVIRONMENTS = {"local": "development", "cicd": "staging", "prod": "production"}
_PRODUCTION_STAGES = frozenset({"cicd", "prod"})


class ServiceLogger:
    """Configures process-wide logging for one service."""

    def __init__(
        self,
        service_name: str,
        stage: str,
        config: Optional[ServiceLoggingConfig] = None
    ):
        self.service_name = service_name
        self.stage = stage
        self.config = config or ServiceLoggingConfig()
        self._logger_instance: Optional[logging.Logger] = None

    @property
    def environment(self) -> str:
        return _ENVIRONMENTS.get(self.stage, "development")

    @property
    def is_production_environment(self) -> bool:
        return self.stage in _PRODUCTION_STAGES

    def configure(self) -> None:
        level = self._get_log_level()
        use_json = self._should_use_json_formatting()
        dict_config = self.build_dict_config(level, use_json)

        file_handler = dict_config["handlers"].get("file")
        if file_handler:
            directory = os.path.dirname(file_handler["filename"])
            if directory:
                os.makedirs(directory, exist_ok=True)
        if self.config.abbreviate_logger_names:
            install_short_name_record_factory()

        logging.config.dictConfig(dict_config)

        self.get_logger().info(
            f"Logging configured for {self.service_name} service",
            extra={
                "stage": self.stage,
                "environment": self.environment,
                "json_format": use_json,
                "log_level": level,
            },
        )

    def build_dict_config(self, level: str, use_json: bool) -> Dict[str, Any]:
        """Return the dictConfig schema for the given level and output format."""
        if use_json:
            formatter: Dict[str, Any] = {
                "()": ServiceStructuredFormatter,
                "service_name": self.service_name,
                "environment": self.environment,
            }
        else:
            formatter = {"()": ServiceHumanReadableFormatter, "service_name": self.service_name}

        handlers = self._handlers(level)
        names = list(handlers)
        loggers = {
            name: {"level": level, "handlers": names, "propagate": False}
            for name in self._owned_logger_names()
        }
        for name, settings in self.config.third_party_loggers.items():
            loggers[name] = {
                "level": settings.get("level", "WARNING"),
                "handlers": names,
                "propagate": False,
            }

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"service": formatter},
            "handlers": handlers,
            "loggers": loggers,
            "root": {"level": "WARNING", "handlers": names},
        }

    def _handlers(self, level: str) -> Dict[str, Dict[str, Any]]:
        handlers: Dict[str, Dict[str, Any]] = {}
        if self.config.console_enabled:
            handlers["console"] = {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "service",
                "stream": "ext://sys.stdout",
            }
        if self.config.file_logging:
            handlers["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": level,
                "formatter": "service",
                "filename": self.config.file_path or f"logs/{self.service_name}.log",
                "maxBytes": self.config.max_file_size,
                "backupCount": self.config.backup_count,
                "mode": "a",
            }
        return handlers

    def _owned_logger_names(self) -> List[str]:
        package = f"microservices_{self.service_name.replace('-', '_')}"
        return [self.service_name, "microservices_common", package]

    def _get_log_level(self) -> str:
        return self.config.level.upper()

    def _should_use_json_formatting(self) -> bool:
        return self.is_production_environment or self.config.json_format

    @contextmanager
    def correlation_context(self, correlation_id: Optional[str] = None) -> Generator[str, None, None]:
        """Bind a correlation id (generated when omitted) for the duration of the block."""
        if correlation_id is None:
            correlation_id = ServiceLogContext.generate_new_correlation_id(self.service_name)
        else:
            ServiceLogContext.set_correlation_id(correlation_id)
        try:
            yield correlation_id
        finally:
            ServiceLogContext.clear()

    def get_logger(self) -> logging.Logger:
        if self._logger_instance is None:
            self._logger_instance = logging.getLogger(self.service_name)
        return self._logger_instance
