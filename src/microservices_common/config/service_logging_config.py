"""
Logging section of the application configuration (``logging:`` in application.yaml).
"""

import logging
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from microservices_common.base.base_schema import BaseSchema


class ServiceLoggingConfig(BaseSchema):
    """Settings consumed by ServiceLogger."""

    level: str = "INFO"
    console_enabled: bool = True
    # JSON is always used in cicd/prod; this forces it for local runs too
    json_format: bool = False

    file_logging: bool = False
    file_path: Optional[str] = Field(
        default=None,
        description="Log file path, logs/{service}.log when unset"
    )
    max_file_size: int = 10 * 1024 * 1024
    backup_count: int = 5

    third_party_loggers: Dict[str, Dict[str, Any]] = Field(
        default_factory=lambda: {"werkzeug": {"level": "WARNING"}},
        description="Per-logger settings for libraries, e.g. {'werkzeug': {'level': 'WARNING'}}"
    )
    abbreviate_logger_names: bool = True

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        if not isinstance(logging.getLevelName(value.upper()), int):
            raise ValueError(f"Unknown log level: {value}")
        return value
