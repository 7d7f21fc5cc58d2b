"""
Request-scoped logging context.

Values bound here are appended to every log line written by the same
thread, which lets a request be followed across the services it touches.
"""

import uuid
from threading import local
from typing import Dict, Optional


class ServiceLogContext:
    """Per-thread correlation fields."""

    FIELDS = ("correlation_id", "request_id")
    _state = local()

    @classmethod
    def _values(cls) -> Dict[str, str]:
        values = getattr(cls._state, "values", None)
        if values is None:
            values = {}
            cls._state.values = values
        return values

    @classmethod
    def set_correlation_id(cls, correlation_id: str) -> None:
        cls._values()["correlation_id"] = correlation_id

    @classmethod
    def get_correlation_id(cls) -> Optional[str]:
        return cls._values().get("correlation_id")

    @classmethod
    def set_request_id(cls, request_id: str) -> None:
        cls._values()["request_id"] = request_id

    @classmethod
    def get_request_id(cls) -> Optional[str]:
        return cls._values().get("request_id")

    @classmethod
    def get_available_context(cls) -> Dict[str, str]:
        """Bound fields of the current thread, in FIELDS order."""
        values = cls._values()
        return {field: values[field] for field in cls.FIELDS if field in values}

    @classmethod
    def clear(cls) -> None:
        cls._values().clear()

    @classmethod
    def generate_new_correlation_id(cls, service_name: str) -> str:
        """Bind and return a fresh ``{service_name}-{uuid4}`` correlation id."""
        correlation_id = f"{service_name}-{uuid.uuid4()}"
        cls.set_correlation_id(correlation_id)
        return correlation_id
