"""
Health check contract.

A check reports one of three states; the aggregate state of a service is
the most severe state reported by any of its checks.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional


class HealthStatus(Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @classmethod
    def parse(cls, value: Any) -> "HealthStatus":
        """Map a reported status string to a member; unknown values are unhealthy."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNHEALTHY


_SEVERITY = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}


class HealthCheck(ABC):
    """A named check of one aspect of a running service."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def check(self) -> Dict[str, Any]:
        """
        Run the check.

        Returns:
            Mapping with ``status`` (a HealthStatus value), ``message`` and
            optionally ``details``, e.g. built with `result()`
        """
        pass

    def get_name(self) -> str:
        return self.name

    @staticmethod
    def result(
        status: HealthStatus, message: str, details: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        outcome: Dict[str, Any] = {"status": status.value, "message": message}
        if details is not None:
            outcome["details"] = details
        return outcome
