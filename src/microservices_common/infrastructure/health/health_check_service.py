"""
Aggregation of health checks into the liveness/readiness answers served by
the web interface.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List
import logging

from .health_check import HealthCheck, HealthStatus

logger = logging.getLogger(__name__)


class HealthCheckService:
    """Registry of the health checks of one service."""

    def __init__(self) -> None:
        self.checks: List[HealthCheck] = []

    def register_check(self, check: HealthCheck) -> None:
        self.checks.append(check)
        logger.info(f"Registered health check: {check.get_name()}")

    def register_checks(self, checks: List[HealthCheck]) -> None:
        for check in checks:
            self.register_check(check)

    def get_registered_checks(self) -> List[str]:
        return [check.get_name() for check in self.checks]

    def check_health(self) -> Dict[str, Any]:
        """
        Run every check, in registration order.

        A check that raises is reported as unhealthy; the overall status is
        the most severe individual status (healthy when nothing is registered).
        """
        results: Dict[str, Dict[str, Any]] = {}
        by_status: Dict[HealthStatus, List[str]] = {status: [] for status in HealthStatus}

        for check in self.checks:
            result = self._run(check)
            results[check.get_name()] = result
            by_status[HealthStatus.parse(result.get("status"))].append(check.get_name())

        overall = max(
            (status for status, names in by_status.items() if names),
            key=lambda status: status.severity,
            default=HealthStatus.HEALTHY,
        )
        failed = by_status[HealthStatus.UNHEALTHY]
        degraded = by_status[HealthStatus.DEGRADED]

        return {
            "status": overall.value,
            "message": self._summarize(overall, failed, degraded),
            "checks": results,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "total_checks": len(self.checks),
            "failed_checks": failed,
            "degraded_checks": degraded,
        }

    def check_readiness(self) -> Dict[str, Any]:
        """Readiness: every check must be healthy; degraded is not ready."""
        health = self.check_health()
        return {
            "ready": health["status"] == HealthStatus.HEALTHY.value,
            "status": health["status"],
            "message": health["message"],
            "timestamp": health["timestamp"],
        }

    @staticmethod
    def _run(check: HealthCheck) -> Dict[str, Any]:
        try:
            return check.check()
        except Exception as e:
            logger.error(f"Health check {check.get_name()} raised: {e}")
            return HealthCheck.result(
                HealthStatus.UNHEALTHY, f"Health check failed with exception: {e}"
            )

    @staticmethod
    def _summarize(overall: HealthStatus, failed: List[str], degraded: List[str]) -> str:
        if overall is HealthStatus.HEALTHY:
            return "All health checks passing"
        parts = []
        if failed:
            parts.append(f"Failed checks: {', '.join(failed)}")
        if degraded:
            parts.append(f"Degraded checks: {', '.join(degraded)}")
        prefix = "Service unhealthy" if overall is HealthStatus.UNHEALTHY else "Service degraded"
        return ". ".join([prefix] + parts)
