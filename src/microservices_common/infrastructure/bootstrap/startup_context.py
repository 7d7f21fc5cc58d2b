"""Startup observability for the runtime wiring.

Records how long each wiring phase took, which phase failed and the state
of the dependencies checked during startup, then renders all of it as one
``STARTUP SUMMARY`` log line.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import asdict, dataclass
import json
import logging
import time
from typing import Any, Dict, Iterator, List, Optional

from microservices_common.instrumentation.timing import MetricEmitter, time_block

logger = logging.getLogger(__name__)


@dataclass
class DependencyStatus:
    name: str
    mandatory: bool
    healthy: bool
    message: str = ""
    latency_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PhaseRecord:
    name: str
    duration_ms: float = 0.0
    error: Optional[str] = None


class StartupContext:
    """Startup metrics of one service.

        ctx = StartupContext("review")
        with ctx.phase("config"):
            ...
        ctx.emit_summary(logger)
    """

    def __init__(
        self,
        service_name: str,
        *,
        emit_phase_metrics: bool = True,
        metric_emit: Optional[MetricEmitter] = None,
    ) -> None:
        self.service_name = service_name
        self._created = time.perf_counter()
        self._phases: List[PhaseRecord] = []
        self._dependencies: List[DependencyStatus] = []
        self._attributes: Dict[str, Any] = {}
        self._emit_phase_metrics = emit_phase_metrics
        self._metric_emit = metric_emit

    @contextmanager
    def phase(self, name: str) -> Iterator[None]:
        record = PhaseRecord(name)
        self._phases.append(record)
        started = time.perf_counter()
        try:
            with time_block(
                f"startup.phase.{name}",
                emit=self._metric_emit,
                enabled=self._emit_phase_metrics,
            ):
                yield
        except BaseException as e:
            record.error = e.__class__.__name__
            raise
        finally:
            record.duration_ms = round((time.perf_counter() - started) * 1000, 2)

    def add_dependency_status(
        self,
        name: str,
        healthy: bool,
        mandatory: bool = True,
        message: str = "",
        latency_ms: Optional[float] = None,
    ) -> None:
        self._dependencies.append(
            DependencyStatus(
                name=name,
                mandatory=mandatory,
                healthy=healthy,
                message=message,
                latency_ms=latency_ms,
            )
        )

    def attribute(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    def mandatory_dependencies_healthy(self) -> bool:
        return all(d.healthy for d in self._dependencies if d.mandatory)

    @property
    def phase_names(self) -> List[str]:
        return [p.name for p in self._phases]

    def summary_dict(self) -> Dict[str, Any]:
        failures = {p.name: p.error for p in self._phases if p.error}
        if failures:
            status = "FAILED"
        elif not self.mandatory_dependencies_healthy():
            status = "DEGRADED"
        else:
            status = "HEALTHY"
        return {
            "service": self.service_name,
            "status": status,
            "total_time_ms": round((time.perf_counter() - self._created) * 1000, 2),
            "phases": [{"name": p.name, "duration_ms": p.duration_ms} for p in self._phases],
            "dependencies": [d.to_dict() for d in self._dependencies],
            "attributes": self._attributes,
            "phase_exceptions": failures,
        }

    def emit_summary(self, log: logging.Logger) -> None:
        summary = json.dumps(self.summary_dict(), sort_keys=True, default=str)
        log.info("STARTUP SUMMARY %s", summary)
