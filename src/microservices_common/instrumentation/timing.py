"""Wall-clock timing of code blocks.

Each measurement is handed to an optional emitter as a metric dict; without
one it is logged at DEBUG level.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional
import time
import logging

logger = logging.getLogger(__name__)

MetricEmitter = Callable[[Dict[str, Any]], None]


@contextmanager
def time_block(
    name: str,
    *,
    emit: Optional[MetricEmitter] = None,
    logger_: Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
    enabled: bool = True,
) -> Iterator[None]:
    """Measure the enclosed block; exceptions are flagged in the metric and re-raised.

    Args:
        name: Metric name, e.g. ``startup.phase.config``
        emit: Callback receiving ``{"metric", "name", "duration_ms", "exception"}``
        logger_: Logger used when no emitter is given
        level: Log level used when no emitter is given
        enabled: When False the block runs unmeasured
    """
    if not enabled:
        yield
        return

    started = time.perf_counter()
    raised = False
    try:
        yield
    except BaseException:
        raised = True
        raise
    finally:
        payload = {
            "metric": "timing",
            "name": name,
            "duration_ms": round((time.perf_counter() - started) * 1000, 3),
            "exception": raised,
        }
        _publish(payload, emit, logger_ or logger, level)


def _publish(
    payload: Dict[str, Any],
    emit: Optional[MetricEmitter],
    log: logging.Logger,
    level: int,
) -> None:
    if emit is None:
        log.log(level, "TIMING %s %sms", payload["name"], payload["duration_ms"])
        return
    try:
        emit(payload)
    except Exception:
        log.debug("timing emit callback failed", exc_info=True)


__all__ = ["MetricEmitter", "time_block"]
