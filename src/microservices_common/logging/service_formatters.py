"""
Log formatters used by ServiceLogger.

JSON lines for cicd/prod, aligned columns for local development. Both add
the request correlation context bound in ServiceLogContext.
"""

import json
import logging
import socket
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, FrozenSet

from microservices_common.logging.service_log_context import ServiceLogContext

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRIBUTES: FrozenSet[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "short_name", "display_name", "taskName"}

_record_factory_installed = False


@lru_cache(maxsize=1024)
def abbreviate_logger_name(name: str) -> str:
    """Shorten every dotted segment but the last to its first letter.

    ``microservices_common.infrastructure.web.web_server`` -> ``m.i.w.web_server``
    """
    parts = [part for part in name.split(".") if part]
    if len(parts) <= 1:
        return name
    return ".".join([part[0] for part in parts[:-1]] + [parts[-1]])


def install_short_name_record_factory() -> None:
    """Give every LogRecord created from now on a ``short_name`` attribute."""
    global _record_factory_installed
    if _record_factory_installed:
        return
    previous = logging.getLogRecordFactory()

    def factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = previous(*args, **kwargs)
        record.short_name = abbreviate_logger_name(record.name)  # type: ignore[attr-defined]
        return record

    logging.setLogRecordFactory(factory)
    _record_factory_installed = True


def _context_suffix() -> str:
    context = ServiceLogContext.get_available_context()
    if not context:
        return ""
    return " [" + ", ".join(f"{key}={value}" for key, value in context.items()) + "]"


class ServiceStructuredFormatter(logging.Formatter):
    """One JSON document per record."""

    def __init__(self, service_name: str, environment: str = "development"):
        super().__init__()
        self.service_name = service_name
        self.environment = environment
        self.hostname = socket.gethostname()

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "service": self.service_name,
            "environment": self.environment,
            "hostname": self.hostname,
            "level": record.levelname,
            "logger": record.name,
            "short_logger": getattr(record, "short_name", record.name),
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread_name": record.threadName,
        }
        entry.update(ServiceLogContext.get_available_context())

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": self.formatException(record.exc_info),
            }

        entry.update(
            (f"extra_{key}", value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRIBUTES
        )
        return json.dumps(entry, ensure_ascii=False, default=str)


class ServiceHumanReadableFormatter(logging.Formatter):
    """``time | LEVEL | logger | service | message [context]``."""

    MAX_SHORT_NAME_LEN = 40

    def __init__(self, service_name: str):
        self.service_name = service_name
        super().__init__(
            f"%(asctime)s | %(levelname)-8s | %(display_name)-{self.MAX_SHORT_NAME_LEN}s | "
            f"{service_name} | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        name = getattr(record, "short_name", record.name)
        if len(name) > self.MAX_SHORT_NAME_LEN:
            name = name[: self.MAX_SHORT_NAME_LEN - 3] + "..."
        record.display_name = name  # type: ignore[attr-defined]
        return super().format(record) + _context_suffix()
