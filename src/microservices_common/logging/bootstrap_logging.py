"""Bootstrap logging.

Configuration loading runs before ServiceLogger can be configured, so it
logs through a plain stderr logger named ``{service}.bootstrap``. The runtime
wiring retires that logger as soon as the real logging setup is applied.
"""
from __future__ import annotations

import logging

_BOOTSTRAP_FORMAT = "%(asctime)s | BOOT | %(levelname)-8s | %(name)s | %(message)s"
_INSTALLED_MARKER = "_bootstrap_handler_installed"


def _bootstrap_logger(service_name: str) -> logging.Logger:
    return logging.getLogger(f"{service_name}.bootstrap")


def get_bootstrap_logger(service_name: str, level: int = logging.INFO) -> logging.Logger:
    """Return the bootstrap logger, attaching its handler on first use."""
    log = _bootstrap_logger(service_name)
    if getattr(log, _INSTALLED_MARKER, False):
        return log

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_BOOTSTRAP_FORMAT))
    log.addHandler(handler)
    log.setLevel(level)
    log.propagate = False
    setattr(log, _INSTALLED_MARKER, True)
    return log


def retire_bootstrap_logger(service_name: str) -> None:
    """Detach the bootstrap handler; later records propagate to the service handlers."""
    log = _bootstrap_logger(service_name)
    if not getattr(log, _INSTALLED_MARKER, False):
        return
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()
    log.setLevel(logging.NOTSET)
    log.propagate = True
    setattr(log, _INSTALLED_MARKER, False)


__all__ = ["get_bootstrap_logger", "retire_bootstrap_logger"]
