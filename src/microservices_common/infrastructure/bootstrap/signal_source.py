"""
Process signal source.

Turns the hosting environment's shutdown request (SIGTERM / SIGINT) into a
single blocking `await_termination()` call for the bootstrap thread.
"""

import logging
import signal
import threading
from abc import ABC, abstractmethod
from types import FrameType
from typing import Any, Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS: Tuple[signal.Signals, ...] = (signal.SIGTERM, signal.SIGINT)


class SignalSourceInterface(ABC):
    """Source of the external termination request."""

    @abstractmethod
    def install(self) -> None:
        """Start listening for termination requests."""
        pass

    @abstractmethod
    def await_termination(self) -> None:
        """Block until termination has been requested; returns exactly once."""
        pass

    @abstractmethod
    def request_termination(self, reason: str = "requested") -> None:
        """Request termination programmatically."""
        pass

    @abstractmethod
    def restore(self) -> None:
        """Stop listening and release any process-level hooks."""
        pass


class ProcessSignalSource(SignalSourceInterface):
    """Signal-driven termination source.

    Handlers can only be installed from the main thread; when the bootstrap
    runs on another thread only `request_termination` can end the wait.
    A termination requested before `await_termination` is remembered.
    """

    def __init__(self, signals: Iterable[signal.Signals] = DEFAULT_SIGNALS) -> None:
        self._signals = tuple(signals)
        self._terminated = threading.Event()
        self._previous_handlers: Dict[signal.Signals, Any] = {}
        self._awaited = False
        self.reason: Optional[str] = None

    @property
    def termination_requested(self) -> bool:
        return self._terminated.is_set()

    def install(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread; signal handlers not installed")
            return
        for signum in self._signals:
            if signum not in self._previous_handlers:
                self._previous_handlers[signum] = signal.signal(signum, self._signal_handler)
        logger.debug(f"Signal handlers installed for {[s.name for s in self._signals]}")

    def await_termination(self) -> None:
        if self._awaited:
            raise RuntimeError("await_termination() has already returned once")
        self._terminated.wait()
        self._awaited = True
        logger.info(f"Termination requested ({self.reason})")

    def request_termination(self, reason: str = "requested") -> None:
        if not self._terminated.is_set():
            self.reason = reason
            self._terminated.set()

    def restore(self) -> None:
        if threading.current_thread() is not threading.main_thread():
            return
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

    def _signal_handler(self, signum: int, frame: Optional[FrameType]) -> None:
        """Handle shutdown signals gracefully."""
        name = signal.Signals(signum).name
        logger.info(f"Received signal {name}, initiating graceful shutdown...")
        # The interrupted main thread may hold the event's lock
        threading.Thread(
            target=self.request_termination,
            kwargs={"reason": f"signal {name}"},
            name="signal-termination",
            daemon=True,
        ).start()
