"""
Shared test fixtures for the microservices tests.

Provides fixtures for the process-wide runtime context, logging isolation,
configuration directories and fake bootstrap collaborators following the
Given/When/Then structure.
"""

import logging
import os
import socket
import threading
from pathlib import Path
from typing import Generator, List, Optional, Sequence, Tuple
from unittest.mock import patch

import pytest

from microservices_common.errors import InitializationError
from microservices_common.infrastructure.bootstrap.signal_source import SignalSourceInterface
from microservices_common.infrastructure.wiring.runtime_wiring_interface import (
    RuntimeWiringInterface,
)
from microservices_common.lifecycle import runtime_context
from microservices_common.lifecycle.runtime_context import ServiceRuntimeContext
from microservices_common.logging.service_log_context import ServiceLogContext


class FakeRuntimeWiring(RuntimeWiringInterface):
    """Records wiring calls; optionally fails with an InitializationError."""

    def __init__(self, error: Optional[InitializationError] = None) -> None:
        self.error = error
        self.calls: List[Tuple[str, Sequence[str]]] = []
        self.shutdown_calls = 0
        self.shutdown_error: Optional[Exception] = None

    def wire(self, service_name: str, arguments: Sequence[str]) -> None:
        self.calls.append((service_name, arguments))
        if self.error is not None:
            raise self.error

    def shutdown(self) -> None:
        self.shutdown_calls += 1
        if self.shutdown_error is not None:
            raise self.shutdown_error


class FakeSignalSource(SignalSourceInterface):
    """Termination source that records the lifecycle state seen while blocking."""

    def __init__(self, terminate_immediately: bool = True) -> None:
        self.installed = False
        self.restored = False
        self.states_while_waiting: List[str] = []
        self._event = threading.Event()
        if terminate_immediately:
            self._event.set()

    def install(self) -> None:
        self.installed = True

    def await_termination(self) -> None:
        context = ServiceRuntimeContext.current()
        if context is not None:
            self.states_while_waiting.append(context.state.value)
        self._event.wait()

    def request_termination(self, reason: str = "requested") -> None:
        self._event.set()

    def restore(self) -> None:
        self.restored = True


@pytest.fixture(autouse=True)
def reset_runtime_context(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Each test starts in a process without a runtime context."""
    monkeypatch.setattr(runtime_context, "_active_context", None)
    yield


@pytest.fixture(autouse=True)
def isolate_logging() -> Generator[None, None, None]:
    """Undo dictConfig side effects of ServiceLogger between tests."""
    root = logging.getLogger()
    root_level = root.level
    yield
    for handler in list(root.handlers):
        # pytest manages its own capture handlers
        if not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
            handler.close()
    for name, candidate in list(logging.root.manager.loggerDict.items()):
        if isinstance(candidate, logging.Logger):
            for handler in list(candidate.handlers):
                candidate.removeHandler(handler)
                handler.close()
            candidate.setLevel(logging.NOTSET)
            candidate.propagate = True
            candidate.disabled = False
            if hasattr(candidate, "_bootstrap_handler_installed"):
                candidate._bootstrap_handler_installed = False  # type: ignore[attr-defined]
    root.setLevel(root_level)


@pytest.fixture
def clean_log_context() -> Generator[None, None, None]:
    ServiceLogContext.clear()
    try:
        yield
    finally:
        ServiceLogContext.clear()


@pytest.fixture
def clean_environment() -> Generator[None, None, None]:
    """Remove configuration variables that would leak into the loader."""
    with patch.dict(os.environ, {}, clear=False):
        for key in ("CONFIG_DIR", "STAGE"):
            os.environ.pop(key, None)
        yield


@pytest.fixture
def config_dir(tmp_path: Path, clean_environment: None) -> Generator[Path, None, None]:
    """Configuration directory exported through CONFIG_DIR."""
    os.environ["CONFIG_DIR"] = str(tmp_path)
    yield tmp_path


@pytest.fixture
def free_port() -> int:
    """A TCP port that was free a moment ago."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def occupied_port() -> Generator[int, None, None]:
    """A TCP port held by a listening socket for the duration of the test."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def fake_wiring() -> FakeRuntimeWiring:
    return FakeRuntimeWiring()


@pytest.fixture
def fake_signal_source() -> FakeSignalSource:
    return FakeSignalSource()


@pytest.fixture
def failing_wiring() -> FakeRuntimeWiring:
    return FakeRuntimeWiring(error=InitializationError("port in use"))


@pytest.fixture
def blocking_signal_source() -> FakeSignalSource:
    """Signal source that blocks until request_termination is called."""
    return FakeSignalSource(terminate_immediately=False)
