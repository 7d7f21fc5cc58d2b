"""
Process-wide Service Runtime Context.

Holds the service identity and its lifecycle state. Exactly one context may
exist per process; it is created by the bootstrap entry point and lives until
the process exits.
"""
from __future__ import annotations

import logging
import threading
from typing import List, Optional

from microservices_common.errors import LifecycleError
from microservices_common.lifecycle.lifecycle_state import (
    ALLOWED_TRANSITIONS,
    LifecycleState,
)

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
_active_context: Optional["ServiceRuntimeContext"] = None


class ServiceRuntimeContext:
    """Lifecycle holder for a single service process.

    Transitions are monotonic: a state is never entered twice and there is
    no restart-in-place. All mutation happens under a condition variable so
    the signal handling thread and the bootstrap thread observe a consistent
    state.

    Usage:
        ctx = ServiceRuntimeContext.create("recommendation")
        ctx.transition(LifecycleState.INITIALIZING)
        ...
    """

    def __init__(self, service_name: str) -> None:
        if not service_name:
            raise ValueError("service_name must be a non-empty string")
        self.service_name = service_name
        self._state = LifecycleState.UNINITIALIZED
        self._history: List[LifecycleState] = [LifecycleState.UNINITIALIZED]
        self._condition = threading.Condition()

    @classmethod
    def create(cls, service_name: str) -> "ServiceRuntimeContext":
        """Create the process-wide context.

        Raises:
            LifecycleError: if a context already exists in this process
        """
        global _active_context
        with _registry_lock:
            if _active_context is not None:
                raise LifecycleError(
                    f"A runtime context for '{_active_context.service_name}' already exists "
                    "in this process"
                )
            context = cls(service_name)
            _active_context = context
        logger.debug(f"Runtime context created for {service_name}")
        return context

    @classmethod
    def current(cls) -> Optional["ServiceRuntimeContext"]:
        """Return the process-wide context, if one has been created."""
        return _active_context

    @property
    def state(self) -> LifecycleState:
        with self._condition:
            return self._state

    @property
    def history(self) -> List[LifecycleState]:
        """Every state entered so far, in order."""
        with self._condition:
            return list(self._history)

    @property
    def is_running(self) -> bool:
        return self.state == LifecycleState.RUNNING

    def transition(self, new_state: LifecycleState) -> None:
        """Move to `new_state`.

        Raises:
            LifecycleError: if the transition is not part of the lifecycle
        """
        with self._condition:
            current = self._state
            if new_state not in ALLOWED_TRANSITIONS[current]:
                raise LifecycleError(
                    f"Illegal lifecycle transition for {self.service_name}: "
                    f"{current.value} -> {new_state.value}"
                )
            self._state = new_state
            self._history.append(new_state)
            self._condition.notify_all()
        logger.info(
            f"{self.service_name} lifecycle: {current.value} -> {new_state.value}",
            extra={"service": self.service_name, "lifecycle_state": new_state.value},
        )

    def wait_for_state(self, state: LifecycleState, timeout: Optional[float] = None) -> bool:
        """Block until `state` has been entered.

        Returns:
            True once the state is (or has been) reached, False on timeout
            or when the context stops without ever entering `state`
        """
        with self._condition:
            self._condition.wait_for(
                lambda: state in self._history or self._state is LifecycleState.STOPPED,
                timeout=timeout,
            )
            return state in self._history

    def __repr__(self) -> str:
        return f"ServiceRuntimeContext(service_name={self.service_name!r}, state={self.state.value})"
