from enum import Enum
from typing import Dict, FrozenSet


class LifecycleState(str, Enum):
    """Phases of a service process."""
    UNINITIALIZED = "Uninitialized"
    INITIALIZING = "Initializing"
    RUNNING = "Running"
    SHUTTING_DOWN = "ShuttingDown"
    STOPPED = "Stopped"


# Linear lifecycle; the only branch is the wiring failure exit from INITIALIZING.
ALLOWED_TRANSITIONS: Dict[LifecycleState, FrozenSet[LifecycleState]] = {
    LifecycleState.UNINITIALIZED: frozenset({LifecycleState.INITIALIZING}),
    LifecycleState.INITIALIZING: frozenset({LifecycleState.RUNNING, LifecycleState.STOPPED}),
    LifecycleState.RUNNING: frozenset({LifecycleState.SHUTTING_DOWN}),
    LifecycleState.SHUTTING_DOWN: frozenset({LifecycleState.STOPPED}),
    LifecycleState.STOPPED: frozenset(),
}
