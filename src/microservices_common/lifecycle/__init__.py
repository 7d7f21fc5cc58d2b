"""Service lifecycle: states and the process-wide runtime context."""

from .lifecycle_state import LifecycleState
from .runtime_context import ServiceRuntimeContext

__all__ = ["LifecycleState", "ServiceRuntimeContext"]
