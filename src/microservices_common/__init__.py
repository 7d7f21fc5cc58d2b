"""SAI Microservices Common Library.

Shared bootstrap, lifecycle, configuration, logging and health components
used by every deployable microservice.
"""

__version__ = "0.1.0"

from .errors import InitializationError, LifecycleError
from .lifecycle import LifecycleState, ServiceRuntimeContext

__all__ = [
    "InitializationError",
    "LifecycleError",
    "LifecycleState",
    "ServiceRuntimeContext",
]
