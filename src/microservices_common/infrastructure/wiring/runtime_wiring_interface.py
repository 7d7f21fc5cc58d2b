from abc import ABC, abstractmethod
from typing import Sequence


class RuntimeWiringInterface(ABC):
    """Connects the capabilities a service needs before it can run."""

    @abstractmethod
    def wire(self, service_name: str, arguments: Sequence[str]) -> None:
        """
        Discover and connect the service's capabilities.

        Called exactly once per process lifetime.

        Args:
            service_name: Fixed identifier of the service being started
            arguments: Process arguments, passed through unmodified

        Raises:
            InitializationError: if the service cannot be brought up
        """
        pass

    @abstractmethod
    def shutdown(self) -> None:
        """Release whatever `wire` acquired. Must be safe to call more than once."""
        pass
