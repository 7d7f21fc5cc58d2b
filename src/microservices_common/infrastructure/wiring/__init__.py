"""Runtime wiring collaborators."""

from .runtime_wiring_interface import RuntimeWiringInterface
from .injector_runtime_wiring import InjectorRuntimeWiring

__all__ = ["InjectorRuntimeWiring", "RuntimeWiringInterface"]
