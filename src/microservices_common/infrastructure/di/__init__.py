"""Dependency injection modules shared by all services."""

from .common_module import CommonModule, ProcessArguments

__all__ = ["CommonModule", "ProcessArguments"]
