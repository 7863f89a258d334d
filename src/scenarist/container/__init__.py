"""Dependency container for helpers, support objects and translations."""

from .errors import (
    ConfigurationError,
    ContainerError,
    InitializationError,
    InstallationError,
    LoadError,
)
from .registry import Container, ContainerState, get_container, set_container

__all__ = [
    "ConfigurationError",
    "Container",
    "ContainerError",
    "ContainerState",
    "InitializationError",
    "InstallationError",
    "LoadError",
    "get_container",
    "set_container",
]
