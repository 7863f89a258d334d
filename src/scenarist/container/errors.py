"""Errors raised while assembling the container."""

from __future__ import annotations

from scenarist.config.schema import ConfigurationError


class ContainerError(Exception):
    """Base class for failures while building helpers or support objects."""


class LoadError(ContainerError):
    """A helper or support module could not be resolved, imported or built."""

    def __init__(self, message: str, *, name: str, reference: str | None) -> None:
        self.name = name
        self.reference = reference
        super().__init__(message)


class InstallationError(LoadError):
    """A helper declared external dependencies that are not installed."""

    def __init__(
        self, requirements: list[str], command: str, *, name: str, reference: str
    ) -> None:
        self.requirements = list(requirements)
        self.command = command
        super().__init__(
            f"Could not load helper {name} from module '{reference}':\n"
            f"Required modules are not installed.\n\nRUN: {command}",
            name=name,
            reference=reference,
        )


class InitializationError(ContainerError):
    """A support object's factory or ``_init`` hook raised."""

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        super().__init__(f"Initialization failed for {name}\n{cause}")


__all__ = [
    "ConfigurationError",
    "ContainerError",
    "InitializationError",
    "InstallationError",
    "LoadError",
]
