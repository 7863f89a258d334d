"""Base class shared by builtin and custom helpers."""

from __future__ import annotations

from typing import Any, Mapping


class Helper:
    """Driver performing scenario actions.

    Subclasses receive their configuration mapping on construction. The
    container calls ``_init`` once every helper of the project is built and
    consults ``_check_requirements`` before constructing anything.
    """

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        self.config: dict[str, Any] = dict(config or {})
        self._helpers: Mapping[str, Any] = {}

    @staticmethod
    def _check_requirements() -> list[str] | None:
        """Return the names of missing external packages, if any."""

        return None

    def _init(self) -> Any:
        """Hook invoked once after all helpers are constructed."""

        return None

    def _bind(self, helpers: Mapping[str, Any]) -> None:
        self._helpers = helpers

    @property
    def helpers(self) -> Mapping[str, Any]:
        """Helpers built alongside this one, keyed by name."""

        return self._helpers


__all__ = ["Helper"]
