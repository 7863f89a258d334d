"""Default actor registered under ``I`` when the project does not define one."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class Actor:
    """The primary agent of a scenario."""

    def say(self, message: str) -> None:
        """Print a comment into the scenario output."""

        logger.info("%s", message)
        print(f"   {message}")

    def __repr__(self) -> str:
        return "<Actor I>"


def create_actor() -> Actor:
    """Return a fresh default actor."""

    return Actor()


__all__ = ["Actor", "create_actor"]
