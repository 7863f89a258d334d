"""Small shared utilities used by the container and its loaders."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from copy import copy
from pathlib import Path
from typing import Any, Iterable


def file_exists(path: str | Path) -> bool:
    """Return ``True`` when ``path`` points at an existing regular file."""

    try:
        return Path(path).is_file()
    except OSError:
        return False


def deep_merge(target: Mapping[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new mapping with ``source`` merged recursively into ``target``.

    Nested mappings present on both sides are merged key by key; any other
    value from ``source`` overwrites the one in ``target``. Neither argument is
    modified.
    """

    merged: dict[str, Any] = dict(target)
    for key, value in source.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy(value) if isinstance(value, (dict, list)) else value
    return merged


def installed_locally() -> bool:
    """Return ``True`` when running inside a virtual environment."""

    return sys.prefix != getattr(sys, "base_prefix", sys.prefix)


def install_command(requirements: Iterable[str]) -> str:
    """Build the command a user should run to install ``requirements``."""

    packages = " ".join(requirements)
    if installed_locally():
        return f"pip install {packages}"
    return f"[sudo] python -m pip install {packages}"


__all__ = ["deep_merge", "file_exists", "install_command", "installed_locally"]
