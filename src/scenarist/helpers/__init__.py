"""Builtin helpers and the name lookup table used by the container."""

from __future__ import annotations

from .base import Helper

BUILTIN_HELPERS: dict[str, str] = {
    "FileSystem": "scenarist.helpers.file_system:FileSystem",
}


def register_helper(name: str, reference: str) -> None:
    """Expose the helper at ``reference`` (``module:attr``) under ``name``."""

    BUILTIN_HELPERS[name] = reference


__all__ = ["BUILTIN_HELPERS", "Helper", "register_helper"]
