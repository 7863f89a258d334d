"""Resolution of module references used by helper and support configuration.

A reference is either a relative path (``./helpers/login.py``), resolved
against the project root, or a dotted module name. Both may carry an
``:attribute`` suffix selecting one object from the loaded module.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

RELATIVE_MARKER = "."


def is_relative(reference: str) -> bool:
    return reference.startswith(RELATIVE_MARKER)


def split_reference(reference: str) -> tuple[str, str | None]:
    """Split ``module:attr`` into its parts; drive letters are left alone."""

    target, sep, attribute = reference.rpartition(":")
    if not sep or not attribute or not target or "/" in attribute or "\\" in attribute:
        return reference, None
    return target, attribute


def resolve_path(reference: str, project_root: Path) -> Path:
    path = (project_root / reference).resolve()
    if path.is_dir():
        path = path / "__init__.py"
    elif not path.suffix:
        path = path.with_suffix(".py")
    return path


def _load_file(path: Path) -> ModuleType:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:10]
    module_name = f"scenarist_local_{path.stem}_{digest}"
    if module_name in sys.modules:
        return sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise
    return module


def load_module(reference: str, project_root: Path) -> ModuleType:
    """Import the module behind ``reference`` (without any attribute suffix)."""

    if is_relative(reference):
        path = resolve_path(reference, project_root)
        if not path.is_file():
            raise ModuleNotFoundError(f"No such file: {path}")
        return _load_file(path)
    return importlib.import_module(reference)


def load_reference(reference: str, project_root: Path) -> tuple[ModuleType, str | None, Any]:
    """Load ``reference`` and return ``(module, attribute, object)``.

    Without an attribute suffix the returned object is the module itself.
    """

    target, attribute = split_reference(reference)
    module = load_module(target, project_root)
    if attribute is None:
        return module, None, module
    try:
        return module, attribute, getattr(module, attribute)
    except AttributeError as error:
        raise ImportError(f"Module '{target}' has no attribute '{attribute}'") from error


def describe_reference(reference: str, project_root: Path) -> str:
    """Return the reference as shown in error messages."""

    target, attribute = split_reference(reference)
    if is_relative(target):
        target = str(resolve_path(target, project_root))
    return f"{target}:{attribute}" if attribute else target


__all__ = [
    "RELATIVE_MARKER",
    "describe_reference",
    "is_relative",
    "load_module",
    "load_reference",
    "resolve_path",
    "split_reference",
]
