"""Build helper instances from the ``helpers`` section of the configuration."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any

from scenarist.config.schema import HelperConfig
from scenarist.helpers import BUILTIN_HELPERS
from scenarist.utils import install_command

from .async_guard import run_hook
from .errors import InstallationError, LoadError
from .imports import describe_reference, load_reference

logger = logging.getLogger(__name__)


def helper_reference(name: str, entry: HelperConfig) -> str:
    """Return the module reference a helper entry points at.

    An explicit ``require`` wins (a relative path for project helpers, a
    module name for installed plugins); otherwise the builtin table decides.
    """

    if entry.require:
        return entry.require
    try:
        return BUILTIN_HELPERS[name]
    except KeyError:
        raise LoadError(
            f"Could not load helper {name}: no builtin helper with this name "
            "and no 'require' set",
            name=name,
            reference=None,
        ) from None


def _helper_class(name: str, module: ModuleType, attribute: str | None, obj: Any) -> type:
    if attribute is not None:
        candidate = obj
    else:
        candidate = getattr(module, name, None)
        if candidate is None:
            local_classes = [
                value
                for value in vars(module).values()
                if inspect.isclass(value) and value.__module__ == module.__name__
            ]
            if len(local_classes) != 1:
                raise ImportError(
                    f"Module '{module.__name__}' must define a class named '{name}'"
                )
            candidate = local_classes[0]

    if not inspect.isclass(candidate):
        raise TypeError(f"'{name}' does not resolve to a class")
    return candidate


def _check_requirements(helper_class: type, name: str, reference: str) -> None:
    check = getattr(helper_class, "_check_requirements", None)
    if not callable(check):
        return
    missing = check()
    if missing:
        missing = list(missing)
        raise InstallationError(
            missing, install_command(missing), name=name, reference=reference
        )


def create_helpers(config: Mapping[str, HelperConfig], project_root: Path) -> dict[str, Any]:
    """Construct every configured helper, then run their ``_init`` hooks.

    Helpers are built in configuration order. Hooks run only after all
    helpers exist, in the same order; hook failures propagate as they are.
    """

    helpers: dict[str, Any] = {}

    for name, entry in config.items():
        reference = helper_reference(name, entry)
        shown = describe_reference(reference, project_root)
        try:
            module, attribute, obj = load_reference(reference, project_root)
            helper_class = _helper_class(name, module, attribute, obj)
            _check_requirements(helper_class, name, shown)
            helper = helper_class(entry.payload())
        except InstallationError:
            raise
        except Exception as error:
            raise LoadError(
                f"Could not load helper {name} from module '{shown}':\n{error}",
                name=name,
                reference=shown,
            ) from error

        bind = getattr(helper, "_bind", None)
        if callable(bind):
            bind(helpers)
        helpers[name] = helper
        logger.debug("Helper %s loaded from %s", name, shown)

    hooks = [getattr(helper, "_init", None) for helper in helpers.values()]
    for hook in hooks:
        if callable(hook):
            run_hook(hook)

    return helpers


__all__ = ["create_helpers", "helper_reference"]
