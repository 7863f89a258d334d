"""Build support objects from the ``include`` section of the configuration.

Entries are module references, factories or ready instances. Whatever they
resolve to gets its coroutine methods guarded so late failures reach the
recorder, and an actor is always available under ``I``.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from scenarist.actor import create_actor
from scenarist.localization import DEFAULT_ACTOR, Translation
from scenarist.recorder import Recorder

from .async_guard import guard_async_methods, run_hook
from .errors import InitializationError, LoadError
from .imports import describe_reference, load_reference

logger = logging.getLogger(__name__)


def _is_factory(value: Any) -> bool:
    if isinstance(value, ModuleType) or not callable(value):
        return False
    try:
        signature = inspect.signature(value)
    except (TypeError, ValueError):
        return True
    try:
        signature.bind()
    except TypeError:
        return False
    return True


@dataclass(frozen=True)
class SupportEntry:
    """A configured support object with its capabilities decided up front."""

    name: str
    value: Any
    is_factory: bool
    has_init: bool

    @classmethod
    def classify(cls, name: str, value: Any) -> SupportEntry:
        is_factory = _is_factory(value)
        has_init = not is_factory and callable(getattr(value, "_init", None))
        return cls(name=name, value=value, is_factory=is_factory, has_init=has_init)

    def build(self) -> Any:
        try:
            if self.is_factory:
                return self.value()
            if self.has_init:
                run_hook(self.value._init)
        except Exception as error:
            raise InitializationError(self.name, error) from error
        return self.value


def load_support_object(name: str, reference: str, project_root: Path) -> Any:
    """Import the object a string ``include`` entry points at."""

    try:
        _, _, obj = load_reference(reference, project_root)
    except Exception as error:
        shown = describe_reference(reference, project_root)
        raise LoadError(
            f"Could not include object {name} from module '{shown}'\n{error}",
            name=name,
            reference=shown,
        ) from error
    return obj


def create_support_objects(
    config: Mapping[str, Any],
    translation: Translation,
    recorder: Recorder,
    project_root: Path,
    actor_factory: Callable[[], Any] = create_actor,
) -> dict[str, Any]:
    """Resolve every support entry, inject the default actor and guard coroutines."""

    objects: dict[str, Any] = {}
    for name, value in config.items():
        if isinstance(value, str):
            value = load_support_object(name, value, project_root)
        objects[name] = SupportEntry.classify(name, value).build()
        logger.debug("Support object %s ready", name)

    if DEFAULT_ACTOR not in objects:
        actor = actor_factory()
        objects[DEFAULT_ACTOR] = actor
        if translation.loaded and translation.actor != DEFAULT_ACTOR:
            objects.setdefault(translation.actor, actor)

    guarded: set[int] = set()
    for name, obj in objects.items():
        if id(obj) in guarded:
            continue
        guarded.add(id(obj))
        try:
            methods = guard_async_methods(obj, recorder)
        except AttributeError as error:
            raise LoadError(
                f"Could not guard asynchronous methods of {name}\n{error}",
                name=name,
                reference=None,
            ) from error
        for method in methods:
            logger.debug("Guarded coroutine %s.%s", name, method)

    return objects


__all__ = ["SupportEntry", "create_support_objects", "load_support_object"]
