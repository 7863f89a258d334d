"""The container holding helpers, support objects, translation and runner.

A ``Container`` owns one ``ContainerState``. ``create`` and ``clear`` replace
it and ``append`` merges into it; in every case the new state is built first
and swapped in with a single assignment, so readers never observe a
half-built container.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable

from scenarist.actor import create_actor
from scenarist.config.project_config import parse_project_config
from scenarist.config.schema import ProjectConfig
from scenarist.localization import Translation, load_translation
from scenarist.recorder import Recorder
from scenarist.recorder import recorder as default_recorder
from scenarist.runner import RunnerFactory, build_runner
from scenarist.utils import deep_merge

from .errors import ContainerError
from .helper_loader import create_helpers
from .support_loader import create_support_objects

logger = logging.getLogger(__name__)

_FIELDS = ("helpers", "support", "translation", "runner")


@dataclass(frozen=True)
class ContainerState:
    helpers: Mapping[str, Any] = field(default_factory=dict)
    support: Mapping[str, Any] = field(default_factory=dict)
    translation: Translation = field(default_factory=Translation.sentinel)
    runner: Any = None


class Container:
    """Dependency container shared by every phase of a test run."""

    def __init__(
        self,
        project_root: Path | str | None = None,
        *,
        recorder: Recorder | None = None,
        runner_factory: RunnerFactory = build_runner,
        actor_factory: Callable[[], Any] = create_actor,
    ) -> None:
        self.project_root = Path(project_root) if project_root is not None else Path.cwd()
        self.recorder = recorder if recorder is not None else default_recorder
        self._runner_factory = runner_factory
        self._actor_factory = actor_factory
        self._state = ContainerState()

    @property
    def state(self) -> ContainerState:
        return self._state

    def create(
        self,
        config: ProjectConfig | Mapping[str, Any],
        opts: Mapping[str, Any] | None = None,
    ) -> None:
        """Build every service described by ``config`` and make it current."""

        project = parse_project_config(config)
        options = dict(opts or {})

        runner_config = dict(project.mocha)
        if project.grep and not options.get("grep"):
            runner_config["grep"] = project.grep
        runner = self._runner_factory(runner_config, options)

        helpers = create_helpers(project.helpers, self.project_root)
        translation = load_translation(project.translation, self.project_root)
        support = create_support_objects(
            project.include,
            translation,
            self.recorder,
            self.project_root,
            actor_factory=self._actor_factory,
        )

        self._state = ContainerState(
            helpers=helpers, support=support, translation=translation, runner=runner
        )
        logger.info(
            "Container created with %d helper(s) and %d support object(s)",
            len(helpers),
            len(support),
        )

    def support(self, name: str | None = None) -> Any:
        """Return all support objects, or the one called ``name`` (``None`` if absent)."""

        if not name:
            return self._state.support
        return self._state.support.get(name)

    def helpers(self, name: str | None = None) -> Any:
        """Return all helpers, or the one called ``name`` (``None`` if absent)."""

        if not name:
            return self._state.helpers
        return self._state.helpers.get(name)

    def translation(self) -> Translation:
        return self._state.translation

    def runner(self) -> Any:
        return self._state.runner

    def append(self, new_services: Mapping[str, Any]) -> None:
        """Merge ``new_services`` into the current state.

        Mapping fields are merged recursively, keys missing from
        ``new_services`` are kept. ``translation`` and ``runner`` are replaced
        when given.
        """

        unknown = set(new_services) - set(_FIELDS)
        if unknown:
            raise ContainerError(f"Unknown container fields: {', '.join(sorted(unknown))}")

        changes: dict[str, Any] = {}
        for name in _FIELDS:
            if name not in new_services:
                continue
            current = getattr(self._state, name)
            value = new_services[name]
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                value = deep_merge(current, value)
            changes[name] = value

        self._state = replace(self._state, **changes)

    def clear(
        self,
        new_helpers: Mapping[str, Any] | None = None,
        new_support: Mapping[str, Any] | None = None,
    ) -> None:
        """Replace helpers and support objects and drop the translation.

        The runner is left untouched.
        """

        self._state = replace(
            self._state,
            helpers=dict(new_helpers or {}),
            support=dict(new_support or {}),
            translation=load_translation(None),
        )
        logger.info("Container cleared")


_default_container: Container | None = None


def get_container() -> Container:
    """Return the process-wide container, creating it on first use."""

    global _default_container
    if _default_container is None:
        _default_container = Container()
    return _default_container


def set_container(container: Container) -> Container:
    """Install ``container`` as the process-wide one and return the previous."""

    global _default_container
    previous = get_container()
    _default_container = container
    return previous


__all__ = ["Container", "ContainerState", "get_container", "set_container"]
