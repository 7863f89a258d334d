"""Construction of the runner the container hands to the rest of the framework."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable

_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {"timeout": 2000, "bail": False, "reporter": "spec"}
)


@dataclass(frozen=True)
class Runner:
    """Resolved runner settings; execution itself lives elsewhere."""

    grep: str | None = None
    timeout: int = 2000
    bail: bool = False
    reporter: str = "spec"
    options: Mapping[str, Any] = field(default_factory=dict)


RunnerFactory = Callable[[Mapping[str, Any], Mapping[str, Any]], Any]


def build_runner(runner_config: Mapping[str, Any], opts: Mapping[str, Any]) -> Runner:
    """Merge runner configuration with command line options into a ``Runner``.

    Explicit options win over configuration; keys the runner does not know
    about are kept in ``options`` untouched.
    """

    settings = {**_DEFAULTS, **runner_config}
    for key in ("grep", "timeout", "bail", "reporter"):
        if opts.get(key) is not None:
            settings[key] = opts[key]

    known = {key: settings.pop(key) for key in ("timeout", "bail", "reporter")}
    grep = settings.pop("grep", None)
    return Runner(grep=grep, options=MappingProxyType(settings), **known)


__all__ = ["Runner", "RunnerFactory", "build_runner"]
