"""Translation vocabularies backed by builtin JSON resources or project files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from scenarist.config.project_config import load_mapping
from scenarist.config.schema import ConfigurationError, Vocabulary
from scenarist.utils import file_exists

logger = logging.getLogger(__name__)

_TRANSLATIONS_PACKAGE = "scenarist.translations"
DEFAULT_ACTOR = "I"


@dataclass(frozen=True)
class Translation:
    """Localized vocabulary of a project.

    ``loaded`` is ``False`` only for the placeholder used when no translation
    is configured; such a translation never aliases the default actor.
    """

    vocabulary: Vocabulary = field(default_factory=Vocabulary)
    loaded: bool = True

    @classmethod
    def sentinel(cls) -> Translation:
        return cls(Vocabulary(actor=DEFAULT_ACTOR), loaded=False)

    @property
    def actor(self) -> str:
        return self.vocabulary.actor

    @property
    def actions(self) -> Mapping[str, str]:
        return self.vocabulary.actions

    def action_alias_for(self, action: str) -> str:
        """Return the localized name of ``action``, or ``action`` itself."""

        return self.vocabulary.actions.get(action, action)

    def canonical_action_for(self, alias: str) -> str:
        for action, localized in self.vocabulary.actions.items():
            if localized == alias:
                return action
        return alias

    def value(self, key: str) -> str | None:
        return self.vocabulary.contexts.get(key)


@cache
def _available_locales() -> tuple[str, ...]:
    """Return the identifiers of the vocabularies bundled with the package."""

    try:
        root = resources.files(_TRANSLATIONS_PACKAGE)
    except ModuleNotFoundError:  # pragma: no cover - broken installation
        return ()

    locales = sorted(
        entry.name.removesuffix(".json") for entry in root.iterdir() if entry.name.endswith(".json")
    )
    return tuple(locales)


def available_locales() -> list[str]:
    return list(_available_locales())


def _read_builtin_payload(locale: str) -> dict[str, Any]:
    resource = resources.files(_TRANSLATIONS_PACKAGE).joinpath(f"{locale}.json")
    with resource.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):  # pragma: no cover - packaging invariant
        raise ConfigurationError(f"Builtin translation {locale} is not a mapping")
    return payload


def _build_vocabulary(payload: Mapping[str, Any], source: str) -> Vocabulary:
    try:
        return Vocabulary.model_validate(dict(payload))
    except ValidationError as error:
        raise ConfigurationError(f"Translation {source} is invalid: {error}") from error


def load_translation(spec: str | None = None, project_root: Path | None = None) -> Translation:
    """Resolve a translation identifier into a ``Translation``.

    ``spec`` may be empty (no translation), the name of a builtin locale or a
    path to a JSON/YAML vocabulary relative to ``project_root``.
    """

    if not spec:
        return Translation.sentinel()

    if spec in _available_locales():
        logger.debug("Using builtin translation %s", spec)
        return Translation(_build_vocabulary(_read_builtin_payload(spec), spec))

    candidate = (project_root or Path.cwd()) / spec
    if file_exists(candidate):
        logger.debug("Loading translation from %s", candidate)
        return Translation(_build_vocabulary(load_mapping(candidate), spec))

    raise ConfigurationError(
        f"Translation option is set in config, but {spec} is not a translated locale or filename"
    )


__all__ = [
    "DEFAULT_ACTOR",
    "Translation",
    "available_locales",
    "load_translation",
]
