"""Pydantic models describing project configuration and translation vocabularies."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class HelperConfig(BaseModel):
    """Configuration entry of a single helper.

    ``require`` selects where the helper class comes from; every other key is
    free-form payload handed to the helper constructor.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    require: str | None = None

    @field_validator("require")
    @classmethod
    def _reject_blank_require(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ConfigurationError("Helper 'require' must be a non-empty string")
        return value

    def payload(self) -> dict[str, Any]:
        """Return the mapping passed to the helper constructor."""

        data = dict(self.model_extra or {})
        if self.require is not None:
            data["require"] = self.require
        return data


class ProjectConfig(BaseModel):
    """Top-level project configuration consumed by the container."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str | None = None
    tests: str | None = None
    output: str | None = None
    helpers: dict[str, HelperConfig] = Field(default_factory=dict)
    include: dict[str, Any] = Field(default_factory=dict)
    translation: str | None = None
    mocha: dict[str, Any] = Field(default_factory=dict)
    grep: str | None = None

    @field_validator("include", "mocha", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("helpers", mode="before")
    @classmethod
    def _coerce_helper_entries(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("'helpers' must map helper names to configuration")
        return {name: {} if entry is None else entry for name, entry in value.items()}

    @field_validator("translation", "grep", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Vocabulary(ImmutableModel):
    """A locale vocabulary: the actor alias plus localized action names.

    ``actions`` maps canonical helper method names to their localized form;
    ``contexts`` holds localized words for suite-level keywords.
    """

    actor: str = Field(default="I", alias="I")
    actions: Mapping[str, str] = Field(default_factory=dict)
    contexts: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("actions", "contexts", mode="before")
    @classmethod
    def _coerce_names(cls, value: Any) -> Mapping[str, str]:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {str(key): str(val) for key, val in value.items()}
        raise ConfigurationError("Vocabulary sections must be mappings of names")

    @model_validator(mode="after")
    def _validate_actor(self) -> Self:
        if not self.actor.strip():
            raise ConfigurationError("Vocabulary actor alias must be a non-empty string")
        return self


__all__ = [
    "ConfigurationError",
    "HelperConfig",
    "ImmutableModel",
    "ProjectConfig",
    "Vocabulary",
]
