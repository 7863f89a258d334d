"""Loading of project configuration files into validated models."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import ConfigurationError, HelperConfig, ProjectConfig

CONFIG_FILENAMES = ("scenarist.yaml", "scenarist.yml", "scenarist.json")


def load_mapping(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON document that must hold a mapping at the top level."""

    with path.open("r", encoding="utf-8") as handle:
        try:
            if path.suffix == ".json":
                data = json.load(handle)
            else:
                data = yaml.safe_load(handle) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as error:
            raise ConfigurationError(f"{path.name} could not be parsed: {error}") from error
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path.name} must define a mapping at the top level")
    return data


def parse_project_config(raw: ProjectConfig | Mapping[str, Any]) -> ProjectConfig:
    """Validate ``raw`` into a ``ProjectConfig``; models pass through untouched."""

    if isinstance(raw, ProjectConfig):
        return raw
    try:
        return ProjectConfig.model_validate(dict(raw))
    except ValidationError as error:
        raise ConfigurationError(f"Configuration validation failed: {error}") from error


def find_project_config(directory: Path) -> Path:
    """Return the first known configuration file inside ``directory``."""

    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(
        f"No configuration file found in {directory} (looked for {', '.join(CONFIG_FILENAMES)})"
    )


def load_project_config(path: Path) -> ProjectConfig:
    """Load and validate the project configuration stored at ``path``."""

    if path.is_dir():
        path = find_project_config(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return parse_project_config(load_mapping(path))


__all__ = [
    "CONFIG_FILENAMES",
    "ConfigurationError",
    "HelperConfig",
    "ProjectConfig",
    "find_project_config",
    "load_mapping",
    "load_project_config",
    "parse_project_config",
]
