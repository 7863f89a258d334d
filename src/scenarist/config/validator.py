"""Utilities for validating vocabularies and project configuration files."""

from __future__ import annotations

import argparse
import keyword
from collections import Counter
from pathlib import Path
from typing import Sequence

from scenarist.container import Container, ContainerError
from scenarist.localization import Translation, available_locales, load_translation
from scenarist.version import get_project_version

from .project_config import load_project_config
from .schema import ConfigurationError, Vocabulary


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _add_version_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_project_version()}"
    )


def _validate_actions(scope: str, vocabulary: Vocabulary) -> list[str]:
    errors: list[str] = []

    for action, localized in vocabulary.actions.items():
        if not action.isidentifier() or keyword.iskeyword(action):
            errors.append(
                _format_scope(scope, f"action '{action}' is not a valid method name")
            )
        if not localized.isidentifier() or keyword.iskeyword(localized):
            errors.append(
                _format_scope(
                    scope,
                    f"localized name '{localized}' of '{action}' is not a valid method name",
                )
            )

    duplicates = [
        name for name, count in Counter(vocabulary.actions.values()).items() if count > 1
    ]
    if duplicates:
        errors.append(
            _format_scope(
                scope,
                f"localized names used by more than one action: {sorted(duplicates)}",
            )
        )

    return errors


def validate_vocabulary(vocabulary: Vocabulary, scope: str = "vocabulary") -> list[str]:
    """Return a list of validation issues for the provided vocabulary."""

    errors: list[str] = []

    if not vocabulary.actor.isidentifier():
        errors.append(
            _format_scope(scope, f"actor alias '{vocabulary.actor}' is not a valid name")
        )
    if vocabulary.actor in vocabulary.actions.values():
        errors.append(
            _format_scope(scope, f"actor alias '{vocabulary.actor}' clashes with an action")
        )

    errors.extend(_validate_actions(scope, vocabulary))
    return errors


def validate_builtin_translations(locales: Sequence[str] | None = None) -> dict[str, list[str]]:
    """Validate bundled vocabularies and return issues keyed by locale."""

    targets = locales or available_locales()
    results: dict[str, list[str]] = {}

    for locale in targets:
        translation = load_translation(locale)
        results[locale] = validate_vocabulary(translation.vocabulary, scope=locale)

    return results


def translations_main(argv: Sequence[str] | None = None) -> int:
    """Validate the bundled vocabularies from the command line."""

    parser = argparse.ArgumentParser(description="Validate builtin translation vocabularies.")
    parser.add_argument("locales", nargs="*", help="Locales to validate (defaults to all)")
    _add_version_flag(parser)
    args = parser.parse_args(argv)

    exit_code = 0
    for locale, issues in validate_builtin_translations(args.locales or None).items():
        if issues:
            exit_code = 1
            print(f"[{locale}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{locale}] OK")
    return exit_code


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load a project configuration and build its container."
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=".",
        help="Configuration file or project directory (defaults to the current directory)",
    )
    parser.add_argument("--grep", help="Runner grep pattern overriding the configuration")
    _add_version_flag(parser)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for checking a project configuration from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    path = Path(args.config).resolve()

    try:
        config = load_project_config(path)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[config] failed to load configuration: {error}")
        return 1

    project_root = path if path.is_dir() else path.parent
    container = Container(project_root)
    try:
        container.create(config, {"grep": args.grep})
    except (ConfigurationError, ContainerError) as error:
        print(f"[container] {type(error).__name__}: {error}")
        return 1

    translation: Translation = container.translation()
    if translation.loaded:
        issues = validate_vocabulary(translation.vocabulary, scope="translation")
        for issue in issues:
            print(f"[translation] {issue}")
        if issues:
            return 1

    for name, helper in container.helpers().items():
        print(f"[helper] {name}: {type(helper).__name__}")
    for name, obj in container.support().items():
        print(f"[support] {name}: {type(obj).__name__}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
