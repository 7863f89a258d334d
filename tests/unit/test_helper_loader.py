"""Unit coverage for helper resolution, requirements checks and init hooks."""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

from scenarist.config.schema import HelperConfig
from scenarist.container.errors import InstallationError, LoadError
from scenarist.container.helper_loader import create_helpers, helper_reference
from scenarist.helpers import BUILTIN_HELPERS, Helper, register_helper
from scenarist.helpers.file_system import FileSystem


class _NeedsRequests(Helper):
    @staticmethod
    def _check_requirements() -> list[str]:
        return ["requests"]


def _write(path: Path, source: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


def _configs(**entries: dict) -> dict[str, HelperConfig]:
    return {name: HelperConfig.model_validate(entry) for name, entry in entries.items()}


def test_builtin_helper_is_used_without_require(project_root: Path) -> None:
    helpers = create_helpers(_configs(FileSystem={"directory": str(project_root)}), project_root)

    helper = helpers["FileSystem"]
    assert isinstance(helper, FileSystem)
    assert helper.config == {"directory": str(project_root)}
    assert helper.directory == project_root.resolve()


def test_relative_require_resolves_against_project_root(project_root: Path) -> None:
    _write(
        project_root / "support" / "my_helper.py",
        """
        from scenarist.helpers import Helper


        class MyHelper(Helper):
            pass
        """,
    )

    helpers = create_helpers(
        _configs(MyHelper={"require": "./support/my_helper.py", "url": "http://localhost"}),
        project_root,
    )

    assert type(helpers["MyHelper"]).__name__ == "MyHelper"
    assert helpers["MyHelper"].config == {
        "require": "./support/my_helper.py",
        "url": "http://localhost",
    }


def test_single_local_class_is_picked_when_names_differ(project_root: Path) -> None:
    _write(
        project_root / "custom.py",
        """
        class Whatever:
            def __init__(self, config):
                self.config = config
        """,
    )

    helpers = create_helpers(_configs(Custom={"require": "./custom"}), project_root)

    assert type(helpers["Custom"]).__name__ == "Whatever"


def test_package_require_is_imported_by_name(
    tmp_path: Path, project_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    site = tmp_path / "site"
    _write(
        site / "scenarist_plugin_api.py",
        """
        class ApiHelper:
            def __init__(self, config):
                self.endpoint = config["endpoint"]
        """,
    )
    monkeypatch.syspath_prepend(str(site))

    helpers = create_helpers(
        _configs(Api={"require": "scenarist_plugin_api:ApiHelper", "endpoint": "/v1"}),
        project_root,
    )

    assert helpers["Api"].endpoint == "/v1"


def test_helper_reference_prefers_require() -> None:
    assert helper_reference("FileSystem", HelperConfig(require="pkg.fs")) == "pkg.fs"
    assert helper_reference("FileSystem", HelperConfig()) == BUILTIN_HELPERS["FileSystem"]


def test_unknown_builtin_raises_load_error(project_root: Path) -> None:
    with pytest.raises(LoadError, match="Playwright") as info:
        create_helpers(_configs(Playwright={}), project_root)

    assert info.value.name == "Playwright"


def test_import_failure_is_wrapped_with_reference(project_root: Path) -> None:
    with pytest.raises(LoadError) as info:
        create_helpers(_configs(Missing={"require": "./nowhere/helper.py"}), project_root)

    message = str(info.value)
    assert message.startswith("Could not load helper Missing from module '")
    assert str((project_root / "nowhere" / "helper.py").resolve()) in message
    assert "No such file" in message
    assert isinstance(info.value.__cause__, ModuleNotFoundError)


def test_constructor_failure_is_wrapped(project_root: Path) -> None:
    _write(
        project_root / "failing.py",
        """
        class Failing:
            def __init__(self, config):
                raise RuntimeError("cannot connect")
        """,
    )

    with pytest.raises(LoadError, match="cannot connect"):
        create_helpers(_configs(Failing={"require": "./failing.py"}), project_root)


def test_missing_requirements_stop_construction(
    project_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write(
        project_root / "browser.py",
        """
        constructed = []


        class Browser:
            @staticmethod
            def _check_requirements():
                return ["playwright", "pillow"]

            def __init__(self, config):
                constructed.append(self)
        """,
    )
    monkeypatch.setattr("scenarist.utils.installed_locally", lambda: True)

    with pytest.raises(InstallationError) as info:
        create_helpers(_configs(Browser={"require": "./browser.py"}), project_root)

    shown = str((project_root / "browser.py").resolve())
    assert isinstance(info.value, LoadError)
    assert (info.value.name, info.value.reference) == ("Browser", shown)
    assert info.value.requirements == ["playwright", "pillow"]
    assert str(info.value).startswith(f"Could not load helper Browser from module '{shown}':\n")
    assert "RUN: pip install playwright pillow" in str(info.value)
    module = next(
        m for m in list(sys.modules.values()) if getattr(m, "__file__", None) == shown
    )
    assert module.constructed == []


def test_global_install_command(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(BUILTIN_HELPERS, "NeedsRequests", f"{__name__}:_NeedsRequests")
    monkeypatch.setattr("scenarist.utils.installed_locally", lambda: False)

    with pytest.raises(InstallationError, match=r"\[sudo\] python -m pip install requests"):
        create_helpers(_configs(NeedsRequests={}), project_root)


def test_init_hooks_run_in_order_after_all_constructed(project_root: Path) -> None:
    _write(
        project_root / "ordered.py",
        """
        events = []


        class First:
            def __init__(self, config):
                events.append("construct First")

            def _init(self):
                events.append("init First")


        class Second:
            def __init__(self, config):
                events.append("construct Second")

            async def _init(self):
                events.append("init Second")
        """,
    )

    helpers = create_helpers(
        _configs(
            First={"require": "./ordered.py:First"},
            Second={"require": "./ordered.py:Second"},
        ),
        project_root,
    )

    module = sys.modules[type(helpers["First"]).__module__]
    assert module.events == [
        "construct First",
        "construct Second",
        "init First",
        "init Second",
    ]
    assert list(helpers) == ["First", "Second"]


def test_init_failure_propagates_unwrapped(project_root: Path) -> None:
    _write(
        project_root / "broken_init.py",
        """
        class BrokenInit:
            def __init__(self, config):
                pass

            def _init(self):
                raise ConnectionError("browser did not start")
        """,
    )

    with pytest.raises(ConnectionError, match="browser did not start"):
        create_helpers(_configs(BrokenInit={"require": "./broken_init.py"}), project_root)


def test_helpers_see_each_other(project_root: Path) -> None:
    _write(
        project_root / "pair.py",
        """
        from scenarist.helpers import Helper


        class Pair(Helper):
            def _init(self):
                self.peer = self.helpers["FileSystem"]
        """,
    )

    helpers = create_helpers(
        _configs(FileSystem={}, Pair={"require": "./pair.py"}), project_root
    )

    assert helpers["Pair"].peer is helpers["FileSystem"]


def test_register_helper_extends_builtin_table(project_root: Path) -> None:
    register_helper("Files", "scenarist.helpers.file_system:FileSystem")
    try:
        helpers = create_helpers(_configs(Files={}), project_root)
    finally:
        BUILTIN_HELPERS.pop("Files")

    assert isinstance(helpers["Files"], FileSystem)
