"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402

from scenarist.container import Container  # noqa: E402
from scenarist.recorder import Recorder  # noqa: E402


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    """Return an empty directory acting as the project root."""

    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture()
def recorder() -> Recorder:
    """Provide a recorder isolated from the process-wide one."""

    return Recorder()


@pytest.fixture()
def container(project_root: Path, recorder: Recorder) -> Container:
    """Provide an empty container bound to the temporary project root."""

    return Container(project_root, recorder=recorder)
