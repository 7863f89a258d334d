"""Helper for scenarios that assert on files written by the system under test."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from .base import Helper

logger = logging.getLogger(__name__)


class FileSystem(Helper):
    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        super().__init__(config)
        self.directory = Path(self.config.get("directory") or Path.cwd())
        self.file: Path | None = None

    def _init(self) -> None:
        self.directory = self.directory.resolve()

    def am_in_path(self, path: str) -> None:
        self.directory = (self.directory / path).resolve()
        logger.debug("Working directory set to %s", self.directory)

    def write_to_file(self, name: str, text: str) -> None:
        (self.directory / name).write_text(text, encoding="utf-8")

    def see_file(self, name: str) -> None:
        target = self.directory / name
        if not target.is_file():
            raise AssertionError(f"File {target} not found in {self.directory}")
        self.file = target

    def dont_see_file(self, name: str) -> None:
        target = self.directory / name
        if target.exists():
            raise AssertionError(f"File {target} was found but should not exist")

    def see_in_this_file(self, text: str) -> None:
        if self.file is None:
            raise AssertionError("No file opened; call see_file first")
        content = self.file.read_text(encoding="utf-8")
        if text not in content:
            raise AssertionError(f"Text {text!r} not found in {self.file.name}")


__all__ = ["FileSystem"]
