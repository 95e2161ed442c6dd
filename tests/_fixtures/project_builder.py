"""Helper utilities for constructing temporary project trees in tests."""

from __future__ import annotations

import os
import textwrap
import time
from pathlib import Path
from typing import Iterable, List, Mapping

from projecthealth.models import FileEntry
from projecthealth.walker import walk_directory

SECONDS_PER_DAY = 60 * 60 * 24


class ProjectBuilder:
    """Utility for writing files into a throwaway project and walking it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_bytes(self, relative: str, data: bytes) -> None:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def mkdir(self, *relatives: str) -> None:
        for relative in relatives:
            (self.root / relative).mkdir(parents=True, exist_ok=True)

    def age(self, relatives: Iterable[str], days: float, *, now: float | None = None) -> None:
        """Set the modification time of each path to ``days`` before ``now``."""
        reference = time.time() if now is None else now
        mtime_ns = int((reference - days * SECONDS_PER_DAY) * 1_000_000_000)
        for relative in relatives:
            os.utime(self.root / relative, ns=(mtime_ns, mtime_ns))

    def walk(self) -> List[FileEntry]:
        """Return a fresh snapshot of the project contents."""
        return walk_directory(self.root)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["ProjectBuilder"]
