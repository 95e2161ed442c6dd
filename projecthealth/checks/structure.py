"""Directory layout checks: nesting depth, crowded and empty directories."""

from __future__ import annotations

import posixpath
from collections import Counter
from pathlib import Path
from typing import List, Sequence, Set

from ..ids import stable_id
from ..models import (
    CHECK_DIRECTORY_SPRAWL,
    SEVERITY_CRITICAL,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    FileEntry,
    HealthIssue,
)
from .base import HealthCheck

MAX_RECOMMENDED_DEPTH = 6
CRITICAL_DEPTH = 8
MAX_RECOMMENDED_FILES_IN_DIR = 30
CRITICAL_FILES_IN_DIR = 50


class StructureCheck(HealthCheck):
    """Flags deep nesting, overcrowded directories and empty leaf directories.

    Ids hash ``<depth>\\n<deepest path>`` for nesting and the directory path
    for crowded and empty directories.
    """

    name = "structure"

    def run(self, files: Sequence[FileEntry], root: Path) -> List[HealthIssue]:
        issues: List[HealthIssue] = []
        depth_issue = self._check_depth(files)
        if depth_issue is not None:
            issues.append(depth_issue)
        issues.extend(self._check_crowded(files))
        issues.extend(self._check_empty(files))
        return issues

    @staticmethod
    def _check_depth(files: Sequence[FileEntry]) -> HealthIssue | None:
        max_depth = 0
        deepest = ""
        for entry in files:
            depth = len(entry.relative_path.split("/"))
            if depth > max_depth:
                max_depth = depth
                deepest = entry.relative_path

        if max_depth <= MAX_RECOMMENDED_DEPTH:
            return None
        severity = SEVERITY_CRITICAL if max_depth > CRITICAL_DEPTH else SEVERITY_WARNING
        return HealthIssue(
            id=stable_id("struct-depth", str(max_depth), deepest),
            check=CHECK_DIRECTORY_SPRAWL,
            severity=severity,
            title=f"Deep directory nesting ({max_depth} levels)",
            description=(
                f"Deepest path: {deepest}. Deep nesting makes navigation harder "
                "and often indicates over-organization."
            ),
            file_paths=[deepest],
            suggested_action=f"Consider flattening directories deeper than {MAX_RECOMMENDED_DEPTH} levels",
        )

    @staticmethod
    def _check_crowded(files: Sequence[FileEntry]) -> List[HealthIssue]:
        counts: Counter[str] = Counter(
            posixpath.dirname(entry.relative_path)
            for entry in files
            if not entry.is_directory
        )
        issues: List[HealthIssue] = []
        for directory, count in counts.items():
            # The project root is allowed to hold many files.
            if not directory or count <= MAX_RECOMMENDED_FILES_IN_DIR:
                continue
            severity = SEVERITY_CRITICAL if count > CRITICAL_FILES_IN_DIR else SEVERITY_WARNING
            issues.append(
                HealthIssue(
                    id=stable_id("struct-crowded", directory),
                    check=CHECK_DIRECTORY_SPRAWL,
                    severity=severity,
                    title=f"{directory}/ has {count} files",
                    description=(
                        f'Directory "{directory}" contains {count} files. Large directories are '
                        "hard to navigate and may benefit from sub-grouping."
                    ),
                    file_paths=[directory],
                    suggested_action=(
                        f'Consider organizing files in "{directory}" into subdirectories by function or domain'
                    ),
                )
            )
        return issues

    @staticmethod
    def _check_empty(files: Sequence[FileEntry]) -> List[HealthIssue]:
        # Leaf: no subdirectory. Empty: no file anywhere below.
        dirs_with_files: Set[str] = set()
        dirs_with_subdirs: Set[str] = set()
        for entry in files:
            parent = posixpath.dirname(entry.relative_path)
            if entry.is_directory:
                dirs_with_subdirs.add(parent)
                continue
            while parent:
                dirs_with_files.add(parent)
                parent = posixpath.dirname(parent)

        issues: List[HealthIssue] = []
        for entry in files:
            path = entry.relative_path
            if not entry.is_directory or path in dirs_with_files or path in dirs_with_subdirs:
                continue
            issues.append(
                HealthIssue(
                    id=stable_id("struct-empty", path),
                    check=CHECK_DIRECTORY_SPRAWL,
                    severity=SEVERITY_INFO,
                    title=f"Empty directory: {path}",
                    description=f'Directory "{path}" contains no files',
                    file_paths=[path],
                    suggested_action="Remove empty directory or add intended files",
                )
            )
        return issues


__all__ = ["StructureCheck"]
