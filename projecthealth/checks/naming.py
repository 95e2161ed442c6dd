"""File naming convention consistency check."""

from __future__ import annotations

import posixpath
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from ..ids import stable_id
from ..models import CHECK_NAMING_INCONSISTENCY, SEVERITY_INFO, FileEntry, HealthIssue
from .base import HealthCheck

KEBAB_CASE = "kebab-case"
SNAKE_CASE = "snake_case"
PASCAL_CASE = "PascalCase"
CAMEL_CASE = "camelCase"

MIN_GROUP_SIZE = 3
_SHOWN_OUTLIERS = 3


def detect_convention(filename: str) -> str:
    """Classify ``filename`` (extension ignored) into a naming convention."""
    stem = posixpath.splitext(filename)[0]
    if "-" in stem:
        return KEBAB_CASE
    if "_" in stem:
        return SNAKE_CASE
    if len(stem) > 1 and stem[0].isupper():
        return PASCAL_CASE
    # Lower-to-upper transitions and plain lowercase names are both camelCase.
    return CAMEL_CASE


class NamingCheck(HealthCheck):
    """Reports minority naming conventions among files sharing a directory and extension.

    Ids hash ``<dir>::<ext>`` and carry the outlier convention in the prefix.
    """

    name = "naming"

    def run(self, files: Sequence[FileEntry], root: Path) -> List[HealthIssue]:
        groups: Dict[Tuple[str, str], List[str]] = defaultdict(list)
        for entry in files:
            if entry.is_directory:
                continue
            directory, filename = posixpath.split(entry.relative_path)
            ext = posixpath.splitext(filename)[1]
            if not ext:
                continue
            groups[(directory, ext)].append(entry.relative_path)

        issues: List[HealthIssue] = []
        for (directory, ext), paths in groups.items():
            if len(paths) < MIN_GROUP_SIZE:
                continue

            conventions: Dict[str, List[str]] = defaultdict(list)
            for path in paths:
                conventions[detect_convention(posixpath.basename(path))].append(path)
            if len(conventions) < 2:
                continue

            dominant, dominant_paths = max(conventions.items(), key=lambda item: len(item[1]))
            location = directory or "root"
            for convention, outliers in conventions.items():
                if convention == dominant:
                    continue
                names = ", ".join(posixpath.basename(path) for path in outliers[:_SHOWN_OUTLIERS])
                more = "..." if len(outliers) > _SHOWN_OUTLIERS else ""
                issues.append(
                    HealthIssue(
                        id=stable_id(f"name-{convention}", f"{directory}::{ext}"),
                        check=CHECK_NAMING_INCONSISTENCY,
                        severity=SEVERITY_INFO,
                        title=f"Mixed naming conventions in {location}/",
                        description=(
                            f"{len(dominant_paths)} {ext} files use {dominant}, "
                            f"but {len(outliers)} use {convention}: {names}{more}"
                        ),
                        file_paths=list(outliers),
                        suggested_action=f"Rename to match the dominant {dominant} convention",
                    )
                )
        return issues


__all__ = ["NamingCheck", "detect_convention"]
