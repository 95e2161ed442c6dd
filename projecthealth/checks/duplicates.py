"""Duplicate file detection by content hash and by name variants."""

from __future__ import annotations

import posixpath
import re
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Sequence

from ..ids import stable_id
from ..logging import get_logger
from ..models import (
    CHECK_DUPLICATE_FILES,
    SEVERITY_CRITICAL,
    SEVERITY_WARNING,
    FileEntry,
    HealthIssue,
)
from ..walker import hash_file
from .base import HealthCheck

MAX_HASH_SIZE = 10 * 1024 * 1024

_SEPARATORS = re.compile(r"[-_\s]")
_PARENTHESIZED_DIGITS = re.compile(r"\(\d+\)")
_TRAILING_DIGITS = re.compile(r"\d+$")
_COPY_WORD = re.compile(r"copy", re.IGNORECASE)

_logger = get_logger("checks.duplicates")


def normalize_name(relative_path: str) -> str:
    """Return the comparison key for name-variant detection.

    The key is ``<parent dir>/<stem><ext>`` with separators, ``(n)`` counters,
    trailing digits and the word "copy" removed from the stem, lowercased.
    An empty string means the stem normalizes to nothing.
    """
    directory, filename = posixpath.split(relative_path)
    stem, ext = posixpath.splitext(filename)
    stem = _SEPARATORS.sub("", stem)
    stem = _PARENTHESIZED_DIGITS.sub("", stem)
    stem = _COPY_WORD.sub("", stem)
    stem = _TRAILING_DIGITS.sub("", stem).lower()
    if not stem:
        return ""
    return posixpath.join(directory, stem + ext.lower())


class DuplicatesCheck(HealthCheck):
    """Flags byte-identical files and files whose names look like copies.

    Exact-content ids are ``dup-hash-`` plus the first 12 hex characters of
    the content SHA-256. Name-variant ids hash the comma-joined group paths.
    """

    name = "duplicates"

    def run(self, files: Sequence[FileEntry], root: Path) -> List[HealthIssue]:
        hash_groups = self._group_by_content(files)
        issues: List[HealthIssue] = []
        for content_hash, paths in hash_groups.items():
            if len(paths) < 2:
                continue
            severity = SEVERITY_CRITICAL if len(paths) > 2 else SEVERITY_WARNING
            issues.append(
                HealthIssue(
                    id=f"dup-hash-{content_hash[:12]}",
                    check=CHECK_DUPLICATE_FILES,
                    severity=severity,
                    title=f"{len(paths)} identical files found",
                    description=f"These files have identical content: {', '.join(paths)}",
                    file_paths=list(paths),
                    suggested_action="Keep one copy and remove the rest",
                )
            )

        exact_groups = [frozenset(paths) for paths in hash_groups.values() if len(paths) > 1]
        issues.extend(self._name_variants(files, exact_groups))
        return issues

    @staticmethod
    def _group_by_content(files: Sequence[FileEntry]) -> Dict[str, List[str]]:
        groups: Dict[str, List[str]] = defaultdict(list)
        for entry in files:
            if entry.is_directory or entry.size == 0 or entry.size > MAX_HASH_SIZE:
                continue
            try:
                content_hash = hash_file(entry.path)
            except OSError as exc:
                _logger.debug("Cannot hash %s: %s", entry.relative_path, exc)
                continue
            groups[content_hash].append(entry.relative_path)
        return groups

    @staticmethod
    def _name_variants(
        files: Sequence[FileEntry], exact_groups: Sequence[frozenset[str]]
    ) -> List[HealthIssue]:
        groups: Dict[str, List[str]] = defaultdict(list)
        for entry in files:
            if entry.is_directory:
                continue
            key = normalize_name(entry.relative_path)
            if key:
                groups[key].append(entry.relative_path)

        issues: List[HealthIssue] = []
        for paths in groups.values():
            if len(paths) < 2:
                continue
            # Already reported as identical content.
            if any(group.issuperset(paths) for group in exact_groups):
                continue
            issues.append(
                HealthIssue(
                    id=stable_id("dup-name", ",".join(paths)),
                    check=CHECK_DUPLICATE_FILES,
                    severity=SEVERITY_WARNING,
                    title="Possible duplicate files by name",
                    description=(
                        f"These files have similar names and may be duplicates: {', '.join(paths)}"
                    ),
                    file_paths=list(paths),
                    suggested_action="Review and remove redundant copies",
                )
            )
        return issues


__all__ = ["DuplicatesCheck", "MAX_HASH_SIZE", "normalize_name"]
