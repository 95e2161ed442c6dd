"""Detects extension combinations that recur across directories."""

from __future__ import annotations

import posixpath
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Set

from ..ids import stable_id
from ..models import PATTERN_FILE_TYPE, PatternEvidence, PatternMatch, SkillTemplate
from ..walker import walk_directory
from .base import PatternDetector, skill_name

FILE_PATTERN_IGNORE: tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "__pycache__",
    ".venv",
    "coverage",
)

MIN_DIRECTORIES = 3
MIN_EXTENSIONS = 2
MAX_EVIDENCE = 5
BASE_CONFIDENCE = 0.4
CONFIDENCE_STEP = 0.1
MAX_CONFIDENCE = 0.85


def extension_sets(root: Path) -> Dict[str, Set[str]]:
    """Map each directory (``"."`` for the root) to the set of file extensions it holds."""
    sets: Dict[str, Set[str]] = defaultdict(set)
    for entry in walk_directory(root, FILE_PATTERN_IGNORE, allowed_hidden=None):
        if entry.is_directory:
            continue
        directory, filename = posixpath.split(entry.relative_path)
        ext = posixpath.splitext(filename)[1]
        if ext:
            sets[directory or "."].add(ext)
    return sets


class FileTypePatternDetector(PatternDetector):
    """Suggests scaffolding skills for extension sets shared by several directories.

    Ids hash the ``+``-joined sorted extension signature.
    """

    name = "file_types"

    def detect(self, root: Path) -> List[PatternMatch]:
        combos: Dict[str, List[str]] = defaultdict(list)
        for directory, extensions in extension_sets(root).items():
            if len(extensions) < MIN_EXTENSIONS:
                continue
            combos["+".join(sorted(extensions))].append(directory)

        matches: List[PatternMatch] = []
        for combo, directories in combos.items():
            if len(directories) < MIN_DIRECTORIES:
                continue
            extensions = combo.split("+")
            listed = ", ".join(extensions)
            matches.append(
                PatternMatch(
                    id=stable_id("ftype", combo),
                    type=PATTERN_FILE_TYPE,
                    name=f"Co-located file pattern: {' + '.join(extensions)}",
                    description=(
                        f"Found {len(directories)} directories where {listed} files always appear "
                        "together. This could be captured as a component/module template skill."
                    ),
                    evidence=[
                        PatternEvidence(file_path=directory, excerpt=f"Directory contains: {listed}")
                        for directory in directories[:MAX_EVIDENCE]
                    ],
                    confidence=min(BASE_CONFIDENCE + CONFIDENCE_STEP * len(directories), MAX_CONFIDENCE),
                    suggested_skill=SkillTemplate(
                        name=skill_name(f"create-{extensions[0].lstrip('.')}-module"),
                        description=f"Scaffold a new module with {listed} files",
                        instructions=(
                            "Create a new module with the following files:\n"
                            + "\n".join(f"- <name>{ext}" for ext in extensions)
                            + "\n\nFollow the existing patterns in the project."
                        ),
                    ),
                )
            )
        return matches


__all__ = ["FILE_PATTERN_IGNORE", "FileTypePatternDetector", "extension_sets"]
