"""Pattern detectors that suggest reusable skills."""

from __future__ import annotations

from typing import Callable, List, Sequence

from .._plugins import load_plugins
from .base import PatternDetector, skill_name
from .config_scripts import ConfigPatternDetector
from .file_types import FileTypePatternDetector
from .instructions import RepetitiveInstructionDetector
from .processes import ManualProcessDetector

_ENTRY_POINT_GROUP = "projecthealth.patterns"

_BUILTIN_FACTORIES: dict[str, Callable[[], PatternDetector]] = {
    "instructions": RepetitiveInstructionDetector,
    "processes": ManualProcessDetector,
    "file_types": FileTypePatternDetector,
    "config": ConfigPatternDetector,
}


def discover_detectors(enabled: Sequence[str] | None = None) -> List[PatternDetector]:
    """Return instantiated pattern detectors in run order, honoring optional enabled names."""
    return load_plugins(
        PatternDetector,
        _BUILTIN_FACTORIES,
        _ENTRY_POINT_GROUP,
        enabled=enabled,
    )


__all__ = [
    "ConfigPatternDetector",
    "FileTypePatternDetector",
    "ManualProcessDetector",
    "PatternDetector",
    "RepetitiveInstructionDetector",
    "discover_detectors",
    "skill_name",
]
