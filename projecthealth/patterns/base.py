"""Base class and helpers for pattern detectors."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..logging import get_logger
from ..models import PatternMatch

MAX_SKILL_NAME_LENGTH = 64
MAX_EXCERPT_LENGTH = 200

_NON_SLUG = re.compile(r"[^a-z0-9]+")

_logger = get_logger("patterns")


class PatternDetector(ABC):
    """Contract for detectors that read the project directly and emit pattern matches."""

    name: str = ""

    @abstractmethod
    def detect(self, root: Path) -> List[PatternMatch]:
        """Return the pattern matches found under ``root``."""


def skill_name(raw: str) -> str:
    """Normalize ``raw`` into a lowercase, hyphen-separated skill name."""
    slug = _NON_SLUG.sub("-", raw.lower()).strip("-")
    return slug[:MAX_SKILL_NAME_LENGTH].rstrip("-")


def read_text(path: Path) -> Optional[str]:
    """Return the file contents, or None when it cannot be read as UTF-8."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _logger.debug("Skipping unreadable file %s: %s", path, exc)
        return None


__all__ = ["MAX_EXCERPT_LENGTH", "PatternDetector", "read_text", "skill_name"]
