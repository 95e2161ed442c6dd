"""Documentation freshness and quality checks."""

from __future__ import annotations

import posixpath
import re
import time
from pathlib import Path
from typing import Callable, List, Sequence

from ..ids import stable_id
from ..logging import get_logger
from ..models import (
    CHECK_DOC_FRESHNESS,
    SEVERITY_CRITICAL,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    FileEntry,
    HealthIssue,
)
from .base import HealthCheck

PRIMARY_DOC = "CLAUDE.md"

DOC_FILES = frozenset(
    {
        PRIMARY_DOC,
        "README.md",
        "CONTRIBUTING.md",
        "ARCHITECTURE.md",
        "TODO.md",
        "CHANGELOG.md",
    }
)
DOCS_DIR_PREFIX = "docs/"

SOURCE_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx", ".py", ".rb", ".go", ".rs"})

PLACEHOLDERS: tuple[str, ...] = ("TODO", "FIXME", "TBD", "placeholder", "lorem ipsum")

STALE_DOC_DAYS = 30
RECENT_ACTIVITY_DAYS = 7
STUB_LENGTH = 50
MAX_CHECKED_REFERENCES = 20

_BACKTICK_FILE = re.compile(r"`([^`]+\.\w+)`")
_SECONDS_PER_DAY = 60 * 60 * 24

_logger = get_logger("checks.freshness")


def is_doc_file(relative_path: str) -> bool:
    return posixpath.basename(relative_path) in DOC_FILES or relative_path.startswith(DOCS_DIR_PREFIX)


def review_doc_content(path: Path) -> List[str]:
    """Return content-quality findings for one documentation file."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _logger.debug("Skipping unreadable doc %s: %s", path, exc)
        return []

    findings: List[str] = []
    if len(content.strip()) < STUB_LENGTH:
        findings.append("File appears to be a stub with minimal content")

    lowered = content.lower()
    for placeholder in PLACEHOLDERS:
        if placeholder.lower() in lowered:
            findings.append(f'Contains placeholder text: "{placeholder}"')
            break

    for ref in _BACKTICK_FILE.findall(content)[:MAX_CHECKED_REFERENCES]:
        if not ref.startswith(("./", "src/", "lib/")):
            continue
        if not (path.parent / ref).exists():
            findings.append(f"References non-existent file: {ref}")
    return findings


class FreshnessCheck(HealthCheck):
    """Flags documentation that lags behind source activity or looks unfinished.

    Ids: stale docs hash the doc path, content findings hash
    ``<doc path>\\n<finding>``; the missing primary doc uses a fixed id.
    """

    name = "freshness"

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def run(self, files: Sequence[FileEntry], root: Path) -> List[HealthIssue]:
        now = self._clock()
        latest_source_ns = 0
        for entry in files:
            if entry.is_directory:
                continue
            if posixpath.splitext(entry.relative_path)[1] in SOURCE_EXTENSIONS:
                latest_source_ns = max(latest_source_ns, entry.mtime_ns)
        source_age = _days_since(latest_source_ns, now)

        issues: List[HealthIssue] = []
        for entry in files:
            if entry.is_directory or not is_doc_file(entry.relative_path):
                continue
            basename = posixpath.basename(entry.relative_path)

            doc_age = _days_since(entry.mtime_ns, now)
            if doc_age > STALE_DOC_DAYS and source_age < RECENT_ACTIVITY_DAYS:
                severity = SEVERITY_CRITICAL if basename == PRIMARY_DOC else SEVERITY_WARNING
                issues.append(
                    HealthIssue(
                        id=stable_id("fresh-stale", entry.relative_path),
                        check=CHECK_DOC_FRESHNESS,
                        severity=severity,
                        title=f"{basename} may be outdated",
                        description=(
                            f"{entry.relative_path} was last modified {doc_age} days ago, "
                            f"but source code was modified {source_age} days ago"
                        ),
                        file_paths=[entry.relative_path],
                        suggested_action=f"Review and update {basename} to reflect current project state",
                    )
                )

            for finding in review_doc_content(Path(entry.path)):
                issues.append(
                    HealthIssue(
                        id=stable_id("fresh-content", entry.relative_path, finding),
                        check=CHECK_DOC_FRESHNESS,
                        severity=SEVERITY_INFO,
                        title=f"Content issue in {basename}",
                        description=finding,
                        file_paths=[entry.relative_path],
                        suggested_action=f"Update {basename}: {finding}",
                    )
                )

        has_primary = any(
            not entry.is_directory and posixpath.basename(entry.relative_path) == PRIMARY_DOC
            for entry in files
        )
        if not has_primary:
            issues.append(
                HealthIssue(
                    id="fresh-missing-primary",
                    check=CHECK_DOC_FRESHNESS,
                    severity=SEVERITY_WARNING,
                    title=f"No {PRIMARY_DOC} found",
                    description=(
                        f"A {PRIMARY_DOC} file gives coding assistants the project structure and conventions"
                    ),
                    file_paths=[],
                    suggested_action=f"Create a {PRIMARY_DOC} with project overview, structure, and conventions",
                )
            )
        return issues


def _days_since(mtime_ns: int, now: float) -> int:
    return int((now - mtime_ns / 1_000_000_000) // _SECONDS_PER_DAY)


__all__ = ["FreshnessCheck", "PRIMARY_DOC", "is_doc_file", "review_doc_content"]
