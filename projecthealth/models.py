"""Core data models shared across projecthealth components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional

SEVERITY_CRITICAL = "critical"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"

SEVERITY_RANK: Dict[str, int] = {
    SEVERITY_CRITICAL: 0,
    SEVERITY_WARNING: 1,
    SEVERITY_INFO: 2,
}

CHECK_DUPLICATE_FILES = "duplicate-files"
CHECK_MISSING_REFERENCES = "missing-references"
CHECK_DOC_FRESHNESS = "doc-freshness"
CHECK_DIRECTORY_SPRAWL = "directory-sprawl"
CHECK_NAMING_INCONSISTENCY = "naming-inconsistency"

CHECK_TYPES = frozenset(
    {
        CHECK_DUPLICATE_FILES,
        CHECK_MISSING_REFERENCES,
        CHECK_DOC_FRESHNESS,
        CHECK_DIRECTORY_SPRAWL,
        CHECK_NAMING_INCONSISTENCY,
    }
)

ACTION_ACCEPT = "accept"
ACTION_SKIP = "skip"
ACTION_DEFER = "defer"

ACTION_CHOICES = (ACTION_ACCEPT, ACTION_SKIP, ACTION_DEFER)

PATTERN_REPETITIVE_INSTRUCTION = "repetitive-instruction"
PATTERN_MANUAL_PROCESS = "manual-process"
PATTERN_FILE_TYPE = "file-type-pattern"
PATTERN_CONFIG = "config-pattern"

PATTERN_TYPES = frozenset(
    {
        PATTERN_REPETITIVE_INSTRUCTION,
        PATTERN_MANUAL_PROCESS,
        PATTERN_FILE_TYPE,
        PATTERN_CONFIG,
    }
)


def utc_timestamp() -> str:
    """Return the current time as an ISO-8601 UTC string with a ``Z`` suffix."""
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class FileEntry:
    """One filesystem node captured by the walker."""

    path: str
    relative_path: str
    size: int
    mtime_ns: int
    is_directory: bool

    @property
    def mtime_ms(self) -> int:
        return self.mtime_ns // 1_000_000

    @property
    def modified_at(self) -> datetime:
        return datetime.fromtimestamp(self.mtime_ns / 1_000_000_000, tz=UTC)


@dataclass
class HealthIssue:
    """A structural or content problem found by a health check."""

    id: str
    check: str
    severity: str
    title: str
    description: str
    file_paths: List[str]
    suggested_action: str
    user_choice: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if data["user_choice"] is None:
            data.pop("user_choice")
        return data


@dataclass
class ScanOptions:
    """Inputs for a single health scan."""

    root_dir: str
    full_scan: bool = True
    previous_fingerprint: Optional[str] = None
    ignore: Optional[List[str]] = None


@dataclass
class ScanResult:
    """Outcome of a health scan."""

    issues: List[HealthIssue]
    scanned_at: str
    scan_duration_ms: int
    file_count: int
    fingerprint: str
    unchanged: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issues": [issue.to_dict() for issue in self.issues],
            "scanned_at": self.scanned_at,
            "scan_duration_ms": self.scan_duration_ms,
            "file_count": self.file_count,
            "fingerprint": self.fingerprint,
            "unchanged": self.unchanged,
        }


@dataclass
class PatternEvidence:
    """A file excerpt supporting a pattern match."""

    file_path: str
    excerpt: str
    line_number: Optional[int] = None


@dataclass
class SkillTemplate:
    """Reusable skill suggested for a pattern.

    ``name`` is lowercase with hyphens only. ``instructions`` is the markdown
    body written below the SKILL.md frontmatter.
    """

    name: str
    description: str
    instructions: str
    disable_model_invocation: bool = False


@dataclass
class PatternMatch:
    """A recurring pattern that hints at an automatable workflow."""

    id: str
    type: str
    name: str
    description: str
    evidence: List[PatternEvidence]
    confidence: float
    suggested_skill: SkillTemplate

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PatternScanResult:
    """Outcome of a pattern scan."""

    patterns: List[PatternMatch]
    scanned_at: str
    scan_duration_ms: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patterns": [pattern.to_dict() for pattern in self.patterns],
            "scanned_at": self.scanned_at,
            "scan_duration_ms": self.scan_duration_ms,
        }


@dataclass
class PackageManifest:
    """Typed view over the fields of ``package.json`` the detectors consume."""

    name: str = "unknown"
    scripts: Dict[str, str] = field(default_factory=dict)
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    has_typescript: bool = False
    has_linting: bool = False
    has_testing: bool = False
    has_formatting: bool = False
