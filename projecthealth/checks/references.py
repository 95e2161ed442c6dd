"""Broken relative reference detection."""

from __future__ import annotations

import posixpath
import re
from pathlib import Path
from typing import List, Sequence, Set, Tuple

from ..ids import stable_id
from ..logging import get_logger
from ..models import CHECK_MISSING_REFERENCES, SEVERITY_CRITICAL, FileEntry, HealthIssue
from .base import HealthCheck

_REFERENCE_PATTERNS: tuple[re.Pattern[str], ...] = (
    # import/require/from targets
    re.compile(r"(?:import|require|from)\s*\(?\s*['\"]([^'\"]+)['\"]"),
    # markdown links
    re.compile(r"\[[^\]]*?\]\((?!https?://)([^)]+)\)"),
    # src/href attributes
    re.compile(r"(?:src|href)=[\"'](?!https?://)([^\"']+)[\"']"),
    # quoted relative paths in YAML/JSON/code
    re.compile(r"['\"](\.\.?/[^'\"]+)['\"]"),
)

TEXT_EXTENSIONS = frozenset(
    {
        ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs",
        ".md", ".mdx", ".txt",
        ".html", ".htm", ".css", ".scss",
        ".json", ".yaml", ".yml", ".toml",
        ".py", ".rb", ".go", ".rs",
        ".vue", ".svelte",
    }
)

_RESOLUTION_SUFFIXES: tuple[str, ...] = (
    "",
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    "/index.ts",
    "/index.js",
)

_LINK_TITLE = re.compile(r"\s+[\"'].*[\"']$")

_logger = get_logger("checks.references")


def extract_references(content: str) -> List[str]:
    """Return relative references found in ``content`` in discovery order, without repeats."""
    refs: List[str] = []
    seen: Set[str] = set()
    for pattern in _REFERENCE_PATTERNS:
        for match in pattern.finditer(content):
            ref = _clean_reference(match.group(1))
            if not ref or not ref.startswith(".") or "node_modules" in ref:
                continue
            if ref in seen:
                continue
            seen.add(ref)
            refs.append(ref)
    return refs


def _clean_reference(raw: str) -> str:
    ref = _LINK_TITLE.sub("", raw.strip())
    ref = ref.split("#", 1)[0]
    ref = ref.split("?", 1)[0]
    return ref.strip()


class ReferencesCheck(HealthCheck):
    """Reports relative references whose target does not exist.

    Issue ids hash ``<referencing file>\\n<reference>``.
    """

    name = "references"

    def run(self, files: Sequence[FileEntry], root: Path) -> List[HealthIssue]:
        known_paths = {entry.relative_path for entry in files}
        issues: List[HealthIssue] = []
        reported: Set[Tuple[str, str]] = set()

        for entry in files:
            if entry.is_directory or Path(entry.relative_path).suffix.lower() not in TEXT_EXTENSIONS:
                continue
            try:
                content = Path(entry.path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                _logger.debug("Skipping unreadable file %s: %s", entry.relative_path, exc)
                continue

            for ref in extract_references(content):
                if (entry.relative_path, ref) in reported:
                    continue
                if self._resolves(entry.relative_path, ref, known_paths, root):
                    continue
                reported.add((entry.relative_path, ref))
                issues.append(
                    HealthIssue(
                        id=stable_id("ref-missing", entry.relative_path, ref),
                        check=CHECK_MISSING_REFERENCES,
                        severity=SEVERITY_CRITICAL,
                        title=f"Broken reference in {entry.relative_path}",
                        description=f'"{ref}" is referenced but the target file does not exist',
                        file_paths=[entry.relative_path],
                        suggested_action=f'Fix or remove the reference to "{ref}"',
                    )
                )
        return issues

    @staticmethod
    def _resolves(source: str, ref: str, known_paths: Set[str], root: Path) -> bool:
        target = posixpath.normpath(posixpath.join(posixpath.dirname(source), ref))
        for suffix in _RESOLUTION_SUFFIXES:
            candidate = target + suffix
            if candidate in known_paths:
                return True
            if (root / candidate).exists():
                return True
        return False


__all__ = ["ReferencesCheck", "TEXT_EXTENSIONS", "extract_references"]
