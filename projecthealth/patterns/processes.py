"""Detects manual workflows described in docs and build scripts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from ..ids import stable_id
from ..models import PATTERN_MANUAL_PROCESS, PatternEvidence, PatternMatch, SkillTemplate
from .base import MAX_EXCERPT_LENGTH, PatternDetector, read_text


@dataclass(frozen=True)
class ProcessIndicator:
    """A manual-workflow phrase bound to the skill that would automate it."""

    pattern: re.Pattern[str]
    tool: str
    skill_name: str
    description: str


PROCESS_INDICATORS: tuple[ProcessIndicator, ...] = (
    ProcessIndicator(
        re.compile(r"(?:manually|by hand)\s+(?:copy|move|rename|delete|create)", re.IGNORECASE),
        "filesystem MCP",
        "file-operations",
        "Automate file operations with filesystem tools",
    ),
    ProcessIndicator(
        re.compile(r"(?:open|check|visit)\s+(?:the\s+)?(?:browser|URL|website|page)", re.IGNORECASE),
        "web-fetch MCP",
        "web-check",
        "Automate web checks with fetch tools",
    ),
    ProcessIndicator(
        re.compile(
            r"(?:search|look|find)\s+(?:for|through|in)\s+(?:the\s+)?(?:docs|documentation)",
            re.IGNORECASE,
        ),
        "web-search MCP",
        "doc-search",
        "Search documentation automatically",
    ),
    ProcessIndicator(
        re.compile(r"(?:format|lint|prettify|beautify)\s+(?:the\s+)?(?:code|files?)", re.IGNORECASE),
        "pre-commit hook",
        "auto-format",
        "Set up automatic code formatting",
    ),
    ProcessIndicator(
        re.compile(
            r"(?:deploy|push|upload)\s+(?:to|the)\s+(?:server|production|staging)",
            re.IGNORECASE,
        ),
        "deployment skill",
        "auto-deploy",
        "Create a deployment skill",
    ),
    ProcessIndicator(
        re.compile(r"(?:run|execute)\s+(?:the\s+)?(?:tests?|test suite|specs?)", re.IGNORECASE),
        "test-runner skill",
        "run-tests",
        "Create a test-running skill",
    ),
)

SCANNABLE_FILES: tuple[str, ...] = (
    "CLAUDE.md",
    "README.md",
    "CONTRIBUTING.md",
    "Makefile",
    "justfile",
    "scripts/*.sh",
    "package.json",
)

BASE_CONFIDENCE = 0.4
CONFIDENCE_PER_LINE = 0.15
MAX_INITIAL_CONFIDENCE = 0.9
CONFIDENCE_PER_EXTRA_FILE = 0.1
MAX_CONFIDENCE = 0.95


def _files_to_scan(root: Path) -> List[Path]:
    paths: List[Path] = []
    for pattern in SCANNABLE_FILES:
        if "*" in pattern:
            paths.extend(sorted(path for path in root.glob(pattern) if path.is_file()))
        else:
            candidate = root / pattern
            if candidate.is_file():
                paths.append(candidate)
    return paths


class ManualProcessDetector(PatternDetector):
    """Suggests skills for manual steps; one match per target skill.

    Ids hash ``<skill name>\\n<first file with evidence>``.
    """

    name = "processes"

    def detect(self, root: Path) -> List[PatternMatch]:
        matches: List[PatternMatch] = []
        by_skill: Dict[str, PatternMatch] = {}

        for path in _files_to_scan(root):
            content = read_text(path)
            if content is None:
                continue
            relative = path.relative_to(root).as_posix()
            lines = content.splitlines()

            for indicator in PROCESS_INDICATORS:
                evidence = [
                    PatternEvidence(
                        file_path=relative,
                        excerpt=line.strip()[:MAX_EXCERPT_LENGTH],
                        line_number=number,
                    )
                    for number, line in enumerate(lines, start=1)
                    if indicator.pattern.search(line)
                ]
                if not evidence:
                    continue

                existing = by_skill.get(indicator.skill_name)
                if existing is not None:
                    existing.evidence.extend(evidence)
                    existing.confidence = min(existing.confidence + CONFIDENCE_PER_EXTRA_FILE, MAX_CONFIDENCE)
                    continue

                match = PatternMatch(
                    id=stable_id("proc", indicator.skill_name, relative),
                    type=PATTERN_MANUAL_PROCESS,
                    name=f"Manual process: {indicator.description}",
                    description=(
                        "Found references to manual processes that could be automated with "
                        f"{indicator.tool}"
                    ),
                    evidence=evidence,
                    confidence=min(
                        BASE_CONFIDENCE + CONFIDENCE_PER_LINE * len(evidence), MAX_INITIAL_CONFIDENCE
                    ),
                    suggested_skill=SkillTemplate(
                        name=indicator.skill_name,
                        description=indicator.description,
                        instructions=(
                            f"# {indicator.skill_name}\n\n{indicator.description}\n\n"
                            "This skill automates the manual process detected in your project files."
                        ),
                    ),
                )
                by_skill[indicator.skill_name] = match
                matches.append(match)
        return matches


__all__ = ["ManualProcessDetector", "PROCESS_INDICATORS", "ProcessIndicator", "SCANNABLE_FILES"]
