"""Detects instructions that keep being repeated in project documents."""

from __future__ import annotations

import re
from collections import defaultdict
from pathlib import Path
from typing import Dict, List

from ..ids import stable_id
from ..models import PATTERN_REPETITIVE_INSTRUCTION, PatternEvidence, PatternMatch, SkillTemplate
from .base import MAX_EXCERPT_LENGTH, PatternDetector, read_text, skill_name

INSTRUCTION_FILES: tuple[str, ...] = (
    "CLAUDE.md",
    "README.md",
    "CONTRIBUTING.md",
    "ARCHITECTURE.md",
    ".cursorrules",
    ".github/copilot-instructions.md",
)

INSTRUCTION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("always-do", re.compile(r"always\s+(?:use|run|do|make|ensure|check)", re.IGNORECASE)),
    ("never-do", re.compile(r"never\s+(?:use|run|do|make|commit|push)", re.IGNORECASE)),
    ("before-action", re.compile(r"before\s+(?:committing|pushing|deploying|merging)", re.IGNORECASE)),
    ("after-action", re.compile(r"after\s+(?:committing|pushing|deploying|merging)", re.IGNORECASE)),
    ("ensure", re.compile(r"make\s+sure\s+(?:to|that)", re.IGNORECASE)),
    ("reminder", re.compile(r"don'?t\s+forget\s+to", re.IGNORECASE)),
    ("pre-command", re.compile(r"run\s+[`\"]([^`\"]+)[`\"]\s+before", re.IGNORECASE)),
)

MIN_OCCURRENCES = 2
BASE_CONFIDENCE = 0.5
CONFIDENCE_STEP = 0.1
MAX_CONFIDENCE = 0.9


class RepetitiveInstructionDetector(PatternDetector):
    """Groups instruction lines by intent and suggests a skill per repeated intent.

    Ids hash the intent label followed by the sorted excerpts concatenated
    without separator.
    """

    name = "instructions"

    def detect(self, root: Path) -> List[PatternMatch]:
        groups: Dict[str, List[PatternEvidence]] = defaultdict(list)
        for relative in INSTRUCTION_FILES:
            path = root / relative
            if not path.is_file():
                continue
            content = read_text(path)
            if content is None:
                continue
            for number, raw_line in enumerate(content.splitlines(), start=1):
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                for label, pattern in INSTRUCTION_PATTERNS:
                    if pattern.search(line):
                        groups[label].append(
                            PatternEvidence(
                                file_path=relative,
                                excerpt=line[:MAX_EXCERPT_LENGTH],
                                line_number=number,
                            )
                        )

        matches: List[PatternMatch] = []
        for label, evidence in groups.items():
            if len(evidence) < MIN_OCCURRENCES:
                continue
            excerpts = [item.excerpt for item in evidence]
            matches.append(
                PatternMatch(
                    id=stable_id("instr", label + "".join(sorted(excerpts))),
                    type=PATTERN_REPETITIVE_INSTRUCTION,
                    name=f'Repeated "{label}" instructions',
                    description=(
                        f"Found {len(evidence)} similar instructions that could be captured as a reusable skill"
                    ),
                    evidence=evidence,
                    confidence=min(BASE_CONFIDENCE + CONFIDENCE_STEP * len(evidence), MAX_CONFIDENCE),
                    suggested_skill=SkillTemplate(
                        name=skill_name(f"auto-{label}"),
                        description=f'Automates the "{label}" pattern found in project instructions',
                        instructions="\n".join(excerpts),
                    ),
                )
            )
        return matches


__all__ = ["INSTRUCTION_FILES", "INSTRUCTION_PATTERNS", "RepetitiveInstructionDetector"]
