"""Detects automation opportunities in ``package.json``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..ids import stable_id
from ..logging import get_logger
from ..models import PATTERN_CONFIG, PackageManifest, PatternEvidence, PatternMatch, SkillTemplate
from .base import PatternDetector, skill_name

MANIFEST_FILENAME = "package.json"
COMPLEX_SCRIPT_LENGTH = 80
MAX_COMMAND_EXCERPT = 150

LINT_SCRIPTS = frozenset({"lint", "eslint"})
TEST_SCRIPTS = frozenset({"test", "jest", "vitest"})
FORMAT_SCRIPTS = frozenset({"format", "prettier"})

_logger = get_logger("patterns.config")


def _string_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(key): item for key, item in value.items() if isinstance(item, str)}


def load_package_manifest(root: Path) -> Optional[PackageManifest]:
    """Parse ``package.json`` under ``root``; None when absent or malformed."""
    path = root / MANIFEST_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        _logger.debug("Ignoring unreadable manifest %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        _logger.debug("Ignoring manifest %s: top-level value is not an object", path)
        return None

    scripts = _string_map(data.get("scripts"))
    dependencies = _string_map(data.get("dependencies"))
    dev_dependencies = _string_map(data.get("devDependencies"))
    name = data.get("name")
    return PackageManifest(
        name=name if isinstance(name, str) and name else "unknown",
        scripts=scripts,
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
        has_typescript="typescript" in dependencies or "typescript" in dev_dependencies,
        has_linting=bool(LINT_SCRIPTS & scripts.keys()),
        has_testing=bool(TEST_SCRIPTS & scripts.keys()),
        has_formatting=bool(FORMAT_SCRIPTS & scripts.keys()),
    )


def is_complex_script(command: str) -> bool:
    return "&&" in command or "|" in command or len(command) > COMPLEX_SCRIPT_LENGTH


class ConfigPatternDetector(PatternDetector):
    name = "config"

    def detect(self, root: Path) -> List[PatternMatch]:
        manifest = load_package_manifest(root)
        if manifest is None:
            return []

        matches: List[PatternMatch] = []
        for script, command in manifest.scripts.items():
            if not is_complex_script(command):
                continue
            matches.append(
                PatternMatch(
                    id=stable_id("cfg-script", script),
                    type=PATTERN_CONFIG,
                    name=f'Complex script: "{script}"',
                    description=(
                        f'The "{script}" script is complex and could be wrapped as a skill '
                        "for easier invocation"
                    ),
                    evidence=[
                        PatternEvidence(
                            file_path=MANIFEST_FILENAME,
                            excerpt=f'"{script}": "{command[:MAX_COMMAND_EXCERPT]}"',
                        )
                    ],
                    confidence=0.6,
                    suggested_skill=SkillTemplate(
                        name=skill_name(f"run-{script}"),
                        description=f'Run the "{script}" script with proper context',
                        instructions=(
                            f'Run the project\'s "{script}" script:\n```bash\nnpm run {script}\n```\n\n'
                            "If it fails, analyze the error and suggest fixes."
                        ),
                    ),
                )
            )

        if manifest.has_typescript and not manifest.has_linting:
            matches.append(
                PatternMatch(
                    id="cfg-missing-lint",
                    type=PATTERN_CONFIG,
                    name="No linting configured",
                    description="TypeScript project without a lint script. Consider adding ESLint for code quality.",
                    evidence=[PatternEvidence(file_path=MANIFEST_FILENAME, excerpt="No lint script found")],
                    confidence=0.5,
                    suggested_skill=SkillTemplate(
                        name="setup-linting",
                        description="Set up ESLint for the project",
                        instructions=(
                            "Set up ESLint with TypeScript support for this project. Install the "
                            "necessary dependencies and create a configuration file."
                        ),
                    ),
                )
            )

        if not manifest.has_testing:
            matches.append(
                PatternMatch(
                    id="cfg-missing-test",
                    type=PATTERN_CONFIG,
                    name="No testing configured",
                    description="Project without a test script. Consider adding a test framework.",
                    evidence=[PatternEvidence(file_path=MANIFEST_FILENAME, excerpt="No test script found")],
                    confidence=0.4,
                    suggested_skill=SkillTemplate(
                        name="setup-testing",
                        description="Set up a test framework for the project",
                        instructions=(
                            "Set up Vitest (or Jest) for this project. Install dependencies, configure "
                            "the test runner and create a sample test file."
                        ),
                    ),
                )
            )
        return matches


__all__ = ["ConfigPatternDetector", "is_complex_script", "load_package_manifest"]
