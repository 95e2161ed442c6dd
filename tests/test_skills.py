"""Tests for SKILL.md rendering and writing."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from projecthealth.models import SkillTemplate
from projecthealth.skills import render_skill_markdown, skill_path, write_skill


def _frontmatter(markdown: str) -> dict:
    _, header, _ = markdown.split("---\n", 2)
    return yaml.safe_load(header)


def test_render_includes_frontmatter_and_heading() -> None:
    template = SkillTemplate(
        name="run-build",
        description='Run the "build" script: with context',
        instructions="Run the build.\n",
    )

    markdown = render_skill_markdown(template)

    assert markdown.startswith("---\n")
    assert _frontmatter(markdown) == {
        "name": "run-build",
        "description": 'Run the "build" script: with context',
    }
    assert markdown.endswith("---\n\n# run-build\n\nRun the build.\n")


def test_render_keeps_existing_heading() -> None:
    template = SkillTemplate(name="doc-search", description="Search docs", instructions="# doc-search\n\nBody")

    markdown = render_skill_markdown(template)

    assert markdown.count("# doc-search") == 1
    assert markdown.endswith("---\n\n# doc-search\n\nBody\n")


def test_render_sets_model_invocation_flag() -> None:
    template = SkillTemplate(
        name="auto-deploy",
        description="Deploy",
        instructions="Deploy it.",
        disable_model_invocation=True,
    )

    assert _frontmatter(render_skill_markdown(template))["disable-model-invocation"] is True


def test_write_skill_creates_file(tmp_path: Path) -> None:
    template = SkillTemplate(name="Run Tests", description="Run tests", instructions="npm test")

    path = write_skill(tmp_path, template)

    assert path == tmp_path / ".claude" / "skills" / "run-tests" / "SKILL.md"
    assert path == skill_path(tmp_path, "run-tests")
    assert "npm test" in path.read_text(encoding="utf-8")


def test_write_skill_refuses_to_overwrite(tmp_path: Path) -> None:
    template = SkillTemplate(name="run-tests", description="Run tests", instructions="first")
    write_skill(tmp_path, template)

    with pytest.raises(FileExistsError):
        write_skill(tmp_path, SkillTemplate(name="run-tests", description="d", instructions="second"))

    path = write_skill(
        tmp_path, SkillTemplate(name="run-tests", description="d", instructions="second"), overwrite=True
    )
    assert "second" in path.read_text(encoding="utf-8")
