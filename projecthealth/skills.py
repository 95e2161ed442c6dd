"""Render suggested skills into ``SKILL.md`` files."""

from __future__ import annotations

from pathlib import Path

import yaml
from jinja2 import Environment, FileSystemLoader

from .logging import get_logger
from .models import SkillTemplate
from .patterns.base import skill_name

SKILLS_DIR = Path(".claude") / "skills"
SKILL_FILENAME = "SKILL.md"
_TEMPLATE_NAME = "skill.md.j2"
# Keeps each frontmatter value on a single line.
_FRONTMATTER_WIDTH = 4096

_logger = get_logger("skills")


def _create_env() -> Environment:
    loader = FileSystemLoader(str(Path(__file__).with_name("templates")))
    return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def skill_path(root: Path | str, name: str) -> Path:
    """Location of the ``SKILL.md`` for ``name`` inside the project ``root``."""
    return Path(root) / SKILLS_DIR / skill_name(name) / SKILL_FILENAME


def render_skill_markdown(template: SkillTemplate) -> str:
    """Return the ``SKILL.md`` text: YAML frontmatter followed by the instructions."""
    frontmatter = {"name": skill_name(template.name), "description": template.description}
    if template.disable_model_invocation:
        frontmatter["disable-model-invocation"] = True
    instructions = template.instructions.strip()
    rendered = (
        _create_env()
        .get_template(_TEMPLATE_NAME)
        .render(
            frontmatter=yaml.safe_dump(
                frontmatter, sort_keys=False, allow_unicode=True, width=_FRONTMATTER_WIDTH
            ).strip(),
            heading=None if instructions.startswith("#") else frontmatter["name"],
            instructions=instructions,
        )
    )
    return rendered.rstrip("\n") + "\n"


def write_skill(root: Path | str, template: SkillTemplate, *, overwrite: bool = False) -> Path:
    """Write the skill under ``.claude/skills/<name>/``; raise FileExistsError unless ``overwrite``."""
    target = skill_path(root, template.name)
    if target.exists() and not overwrite:
        raise FileExistsError(f"Skill already exists: {target}")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_skill_markdown(template), encoding="utf-8")
    _logger.info("Wrote skill %s", target)
    return target


__all__ = ["render_skill_markdown", "skill_path", "write_skill"]
