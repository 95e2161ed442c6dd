"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from projecthealth.cli import NO_CHANGES_MESSAGE, _build_parser, main
from projecthealth.stores import StateStore


def _seed_project(builder) -> Path:
    builder.write(
        {
            "CLAUDE.md": """
            # Project

            This project documents its conventions here for contributors.
            Run the tests, then deploy to staging.
            """,
            "package.json": '{"scripts": {"build": "tsc && webpack && cp dist/* out/", "test": "vitest"}}',
            "src/index.ts": "import { missing } from './missing';\n",
        }
    )
    return builder.path()


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "checkup"])
    assert args.verbose is True
    assert args.command == "checkup"


def test_cli_accepts_options_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["startup", "--dir", "/tmp/x", "--json", "-v"])
    assert args.command == "startup"
    assert args.dir == "/tmp/x"
    assert args.json is True
    assert args.verbose is True


def test_cli_defaults() -> None:
    args = _build_parser().parse_args(["status"])
    assert args.dir == "."
    assert args.json is False
    assert args.verbose is False


def test_decide_rejects_unknown_choice() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["decide", "issue-1", "maybe"])


def test_checkup_prints_report_and_records_state(project_builder, capsys) -> None:
    root = _seed_project(project_builder)

    main(["checkup", "--dir", str(root)])

    out = capsys.readouterr().out
    assert "=== Project Health Report ===" in out
    assert "[CRITICAL] Broken reference in src/index.ts" in out
    assert "/run-build" in out
    state = StateStore(root).state
    assert state.fingerprint is not None
    assert len(state.scan_history) == 1
    assert "run-build" in {suggestion.name for suggestion in state.skill_suggestions}


def test_checkup_json_output(project_builder, capsys) -> None:
    root = _seed_project(project_builder)

    main(["checkup", "--dir", str(root), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert set(payload) == {"scan", "patterns"}
    assert payload["scan"]["file_count"] == 3


def test_startup_reports_no_changes_after_checkup(project_builder, capsys) -> None:
    root = _seed_project(project_builder)
    main(["checkup", "--dir", str(root)])
    capsys.readouterr()

    main(["startup", "--dir", str(root)])

    assert capsys.readouterr().out.strip() == NO_CHANGES_MESSAGE


def test_startup_reminds_about_deferred_items(project_builder, capsys) -> None:
    root = _seed_project(project_builder)
    StateStore(root).record_decision("something", "defer")

    main(["startup", "--dir", str(root)])

    assert "Reminder: You have 1 deferred item(s)." in capsys.readouterr().out


def test_decide_and_status(project_builder, capsys) -> None:
    root = project_builder.path()

    main(["decide", "issue-1", "defer", "--dir", str(root)])
    main(["status", "--dir", str(root)])

    out = capsys.readouterr().out
    assert "Recorded 'defer' for issue-1" in out
    assert "Deferred items: 1" in out
    assert "  - issue-1 (deferred " in out
    assert "Last full scan: Never" in out


def test_skills_create_and_dismiss(project_builder, capsys) -> None:
    root = _seed_project(project_builder)
    main(["checkup", "--dir", str(root), "--json"])
    suggestions = StateStore(root).state.skill_suggestions
    build = next(item for item in suggestions if item.name == "run-build")
    other = next(item for item in suggestions if item.name != "run-build")
    capsys.readouterr()

    main(["skills", "create", build.id, "--dir", str(root)])
    main(["skills", "dismiss", other.id, "--dir", str(root)])
    main(["skills", "list", "--dir", str(root)])

    out = capsys.readouterr().out
    skill_file = root / ".claude" / "skills" / "run-build" / "SKILL.md"
    assert skill_file.exists()
    assert "npm run build" in skill_file.read_text(encoding="utf-8")
    assert "[created] run-build" in out
    assert f"[dismissed] {other.name}" in out


def test_skills_create_refuses_existing_file(project_builder, capsys) -> None:
    root = _seed_project(project_builder)
    main(["checkup", "--dir", str(root), "--json"])
    build = next(item for item in StateStore(root).state.skill_suggestions if item.name == "run-build")
    main(["skills", "create", build.id, "--dir", str(root)])

    with pytest.raises(SystemExit) as excinfo:
        main(["skills", "create", build.id, "--dir", str(root)])

    assert excinfo.value.code == 1
    assert "Use --force to overwrite." in capsys.readouterr().err


def test_unknown_suggestion_exits_with_error(project_builder, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["skills", "dismiss", "nope", "--dir", str(project_builder.path())])

    assert excinfo.value.code == 1
    assert "Unknown skill suggestion: nope" in capsys.readouterr().err


def test_missing_directory_exits_with_error(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["status", "--dir", str(tmp_path / "absent")])

    assert excinfo.value.code == 1
    assert "Project directory not found" in capsys.readouterr().err
