"""CLI entrypoints for projecthealth commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

from .logging import configure_logging
from .models import ACTION_CHOICES, PatternMatch, ScanOptions, SkillTemplate
from .orchestrator import Orchestrator
from .report import generate_report
from .skills import write_skill
from .stores import StateStore
from .stores.state import SKILL_CREATED, SKILL_DISMISSED, SkillSuggestion

NO_CHANGES_MESSAGE = "No changes detected since last scan. Project looks good!"


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_options(parser: argparse.ArgumentParser, *, suppress_default: bool = False) -> None:
    _add_verbose_option(parser, suppress_default=suppress_default)
    parser.add_argument(
        "--dir",
        default=argparse.SUPPRESS if suppress_default else ".",
        help="Project root directory (defaults to current directory).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Print raw JSON instead of the formatted report.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projecthealth",
        description="Scan a project for health issues and suggest reusable skills.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    checkup_parser = subparsers.add_parser(
        "checkup",
        help="Run a full project health scan and pattern scan.",
    )
    _add_common_options(checkup_parser, suppress_default=True)

    startup_parser = subparsers.add_parser(
        "startup",
        help="Run a light scan that stops early when nothing changed.",
    )
    _add_common_options(startup_parser, suppress_default=True)

    status_parser = subparsers.add_parser(
        "status",
        help="Show the stored project state, deferred items and skill suggestions.",
    )
    _add_common_options(status_parser, suppress_default=True)

    decide_parser = subparsers.add_parser(
        "decide",
        help="Record a decision for a health issue.",
    )
    _add_common_options(decide_parser, suppress_default=True)
    decide_parser.add_argument("issue_id", help="Issue id as printed by checkup.")
    decide_parser.add_argument("choice", choices=ACTION_CHOICES, help="Decision to record.")

    skills_parser = subparsers.add_parser(
        "skills",
        help="Manage suggested skills.",
    )
    _add_common_options(skills_parser, suppress_default=True)
    skills_sub = skills_parser.add_subparsers(dest="skills_command", required=True)

    list_parser = skills_sub.add_parser("list", help="List recorded skill suggestions.")
    _add_common_options(list_parser, suppress_default=True)

    create_parser = skills_sub.add_parser("create", help="Write SKILL.md for a suggestion.")
    _add_common_options(create_parser, suppress_default=True)
    create_parser.add_argument("suggestion_id", help="Suggestion id as printed by checkup.")
    create_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing SKILL.md.",
    )

    dismiss_parser = skills_sub.add_parser("dismiss", help="Dismiss a suggestion.")
    _add_common_options(dismiss_parser, suppress_default=True)
    dismiss_parser.add_argument("suggestion_id", help="Suggestion id as printed by checkup.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for projecthealth commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    root = Path(args.dir).expanduser().resolve()
    if not root.is_dir():
        parser.exit(1, f"Project directory not found: {root}\n")

    orchestrator = Orchestrator()
    as_json = bool(args.json)

    try:
        if args.command == "checkup":
            _run_checkup(orchestrator, root, as_json)
        elif args.command == "startup":
            _run_startup(orchestrator, root, as_json)
        elif args.command == "status":
            _show_status(root, as_json)
        elif args.command == "decide":
            StateStore(root).record_decision(args.issue_id, args.choice)
            print(f"Recorded '{args.choice}' for {args.issue_id}")
        elif args.command == "skills":
            _run_skills(parser, orchestrator, root, args, as_json)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except FileExistsError as exc:
        parser.exit(1, f"{exc}\nUse --force to overwrite.\n")
    except (OSError, ValueError) as exc:
        parser.exit(1, f"projecthealth {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_checkup(orchestrator: Orchestrator, root: Path, as_json: bool) -> None:
    store = StateStore(root)
    scan = orchestrator.scan(ScanOptions(root_dir=str(root), full_scan=True))
    patterns = orchestrator.scan_patterns(root)
    store.record_scan(scan)
    for pattern in patterns.patterns:
        store.add_skill_suggestion(
            suggestion_id=pattern.id,
            name=pattern.suggested_skill.name,
            description=pattern.suggested_skill.description,
            pattern=pattern.type,
        )

    report = generate_report(scan, patterns, store)
    if as_json:
        _print_json(report.raw)
        return
    print(report.summary)
    print()
    print(report.health_report)
    print()
    print(report.pattern_report)


def _run_startup(orchestrator: Orchestrator, root: Path, as_json: bool) -> None:
    store = StateStore(root)
    preferences = store.state.preferences
    if not preferences.auto_scan_on_startup:
        print("Startup scan disabled in project preferences.")
        return

    scan = orchestrator.scan(
        ScanOptions(
            root_dir=str(root),
            full_scan=preferences.scan_depth == "full",
            previous_fingerprint=store.get_fingerprint(),
        )
    )
    if scan.unchanged:
        if as_json:
            _print_json({"scan": scan.to_dict()})
        else:
            print(NO_CHANGES_MESSAGE)
        return

    patterns = orchestrator.scan_patterns(root)
    store.record_scan(scan)
    report = generate_report(scan, patterns, store)
    if as_json:
        _print_json(report.raw)
        return

    print(report.summary)
    if report.raw["scan"]["issues"]:
        print()
        print(report.health_report)
    deferred = store.get_deferred_items()
    if deferred:
        print()
        print(f"Reminder: You have {len(deferred)} deferred item(s). Run `projecthealth checkup` to review.")


def _show_status(root: Path, as_json: bool) -> None:
    state = StateStore(root).state
    if as_json:
        _print_json(state.to_dict())
        return

    print("=== Project Status ===")
    print()
    print(f"Project: {state.project_root}")
    print(f"Last full scan: {state.last_full_scan or 'Never'}")
    print(f"Scan history: {len(state.scan_history)} scan(s)")
    print(f"Deferred items: {len(state.deferred)}")
    print(f"Skill suggestions: {len(state.skill_suggestions)}")
    if state.deferred:
        print()
        print("Deferred items:")
        for item in state.deferred:
            print(f"  - {item.issue_id} (deferred {item.deferred_at})")
    if state.skill_suggestions:
        print()
        print("Skill suggestions:")
        for suggestion in state.skill_suggestions:
            print(_describe_suggestion(suggestion))


def _run_skills(
    parser: argparse.ArgumentParser,
    orchestrator: Orchestrator,
    root: Path,
    args: argparse.Namespace,
    as_json: bool,
) -> None:
    store = StateStore(root)
    if args.skills_command == "list":
        suggestions = store.state.skill_suggestions
        if as_json:
            _print_json([asdict(suggestion) for suggestion in suggestions])
        elif not suggestions:
            print("No skill suggestions recorded. Run `projecthealth checkup` first.")
        else:
            for suggestion in suggestions:
                print(_describe_suggestion(suggestion))
        return

    suggestion = store.find_skill_suggestion(args.suggestion_id)
    if suggestion is None:
        parser.exit(1, f"Unknown skill suggestion: {args.suggestion_id}\n")

    if args.skills_command == "dismiss":
        store.update_skill_suggestion_status(suggestion.id, SKILL_DISMISSED)
        print(f"Dismissed {suggestion.name}")
        return

    template = _template_for(orchestrator, root, suggestion)
    path = write_skill(root, template, overwrite=bool(getattr(args, "force", False)))
    store.update_skill_suggestion_status(suggestion.id, SKILL_CREATED)
    print(f"Skill created at {_relativize(path)}")


def _template_for(orchestrator: Orchestrator, root: Path, suggestion: SkillSuggestion) -> SkillTemplate:
    match: Optional[PatternMatch] = next(
        (pattern for pattern in orchestrator.scan_patterns(root).patterns if pattern.id == suggestion.id),
        None,
    )
    if match is not None:
        return match.suggested_skill
    # The pattern no longer shows up; fall back to what was recorded.
    return SkillTemplate(
        name=suggestion.name,
        description=suggestion.description,
        instructions=suggestion.description,
    )


def _describe_suggestion(suggestion: SkillSuggestion) -> str:
    return f"  - [{suggestion.status}] {suggestion.name}: {suggestion.description} ({suggestion.id})"


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
