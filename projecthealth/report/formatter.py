"""Plain-text rendering of health issues, pattern matches and scan summaries."""

from __future__ import annotations

from typing import List, Sequence

from ..models import (
    SEVERITY_CRITICAL,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    HealthIssue,
    PatternMatch,
)

SEVERITY_MARKERS = {
    SEVERITY_CRITICAL: "[CRITICAL]",
    SEVERITY_WARNING: "[WARNING]",
    SEVERITY_INFO: "[INFO]",
}
SEVERITY_ORDER = (SEVERITY_CRITICAL, SEVERITY_WARNING, SEVERITY_INFO)

MAX_LISTED_PATHS = 5
MAX_LISTED_EVIDENCE = 3
MAX_EVIDENCE_EXCERPT = 100

ALL_CLEAR = "Project health check: All clear! No issues found."
NO_PATTERNS = "Pattern scan: No reusable patterns detected."
ACTION_PROMPT = "For each issue, choose: [accept] fix it | [skip] ignore | [defer] handle later"


def _format_issue(issue: HealthIssue, index: int) -> str:
    lines = [
        f"  {index}. {SEVERITY_MARKERS.get(issue.severity, '[INFO]')} {issue.title}",
        f"     {issue.description}",
    ]
    if issue.file_paths:
        listed = ", ".join(issue.file_paths[:MAX_LISTED_PATHS])
        hidden = len(issue.file_paths) - MAX_LISTED_PATHS
        suffix = f" (+{hidden} more)" if hidden > 0 else ""
        lines.append(f"     Files: {listed}{suffix}")
    if issue.user_choice:
        lines.append(f"     Previously: {issue.user_choice}")
    lines.append(f"     Suggested: {issue.suggested_action}")
    lines.append(f"     Id: {issue.id}")
    return "\n".join(lines)


def _percent(confidence: float) -> int:
    return int(confidence * 100 + 0.5)


def _format_pattern(pattern: PatternMatch, index: int) -> str:
    lines = [
        f"  {index}. [{_percent(pattern.confidence)}% confidence] {pattern.name}",
        f"     {pattern.description}",
    ]
    if pattern.evidence:
        lines.append("     Evidence:")
        for evidence in pattern.evidence[:MAX_LISTED_EVIDENCE]:
            location = f":{evidence.line_number}" if evidence.line_number else ""
            excerpt = evidence.excerpt[:MAX_EVIDENCE_EXCERPT]
            lines.append(f'       - {evidence.file_path}{location}: "{excerpt}"')
    lines.append(f"     Suggested skill: /{pattern.suggested_skill.name}")
    lines.append(f"     Id: {pattern.id}")
    return "\n".join(lines)


def format_health_report(issues: Sequence[HealthIssue]) -> str:
    """Render issues grouped by severity, most severe first."""
    if not issues:
        return ALL_CLEAR

    lines: List[str] = ["=== Project Health Report ===", ""]
    for severity in SEVERITY_ORDER:
        group = [issue for issue in issues if issue.severity == severity]
        if not group:
            continue
        lines.append(f"--- {severity.capitalize()} ({len(group)}) ---")
        lines.extend(_format_issue(issue, index) for index, issue in enumerate(group, start=1))
        lines.append("")

    lines.append(f"Total: {len(issues)} issue(s) found")
    lines.append("")
    lines.append(ACTION_PROMPT)
    return "\n".join(lines)


def format_pattern_report(patterns: Sequence[PatternMatch]) -> str:
    if not patterns:
        return NO_PATTERNS

    lines: List[str] = [
        "=== Skill Suggestions ===",
        "",
        f"Found {len(patterns)} pattern(s) that could become reusable skills:",
        "",
    ]
    for index, pattern in enumerate(patterns, start=1):
        lines.append(_format_pattern(pattern, index))
        lines.append("")
    lines.append("Would you like to create any of these skills?")
    return "\n".join(lines)


def format_summary(issue_count: int, pattern_count: int, duration_ms: int, file_count: int) -> str:
    return (
        f"Scanned {file_count} files in {duration_ms}ms\n"
        f"Found {issue_count} health issue(s) and {pattern_count} skill suggestion(s)"
    )


__all__ = ["format_health_report", "format_pattern_report", "format_summary"]
