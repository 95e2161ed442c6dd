"""Tests for plain-text report formatting."""

from __future__ import annotations

from projecthealth.models import HealthIssue, PatternEvidence, PatternMatch, SkillTemplate
from projecthealth.report import format_health_report, format_pattern_report, format_summary


def _issue(issue_id: str, severity: str, file_paths=None, **overrides) -> HealthIssue:
    fields = {
        "id": issue_id,
        "check": "directory-sprawl",
        "severity": severity,
        "title": f"Title {issue_id}",
        "description": f"Description {issue_id}.",
        "file_paths": list(file_paths or []),
        "suggested_action": f"Action {issue_id}",
    }
    fields.update(overrides)
    return HealthIssue(**fields)


def _pattern(confidence: float, evidence=None, **overrides) -> PatternMatch:
    fields = {
        "id": "pat-1",
        "type": "repetitive-instruction",
        "name": "Repeated lint config",
        "description": "Lint config copy-pasted across repos.",
        "evidence": list(evidence or []),
        "confidence": confidence,
        "suggested_skill": SkillTemplate(name="lint-setup", description="Standardize linting", instructions="..."),
    }
    fields.update(overrides)
    return PatternMatch(**fields)


def test_no_issues_is_all_clear() -> None:
    assert format_health_report([]) == "Project health check: All clear! No issues found."


def test_single_critical_issue() -> None:
    report = format_health_report(
        [
            _issue(
                "test-1",
                "critical",
                ["src/a/b/c/d/e/f/g/h/i/j"],
                title="Deep nesting detected",
                description="The project has 10 levels of nesting.",
                suggested_action="Flatten directories",
            )
        ]
    )

    assert report.startswith("=== Project Health Report ===\n")
    assert "--- Critical (1) ---" in report
    assert "  1. [CRITICAL] Deep nesting detected" in report
    assert "     The project has 10 levels of nesting." in report
    assert "     Files: src/a/b/c/d/e/f/g/h/i/j" in report
    assert "     Suggested: Flatten directories" in report
    assert "Total: 1 issue(s) found" in report
    assert "Id: test-1" in report


def test_groups_follow_severity_order() -> None:
    report = format_health_report(
        [_issue("info-1", "info"), _issue("crit-1", "critical"), _issue("warn-1", "warning")]
    )

    critical = report.index("Critical (1)")
    warning = report.index("Warning (1)")
    info = report.index("Info (1)")
    assert critical < warning < info


def test_file_paths_are_truncated_after_five() -> None:
    report = format_health_report([_issue("many", "warning", [f"file{index}.ts" for index in range(8)])])

    assert "file0.ts" in report
    assert "file4.ts" in report
    assert "file5.ts" not in report
    assert "(+3 more)" in report


def test_files_line_omitted_without_paths() -> None:
    assert "Files:" not in format_health_report([_issue("none", "info")])


def test_action_prompt_is_appended() -> None:
    report = format_health_report([_issue("any", "info")])

    assert report.endswith("[accept] fix it | [skip] ignore | [defer] handle later")


def test_previous_choice_is_shown() -> None:
    report = format_health_report([_issue("d", "warning", user_choice="defer")])

    assert "Previously: defer" in report


def test_no_patterns_message() -> None:
    assert format_pattern_report([]) == "Pattern scan: No reusable patterns detected."


def test_single_pattern_with_evidence() -> None:
    report = format_pattern_report(
        [
            _pattern(
                0.85,
                [PatternEvidence(file_path=".eslintrc.js", excerpt="module.exports = {}", line_number=1)],
            )
        ]
    )

    assert "=== Skill Suggestions ===" in report
    assert "Found 1 pattern(s) that could become reusable skills:" in report
    assert "  1. [85% confidence] Repeated lint config" in report
    assert "     Evidence:" in report
    assert '       - .eslintrc.js:1: "module.exports = {}"' in report
    assert "     Suggested skill: /lint-setup" in report
    assert report.endswith("Would you like to create any of these skills?")


def test_evidence_is_limited_to_three() -> None:
    evidence = [
        PatternEvidence(file_path=f"file{index}.ts", excerpt=f"evidence {index}", line_number=index + 1)
        for index in range(5)
    ]
    report = format_pattern_report([_pattern(0.5, evidence)])

    assert "file2.ts" in report
    assert "file3.ts" not in report


def test_evidence_without_line_number_has_no_suffix() -> None:
    report = format_pattern_report([_pattern(0.5, [PatternEvidence(file_path="src", excerpt="Directory contains: .ts")])])

    assert '- src: "Directory contains: .ts"' in report


def test_confidence_is_rounded() -> None:
    assert "[33% confidence]" in format_pattern_report([_pattern(0.333)])
    assert "[55% confidence]" in format_pattern_report([_pattern(0.55)])


def test_evidence_section_omitted_when_empty() -> None:
    assert "Evidence:" not in format_pattern_report([_pattern(0.9)])


def test_summary_lines() -> None:
    assert format_summary(5, 3, 142, 200) == (
        "Scanned 200 files in 142ms\nFound 5 health issue(s) and 3 skill suggestion(s)"
    )
    assert "Scanned 0 files in 50ms" in format_summary(0, 0, 50, 0)
