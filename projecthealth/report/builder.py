"""Combine scan results with persisted decisions into a user-facing report."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Set

from ..models import ACTION_DEFER, HealthIssue, PatternScanResult, ScanResult
from ..stores import StateStore
from .formatter import format_health_report, format_pattern_report, format_summary


@dataclass
class FullReport:
    """Rendered report sections plus the JSON-ready data behind them."""

    summary: str
    health_report: str
    pattern_report: str
    raw: Dict[str, Any]


def select_reportable_issues(scan: ScanResult, store: StateStore) -> List[HealthIssue]:
    """Return undecided issues followed by issues still deferred, each id once.

    Deferred issues carry ``user_choice="defer"``. An issue the user later
    accepted or skipped stays hidden even though its deferral is kept on record.
    """
    decisions = store.state.decisions
    still_deferred = {
        item.issue_id for item in store.get_deferred_items() if decisions.get(item.issue_id) == ACTION_DEFER
    }

    selected: List[HealthIssue] = []
    seen: Set[str] = set()
    for issue in scan.issues:
        if store.is_already_decided(issue.id) or issue.id in seen:
            continue
        seen.add(issue.id)
        selected.append(issue)
    for issue in scan.issues:
        if issue.id not in still_deferred or issue.id in seen:
            continue
        seen.add(issue.id)
        selected.append(replace(issue, user_choice=ACTION_DEFER))
    return selected


def generate_report(scan: ScanResult, patterns: PatternScanResult, store: StateStore) -> FullReport:
    issues = select_reportable_issues(scan, store)
    raw_scan = scan.to_dict()
    raw_scan["issues"] = [issue.to_dict() for issue in issues]
    return FullReport(
        summary=format_summary(
            len(issues),
            len(patterns.patterns),
            scan.scan_duration_ms + patterns.scan_duration_ms,
            scan.file_count,
        ),
        health_report=format_health_report(issues),
        pattern_report=format_pattern_report(patterns.patterns),
        raw={"scan": raw_scan, "patterns": patterns.to_dict()},
    )


__all__ = ["FullReport", "generate_report", "select_reportable_issues"]
