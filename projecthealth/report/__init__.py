"""Report rendering for health scans and pattern scans."""

from .builder import FullReport, generate_report, select_reportable_issues
from .formatter import format_health_report, format_pattern_report, format_summary

__all__ = [
    "FullReport",
    "format_health_report",
    "format_pattern_report",
    "format_summary",
    "generate_report",
    "select_reportable_issues",
]
