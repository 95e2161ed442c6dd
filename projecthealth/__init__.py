"""Project health scanning and skill suggestions."""

from .models import HealthIssue, PatternMatch, PatternScanResult, ScanOptions, ScanResult
from .orchestrator import Orchestrator
from .stores import StateStore

__version__ = "0.1.0"

__all__ = [
    "HealthIssue",
    "Orchestrator",
    "PatternMatch",
    "PatternScanResult",
    "ScanOptions",
    "ScanResult",
    "StateStore",
    "__version__",
]
