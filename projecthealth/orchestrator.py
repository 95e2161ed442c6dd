"""Scan orchestration: walk, fingerprint, run checks and pattern detectors."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Iterable, List, Optional

from .checks import HealthCheck, discover_checks
from .config import ConfigError, ProjectHealthConfig, load_config
from .logging import get_logger
from .models import (
    SEVERITY_RANK,
    HealthIssue,
    PatternMatch,
    PatternScanResult,
    ScanOptions,
    ScanResult,
    utc_timestamp,
)
from .patterns import PatternDetector, discover_detectors
from .walker import DEFAULT_IGNORE, compute_fingerprint, walk_directory


class Orchestrator:
    """Coordinates health scans and pattern scans for a project root."""

    def __init__(
        self,
        checks: Optional[Iterable[HealthCheck]] = None,
        detectors: Optional[Iterable[PatternDetector]] = None,
    ) -> None:
        self._check_overrides = list(checks) if checks is not None else None
        self._detector_overrides = list(detectors) if detectors is not None else None
        self.logger = get_logger("orchestrator")

    def scan(self, options: ScanOptions) -> ScanResult:
        """Run a health scan.

        When ``options.full_scan`` is false and the tree fingerprint equals
        ``options.previous_fingerprint`` no check runs and the result carries
        ``unchanged=True``.
        """
        started = time.perf_counter()
        root = _resolve_root(options.root_dir)
        self.logger.info("Scanning %s", root)

        config = self._load_config(root)
        ignore = options.ignore if options.ignore is not None else config.resolve_ignore(DEFAULT_IGNORE)
        files = walk_directory(root, ignore)
        fingerprint = compute_fingerprint(files)
        file_count = sum(1 for entry in files if not entry.is_directory)

        if not options.full_scan and options.previous_fingerprint == fingerprint:
            self.logger.info("No changes since last scan (%d files)", file_count)
            return ScanResult(
                issues=[],
                scanned_at=utc_timestamp(),
                scan_duration_ms=_elapsed_ms(started),
                file_count=file_count,
                fingerprint=fingerprint,
                unchanged=True,
            )

        issues: List[HealthIssue] = []
        for check in self._select_checks(config):
            self.logger.debug("Running check %s", check.__class__.__name__)
            issues.extend(check.run(files, root))

        issues.sort(key=lambda issue: SEVERITY_RANK.get(issue.severity, len(SEVERITY_RANK)))
        self.logger.info("Found %d issue(s) across %d files", len(issues), file_count)
        return ScanResult(
            issues=issues,
            scanned_at=utc_timestamp(),
            scan_duration_ms=_elapsed_ms(started),
            file_count=file_count,
            fingerprint=fingerprint,
        )

    def scan_patterns(self, root_dir: Path | str) -> PatternScanResult:
        """Run every enabled pattern detector; highest confidence first."""
        started = time.perf_counter()
        root = _resolve_root(root_dir)
        config = self._load_config(root)

        patterns: List[PatternMatch] = []
        for detector in self._select_detectors(config):
            self.logger.debug("Running pattern detector %s", detector.__class__.__name__)
            patterns.extend(detector.detect(root))

        patterns.sort(key=lambda pattern: pattern.confidence, reverse=True)
        self.logger.info("Found %d pattern(s)", len(patterns))
        return PatternScanResult(
            patterns=patterns,
            scanned_at=utc_timestamp(),
            scan_duration_ms=_elapsed_ms(started),
        )

    def _load_config(self, root: Path) -> ProjectHealthConfig:
        try:
            return load_config(root)
        except ConfigError as exc:
            self.logger.warning("Ignoring invalid configuration: %s", exc)
            return ProjectHealthConfig(root=root)

    def _select_checks(self, config: ProjectHealthConfig) -> List[HealthCheck]:
        if self._check_overrides is not None:
            return list(self._check_overrides)
        try:
            return discover_checks(config.checks.enabled)
        except ValueError as exc:
            self.logger.warning("Ignoring checks.enabled: %s", exc)
            return discover_checks()

    def _select_detectors(self, config: ProjectHealthConfig) -> List[PatternDetector]:
        if self._detector_overrides is not None:
            return list(self._detector_overrides)
        try:
            return discover_detectors(config.patterns.enabled)
        except ValueError as exc:
            self.logger.warning("Ignoring patterns.enabled: %s", exc)
            return discover_detectors()


def _resolve_root(root_dir: Path | str) -> Path:
    root = Path(root_dir).expanduser().resolve()
    if not root.exists():
        raise FileNotFoundError(f"Project root does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Project root is not a directory: {root}")
    return root


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


__all__ = ["Orchestrator"]
