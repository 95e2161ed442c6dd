"""Configuration loading for projecthealth (.projecthealth.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".projecthealth.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ChecksConfig:
    """Health check enablement; None runs every check."""

    enabled: Optional[List[str]] = None


@dataclass
class PatternsConfig:
    """Pattern detector enablement; None runs every detector."""

    enabled: Optional[List[str]] = None


@dataclass
class ProjectHealthConfig:
    """Represents the settings defined in .projecthealth.yml."""

    root: Path
    ignore: Optional[List[str]] = None
    exclude_paths: List[str] = field(default_factory=list)
    checks: ChecksConfig = field(default_factory=ChecksConfig)
    patterns: PatternsConfig = field(default_factory=PatternsConfig)

    def resolve_ignore(self, defaults: Sequence[str]) -> List[str]:
        """Return the effective ignore names: override (or defaults) plus exclusions."""
        base = list(self.ignore) if self.ignore is not None else list(defaults)
        for name in self.exclude_paths:
            if name not in base:
                base.append(name)
        return base


def load_config(config_path: Path) -> ProjectHealthConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProjectHealthConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    ignore = _as_str_list(data["ignore"]) if data.get("ignore") is not None else None

    checks = ChecksConfig()
    checks_data = _as_dict(data.get("checks"))
    if checks_data.get("enabled") is not None:
        checks.enabled = _as_str_list(checks_data["enabled"])

    patterns = PatternsConfig()
    patterns_data = _as_dict(data.get("patterns"))
    if patterns_data.get("enabled") is not None:
        patterns.enabled = _as_str_list(patterns_data["enabled"])

    return ProjectHealthConfig(
        root=root,
        ignore=ignore,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        checks=checks,
        patterns=patterns,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ChecksConfig",
    "ConfigError",
    "PatternsConfig",
    "ProjectHealthConfig",
    "load_config",
]
