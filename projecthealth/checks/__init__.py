"""Health check implementations and discovery utilities."""

from __future__ import annotations

from typing import Callable, List, Sequence

from .._plugins import load_plugins
from .base import HealthCheck
from .duplicates import DuplicatesCheck
from .freshness import FreshnessCheck
from .naming import NamingCheck
from .references import ReferencesCheck
from .structure import StructureCheck

_ENTRY_POINT_GROUP = "projecthealth.checks"

_BUILTIN_FACTORIES: dict[str, Callable[[], HealthCheck]] = {
    "duplicates": DuplicatesCheck,
    "references": ReferencesCheck,
    "freshness": FreshnessCheck,
    "structure": StructureCheck,
    "naming": NamingCheck,
}


def discover_checks(enabled: Sequence[str] | None = None) -> List[HealthCheck]:
    """Return instantiated health checks in run order, honoring optional enabled names."""
    return load_plugins(
        HealthCheck,
        _BUILTIN_FACTORIES,
        _ENTRY_POINT_GROUP,
        enabled=enabled,
    )


__all__ = [
    "DuplicatesCheck",
    "FreshnessCheck",
    "HealthCheck",
    "NamingCheck",
    "ReferencesCheck",
    "StructureCheck",
    "discover_checks",
]
