"""Persistent stores used by projecthealth."""

from .state import (
    DeferredItem,
    Preferences,
    ProjectState,
    ScanHistoryEntry,
    SkillSuggestion,
    StateStore,
)

__all__ = [
    "DeferredItem",
    "Preferences",
    "ProjectState",
    "ScanHistoryEntry",
    "SkillSuggestion",
    "StateStore",
]
