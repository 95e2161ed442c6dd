"""Persistent per-project state: scan history, decisions and skill suggestions."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..logging import get_logger
from ..models import ACTION_CHOICES, ACTION_DEFER, ScanResult, utc_timestamp

STATE_DIRNAME = ".projecthealth"
STATE_FILENAME = "state.json"
STATE_VERSION = 1
HISTORY_LIMIT = 20

SKILL_SUGGESTED = "suggested"
SKILL_CREATED = "created"
SKILL_DISMISSED = "dismissed"
SKILL_STATUSES = (SKILL_SUGGESTED, SKILL_CREATED, SKILL_DISMISSED)

SCAN_DEPTHS = ("full", "light")

_logger = get_logger("state")


@dataclass
class DeferredItem:
    issue_id: str
    deferred_at: str
    reason: Optional[str] = None


@dataclass
class ScanHistoryEntry:
    scanned_at: str
    file_count: int
    issue_count: int
    fingerprint: str


@dataclass
class SkillSuggestion:
    id: str
    name: str
    description: str
    pattern: str
    suggested_at: str
    status: str = SKILL_SUGGESTED


@dataclass
class Preferences:
    auto_scan_on_startup: bool = True
    scan_depth: str = "light"


@dataclass
class ProjectState:
    """The persisted record for one project root."""

    project_root: str
    version: int = STATE_VERSION
    fingerprint: Optional[str] = None
    last_full_scan: Optional[str] = None
    scan_history: List[ScanHistoryEntry] = field(default_factory=list)
    deferred: List[DeferredItem] = field(default_factory=list)
    skill_suggestions: List[SkillSuggestion] = field(default_factory=list)
    preferences: Preferences = field(default_factory=Preferences)
    decisions: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class StateStore:
    """Loads and persists the state record stored under ``<root>/.projecthealth/``.

    Every mutating call writes the whole record back to disk. A missing or
    corrupt file is never fatal: each field that cannot be read falls back
    to its default.
    """

    def __init__(self, project_root: Path | str) -> None:
        self._root = Path(project_root)
        self._path = self._root / STATE_DIRNAME / STATE_FILENAME
        self._state = self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def state(self) -> ProjectState:
        return self._state

    def get_fingerprint(self) -> Optional[str]:
        return self._state.fingerprint

    def record_scan(self, result: ScanResult) -> None:
        self._state.fingerprint = result.fingerprint
        self._state.last_full_scan = result.scanned_at
        self._state.scan_history.append(
            ScanHistoryEntry(
                scanned_at=result.scanned_at,
                file_count=result.file_count,
                issue_count=len(result.issues),
                fingerprint=result.fingerprint,
            )
        )
        if len(self._state.scan_history) > HISTORY_LIMIT:
            self._state.scan_history = self._state.scan_history[-HISTORY_LIMIT:]
        self.save()

    def record_decision(self, issue_id: str, choice: str) -> None:
        if choice not in ACTION_CHOICES:
            raise ValueError(f"Unknown decision '{choice}'. Expected one of: {', '.join(ACTION_CHOICES)}")
        self._state.decisions[issue_id] = choice
        if choice == ACTION_DEFER and not any(item.issue_id == issue_id for item in self._state.deferred):
            self._state.deferred.append(DeferredItem(issue_id=issue_id, deferred_at=utc_timestamp()))
        self.save()

    def is_already_decided(self, issue_id: str) -> bool:
        return issue_id in self._state.decisions

    def get_deferred_items(self) -> List[DeferredItem]:
        return self._state.deferred

    def add_skill_suggestion(
        self, *, suggestion_id: str, name: str, description: str, pattern: str
    ) -> None:
        """Record a suggestion; a second call with the same id changes nothing."""
        if self.find_skill_suggestion(suggestion_id) is not None:
            return
        self._state.skill_suggestions.append(
            SkillSuggestion(
                id=suggestion_id,
                name=name,
                description=description,
                pattern=pattern,
                suggested_at=utc_timestamp(),
            )
        )
        self.save()

    def find_skill_suggestion(self, suggestion_id: str) -> Optional[SkillSuggestion]:
        for suggestion in self._state.skill_suggestions:
            if suggestion.id == suggestion_id:
                return suggestion
        return None

    def update_skill_suggestion_status(self, suggestion_id: str, status: str) -> None:
        if status not in SKILL_STATUSES:
            raise ValueError(f"Unknown skill status '{status}'. Expected one of: {', '.join(SKILL_STATUSES)}")
        suggestion = self.find_skill_suggestion(suggestion_id)
        if suggestion is None:
            return
        suggestion.status = status
        self.save()

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self._state.to_dict(), indent=2), encoding="utf-8")

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self) -> ProjectState:
        state = ProjectState(project_root=str(self._root))
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return state
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            _logger.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return state
        if not isinstance(data, dict):
            _logger.warning("Ignoring state file %s: expected a JSON object", self._path)
            return state

        version = data.get("version")
        if isinstance(version, int) and not isinstance(version, bool):
            state.version = version
        state.fingerprint = _optional_str(data.get("fingerprint"))
        state.last_full_scan = _optional_str(data.get("last_full_scan"))
        state.scan_history = [
            entry for entry in map(_history_from_dict, _as_list(data.get("scan_history"))) if entry
        ][-HISTORY_LIMIT:]
        state.deferred = [item for item in map(_deferred_from_dict, _as_list(data.get("deferred"))) if item]
        state.skill_suggestions = [
            item for item in map(_suggestion_from_dict, _as_list(data.get("skill_suggestions"))) if item
        ]
        state.preferences = _preferences_from_dict(data.get("preferences"))
        decisions = data.get("decisions")
        if isinstance(decisions, dict):
            state.decisions = {
                key: value
                for key, value in decisions.items()
                if isinstance(key, str) and value in ACTION_CHOICES
            }
        return state


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _history_from_dict(payload: Any) -> Optional[ScanHistoryEntry]:
    if not isinstance(payload, dict):
        return None
    scanned_at = payload.get("scanned_at")
    file_count = payload.get("file_count")
    issue_count = payload.get("issue_count")
    fingerprint = payload.get("fingerprint")
    if (
        not isinstance(scanned_at, str)
        or not _is_int(file_count)
        or not _is_int(issue_count)
        or not isinstance(fingerprint, str)
    ):
        return None
    return ScanHistoryEntry(
        scanned_at=scanned_at, file_count=file_count, issue_count=issue_count, fingerprint=fingerprint
    )


def _deferred_from_dict(payload: Any) -> Optional[DeferredItem]:
    if not isinstance(payload, dict):
        return None
    issue_id = payload.get("issue_id")
    deferred_at = payload.get("deferred_at")
    if not isinstance(issue_id, str) or not isinstance(deferred_at, str):
        return None
    return DeferredItem(issue_id=issue_id, deferred_at=deferred_at, reason=_optional_str(payload.get("reason")))


def _suggestion_from_dict(payload: Any) -> Optional[SkillSuggestion]:
    if not isinstance(payload, dict):
        return None
    fields = {key: payload.get(key) for key in ("id", "name", "description", "pattern", "suggested_at")}
    if not all(isinstance(value, str) for value in fields.values()):
        return None
    status = payload.get("status")
    return SkillSuggestion(**fields, status=status if status in SKILL_STATUSES else SKILL_SUGGESTED)


def _preferences_from_dict(payload: Any) -> Preferences:
    preferences = Preferences()
    if not isinstance(payload, dict):
        return preferences
    auto_scan = payload.get("auto_scan_on_startup")
    if isinstance(auto_scan, bool):
        preferences.auto_scan_on_startup = auto_scan
    if payload.get("scan_depth") in SCAN_DEPTHS:
        preferences.scan_depth = payload["scan_depth"]
    return preferences


__all__ = [
    "DeferredItem",
    "HISTORY_LIMIT",
    "Preferences",
    "ProjectState",
    "SKILL_STATUSES",
    "ScanHistoryEntry",
    "SkillSuggestion",
    "StateStore",
]
