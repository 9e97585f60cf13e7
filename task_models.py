from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Mapping

STATUSES = ["pending", "in-progress", "completed", "blocked"]
STATUS_LABELS = {
    "pending": "Pending",
    "in-progress": "In Progress",
    "completed": "Completed",
    "blocked": "Blocked",
}

PRIORITIES = [1, 2, 3]
PRIORITY_LABELS = {
    1: "High Priority (1)",
    2: "Medium Priority (2)",
    3: "Low Priority (3)",
}

CATEGORIES = [
    "witness",
    "legal",
    "relationship",
    "petition",
    "highlevel",
    "negotiation",
    "pressure",
    "investigation",
]
CATEGORY_LABELS = {
    "witness": "Witness Contact",
    "legal": "Legal Process",
    "relationship": "Relationship Building",
    "petition": "Petition",
    "highlevel": "High Level Contact",
    "negotiation": "Negotiation",
    "pressure": "Legal Pressure",
    "investigation": "Investigation",
}

OPTIONAL_TEXT_FIELDS = ("details", "expected_result", "risks", "due_date", "category")


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    priority: int
    executor: List[str] = field(default_factory=list)
    target: List[str] = field(default_factory=list)
    status: str = "pending"
    details: str | None = None
    expected_result: str | None = None
    risks: str | None = None
    due_date: str | None = None
    category: str | None = None

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Person:
    id: int
    name: str

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _name_list(value: Any) -> List[str]:
    if not value:
        return []
    return [str(name) for name in value]


def task_from_row(row: Mapping[str, Any]) -> Task:
    """Normalize a `tasks` row into a Task, ignoring bookkeeping columns."""
    optional = {name: _optional_text(row.get(name)) for name in OPTIONAL_TEXT_FIELDS}
    return Task(
        id=str(row["id"]),
        title=str(row.get("title") or ""),
        priority=int(row.get("priority") or 1),
        executor=_name_list(row.get("executor")),
        target=_name_list(row.get("target")),
        status=str(row.get("status") or "pending"),
        **optional,
    )


def person_from_row(row: Mapping[str, Any]) -> Person:
    return Person(id=int(row["id"]), name=str(row.get("name") or ""))


def split_names(text: str) -> List[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


@dataclass(frozen=True)
class TaskDraft:
    """Form state for a new task. Names stay as raw comma-separated text."""

    title: str = ""
    priority: int = 1
    details: str = ""
    executor: str = ""
    target: str = ""
    expected_result: str = ""
    due_date: str = ""
    category: str = "witness"


DRAFT_FIELDS = tuple(TaskDraft.__dataclass_fields__)


def with_field(draft: TaskDraft, name: str, value: Any) -> TaskDraft:
    if name not in DRAFT_FIELDS:
        raise ValueError(f"Unknown draft field: {name}")
    if name == "priority":
        return replace(draft, priority=int(value))
    return replace(draft, **{name: "" if value is None else str(value)})


def draft_from_payload(payload: Mapping[str, Any]) -> TaskDraft:
    draft = TaskDraft()
    for name in DRAFT_FIELDS:
        if name in payload:
            draft = with_field(draft, name, payload[name])
    return draft


def can_submit(draft: TaskDraft) -> bool:
    return bool(draft.title.strip())


def task_from_draft(draft: TaskDraft, now_ms: int) -> Task:
    return Task(
        id=f"custom-{now_ms}",
        title=draft.title,
        priority=draft.priority,
        details=draft.details or None,
        executor=split_names(draft.executor),
        target=split_names(draft.target),
        expected_result=draft.expected_result or None,
        due_date=draft.due_date or None,
        category=draft.category or None,
        risks=None,
        status="pending",
    )
