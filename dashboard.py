from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List

from task_models import STATUS_LABELS, Person, Task

VIEWS = [
    {"id": "dashboard", "label": "Dashboard"},
    {"id": "dates", "label": "By Date"},
    {"id": "people", "label": "By Person"},
    {"id": "tasks", "label": "Task Management"},
    {"id": "add", "label": "Add Task"},
]
VIEW_IDS = [view["id"] for view in VIEWS]

URGENT_RECOMMENDATION = "🔥 High priority urgent task! Recommend immediate execution and close follow-up."
RISK_RECOMMENDATION = "⚠️ This task has risks. Recommend creating contingency plan and careful execution."
WITNESS_RECOMMENDATION = "💡 Recommend gentle communication, build trust, avoid pressure that could backfire."
LEGAL_RECOMMENDATION = "📋 Recommend consulting professional lawyer to ensure process compliance and effectiveness."
DEFAULT_RECOMMENDATION = "📌 Proceed as planned, report progress regularly."


def tasks_on_date(tasks: Iterable[Task], date: str) -> List[Task]:
    return [task for task in tasks if task.due_date == date]


def tasks_for_person(tasks: Iterable[Task], name: str) -> List[Task]:
    return [task for task in tasks if name in task.executor or name in task.target]


def high_risk_tasks(tasks: Iterable[Task]) -> List[Task]:
    return [task for task in tasks if task.risks]


def person_role(task: Task, name: str) -> str:
    return "Executor" if name in task.executor else "Target"


def recommendation(task: Task, first_date: str) -> str:
    """Canned advice for a task. Rules are checked in order; the first match wins."""
    if task.priority == 1 and task.due_date == first_date:
        return URGENT_RECOMMENDATION
    if task.risks:
        return RISK_RECOMMENDATION
    if task.category == "witness":
        return WITNESS_RECOMMENDATION
    if task.category == "legal":
        return LEGAL_RECOMMENDATION
    return DEFAULT_RECOMMENDATION


def summarize(tasks: List[Task], people: List[Person]) -> Dict[str, int]:
    return {
        "total": len(tasks),
        "people": len(people),
        "pending": sum(1 for task in tasks if task.status == "pending"),
        "high_priority": sum(1 for task in tasks if task.priority == 1),
    }


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status.replace("-", " ").title())


def priority_class(priority: int) -> str:
    if priority == 1:
        return "pill-danger"
    if priority == 2:
        return "pill-warning"
    if priority == 3:
        return "pill-info"
    return "pill-muted"


def status_class(status: str) -> str:
    return {
        "completed": "pill-success",
        "in-progress": "pill-info",
        "pending": "pill-warning",
        "blocked": "pill-danger",
    }.get(status, "pill-muted")


@dataclass(frozen=True)
class ViewState:
    view: str = "dashboard"
    selected_date: str | None = None
    selected_person: str | None = None
    selected_task: str | None = None


def _toggle(current: str | None, item: str) -> str | None:
    return None if current == item else item


def select_view(state: ViewState, view: str) -> ViewState:
    if view not in VIEW_IDS:
        raise ValueError(f"Unknown view: {view}")
    return replace(state, view=view)


def toggle_date(state: ViewState, date: str) -> ViewState:
    return replace(state, selected_date=_toggle(state.selected_date, date))


def toggle_person(state: ViewState, name: str) -> ViewState:
    return replace(state, selected_person=_toggle(state.selected_person, name))


def toggle_task(state: ViewState, task_id: str) -> ViewState:
    return replace(state, selected_task=_toggle(state.selected_task, task_id))


@dataclass(frozen=True)
class LoadState:
    tasks_loaded: bool = False
    people_loaded: bool = False

    @property
    def show_loading(self) -> bool:
        # People arrive in the background; only the first task load gates the page.
        return not self.tasks_loaded


def mark_tasks_loaded(state: LoadState) -> LoadState:
    return replace(state, tasks_loaded=True)


def mark_people_loaded(state: LoadState) -> LoadState:
    return replace(state, people_loaded=True)
