"""Session mirrors of the `tasks` and `people` tables.

Mutations go to the data store first. The local mirror only changes once the
remote call has succeeded, so a failure never needs a rollback.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Generic, List, TypeVar

from data_store import DataStore, DataStoreError
from task_models import STATUSES, Person, Task, TaskDraft, can_submit, person_from_row, task_from_row, task_from_draft

logger = logging.getLogger(__name__)

T = TypeVar("T")

UPDATE_FAILED_MESSAGE = "Failed to update task status"
CREATE_FAILED_MESSAGE = "Failed to create task"
CREATE_SUCCEEDED_MESSAGE = "Task created successfully!"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    ok: bool
    value: T | None = None
    error: str = ""
    exception: DataStoreError | None = None


def attempt(action: Callable[[], T]) -> Outcome[T]:
    try:
        return Outcome(ok=True, value=action())
    except DataStoreError as exc:
        return Outcome(ok=False, error=str(exc), exception=exc)


def current_millis() -> int:
    return int(time.time() * 1000)


class TaskStore:
    def __init__(self, data_store: DataStore, tasks: List[Task] | None = None) -> None:
        self.data_store = data_store
        self.tasks: List[Task] = list(tasks or [])

    def load(self) -> Outcome[List[Task]]:
        outcome = attempt(lambda: [task_from_row(row) for row in self.data_store.list_tasks()])
        if not outcome.ok:
            logger.error("Error loading tasks: %s", outcome.error, exc_info=outcome.exception)
            return outcome
        self.tasks = list(outcome.value or [])
        return outcome

    def update_status(self, task_id: str, status: str) -> Outcome[None]:
        if status not in STATUSES:
            raise ValueError(f"Unknown task status: {status}")
        outcome = attempt(lambda: self.data_store.update_task_status(task_id, status))
        if not outcome.ok:
            logger.error("Error updating task %s: %s", task_id, outcome.error, exc_info=outcome.exception)
            return replace(outcome, error=UPDATE_FAILED_MESSAGE)

        updated = list(self.tasks)
        for index, task in enumerate(updated):
            if task.id == task_id:
                updated[index] = replace(task, status=status)
                break
        self.tasks = updated
        return outcome

    def create(self, draft: TaskDraft, now_ms: int | None = None) -> Outcome[Task] | None:
        """Insert a task built from the draft; None when the title is blank."""
        if not can_submit(draft):
            return None

        task = task_from_draft(draft, current_millis() if now_ms is None else now_ms)
        outcome = attempt(lambda: self.data_store.insert_task(task.to_row()))
        if not outcome.ok:
            logger.error("Error creating task: %s", outcome.error, exc_info=outcome.exception)
            return replace(outcome, error=CREATE_FAILED_MESSAGE)

        self.tasks = [*self.tasks, task]
        return Outcome(ok=True, value=task)

    def find(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks if task.id == task_id), None)


def draft_after_create(draft: TaskDraft, outcome: Outcome[Task] | None) -> TaskDraft:
    """The form resets to its defaults only after a successful create."""
    if outcome is not None and outcome.ok:
        return TaskDraft()
    return draft


class PersonStore:
    def __init__(self, data_store: DataStore, people: List[Person] | None = None) -> None:
        self.data_store = data_store
        self.people: List[Person] = list(people or [])

    def load(self) -> Outcome[List[Person]]:
        outcome = attempt(lambda: [person_from_row(row) for row in self.data_store.list_people()])
        if not outcome.ok:
            logger.error("Error loading people: %s", outcome.error, exc_info=outcome.exception)
            return outcome
        self.people = list(outcome.value or [])
        return outcome
