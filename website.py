from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, List

from flask import Flask, jsonify, request
from reactpy import component, event, hooks, html
from reactpy.backend.flask import Options, configure

from dashboard import (
    VIEWS,
    LoadState,
    ViewState,
    high_risk_tasks,
    mark_people_loaded,
    mark_tasks_loaded,
    person_role,
    priority_class,
    recommendation,
    select_view,
    status_class,
    status_label,
    summarize,
    tasks_for_person,
    tasks_on_date,
    toggle_date,
    toggle_person,
    toggle_task,
)
from data_store import DataStore, DataStoreError, create_data_store
from postgres_store import PostgresDataStore
from settings import load_dotenv, load_settings
from task_models import (
    CATEGORIES,
    CATEGORY_LABELS,
    PRIORITIES,
    PRIORITY_LABELS,
    STATUSES,
    STATUS_LABELS,
    Task,
    TaskDraft,
    can_submit,
    draft_from_payload,
    person_from_row,
    task_from_row,
    with_field,
)
from task_store import (
    CREATE_SUCCEEDED_MESSAGE,
    Outcome,
    PersonStore,
    TaskStore,
    draft_after_create,
)

load_dotenv()

app = Flask(__name__)

SETTINGS = load_settings()

DATA_STORE: DataStore | None = None


def get_data_store() -> DataStore:
    global DATA_STORE
    if DATA_STORE is None:
        DATA_STORE = create_data_store(SETTINGS)
    return DATA_STORE


def maybe_init_db_on_startup() -> None:
    """Create the Postgres schema once at process startup when RUN_DB_INIT=1.

    Set RUN_DB_INIT=1, restart the app, then set it back to 0. The REST store
    has no schema step; its tables are managed by the hosting project.
    """
    if not SETTINGS.run_db_init:
        return

    store = get_data_store()
    if isinstance(store, PostgresDataStore):
        store.init_schema()
    else:
        app.logger.warning("RUN_DB_INIT ignored: the REST data store does not manage its schema")


def project_info() -> Dict[str, Any]:
    return {"name": SETTINGS.project_name, "dates": list(SETTINGS.project_dates)}


@app.errorhandler(DataStoreError)
def handle_data_store_error(exc: DataStoreError):
    app.logger.error("Data store request failed: %s", exc)
    return jsonify({"error": str(exc)}), 502


@app.route("/api/data")
def api_data():
    store = get_data_store()
    return jsonify(
        {
            "project": project_info(),
            "tasks": [task_from_row(row).to_row() for row in store.list_tasks()],
            "people": [person_from_row(row).to_row() for row in store.list_people()],
            "last_updated": datetime.now().isoformat(timespec="minutes"),
        }
    )


@app.route("/api/db-health")
def api_db_health():
    return jsonify({"ok": get_data_store().ping()})


@app.route("/api/people")
def api_people():
    return jsonify([person_from_row(row).to_row() for row in get_data_store().list_people()])


@app.route("/api/tasks", methods=["GET", "POST"])
def api_tasks():
    if request.method == "GET":
        return jsonify([task_from_row(row).to_row() for row in get_data_store().list_tasks()])

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Expected a JSON object body"}), 400
    try:
        draft = draft_from_payload(payload)
    except (TypeError, ValueError) as exc:
        return jsonify({"error": str(exc)}), 400
    if not can_submit(draft):
        return jsonify({"error": "Field 'title' must be a non-empty string"}), 400

    outcome = TaskStore(get_data_store()).create(draft)
    if outcome is None or not outcome.ok or outcome.value is None:
        return jsonify({"error": outcome.error if outcome else "Task was not created"}), 502
    return jsonify(outcome.value.to_row()), 201


@app.route("/api/tasks/<task_id>/status", methods=["PUT"])
def api_task_status(task_id: str):
    payload = request.get_json(silent=True) or {}
    status = payload.get("status") if isinstance(payload, dict) else None
    if status not in STATUSES:
        return jsonify({"error": f"Field 'status' must be one of: {', '.join(STATUSES)}"}), 400
    get_data_store().update_task_status(task_id, status)
    return jsonify({"ok": True})


DASHBOARD_CSS = """
:root {
  color-scheme: light;
  --bg-2: #86c9ff;
  --bg-3: #356eff;
  --bg-4: #f2f6ff;
  --glass: rgba(255, 255, 255, 0.58);
  --glass-2: rgba(255, 255, 255, 0.32);
  --border: rgba(255, 255, 255, 0.5);
  --text: #0b1220;
  --muted: #56627a;
  --shadow: 0 24px 60px rgba(10, 20, 45, 0.22);
  --shadow-soft: 0 12px 30px rgba(10, 20, 45, 0.14);
  --blur: 26px;
  --radius: 22px;
  --accent: #0a84ff;
  --accent-2: #6bd7ff;
}

@media (prefers-color-scheme: dark) {
  :root {
    color-scheme: dark;
    --bg-2: #111f3d;
    --bg-3: #1b2f61;
    --bg-4: #0b142b;
    --glass: rgba(12, 18, 34, 0.62);
    --glass-2: rgba(12, 18, 34, 0.42);
    --border: rgba(255, 255, 255, 0.14);
    --text: #ecf2ff;
    --muted: #a7b6d3;
    --shadow: 0 26px 70px rgba(0, 0, 0, 0.45);
    --accent: #6bb7ff;
    --accent-2: #7ee1ff;
  }
}

* { box-sizing: border-box; }

body {
  margin: 0;
  font-family: "SF Pro Text", "Helvetica Neue", "Segoe UI", sans-serif;
  color: var(--text);
  background: linear-gradient(155deg, var(--bg-2) 0%, var(--bg-3) 55%, var(--bg-4) 100%);
  min-height: 100vh;
}

.page {
  max-width: 1120px;
  margin: 0 auto;
  padding: 32px 24px 88px;
  display: grid;
  gap: 24px;
}

.glass-surface {
  background: linear-gradient(135deg, var(--glass), var(--glass-2));
  border: 1px solid var(--border);
  border-radius: var(--radius);
  box-shadow: var(--shadow), inset 0 1px 0 rgba(255, 255, 255, 0.45);
  backdrop-filter: blur(var(--blur)) saturate(180%);
  -webkit-backdrop-filter: blur(var(--blur)) saturate(180%);
}

.card { padding: 24px; }

.navbar {
  max-width: 1120px;
  margin: 20px auto 0;
  padding: 14px 20px;
  display: flex;
  align-items: center;
  justify-content: space-between;
  gap: 16px;
  flex-wrap: wrap;
  position: sticky;
  top: 16px;
  z-index: 10;
}

.nav-left { display: grid; gap: 2px; flex: 1 1 280px; }
.nav-title { font-size: 18px; font-weight: 600; }
.nav-meta { font-size: 12px; color: var(--muted); }
.nav-actions { display: flex; gap: 8px; flex-wrap: wrap; }

.tabs {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(140px, 1fr));
  gap: 10px;
}

h1, h2, h3, h4 { margin: 0 0 8px; font-weight: 600; letter-spacing: -0.02em; }
h2 { font-size: 20px; }
h4 { font-size: 15px; }

.meta { color: var(--muted); font-size: 14px; }

.stats {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
  gap: 16px;
}

.stat-value { font-size: 28px; font-weight: 700; }

.columns {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(280px, 1fr));
  gap: 16px;
}

.list { display: grid; gap: 12px; }

.item {
  padding: 16px;
  border-radius: 16px;
  border: 2px solid transparent;
  cursor: pointer;
  display: grid;
  gap: 8px;
}

.item.selected { border-color: var(--accent); }

.task-row {
  padding: 14px 16px;
  border-radius: 16px;
  display: grid;
  gap: 6px;
  cursor: default;
}

.task-meta { display: flex; flex-wrap: wrap; gap: 8px; align-items: center; }

.risk { color: #b42318; font-size: 13px; }

.recommendation {
  padding: 12px 14px;
  border-radius: 12px;
  background: rgba(10, 132, 255, 0.12);
  border: 1px solid rgba(10, 132, 255, 0.35);
}

.btn, .seg-btn {
  border: 1px solid var(--border);
  background: linear-gradient(135deg, rgba(255, 255, 255, 0.8), rgba(255, 255, 255, 0.35));
  padding: 10px 16px;
  border-radius: 999px;
  cursor: pointer;
  font-size: 13px;
  font-weight: 600;
  color: var(--text);
}

.btn.primary {
  background: linear-gradient(160deg, var(--accent-2), var(--accent) 55%, #0a4bd6 100%);
  color: #fff;
}

.seg-btn { color: var(--muted); }

.seg-btn.active {
  background: rgba(10, 132, 255, 0.18);
  border-color: rgba(10, 132, 255, 0.5);
  color: var(--accent);
}

.btn[disabled], .seg-btn[disabled], .select[disabled] {
  cursor: not-allowed;
  opacity: 0.6;
}

.pill {
  display: inline-flex;
  align-items: center;
  padding: 4px 10px;
  border-radius: 999px;
  font-size: 12px;
  font-weight: 600;
  border: 1px solid transparent;
}

.pill-success { background: rgba(68, 201, 140, 0.18); color: #0f5132; border-color: rgba(68, 201, 140, 0.5); }
.pill-warning { background: rgba(255, 176, 86, 0.2); color: #7a4b0b; border-color: rgba(255, 176, 86, 0.5); }
.pill-danger { background: rgba(255, 99, 99, 0.2); color: #7a1010; border-color: rgba(255, 99, 99, 0.5); }
.pill-info { background: rgba(86, 160, 255, 0.2); color: #133d7a; border-color: rgba(86, 160, 255, 0.5); }
.pill-muted { background: rgba(15, 23, 42, 0.08); color: var(--muted); border-color: rgba(15, 23, 42, 0.12); }

.modal {
  position: fixed;
  inset: 0;
  background: rgba(8, 16, 32, 0.45);
  display: flex;
  align-items: center;
  justify-content: center;
  padding: 24px;
  z-index: 40;
}

.modal-card { width: min(480px, 95vw); padding: 24px; display: grid; gap: 16px; }

.form { display: grid; gap: 14px; }
.form-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(260px, 1fr)); gap: 14px; }
.field { display: grid; gap: 6px; }

.label {
  font-size: 12px;
  text-transform: uppercase;
  letter-spacing: 0.12em;
  color: var(--muted);
}

.input, .textarea, .select {
  width: 100%;
  padding: 12px 14px;
  border-radius: 12px;
  border: 1px solid rgba(255, 255, 255, 0.4);
  background: linear-gradient(135deg, rgba(255, 255, 255, 0.9), rgba(255, 255, 255, 0.5));
  font-size: 14px;
  color: var(--text);
}

.select.compact { width: auto; padding: 6px 10px; }
.textarea { min-height: 90px; resize: vertical; }

.form-actions { display: flex; gap: 10px; justify-content: flex-end; }

.loading {
  min-height: 100vh;
  display: grid;
  place-items: center;
  text-align: center;
}

.spinner {
  width: 48px;
  height: 48px;
  margin: 0 auto 16px;
  border-radius: 50%;
  border: 3px solid rgba(255, 255, 255, 0.4);
  border-bottom-color: var(--accent);
  animation: spin 1s linear infinite;
}

@keyframes spin { to { transform: rotate(360deg); } }

@media (max-width: 720px) {
  .page { padding: 24px 16px 70px; }
  .card { padding: 16px; }
  .navbar { margin: 16px 16px 0; top: 8px; }
}
"""


@component
def App():
    task_store, _ = hooks.use_state(lambda: TaskStore(get_data_store()))
    person_store, _ = hooks.use_state(lambda: PersonStore(get_data_store()))
    tasks, set_tasks = hooks.use_state(list(task_store.tasks))
    people, set_people = hooks.use_state(list(person_store.people))
    load_state, set_load_state = hooks.use_state(LoadState())
    view_state, set_view_state = hooks.use_state(ViewState())
    draft, set_draft = hooks.use_state(TaskDraft())
    form_key, set_form_key = hooks.use_state(0)
    notice, set_notice = hooks.use_state(None)
    is_busy, set_is_busy = hooks.use_state(False)
    busy_ref = hooks.use_ref(False)

    @hooks.use_effect(dependencies=[])
    async def load_tasks() -> None:
        try:
            await asyncio.to_thread(task_store.load)
            set_tasks(list(task_store.tasks))
        finally:
            set_load_state(mark_tasks_loaded)

    @hooks.use_effect(dependencies=[])
    async def load_people() -> None:
        try:
            await asyncio.to_thread(person_store.load)
            set_people(list(person_store.people))
        finally:
            set_load_state(mark_people_loaded)

    def run_mutation(action: Callable[[], Outcome | None]) -> Outcome | None:
        if busy_ref.current:
            return None
        busy_ref.current = True
        set_is_busy(True)
        try:
            outcome = action()
        finally:
            busy_ref.current = False
            set_is_busy(False)
        set_tasks(list(task_store.tasks))
        return outcome

    def change_status(task_id: str, status: str) -> None:
        outcome = run_mutation(lambda: task_store.update_status(task_id, status))
        if outcome is not None and not outcome.ok:
            set_notice({"kind": "error", "text": outcome.error})

    def set_draft_field(name: str, event_data: Dict[str, Any]) -> None:
        value = event_data.get("target", {}).get("value", "")
        set_draft(lambda prev: with_field(prev, name, value))

    @event(prevent_default=True)
    def handle_submit(event_data: Dict[str, Any]) -> None:
        outcome = run_mutation(lambda: task_store.create(draft))
        if outcome is None:
            return
        set_draft(draft_after_create(draft, outcome))
        if outcome.ok:
            set_form_key(form_key + 1)
            set_notice({"kind": "success", "text": CREATE_SUCCEEDED_MESSAGE})
        else:
            set_notice({"kind": "error", "text": outcome.error})

    def dismiss_notice(event_data: Dict[str, Any] | None = None) -> None:
        set_notice(None)

    def priority_pill(task: Task, prefix: str = "P"):
        return html.span({"class": f"pill {priority_class(task.priority)}"}, f"{prefix}{task.priority}")

    def status_pill(task: Task):
        return html.span({"class": f"pill {status_class(task.status)}"}, status_label(task.status))

    def render_status_select(task: Task):
        return html.select(
            {
                "class": "select compact",
                "value": task.status,
                "disabled": is_busy,
                "on_click": event(lambda e: None, stop_propagation=True),
                "on_change": lambda e, task_id=task.id: change_status(task_id, e["target"]["value"]),
            },
            *[html.option({"key": status, "value": status}, STATUS_LABELS[status]) for status in STATUSES],
        )

    def render_tabs():
        return html.nav(
            {"class": "tabs"},
            *[
                html.button(
                    {
                        "key": view["id"],
                        "type": "button",
                        "class": f"seg-btn {'active' if view_state.view == view['id'] else ''}",
                        "on_click": lambda e, view_id=view["id"]: set_view_state(lambda prev: select_view(prev, view_id)),
                    },
                    view["label"],
                )
                for view in VIEWS
            ],
        )

    def render_dashboard():
        counts = summarize(tasks, people)
        stats = [
            ("Total Tasks", counts["total"]),
            ("Team Members", counts["people"]),
            ("Pending", counts["pending"]),
            ("High Priority", counts["high_priority"]),
        ]
        today_tasks = tasks_on_date(tasks, SETTINGS.first_date)
        risky = high_risk_tasks(tasks)
        return html.div(
            {"class": "list"},
            html.div(
                {"class": "stats"},
                *[
                    html.div(
                        {"class": "card glass-surface", "key": label},
                        html.div({"class": "meta"}, label),
                        html.div({"class": "stat-value"}, str(value)),
                    )
                    for label, value in stats
                ],
            ),
            html.section(
                {"class": "card glass-surface"},
                html.h2(f"Project Goal: {SETTINGS.project_name}"),
                html.div(
                    {"class": "columns"},
                    html.div(
                        {"class": "list"},
                        html.h4("Today's Priority Tasks"),
                        *[
                            html.div(
                                {"class": "task-row glass-surface", "key": task.id},
                                html.div({"class": "task-meta"}, html.strong(task.title), priority_pill(task)),
                                html.div({"class": "meta"}, f"Assigned: {', '.join(task.executor)}"),
                            )
                            for task in today_tasks
                        ]
                        if today_tasks
                        else [html.div({"class": "meta"}, "No tasks due today.")],
                    ),
                    html.div(
                        {"class": "list"},
                        html.h4("High Risk Tasks"),
                        *[
                            html.div(
                                {"class": "task-row glass-surface", "key": task.id},
                                html.strong(task.title),
                                html.div({"class": "risk"}, f"Risk: {task.risks}"),
                            )
                            for task in risky
                        ]
                        if risky
                        else [html.div({"class": "meta"}, "No risks recorded.")],
                    ),
                ),
            ),
        )

    def render_date_view():
        def render_date(date: str):
            date_tasks = tasks_on_date(tasks, date)
            selected = view_state.selected_date == date
            return html.div(
                {
                    "key": date,
                    "class": f"item glass-surface {'selected' if selected else ''}",
                    "on_click": lambda e: set_view_state(lambda prev: toggle_date(prev, date)),
                },
                html.h3(date),
                html.div({"class": "meta"}, f"{len(date_tasks)} tasks"),
                *(
                    [
                        html.div(
                            {"class": "task-row glass-surface", "key": task.id},
                            html.div({"class": "task-meta"}, html.strong(task.title), priority_pill(task)),
                            html.div({"class": "meta"}, task.details or ""),
                            html.div({"class": "meta"}, f"Executor: {', '.join(task.executor)}"),
                            html.div({"class": "meta"}, f"Target: {', '.join(task.target)}"),
                            render_status_select(task),
                        )
                        for task in date_tasks
                    ]
                    if selected
                    else []
                ),
            )

        return html.section(
            {"class": "list"},
            html.h2("View Tasks by Date"),
            *[render_date(date) for date in SETTINGS.project_dates],
        )

    def render_person_view():
        def render_person(name: str, person_id: int):
            person_tasks = tasks_for_person(tasks, name)
            selected = view_state.selected_person == name
            return html.div(
                {
                    "key": person_id,
                    "class": f"item glass-surface {'selected' if selected else ''}",
                    "on_click": lambda e: set_view_state(lambda prev: toggle_person(prev, name)),
                },
                html.h3(name),
                html.div({"class": "meta"}, f"{len(person_tasks)} related tasks"),
                *(
                    [
                        html.div(
                            {"class": "task-row glass-surface", "key": task.id},
                            html.div(
                                {"class": "task-meta"},
                                html.strong(task.title),
                                priority_pill(task),
                                status_pill(task),
                            ),
                            html.div({"class": "meta"}, task.details or ""),
                            html.div({"class": "meta"}, f"Role: {person_role(task, name)}"),
                            *([html.div({"class": "meta"}, f"Due: {task.due_date}")] if task.due_date else []),
                        )
                        for task in person_tasks
                    ]
                    if selected
                    else []
                ),
            )

        return html.section(
            {"class": "list"},
            html.h2("View Tasks by Person"),
            *(
                [render_person(person.name, person.id) for person in people]
                if people
                else [html.div({"class": "meta"}, "No people loaded.")]
            ),
        )

    def render_task_view():
        def render_details(task: Task):
            return html.div(
                {"class": "columns"},
                html.div(
                    html.h4("Task Details"),
                    html.p({"class": "meta"}, task.details or ""),
                    html.h4("Execution Info"),
                    html.div(f"Executor: {', '.join(task.executor)}"),
                    html.div(f"Target: {', '.join(task.target)}"),
                    *([html.div(f"Due Date: {task.due_date}")] if task.due_date else []),
                ),
                html.div(
                    html.h4("Expected Result"),
                    html.p({"class": "meta"}, task.expected_result or ""),
                    *([html.p({"class": "risk"}, f"Potential Risk: {task.risks}")] if task.risks else []),
                ),
                html.div(
                    {"class": "field"},
                    html.span({"class": "label"}, "Update Status"),
                    render_status_select(task),
                ),
                html.div(
                    {"class": "field"},
                    html.span({"class": "label"}, "AI Recommendation"),
                    html.div({"class": "recommendation"}, recommendation(task, SETTINGS.first_date)),
                ),
            )

        def render_task(task: Task):
            selected = view_state.selected_task == task.id
            return html.div(
                {
                    "key": task.id,
                    "class": f"item glass-surface {'selected' if selected else ''}",
                    "on_click": lambda e: set_view_state(lambda prev: toggle_task(prev, task.id)),
                },
                html.h3(task.title),
                html.div({"class": "meta"}, f"{task.id} | {task.category or ''}"),
                html.div({"class": "task-meta"}, priority_pill(task, prefix="Priority "), status_pill(task)),
                *([render_details(task)] if selected else []),
            )

        return html.section(
            {"class": "list"},
            html.h2("Task Management"),
            *([render_task(task) for task in tasks] if tasks else [html.div({"class": "meta"}, "No tasks yet.")]),
        )

    def text_field(name: str, label: str, placeholder: str, multiline: bool = False):
        attrs = {
            "name": name,
            "class": "textarea" if multiline else "input",
            "placeholder": placeholder,
            "default_value": getattr(draft, name),
            "disabled": is_busy,
            "on_change": lambda e: set_draft_field(name, e),
        }
        control = html.textarea(attrs) if multiline else html.input({**attrs, "type": "text"})
        return html.div({"class": "field"}, html.span({"class": "label"}, label), control)

    def select_field(name: str, label: str, options: List[tuple[Any, str]]):
        return html.div(
            {"class": "field"},
            html.span({"class": "label"}, label),
            html.select(
                {
                    "name": name,
                    "class": "select",
                    "value": getattr(draft, name),
                    "disabled": is_busy,
                    "on_change": lambda e: set_draft_field(name, e),
                },
                *[html.option({"key": str(value), "value": value}, text) for value, text in options],
            ),
        )

    def render_add_task():
        return html.section(
            {"class": "card glass-surface"},
            html.h2("Add New Task"),
            html.form(
                {"class": "form", "key": f"draft-{form_key}", "on_submit": handle_submit},
                html.div(
                    {"class": "form-grid"},
                    text_field("title", "Task Title", "Enter task title"),
                    select_field("priority", "Priority", [(value, PRIORITY_LABELS[value]) for value in PRIORITIES]),
                    text_field("executor", "Executor (comma separated)", "John, Jane"),
                    text_field("target", "Target (comma separated)", "Client, Partner"),
                    text_field("due_date", "Due Date", SETTINGS.project_dates[min(1, len(SETTINGS.project_dates) - 1)]),
                    select_field("category", "Category", [(value, CATEGORY_LABELS[value]) for value in CATEGORIES]),
                ),
                text_field("details", "Task Details", "Detailed description of task requirements", multiline=True),
                text_field("expected_result", "Expected Result", "Describe expected outcome", multiline=True),
                html.div(
                    {"class": "form-actions"},
                    html.button(
                        {"type": "submit", "class": "btn primary", "disabled": is_busy or not can_submit(draft)},
                        "Create Task",
                    ),
                ),
            ),
        )

    def render_notice():
        if not notice:
            return None
        title = "Done" if notice.get("kind") == "success" else "Something went wrong"
        return html.div(
            {"class": "modal"},
            html.div(
                {"class": "modal-card glass-surface"},
                html.h3(title),
                html.div(notice.get("text", "")),
                html.div(
                    {"class": "form-actions"},
                    html.button({"class": "btn primary", "type": "button", "on_click": dismiss_notice}, "OK"),
                ),
            ),
        )

    if load_state.show_loading:
        return html.div(
            {"id": "task-hub-root"},
            html.style(DASHBOARD_CSS),
            html.div(
                {"class": "loading"},
                html.div(html.div({"class": "spinner"}), html.div({"class": "meta"}, "Loading project data...")),
            ),
        )

    renderers = {
        "dashboard": render_dashboard,
        "dates": render_date_view,
        "people": render_person_view,
        "tasks": render_task_view,
        "add": render_add_task,
    }

    return html.div(
        {"id": "task-hub-root", "data-unsaved": "1" if draft != TaskDraft() else "0"},
        html.style(DASHBOARD_CSS),
        html.header(
            {"class": "navbar glass-surface"},
            html.div(
                {"class": "nav-left"},
                html.div({"class": "nav-title"}, "Project Management AI Assistant"),
                html.div({"class": "nav-meta"}, "Intelligent project management and task coordination system"),
            ),
            html.div(
                {"class": "nav-actions"},
                html.span({"class": "pill pill-muted"}, "Project Status"),
                html.span({"class": "pill pill-success"}, "Active"),
                *([html.span({"class": "pill pill-warning"}, "Syncing...")] if is_busy else []),
            ),
        ),
        html.main(
            {"class": "page"},
            render_tabs(),
            renderers[view_state.view](),
        ),
        render_notice(),
    )


# One-time optional schema initialization at process startup (not per request)
maybe_init_db_on_startup()

configure(
    app,
    App,
    Options(
        head=(
            {"tagName": "title", "children": ["Project Management AI Assistant"]},
            {
                "tagName": "meta",
                "attributes": {"name": "viewport", "content": "width=device-width, initial-scale=1"},
            },
            {
                "tagName": "script",
                "children": [
                    "window.addEventListener('beforeunload', function (event) {"
                    "  var root = document.getElementById('task-hub-root');"
                    "  if (!root || root.getAttribute('data-unsaved') !== '1') {"
                    "    return;"
                    "  }"
                    "  event.preventDefault();"
                    "  event.returnValue = '';"
                    "});"
                ],
            },
        )
    ),
)


if __name__ == "__main__":
    app.run(
        host="0.0.0.0",
        port=SETTINGS.port,
        debug=SETTINGS.debug,
    )
