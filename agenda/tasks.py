from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Tuple

from .models import Priority, Task, new_id
from .periods import timestamp_ms

PRIORITY_COLORS = {
    Priority.HIGH: "#ef4444",    # red
    Priority.MEDIUM: "#eab308",  # yellow
    Priority.LOW: "#22c55e",     # green
}
DEFAULT_PRIORITY_COLOR = "#6b7280"  # gray


@dataclass(frozen=True)
class TaskListState:
    # newest first
    tasks: Tuple[Task, ...] = ()
    new_title: str = ""
    selected_priority: Priority = Priority.MEDIUM
    selected_category: str = "personal"


def set_new_title(state: TaskListState, title: str) -> TaskListState:
    return replace(state, new_title=title)


def select_priority(state: TaskListState, priority: Priority) -> TaskListState:
    return replace(state, selected_priority=Priority(priority))


def select_category(state: TaskListState, category: str) -> TaskListState:
    return replace(state, selected_category=category)


def add_task(state: TaskListState, now: datetime) -> TaskListState:
    if not state.new_title.strip():
        return state

    task = Task(
        id=new_id(timestamp_ms(now), (t.id for t in state.tasks)),
        title=state.new_title,
        priority=state.selected_priority,
        category=state.selected_category,
        completed=False,
    )
    return replace(state, tasks=(task,) + state.tasks, new_title="")


def toggle_complete(state: TaskListState, task_id: str) -> TaskListState:
    if not any(t.id == task_id for t in state.tasks):
        return state
    return replace(
        state,
        tasks=tuple(
            replace(t, completed=not t.completed) if t.id == task_id else t
            for t in state.tasks
        ),
    )


def priority_color(priority) -> str:
    try:
        return PRIORITY_COLORS[Priority(priority)]
    except ValueError:
        return DEFAULT_PRIORITY_COLOR
