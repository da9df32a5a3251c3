"""
Client view state as a pure transition function.

``reduce(state, event)`` returns the next ``ClientState``; nothing here does I/O,
so every UI flow can be replayed in a test without a browser or a server.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum

from todolist.schemas import TaskResponse as Task


class TaskFilter(StrEnum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"


class NotificationKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    kind: NotificationKind
    message: str


@dataclass(frozen=True, slots=True)
class ClientState:
    tasks: tuple[Task, ...] = ()
    loading: bool = True
    filter: TaskFilter = TaskFilter.ALL
    editing: Task | None = None
    notification: Notification | None = None


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    completed: int
    pending: int


# ---- events ----


@dataclass(frozen=True, slots=True)
class LoadStarted:
    pass


@dataclass(frozen=True, slots=True)
class TasksLoaded:
    tasks: tuple[Task, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class LoadFailed:
    message: str = "Failed to fetch tasks. Make sure your backend is running."


@dataclass(frozen=True, slots=True)
class TaskCreated:
    task: Task


@dataclass(frozen=True, slots=True)
class TaskUpdated:
    task: Task


@dataclass(frozen=True, slots=True)
class TaskToggled:
    task: Task


@dataclass(frozen=True, slots=True)
class TaskDeleted:
    task_id: str


@dataclass(frozen=True, slots=True)
class FilterChanged:
    filter: TaskFilter


@dataclass(frozen=True, slots=True)
class EditStarted:
    task: Task


@dataclass(frozen=True, slots=True)
class EditCancelled:
    pass


@dataclass(frozen=True, slots=True)
class MutationFailed:
    message: str


@dataclass(frozen=True, slots=True)
class NotificationDismissed:
    pass


Event = (
    LoadStarted
    | TasksLoaded
    | LoadFailed
    | TaskCreated
    | TaskUpdated
    | TaskToggled
    | TaskDeleted
    | FilterChanged
    | EditStarted
    | EditCancelled
    | MutationFailed
    | NotificationDismissed
)


def _success(message: str) -> Notification:
    return Notification(NotificationKind.SUCCESS, message)


def _error(message: str) -> Notification:
    return Notification(NotificationKind.ERROR, message)


def _replace_task(tasks: tuple[Task, ...], updated: Task) -> tuple[Task, ...]:
    return tuple(updated if t.id == updated.id else t for t in tasks)


def reduce(state: ClientState, event: Event) -> ClientState:
    if isinstance(event, LoadStarted):
        return replace(state, loading=True)

    if isinstance(event, TasksLoaded):
        return replace(state, tasks=tuple(event.tasks), loading=False)

    if isinstance(event, LoadFailed):
        return replace(state, loading=False, notification=_error(event.message))

    if isinstance(event, TaskCreated):
        return replace(
            state,
            tasks=(event.task, *state.tasks),
            notification=_success("Task added successfully!"),
        )

    if isinstance(event, TaskUpdated):
        return replace(
            state,
            tasks=_replace_task(state.tasks, event.task),
            editing=None,
            notification=_success("Task updated successfully!"),
        )

    if isinstance(event, TaskToggled):
        return replace(state, tasks=_replace_task(state.tasks, event.task))

    if isinstance(event, TaskDeleted):
        editing = state.editing
        if editing is not None and editing.id == event.task_id:
            editing = None
        return replace(
            state,
            tasks=tuple(t for t in state.tasks if t.id != event.task_id),
            editing=editing,
            notification=_success("Task deleted successfully!"),
        )

    if isinstance(event, FilterChanged):
        return replace(state, filter=TaskFilter(event.filter))

    if isinstance(event, EditStarted):
        return replace(state, editing=event.task)

    if isinstance(event, EditCancelled):
        return replace(state, editing=None)

    if isinstance(event, MutationFailed):
        return replace(state, notification=_error(event.message))

    if isinstance(event, NotificationDismissed):
        return replace(state, notification=None)

    raise TypeError(f"unknown event: {event!r}")


def matches_filter(task: Task, task_filter: TaskFilter) -> bool:
    if task_filter == TaskFilter.COMPLETED:
        return task.completed
    if task_filter == TaskFilter.PENDING:
        return not task.completed
    return True


def visible_tasks(state: ClientState) -> list[Task]:
    return [t for t in state.tasks if matches_filter(t, state.filter)]


def task_stats(state: ClientState) -> TaskStats:
    completed = sum(1 for t in state.tasks if t.completed)
    return TaskStats(total=len(state.tasks), completed=completed, pending=len(state.tasks) - completed)


def form_mode(state: ClientState) -> str:
    """Which form the UI shows: ``"create"`` when idle, ``"update"`` while editing."""
    return "create" if state.editing is None else "update"
