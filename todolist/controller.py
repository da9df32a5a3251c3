from __future__ import annotations

import logging

from todolist.client import TaskApiClient, TaskApiError
from todolist.client_state import (
    ClientState,
    EditCancelled,
    EditStarted,
    Event,
    FilterChanged,
    LoadFailed,
    LoadStarted,
    MutationFailed,
    NotificationDismissed,
    Task,
    TaskCreated,
    TaskDeleted,
    TaskFilter,
    TasksLoaded,
    TaskToggled,
    TaskUpdated,
    form_mode,
    reduce,
)

logger = logging.getLogger(__name__)


class TaskListController:
    """
    Runs user actions against the API and folds each outcome into ``state``.

    Every action is a single request. A failed request only sets an error
    notification; the task list is never touched, so there is nothing to roll back.
    """

    def __init__(self, api: TaskApiClient, state: ClientState | None = None) -> None:
        self.api = api
        self.state = state or ClientState()

    def dispatch(self, event: Event) -> ClientState:
        self.state = reduce(self.state, event)
        return self.state

    async def load(self) -> ClientState:
        self.dispatch(LoadStarted())
        try:
            tasks = await self.api.get_all_tasks()
        except TaskApiError as e:
            logger.warning("Loading tasks failed: %s", e)
            return self.dispatch(LoadFailed())
        return self.dispatch(TasksLoaded(tuple(tasks)))

    async def add_task(self, title: str, description: str = "") -> ClientState:
        try:
            task = await self.api.create_task(title, description)
        except TaskApiError as e:
            logger.warning("Creating task failed: %s", e)
            return self.dispatch(MutationFailed("Failed to add task. Check your backend connection."))
        return self.dispatch(TaskCreated(task))

    async def update_task(self, title: str, description: str | None = None) -> ClientState:
        editing = self.state.editing
        if editing is None:
            return self.state
        try:
            task = await self.api.update_task(editing.id, title=title, description=description)
        except TaskApiError as e:
            logger.warning("Updating task %s failed: %s", editing.id, e)
            return self.dispatch(MutationFailed("Failed to update task."))
        return self.dispatch(TaskUpdated(task))

    async def submit(self, title: str, description: str | None = None) -> ClientState:
        """Form submit: create or update depending on the editing state."""
        if not title.strip():
            return self.state
        if form_mode(self.state) == "update":
            return await self.update_task(title, description)
        return await self.add_task(title, description or "")

    async def toggle(self, task_id: str) -> ClientState:
        task = next((t for t in self.state.tasks if t.id == task_id), None)
        if task is None:
            return self.state
        try:
            updated = await self.api.toggle_task(task_id, not task.completed)
        except TaskApiError as e:
            logger.warning("Toggling task %s failed: %s", task_id, e)
            return self.dispatch(MutationFailed("Failed to update task status."))
        return self.dispatch(TaskToggled(updated))

    async def delete(self, task_id: str) -> ClientState:
        try:
            await self.api.delete_task(task_id)
        except TaskApiError as e:
            logger.warning("Deleting task %s failed: %s", task_id, e)
            return self.dispatch(MutationFailed("Failed to delete task."))
        return self.dispatch(TaskDeleted(task_id))

    def start_edit(self, task: Task) -> ClientState:
        return self.dispatch(EditStarted(task))

    def cancel_edit(self) -> ClientState:
        return self.dispatch(EditCancelled())

    def set_filter(self, task_filter: TaskFilter | str) -> ClientState:
        return self.dispatch(FilterChanged(TaskFilter(task_filter)))

    def dismiss_notification(self) -> ClientState:
        return self.dispatch(NotificationDismissed())
