from __future__ import annotations

from datetime import datetime, timezone

from todolist.client import TaskApiError
from todolist.schemas import TaskResponse


def make_task(task_id: str, title: str = "task", *, completed: bool = False, description: str = "") -> TaskResponse:
    return TaskResponse(
        id=task_id,
        title=title,
        description=description,
        completed=completed,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


class FailingTaskApi:
    """
    Task API double whose every call fails like an unreachable backend.

    Records call names so tests can assert nothing was retried.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, name: str):
        self.calls.append(name)
        raise TaskApiError(f"{name} failed: connection refused")

    async def get_all_tasks(self):
        self._fail("get_all_tasks")

    async def create_task(self, title, description=""):
        self._fail("create_task")

    async def update_task(self, task_id, *, title=None, description=None):
        self._fail("update_task")

    async def toggle_task(self, task_id, completed):
        self._fail("toggle_task")

    async def delete_task(self, task_id):
        self._fail("delete_task")
