import contextlib
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from sqlalchemy import exc
from sqlalchemy.orm import Session

from todolist.errors import StoreConnectionError, TaskNotFoundError, TaskValidationError
from todolist.models import Task

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "description"})


@contextlib.contextmanager
def _store_errors(session: Session) -> Iterator[None]:
    try:
        yield
    except (exc.OperationalError, exc.InterfaceError) as e:
        session.rollback()
        logger.error("Task store unreachable: %s", e)
        raise StoreConnectionError(str(e.orig or e)) from e


def _clean_title(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise TaskValidationError("title is required")
    return cleaned


class TaskStore:
    """
    CRUD over the ``tasks`` table using one SQLAlchemy session.

    Every mutating call commits on its own; there is no multi-task transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def count(self) -> int:
        with _store_errors(self._session):
            return self._session.query(Task).count()

    def create(self, title: str, description: str | None = "") -> Task:
        task = Task(title=_clean_title(title), description=description or "", completed=False)
        with _store_errors(self._session):
            self._session.add(task)
            self._session.commit()
            self._session.refresh(task)
        logger.info("Task created id=%s", task.id)
        return task

    def get_all(self) -> list[Task]:
        with _store_errors(self._session):
            return self._session.query(Task).order_by(Task.created_at.desc(), Task.id).all()

    def get(self, task_id: str) -> Task:
        with _store_errors(self._session):
            task = self._session.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update(self, task_id: str, fields: Mapping[str, Any]) -> Task:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise TaskValidationError(f"cannot update fields: {', '.join(sorted(unknown))}")

        changes: dict[str, Any] = {}
        if fields.get("title") is not None:
            changes["title"] = _clean_title(fields["title"])
        if "description" in fields:
            changes["description"] = fields["description"] or ""

        task = self.get(task_id)
        with _store_errors(self._session):
            for name, value in changes.items():
                setattr(task, name, value)
            self._session.commit()
            self._session.refresh(task)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        return task

    def set_completed(self, task_id: str, completed: bool) -> Task:
        task = self.get(task_id)
        with _store_errors(self._session):
            task.completed = bool(completed)
            self._session.commit()
            self._session.refresh(task)
        logger.debug("Task id=%s completed=%s", task_id, task.completed)
        return task

    def delete(self, task_id: str) -> None:
        task = self.get(task_id)
        with _store_errors(self._session):
            self._session.delete(task)
            self._session.commit()
        logger.info("Task deleted id=%s", task_id)
