"""Async HTTP client for the task API."""

import logging

import httpx

from todolist.schemas import TaskResponse

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TaskApiClient:
    """
    Thin wrapper over ``httpx.AsyncClient``: one method per API route.

    Pass ``transport`` to talk to an in-process ASGI app instead of the network.
    """

    def __init__(self, base_url: str, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "TaskApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TaskApiError(f"{method} {url} failed: {e}") from e

        if response.is_error:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            detail = payload.get("detail", response.text) if isinstance(payload, dict) else response.text
            raise TaskApiError(f"{method} {url} returned {response.status_code}: {detail}", response.status_code)
        return response

    async def get_all_tasks(self) -> list[TaskResponse]:
        response = await self._request("GET", "/tasks")
        return [TaskResponse.model_validate(item) for item in response.json()]

    async def create_task(self, title: str, description: str = "") -> TaskResponse:
        response = await self._request("POST", "/tasks", json={"title": title, "description": description})
        return TaskResponse.model_validate(response.json())

    async def update_task(
        self, task_id: str, *, title: str | None = None, description: str | None = None
    ) -> TaskResponse:
        body = {}
        if title is not None:
            body["title"] = title
        if description is not None:
            body["description"] = description
        response = await self._request("PUT", f"/tasks/{task_id}", json=body)
        return TaskResponse.model_validate(response.json())

    async def toggle_task(self, task_id: str, completed: bool) -> TaskResponse:
        response = await self._request("PATCH", f"/tasks/{task_id}/toggle", json={"completed": completed})
        return TaskResponse.model_validate(response.json())

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")
