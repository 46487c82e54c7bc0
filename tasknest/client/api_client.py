"""Async HTTP client for the task API.

TaskApiClient implements the same contract as TaskService, so a TaskCache
can run against a remote server unchanged. Error responses are mapped back
to the domain exceptions the server raised; transport failures become
StoreUnavailableException.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any

import httpx

from tasknest.domain.entities.task import TaskEntity
from tasknest.domain.enums import TaskStatus
from tasknest.domain.exceptions import (
    AuthenticationException,
    ResourceNotFoundException,
    StoreUnavailableException,
    TaskNestException,
    ValidationException,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, tuple):
        return list(value)
    return value


def _error_from_response(
    resp: httpx.Response, operation: str, task_id: str | None
) -> TaskNestException:
    """Rebuild the domain exception from an error response body."""
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = body.get("message") or resp.reason_phrase
    details = body.get("details")
    status = resp.status_code
    if status == 401:
        return AuthenticationException(message if isinstance(message, str) else "Unauthorized")
    if status == 404:
        info = details if isinstance(details, dict) else {}
        return ResourceNotFoundException(
            info.get("resource_type", "task"), info.get("resource_id", task_id or "")
        )
    if status == 400:
        field = details.get("field") if isinstance(details, dict) else None
        return ValidationException(message, field=field)
    if status == 422:
        field = None
        if isinstance(details, list) and details:
            loc = details[0].get("loc") or []
            field = str(loc[-1]) if loc else None
        return ValidationException(message, field=field)
    reason = details.get("reason") if isinstance(details, dict) else None
    return StoreUnavailableException(operation, reason or f"HTTP {status}: {message}")


class TaskApiClient:
    """Task service over HTTP.

    Identity is the bearer token; the owner_id argument of each call is
    accepted for contract compatibility and not sent (the server derives the
    owner from the token's sub claim).
    """

    def __init__(
        self,
        base_url: str,
        token: str | None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(timeout=timeout)
        )
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> TaskApiClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    def _headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        *,
        task_id: str | None = None,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        url = f"{self._base_url}{API_PREFIX}{path}"
        try:
            resp = await self._http.request(
                method, url, headers=self._headers(), json=json, params=params
            )
        except httpx.HTTPError as e:
            logger.warning("Task API %s failed: %s", operation, e)
            raise StoreUnavailableException(operation, str(e)) from e
        if resp.is_success:
            if not resp.content:
                return None
            try:
                return resp.json()
            except ValueError as e:
                raise StoreUnavailableException(operation, "Malformed response body") from e
        raise _error_from_response(resp, operation, task_id)

    async def list_tasks(
        self, owner_id: str | None, status_filter: str | TaskStatus | None = None
    ) -> list[TaskEntity]:
        params = {"status": _json_value(status_filter)} if status_filter else None
        data = await self._request("GET", "/tasks", "list_tasks", params=params)
        return [TaskEntity.from_dict(item) for item in data]

    async def get_task(self, owner_id: str | None, task_id: str) -> TaskEntity:
        data = await self._request(
            "GET", f"/tasks/{task_id}", "get_task", task_id=task_id
        )
        return TaskEntity.from_dict(data)

    async def create_task(
        self, owner_id: str | None, payload: Mapping[str, Any]
    ) -> TaskEntity:
        body = {k: _json_value(v) for k, v in payload.items()}
        data = await self._request("POST", "/tasks", "create_task", json=body)
        return TaskEntity.from_dict(data)

    async def update_task(
        self, owner_id: str | None, task_id: str, payload: Mapping[str, Any]
    ) -> TaskEntity:
        body = {k: _json_value(v) for k, v in payload.items()}
        data = await self._request(
            "PATCH", f"/tasks/{task_id}", "update_task", task_id=task_id, json=body
        )
        return TaskEntity.from_dict(data)

    async def set_status(
        self, owner_id: str | None, task_id: str, status: str | TaskStatus
    ) -> TaskEntity:
        data = await self._request(
            "PUT",
            f"/tasks/{task_id}/status",
            "set_status",
            task_id=task_id,
            json={"status": _json_value(status)},
        )
        return TaskEntity.from_dict(data)

    async def delete_task(self, owner_id: str | None, task_id: str) -> None:
        await self._request(
            "DELETE", f"/tasks/{task_id}", "delete_task", task_id=task_id
        )
