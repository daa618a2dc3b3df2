# src/site_schedule/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskGatewayError(RuntimeError):
    """The persistence API could not be reached or returned something unusable."""


class HttpTaskGateway:
    """
    TaskGateway over the dashboard REST API.

    Endpoints:
    - GET   {base}/tasks                     (or /tasks/project/{id} when scoped)
    - POST  {base}/tasks
    - PATCH {base}/tasks/{id}

    One httpx.Client is reused for all calls; close() releases it.
    """

    def __init__(
        self,
        base_url: str,
        *,
        project_id: str | None = None,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._project_id = project_id
        self._client = client or httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(timeout_seconds, connect=min(5.0, timeout_seconds)),
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TaskGatewayError(f"{method} {url} failed: {e}") from e

        if resp.is_error:
            raise TaskGatewayError(f"{method} {url} -> HTTP {resp.status_code}")

        try:
            return resp.json()
        except ValueError as e:
            raise TaskGatewayError(f"{method} {url} returned invalid JSON") from e

    @staticmethod
    def _decode_one(data: Any, what: str) -> Task:
        if not isinstance(data, Mapping):
            raise TaskGatewayError(f"{what}: expected a task object")
        try:
            return Task.from_payload(data)
        except ValueError as e:
            raise TaskGatewayError(f"{what}: {e}") from e

    def list_tasks(self) -> list[Task]:
        url = f"/tasks/project/{quote(self._project_id, safe='')}" if self._project_id else "/tasks"
        data = self._request("GET", url)
        if not isinstance(data, list):
            raise TaskGatewayError(f"GET {url}: expected a list of tasks")

        tasks: list[Task] = []
        for item in data:
            if not isinstance(item, Mapping):
                logger.warning("Skipping non-object task entry: %r", item)
                continue
            try:
                tasks.append(Task.from_payload(item))
            except ValueError:
                logger.warning("Skipping malformed task entry: %r", item)
        logger.debug("Fetched %d tasks from %s", len(tasks), url)
        return tasks

    def create_task(self, fields: Mapping[str, Any]) -> Task:
        body = dict(fields)
        if self._project_id and "projectId" not in body:
            body["projectId"] = self._project_id
        data = self._request("POST", "/tasks", json=body)
        task = self._decode_one(data, "POST /tasks")
        logger.info("Task created id=%s title=%s", task.id, task.title)
        return task

    def update_task(self, task_id: str, partial_fields: Mapping[str, Any]) -> Task:
        url = f"/tasks/{quote(task_id, safe='')}"
        data = self._request("PATCH", url, json=dict(partial_fields))
        task = self._decode_one(data, f"PATCH {url}")
        logger.info("Task updated id=%s fields=%s", task_id, sorted(partial_fields))
        return task
