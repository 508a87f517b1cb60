"""
Async HTTP client for the workpluck API.

Used by producers to submit tasks and fetch results, and by the
reference worker to lease tasks and post results.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import httpx

from workpluck.constants import RESULT_PATH, TASK_PATH, TaskStatus
from workpluck.exceptions import TaskNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class LeasedTask:
    """A task handed to a worker by ``GET /task``."""

    id: str
    topic: str
    input: Any
    status: TaskStatus
    timestamp: datetime

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "LeasedTask":
        return cls(
            id=data["id"],
            topic=data["topic"],
            input=data["input"],
            status=TaskStatus(data["status"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


class WorkpluckClient:
    """
    Client for the four broker operations.

    Either pass ``base_url`` and let the client own its connection pool,
    or pass an existing ``httpx.AsyncClient`` (for example one bound to an
    ASGI transport in tests).
    """

    def __init__(
        self,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        if http_client is None and base_url is None:
            raise ValueError("Either base_url or http_client is required")

        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "WorkpluckClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_client:
            await self._http.aclose()

    async def submit_task(self, topic: str, input: Any) -> str:
        """
        Submit a task.

        Returns:
            The new task id.
        """
        response = await self._http.post(TASK_PATH, json={"topic": topic, "input": input})
        response.raise_for_status()
        return response.json()["id"]

    async def lease_task(self, topic: str) -> LeasedTask | None:
        """
        Lease a task for a topic.

        Returns:
            The leased task, or None when nothing is available.
        """
        response = await self._http.get(TASK_PATH, params={"topic": topic})
        if response.status_code == httpx.codes.NO_CONTENT:
            return None
        response.raise_for_status()
        return LeasedTask.from_json(response.json())

    async def submit_result(self, task_id: str, output: Any) -> None:
        """
        Submit the result of a task.

        Raises:
            TaskNotFoundError: If the broker does not know the task.
        """
        response = await self._http.post(RESULT_PATH, json={"id": task_id, "output": output})
        if response.status_code == httpx.codes.NOT_FOUND:
            raise TaskNotFoundError(task_id)
        response.raise_for_status()

    async def get_result(self, task_id: str) -> Any | None:
        """
        Fetch the output of a task.

        Returns:
            The submitted output, or None while the task has no result.

        Raises:
            TaskNotFoundError: If the broker does not know the task.
        """
        response = await self._http.get(RESULT_PATH, params={"id": task_id})
        if response.status_code == httpx.codes.NOT_FOUND:
            raise TaskNotFoundError(task_id)
        if response.status_code == httpx.codes.ACCEPTED:
            return None
        response.raise_for_status()
        return response.json()["output"]

    async def wait_for_result(
        self,
        task_id: str,
        poll_interval: float = 1.0,
        timeout: float | None = None,
    ) -> Any:
        """
        Poll until a task has a result.

        Args:
            task_id: The task to wait for.
            poll_interval: Seconds between polls.
            timeout: Give up after this many seconds. Waits forever if None.

        Raises:
            TimeoutError: If the timeout elapses first.
            TaskNotFoundError: If the broker does not know the task.
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            output = await self.get_result(task_id)
            if output is not None:
                return output

            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError(f"No result for task {task_id} after {timeout}s")

            logger.debug("Result pending", extra={"task_id": task_id})
            await asyncio.sleep(poll_interval)
