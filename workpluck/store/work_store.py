"""
In-memory work store.
Implements the task/result collections and the lease-based retrieval protocol.
"""

import logging
import threading
from collections import Counter
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from workpluck.constants import LEASE_TTL, TaskStatus
from workpluck.exceptions import TaskNotFoundError, ValidationError
from workpluck.observability.metrics import MetricsCollector
from workpluck.types.task import Result, StoreSnapshot, Task

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class WorkStore:
    """
    Task and result collections behind one lock.

    Implements atomic operations for:
    - Task submission
    - Lease acquisition by topic, reclaiming expired leases lazily
    - Result submission (last writer wins)
    - Result lookup

    Every public method holds the lock for its whole duration, so a lease
    scan-and-update can never interleave with another lease or with a
    result submission for the same task.
    """

    def __init__(
        self,
        lease_ttl: timedelta = LEASE_TTL,
        clock: Callable[[], datetime] = utc_now,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize an empty store.

        Args:
            lease_ttl: Age after which a pending lease may be reclaimed.
            clock: Source of aware UTC timestamps.
            metrics: Optional collector updated on every state change.
        """
        self._lease_ttl = lease_ttl
        self._clock = clock
        self._metrics = metrics
        self._lock = threading.Lock()
        self._tasks: dict[str, Task] = {}
        self._results: dict[str, Result] = {}

    @property
    def lease_ttl(self) -> timedelta:
        return self._lease_ttl

    def submit_task(self, topic: str, input: Any) -> str:
        """
        Store a new task in the NEW state.

        Args:
            topic: Non-empty topic workers will poll for.
            input: Opaque payload handed to the worker.

        Returns:
            The new task identifier.

        Raises:
            ValidationError: If topic is empty or input is missing.
        """
        if not isinstance(topic, str) or not topic:
            raise ValidationError("topic must be a non-empty string")
        if input is None:
            raise ValidationError("input is required")

        with self._lock:
            task_id = str(uuid4())
            while task_id in self._tasks:
                task_id = str(uuid4())

            self._tasks[task_id] = Task(
                id=task_id,
                topic=topic,
                input=input,
                created_at=self._clock(),
            )
            self._publish_counts()

        logger.info("Task submitted", extra={"task_id": task_id, "topic": topic})
        if self._metrics is not None:
            self._metrics.record_task_submitted(topic)
        return task_id

    def lease_task(self, topic: str) -> Task | None:
        """
        Lease the first eligible task for a topic.

        A task is eligible when it is NEW, or PENDING with a lease older than
        the TTL. No ordering is guaranteed among eligible tasks.

        Args:
            topic: The topic to match.

        Returns:
            A copy of the leased task, or None if nothing is available.

        Raises:
            ValidationError: If topic is empty.
        """
        if not topic:
            raise ValidationError("topic is required")

        with self._lock:
            now = self._clock()
            task = next(
                (
                    candidate
                    for candidate in self._tasks.values()
                    if candidate.is_leasable(topic, now, self._lease_ttl)
                ),
                None,
            )

            if task is None:
                leased = None
            else:
                previous_lease = task.lease_time
                task.status = TaskStatus.PENDING
                task.lease_time = now
                leased = replace(task)
                self._publish_counts()

        if leased is None:
            if self._metrics is not None:
                self._metrics.record_lease_empty(topic)
            return None

        # Only an expired PENDING task carries a previous lease time
        reclaimed = previous_lease is not None
        if reclaimed:
            logger.warning(
                "Reclaimed expired lease",
                extra={
                    "task_id": leased.id,
                    "topic": topic,
                    "previous_lease": previous_lease.isoformat(),
                },
            )
        else:
            logger.info("Task leased", extra={"task_id": leased.id, "topic": topic})

        if self._metrics is not None:
            self._metrics.record_lease_acquired(topic, reclaimed=reclaimed)
        return leased

    def submit_result(self, task_id: str, output: Any) -> None:
        """
        Store the result for a task and mark it COMPLETED.

        Accepted whatever the task's current status; a later submission
        replaces an earlier one.

        Args:
            task_id: Identifier of an existing task.
            output: Opaque result payload.

        Raises:
            ValidationError: If output is missing.
            TaskNotFoundError: If no task has this identifier.
        """
        if output is None:
            raise ValidationError("output is required")

        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                raise TaskNotFoundError(task_id)

            overwritten = task_id in self._results
            self._results[task_id] = Result(id=task_id, output=output)
            task.status = TaskStatus.COMPLETED
            self._publish_counts()

        logger.info(
            "Result submitted",
            extra={"task_id": task_id, "overwritten": overwritten},
        )
        if self._metrics is not None:
            self._metrics.record_result_submitted()

    def get_result(self, task_id: str) -> Result | None:
        """
        Look up the result for a task.

        Args:
            task_id: The task identifier.

        Returns:
            The stored result, or None while the task has no result yet.

        Raises:
            TaskNotFoundError: If no task has this identifier.
        """
        with self._lock:
            if task_id not in self._tasks:
                raise TaskNotFoundError(task_id)
            return self._results.get(task_id)

    def get_task(self, task_id: str) -> Task | None:
        """
        Get a copy of a task by ID.

        Returns:
            The Task or None if not found.
        """
        with self._lock:
            task = self._tasks.get(task_id)
            return replace(task) if task is not None else None

    def observe(self) -> StoreSnapshot:
        """Take a consistent snapshot of task statuses and result ids."""
        with self._lock:
            return StoreSnapshot(
                tasks=[(task.id, task.status) for task in self._tasks.values()],
                results=list(self._results),
            )

    def counts(self) -> dict[TaskStatus, int]:
        """
        Get task counts by status.

        Returns:
            Dictionary of status -> count, with every status present.
        """
        with self._lock:
            return self._count_by_status()

    def result_count(self) -> int:
        """Number of stored results."""
        with self._lock:
            return len(self._results)

    def _count_by_status(self) -> dict[TaskStatus, int]:
        tally = Counter(task.status for task in self._tasks.values())
        return {status: tally.get(status, 0) for status in TaskStatus}

    def _publish_counts(self) -> None:
        # Caller holds the lock.
        if self._metrics is not None:
            self._metrics.update_task_counts(self._count_by_status())
