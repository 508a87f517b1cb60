"""
Task-related type definitions for internal use.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel

from workpluck.constants import TaskStatus


@dataclass
class Task:
    """
    A unit of work held by the work store.

    ``id``, ``topic`` and ``input`` never change after submission.
    ``status`` and ``lease_time`` are only mutated under the store lock.
    """

    id: str
    topic: str
    input: Any
    created_at: datetime
    status: TaskStatus = TaskStatus.NEW
    lease_time: datetime | None = None

    def is_lease_expired(self, now: datetime, ttl: timedelta) -> bool:
        """Check if a pending lease is older than the TTL."""
        if self.status != TaskStatus.PENDING or self.lease_time is None:
            return False
        return now - self.lease_time > ttl

    def is_leasable(self, topic: str, now: datetime, ttl: timedelta) -> bool:
        """Check if a worker polling ``topic`` may take this task."""
        if self.topic != topic:
            return False
        return self.status == TaskStatus.NEW or self.is_lease_expired(now, ttl)

    @property
    def timestamp(self) -> datetime:
        """Most recent lease time, falling back to submission time."""
        return self.lease_time or self.created_at


@dataclass(frozen=True)
class Result:
    """Output submitted by a worker for the task with the same id."""

    id: str
    output: Any


@dataclass(frozen=True)
class StoreSnapshot:
    """
    Point-in-time dump of the work store for diagnostics.
    """

    tasks: list[tuple[str, TaskStatus]] = field(default_factory=list)
    results: list[str] = field(default_factory=list)

    def render(self) -> str:
        """Render the snapshot as the plain-text /observe body."""
        lines = ["Tasks:"]
        lines.extend(f"{task_id}: {status}" for task_id, status in self.tasks)
        lines.append("Results:")
        lines.extend(self.results)
        return "\n".join(lines) + "\n"


class TaskOutcome(BaseModel):
    """
    Outcome of running a task handler in a worker.
    """

    success: bool
    output: Any = None
    error: str | None = None
    duration_ms: float | None = None
