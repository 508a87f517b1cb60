"""
Error taxonomy for the work store.

An empty lease is not an error: ``WorkStore.lease_task`` returns ``None``.
"""


class WorkpluckError(Exception):
    """Base class for all workpluck errors."""


class ValidationError(WorkpluckError, ValueError):
    """A required field is missing or malformed."""


class TaskNotFoundError(WorkpluckError, LookupError):
    """The referenced task identifier is unknown."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")
