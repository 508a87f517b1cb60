"""
Type definitions for workpluck.
Contains store records and API request/response models.
"""

from workpluck.types.api import (
    ErrorResponse,
    HealthResponse,
    ResultResponse,
    SubmitResultRequest,
    SubmitTaskRequest,
    SubmitTaskResponse,
    TaskResponse,
)
from workpluck.types.task import (
    Result,
    StoreSnapshot,
    Task,
    TaskOutcome,
)

__all__ = [
    # API types
    "SubmitTaskRequest",
    "SubmitTaskResponse",
    "TaskResponse",
    "SubmitResultRequest",
    "ResultResponse",
    "HealthResponse",
    "ErrorResponse",
    # Store types
    "Task",
    "Result",
    "StoreSnapshot",
    "TaskOutcome",
]
