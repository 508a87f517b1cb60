"""
API request and response type definitions.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from workpluck.constants import TaskStatus


class SubmitTaskRequest(BaseModel):
    """Request body for submitting a new task."""

    topic: str = Field(..., min_length=1, description="Topic used to route the task")
    input: Any = Field(..., description="Opaque task payload")

    @field_validator("input")
    @classmethod
    def input_present(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("input is required")
        return value


class SubmitTaskResponse(BaseModel):
    """Response body after submitting a task."""

    id: str


class TaskResponse(BaseModel):
    """Leased task as handed to a worker."""

    id: str
    topic: str
    input: Any
    status: TaskStatus
    timestamp: datetime


class SubmitResultRequest(BaseModel):
    """Request body for submitting a task result."""

    id: str = Field(..., min_length=1, description="Identifier of the answered task")
    output: Any = Field(..., description="Opaque result payload")

    @field_validator("output")
    @classmethod
    def output_present(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("output is required")
        return value


class ResultResponse(BaseModel):
    """Stored result for a task."""

    id: str
    output: Any


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    tasks: int
    results: int
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: Any = None
