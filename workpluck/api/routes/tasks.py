"""
Task submission and leasing routes.
"""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from workpluck.api.dependencies import WorkStoreDep
from workpluck.constants import SPAN_LEASE_TASK, SPAN_SUBMIT_TASK, TASK_PATH
from workpluck.observability.tracing import get_tracer
from workpluck.types.api import SubmitTaskRequest, SubmitTaskResponse, TaskResponse
from workpluck.types.task import Task

router = APIRouter(prefix=TASK_PATH, tags=["Tasks"])


def _task_to_response(task: Task) -> TaskResponse:
    """Convert a stored Task to a TaskResponse."""
    return TaskResponse(
        id=task.id,
        topic=task.topic,
        input=task.input,
        status=task.status,
        timestamp=task.timestamp,
    )


@router.post(
    "",
    response_model=SubmitTaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a task",
    description="Submit a new task for processing by a worker polling its topic.",
)
def submit_task(
    request: SubmitTaskRequest,
    store: WorkStoreDep,
) -> SubmitTaskResponse:
    """
    Submit a new task.

    Args:
        request: Topic and input of the task.
        store: The work store.

    Returns:
        SubmitTaskResponse with the new task id.
    """
    with get_tracer().start_as_current_span(SPAN_SUBMIT_TASK) as span:
        span.set_attribute("task.topic", request.topic)
        task_id = store.submit_task(request.topic, request.input)
        span.set_attribute("task.id", task_id)

    return SubmitTaskResponse(id=task_id)


@router.get(
    "",
    response_model=TaskResponse,
    summary="Lease a task",
    description=(
        "Lease a task for the given topic. Returns 204 when no task is "
        "available. Leases expire after the configured TTL."
    ),
    responses={status.HTTP_204_NO_CONTENT: {"description": "No task available"}},
)
def lease_task(
    store: WorkStoreDep,
    topic: Annotated[str, Query(min_length=1)],
):
    """
    Lease the next eligible task for a topic.

    Args:
        store: The work store.
        topic: Topic to lease from.

    Returns:
        TaskResponse, or an empty 204 response.
    """
    with get_tracer().start_as_current_span(SPAN_LEASE_TASK) as span:
        span.set_attribute("task.topic", topic)
        task = store.lease_task(topic)
        if task is not None:
            span.set_attribute("task.id", task.id)

    if task is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return _task_to_response(task)
