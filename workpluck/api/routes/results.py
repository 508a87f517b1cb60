"""
Result submission and retrieval routes.
"""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from workpluck.api.dependencies import WorkStoreDep
from workpluck.constants import RESULT_PATH, SPAN_GET_RESULT, SPAN_SUBMIT_RESULT
from workpluck.observability.tracing import get_tracer
from workpluck.types.api import ErrorResponse, ResultResponse, SubmitResultRequest

router = APIRouter(prefix=RESULT_PATH, tags=["Results"])


@router.post(
    "",
    summary="Submit a task result",
    description=(
        "Submit the result of a task. Accepted for any existing task; "
        "a later submission replaces an earlier one."
    ),
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def submit_result(
    request: SubmitResultRequest,
    store: WorkStoreDep,
) -> Response:
    """
    Store the result of a task and mark it completed.

    Args:
        request: Task id and output.
        store: The work store.

    Returns:
        An empty 200 response.
    """
    with get_tracer().start_as_current_span(SPAN_SUBMIT_RESULT) as span:
        span.set_attribute("task.id", request.id)
        store.submit_result(request.id, request.output)

    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "",
    response_model=ResultResponse,
    summary="Get a task result",
    description="Get the result of a task. Returns 202 while the task has no result.",
    responses={
        status.HTTP_202_ACCEPTED: {"description": "Task exists but has no result yet"},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
def get_result(
    store: WorkStoreDep,
    id: Annotated[str, Query(min_length=1)],
):
    """
    Get the result for a task.

    Args:
        store: The work store.
        id: The task identifier.

    Returns:
        ResultResponse, or an empty 202 response while pending.
    """
    with get_tracer().start_as_current_span(SPAN_GET_RESULT) as span:
        span.set_attribute("task.id", id)
        result = store.get_result(id)

    if result is None:
        return Response(status_code=status.HTTP_202_ACCEPTED)

    return ResultResponse(id=result.id, output=result.output)
