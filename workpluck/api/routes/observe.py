"""
Diagnostics dump route.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from workpluck.api.dependencies import WorkStoreDep
from workpluck.constants import OBSERVE_PATH

router = APIRouter(tags=["Diagnostics"])


@router.get(
    OBSERVE_PATH,
    response_class=PlainTextResponse,
    summary="Dump store state",
    description="Plain-text dump of every task's status and every result id.",
)
def observe(store: WorkStoreDep) -> PlainTextResponse:
    return PlainTextResponse(store.observe().render())
