"""
FastAPI dependencies shared by the routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from workpluck.store import WorkStore


def get_work_store(request: Request) -> WorkStore:
    """
    FastAPI dependency returning the store owned by the application.

    Args:
        request: The incoming request.

    Returns:
        The WorkStore created by ``create_app``.
    """
    return request.app.state.work_store


# Type alias for dependency injection
WorkStoreDep = Annotated[WorkStore, Depends(get_work_store)]
