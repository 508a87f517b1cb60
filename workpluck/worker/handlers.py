"""
Topic handlers registry and implementations.

Handlers must tolerate running more than once for the same task: a lease
that expires before the result arrives is handed to another worker.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable

from workpluck.client import LeasedTask
from workpluck.types.task import TaskOutcome

logger = logging.getLogger(__name__)

# Type alias for topic handler functions
TaskHandler = Callable[[LeasedTask], Awaitable[Any]]

# Handler registry
_handlers: dict[str, TaskHandler] = {}


def register_handler(topic: str) -> Callable[[TaskHandler], TaskHandler]:
    """
    Decorator to register a topic handler.

    Args:
        topic: The topic this handler processes.

    Returns:
        Decorator function.

    Example:
        @register_handler("thumbnail")
        async def handle_thumbnail(task: LeasedTask) -> dict:
            ...
    """
    def decorator(handler: TaskHandler) -> TaskHandler:
        _handlers[topic] = handler
        logger.debug(f"Registered handler for topic: {topic}")
        return handler
    return decorator


def get_handler(topic: str) -> TaskHandler | None:
    """
    Get the handler for a topic.

    Returns:
        The handler function or None if not found.
    """
    return _handlers.get(topic)


def list_handlers() -> list[str]:
    """List all topics with a registered handler."""
    return list(_handlers.keys())


# ============================================================================
# Built-in handlers
# ============================================================================


@register_handler("echo")
async def handle_echo(task: LeasedTask) -> Any:
    """Return the task input unchanged."""
    return task.input


@register_handler("sleep")
async def handle_sleep(task: LeasedTask) -> dict[str, Any]:
    """
    Sleep handler for testing slow workers.

    Input should contain:
    - duration_seconds: How long to sleep
    """
    duration = 1.0
    if isinstance(task.input, dict):
        duration = float(task.input.get("duration_seconds", duration))

    await asyncio.sleep(duration)

    return {"slept_for": duration}


async def execute_task(task: LeasedTask) -> TaskOutcome:
    """
    Run the handler registered for a task's topic.

    Args:
        task: The leased task.

    Returns:
        TaskOutcome from the handler; failures are captured, not raised.
    """
    handler = get_handler(task.topic)

    if handler is None:
        logger.error(
            f"No handler for topic: {task.topic}",
            extra={"task_id": task.id}
        )
        return TaskOutcome(
            success=False,
            error=f"No handler registered for topic: {task.topic}",
        )

    start = time.perf_counter()
    try:
        output = await handler(task)
    except Exception as e:
        logger.exception(
            "Handler raised exception",
            extra={"task_id": task.id, "topic": task.topic}
        )
        return TaskOutcome(
            success=False,
            error=f"Handler exception: {e}",
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    duration_ms = (time.perf_counter() - start) * 1000

    # The broker rejects a null output, so it cannot count as a result
    if output is None:
        logger.error(
            "Handler returned no output",
            extra={"task_id": task.id, "topic": task.topic}
        )
        return TaskOutcome(
            success=False,
            error=f"Handler for topic {task.topic} returned no output",
            duration_ms=duration_ms,
        )

    return TaskOutcome(
        success=True,
        output=output,
        duration_ms=duration_ms,
    )
