"""
Worker process for executing tasks.

The worker polls the broker for tasks on its topics, runs the matching
handler, and posts the output back as the task's result.
"""

import asyncio
import logging
import signal

import httpx

from workpluck.client import LeasedTask, WorkpluckClient
from workpluck.config import get_settings
from workpluck.constants import SPAN_EXECUTE_TASK
from workpluck.exceptions import TaskNotFoundError
from workpluck.observability.logging import setup_logging
from workpluck.observability.tracing import get_tracer, setup_tracing
from workpluck.worker.handlers import execute_task

logger = logging.getLogger(__name__)


class Worker:
    """
    Task worker that polls for and executes tasks.

    Features:
    - Polls every configured topic in turn
    - Exponential backoff while all topics are empty or the broker is down
    - Handler failures are reported as ``{"error": ...}`` results
    - Graceful shutdown on SIGTERM/SIGINT
    """

    def __init__(
        self,
        client: WorkpluckClient,
        topics: list[str],
        poll_interval: float | None = None,
        max_backoff: float | None = None,
    ):
        """
        Initialize the worker.

        Args:
            client: Client connected to the broker.
            topics: Topics to poll.
            poll_interval: Initial delay when no task was found.
            max_backoff: Upper bound for the delay between empty polls.
        """
        if not topics:
            raise ValueError("Worker needs at least one topic")

        settings = get_settings()

        self.client = client
        self.topics = list(topics)
        self.poll_interval = (
            settings.worker_poll_interval_seconds if poll_interval is None else poll_interval
        )
        self.max_backoff = (
            settings.worker_max_backoff_seconds if max_backoff is None else max_backoff
        )

        self._running = False
        self._delay = self.poll_interval

    async def start(self) -> None:
        """Start the worker loop."""
        logger.info("Worker starting", extra={"topics": self.topics})

        self._running = True

        while self._running:
            processed = await self.run_once()

            if processed:
                self._delay = self.poll_interval
            else:
                await asyncio.sleep(self._delay)
                self._delay = self.next_delay(self._delay)

        logger.info("Worker stopped")

    async def stop(self) -> None:
        """Stop the worker after the current poll."""
        logger.info("Worker stopping")
        self._running = False

    def next_delay(self, delay: float) -> float:
        """Double the delay, capped at max_backoff."""
        return min(delay * 2, self.max_backoff)

    async def run_once(self) -> int:
        """
        Lease and process at most one task per topic.

        A broker error on one topic is logged and the pass moves on to the
        next topic.

        Returns:
            Number of tasks processed.
        """
        processed = 0

        for topic in self.topics:
            try:
                task = await self.client.lease_task(topic)
                if task is None:
                    continue

                await self._process(task)
            except httpx.HTTPError as e:
                logger.warning(
                    f"Broker request failed: {e}",
                    extra={"topic": topic},
                )
                continue

            processed += 1

        return processed

    async def _process(self, task: LeasedTask) -> None:
        """
        Execute a leased task and submit its result.

        Args:
            task: The leased task.
        """
        logger.info("Executing task", extra={"task_id": task.id, "topic": task.topic})

        with get_tracer().start_as_current_span(SPAN_EXECUTE_TASK) as span:
            span.set_attribute("task.id", task.id)
            span.set_attribute("task.topic", task.topic)
            outcome = await execute_task(task)

        if outcome.success:
            output = outcome.output
        else:
            logger.warning(
                "Task failed",
                extra={"task_id": task.id, "error": outcome.error},
            )
            output = {"error": outcome.error}

        try:
            await self.client.submit_result(task.id, output)
        except TaskNotFoundError:
            logger.error("Broker no longer knows task", extra={"task_id": task.id})
            return

        logger.info(
            "Task completed",
            extra={
                "task_id": task.id,
                "success": outcome.success,
                "duration_ms": outcome.duration_ms,
            },
        )


async def run_async() -> None:
    """Run the worker asynchronously."""
    settings = get_settings()
    setup_logging(settings)
    setup_tracing(settings)

    async with WorkpluckClient(
        base_url=settings.worker_base_url,
        timeout=settings.worker_request_timeout_seconds,
    ) as client:
        worker = Worker(client=client, topics=settings.worker_topics)

        # Handle shutdown signals
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(
                sig,
                lambda: asyncio.create_task(worker.stop())
            )

        await worker.start()


def run() -> None:
    """Run the worker."""
    asyncio.run(run_async())


if __name__ == "__main__":
    run()
