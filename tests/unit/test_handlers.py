"""
Unit tests for topic handlers.
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from workpluck.client import LeasedTask
from workpluck.constants import TaskStatus
from workpluck.worker.handlers import (
    execute_task,
    get_handler,
    handle_echo,
    handle_sleep,
    list_handlers,
    register_handler,
)


def make_task(topic: str, input) -> LeasedTask:
    return LeasedTask(
        id=str(uuid4()),
        topic=topic,
        input=input,
        status=TaskStatus.PENDING,
        timestamp=datetime.now(timezone.utc),
    )


class TestTaskHandlers:
    """Tests for topic handlers."""

    def test_list_handlers(self):
        """Test listing registered handlers."""
        handlers = list_handlers()

        assert "echo" in handlers
        assert "sleep" in handlers

    def test_get_handler_exists(self):
        """Test getting an existing handler."""
        assert get_handler("echo") == handle_echo

    def test_get_handler_not_exists(self):
        """Test getting a non-existent handler."""
        assert get_handler("nonexistent") is None

    async def test_echo_handler(self):
        """Test the echo handler."""
        task = make_task("echo", {"data": "x"})

        assert await handle_echo(task) == {"data": "x"}

    async def test_sleep_handler(self):
        """Test the sleep handler."""
        task = make_task("sleep", {"duration_seconds": 0.01})

        assert await handle_sleep(task) == {"slept_for": 0.01}

    async def test_execute_task_success(self):
        """Test execute_task with a registered topic."""
        outcome = await execute_task(make_task("echo", [1, 2, 3]))

        assert outcome.success is True
        assert outcome.output == [1, 2, 3]
        assert outcome.duration_ms is not None

    async def test_execute_task_unknown_topic(self):
        """Test execute_task with no handler for the topic."""
        outcome = await execute_task(make_task("nonexistent_topic", {}))

        assert outcome.success is False
        assert "No handler registered" in outcome.error

    async def test_execute_task_handler_exception(self):
        """Test that handler exceptions become failed outcomes."""

        @register_handler("test-explodes")
        async def explode(task: LeasedTask):
            raise RuntimeError("boom")

        outcome = await execute_task(make_task("test-explodes", {}))

        assert outcome.success is False
        assert "boom" in outcome.error


class TestLeasedTask:
    """Tests for LeasedTask parsing."""

    def test_from_json(self):
        """Test parsing the GET /task body."""
        task = LeasedTask.from_json(
            {
                "id": "abc",
                "topic": "t",
                "input": {"data": "x"},
                "status": "pending",
                "timestamp": "2024-01-01T12:00:00Z",
            }
        )

        assert task.status == TaskStatus.PENDING
        assert task.timestamp == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_from_json_missing_field(self):
        """Test that an incomplete body is rejected."""
        with pytest.raises(KeyError):
            LeasedTask.from_json({"id": "abc"})


class TestNoOutputHandler:
    """Handlers that finish without producing output."""

    async def test_execute_task_none_output(self):
        """Test that a handler returning None yields a failed outcome."""

        @register_handler("test-returns-none")
        async def returns_none(task: LeasedTask):
            return None

        outcome = await execute_task(make_task("test-returns-none", {"data": "x"}))

        assert outcome.success is False
        assert outcome.output is None
        assert "returned no output" in outcome.error
