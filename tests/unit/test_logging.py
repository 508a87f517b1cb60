"""
Unit tests for logging processors.
"""

from workpluck import __version__
from workpluck.observability.logging import service_info


class TestServiceInfo:
    """Tests for the service info processor."""

    def test_adds_service_and_version(self):
        """Test that records are stamped with service name and version."""
        processor = service_info("workpluck-test")

        event = processor(None, "info", {"event": "Task leased"})

        assert event["service"] == "workpluck-test"
        assert event["version"] == __version__

    def test_keeps_explicit_values(self):
        """Test that values already on the record are not overwritten."""
        processor = service_info("workpluck-test")

        event = processor(None, "info", {"event": "x", "service": "other"})

        assert event["service"] == "other"
