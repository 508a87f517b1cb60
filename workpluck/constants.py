"""
Application constants.
Centralized location for all constant values used across the application.
"""

from datetime import timedelta
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle states.

    State transitions:
    - NEW -> PENDING (lease acquired)
    - PENDING -> PENDING (expired lease reclaimed by another worker)
    - NEW -> COMPLETED (result submitted without a lease)
    - PENDING -> COMPLETED (result submitted)
    - COMPLETED -> COMPLETED (result overwritten)
    """

    NEW = "new"
    PENDING = "pending"
    COMPLETED = "completed"


# Default values
LEASE_TTL = timedelta(hours=1)

# API paths
TASK_PATH = "/task"
RESULT_PATH = "/result"
OBSERVE_PATH = "/observe"

# Metrics names
METRIC_TASKS = "workpluck_tasks"
METRIC_TASKS_SUBMITTED = "tasks_submitted_total"
METRIC_LEASE_ACQUIRED = "leases_acquired_total"
METRIC_LEASE_RECLAIMED = "lease_reclaimed_total"
METRIC_LEASE_EMPTY = "lease_empty_total"
METRIC_RESULTS_SUBMITTED = "results_submitted_total"
METRIC_API_REQUESTS = "api_requests_total"
METRIC_API_LATENCY = "api_request_latency_seconds"

# Trace span names
SPAN_SUBMIT_TASK = "submit_task"
SPAN_LEASE_TASK = "lease_task"
SPAN_SUBMIT_RESULT = "submit_result"
SPAN_GET_RESULT = "get_result"
SPAN_EXECUTE_TASK = "execute_task"
