"""
Locust load testing for the workpluck API.

Run with:
    locust -f tests/load/locustfile.py --host=http://localhost:8080

Or headless:
    locust -f tests/load/locustfile.py --host=http://localhost:8080 \
        --headless -u 100 -r 10 --run-time 5m
"""

import random
import uuid

from locust import HttpUser, between, task

# Topics shared by producers and workers
TEST_TOPICS = [f"load-test-topic-{i}" for i in range(5)]


class ProducerUser(HttpUser):
    """
    Simulated producer.

    Submits tasks and polls for their results.
    """

    wait_time = between(0.5, 2)

    def on_start(self):
        """Called when a user starts."""
        self.created_task_ids: list[str] = []

    @task(10)
    def submit_task(self):
        """Submit a new task."""
        response = self.client.post(
            "/task",
            json={
                "topic": random.choice(TEST_TOPICS),
                "input": {"message": f"Load test at {uuid.uuid4().hex[:8]}"},
            },
            name="/task [POST]",
        )

        if response.status_code == 201:
            task_id = response.json().get("id")
            if task_id:
                self.created_task_ids.append(task_id)
                # Keep only recent task IDs
                if len(self.created_task_ids) > 100:
                    self.created_task_ids = self.created_task_ids[-100:]

    @task(5)
    def get_result(self):
        """Poll the result of a previously submitted task."""
        if not self.created_task_ids:
            return

        task_id = random.choice(self.created_task_ids)
        with self.client.get(
            "/result",
            params={"id": task_id},
            name="/result [GET]",
            catch_response=True,
        ) as response:
            if response.status_code in (200, 202):
                response.success()
            else:
                response.failure(f"Unexpected status {response.status_code}")

    @task(1)
    def health_check(self):
        """Check API health."""
        self.client.get("/health", name="/health [GET]")


class WorkerUser(HttpUser):
    """
    Simulated worker.

    Leases tasks by topic and immediately posts a result.
    """

    wait_time = between(0.1, 0.5)

    @task
    def lease_and_complete(self):
        """Lease a task and submit its result."""
        topic = random.choice(TEST_TOPICS)

        with self.client.get(
            "/task",
            params={"topic": topic},
            name="/task [GET]",
            catch_response=True,
        ) as response:
            if response.status_code == 204:
                response.success()
                return
            if response.status_code != 200:
                response.failure(f"Unexpected status {response.status_code}")
                return
            leased = response.json()

        self.client.post(
            "/result",
            json={"id": leased["id"], "output": {"echo": leased["input"]}},
            name="/result [POST]",
        )


class ObserverUser(HttpUser):
    """
    User polling the diagnostics endpoints.
    """

    wait_time = between(5, 10)

    @task(3)
    def observe(self):
        """Fetch the store dump."""
        self.client.get("/observe", name="/observe [GET]")

    @task(1)
    def metrics(self):
        """Scrape Prometheus metrics."""
        self.client.get("/metrics", name="/metrics [GET]")
