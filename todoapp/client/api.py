"""HTTP client for the task API."""

import httpx

from todoapp.models import Task


class TasksClient:
    """Thin wrapper over ``httpx.Client``. Non-2xx responses raise ``httpx.HTTPStatusError``."""

    def __init__(self, base_url: str | None = None, timeout_seconds: float = 10.0, http: httpx.Client | None = None):
        """Use the given httpx client, or open one against base_url."""
        if http is None:
            if base_url is None:
                raise ValueError("Either base_url or http must be given.")
            http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout_seconds)
        self.http = http

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.http.close()

    def list_tasks(self) -> list[Task]:
        """Fetch every task on the server."""
        response = self.http.get("/tasks")
        response.raise_for_status()
        return [Task.model_validate(item) for item in response.json()]

    def get_task(self, task_id: str) -> Task:
        """Fetch a single task by ID."""
        response = self.http.get(f"/tasks/{task_id}")
        response.raise_for_status()
        return Task.model_validate(response.json())

    def create_task(self, text: str) -> Task:
        """Create a task and return the stored record."""
        response = self.http.post("/tasks", json={"text": text})
        response.raise_for_status()
        return Task.model_validate(response.json())

    def update_task(self, task_id: str, *, text: str | None = None, completed: bool | None = None) -> Task:
        """Send only the given fields and return the updated record."""
        payload: dict = {}
        if text is not None:
            payload["text"] = text
        if completed is not None:
            payload["completed"] = completed
        response = self.http.put(f"/tasks/{task_id}", json=payload)
        response.raise_for_status()
        return Task.model_validate(response.json())

    def delete_task(self, task_id: str) -> None:
        """Delete a task on the server."""
        response = self.http.delete(f"/tasks/{task_id}")
        response.raise_for_status()
