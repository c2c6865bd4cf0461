"""Local board state kept in step with the API.

Each action is applied to the local list first and then sent to the
server. On success the server's record replaces the local one; on any
HTTP failure the list is put back exactly as it was before the action.
"""

import logging

import httpx

from todoapp.client.api import TasksClient
from todoapp.client.state import BoardState, add_task, delete_task, is_local_id, render, replace_task, toggle_task

logger = logging.getLogger(__name__)


class TaskBoard:
    """Owns the current list state and mirrors each action to the API."""

    def __init__(self, client: TasksClient, state: BoardState | None = None):
        """Start from the given state, or an empty list."""
        self.client = client
        self.state = state or BoardState()
        self.last_error: str | None = None

    def _fail(self, previous: BoardState, action: str, exc: httpx.HTTPError) -> None:
        """Restore the pre-action state and remember the error for display."""
        logger.warning("Could not %s: %s", action, exc)
        self.state = previous
        self.last_error = f"Could not {action}: {_describe(exc)}"

    def set_draft(self, text: str) -> None:
        """Set the pending new-task text."""
        self.state = self.state.with_draft(text)

    def refresh(self) -> bool:
        """Replace the local list with the server's list."""
        try:
            tasks = self.client.list_tasks()
        except httpx.HTTPError as exc:
            self._fail(self.state, "load tasks", exc)
            return False
        self.state = self.state.with_tasks(tasks)
        self.last_error = None
        return True

    def add(self) -> bool:
        """Add the draft as a task, then swap in the server record."""
        previous = self.state
        self.state, local_task = add_task(previous)
        if local_task is None:
            return False
        try:
            created = self.client.create_task(local_task.text)
        except httpx.HTTPError as exc:
            self._fail(previous, "add task", exc)
            return False
        self.state = replace_task(self.state, local_task.id, created)
        self.last_error = None
        return True

    def toggle(self, task_id: str) -> bool:
        """Flip completion locally, then send the new value to the server."""
        previous = self.state
        task = previous.find(task_id)
        if task is None:
            return False
        self.state = toggle_task(previous, task_id)
        if is_local_id(task_id):
            return True
        try:
            updated = self.client.update_task(task_id, completed=not task.completed)
        except httpx.HTTPError as exc:
            self._fail(previous, "update task", exc)
            return False
        self.state = replace_task(self.state, task_id, updated)
        self.last_error = None
        return True

    def delete(self, task_id: str) -> bool:
        """Remove a task locally, then delete it on the server."""
        previous = self.state
        if previous.find(task_id) is None:
            return False
        self.state = delete_task(previous, task_id)
        if is_local_id(task_id):
            return True
        try:
            self.client.delete_task(task_id)
        except httpx.HTTPError as exc:
            self._fail(previous, "delete task", exc)
            return False
        self.last_error = None
        return True

    def render(self) -> str:
        """Render the current list."""
        return render(self.state)


def _describe(exc: httpx.HTTPError) -> str:
    """Short message for an HTTP failure, using the API detail when present."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = exc.response.text
        detail = body.get("detail", body) if isinstance(body, dict) else body
        return f"{exc.response.status_code} {detail}"
    return str(exc) or exc.__class__.__name__
