"""Tests for the synchronised client board and terminal commands."""

import io

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from todoapp.client.api import TasksClient
from todoapp.client.board import TaskBoard
from todoapp.client.cli import CLI
from todoapp.client.state import BoardState, is_local_id
from todoapp.config import Settings
from todoapp.main import create_app


@pytest.fixture
def api(app: FastAPI) -> TasksClient:
    """API client that talks to the app through the test client."""
    return TasksClient(http=TestClient(app))


@pytest.fixture
def board(api: TasksClient) -> TaskBoard:
    """Board synced with the in-memory app."""
    return TaskBoard(api)


def _unreachable_client() -> TasksClient:
    """API client whose every request fails to connect."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return TasksClient(http=httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(handler)))


def test_tasks_client_round_trip(api: TasksClient) -> None:
    """Test create, update, fetch and delete through the API client."""
    created = api.create_task("buy milk")
    assert not is_local_id(created.id)

    updated = api.update_task(created.id, completed=True)
    assert updated.completed is True
    assert updated.updated_at is not None
    assert api.get_task(created.id).completed is True

    api.delete_task(created.id)
    assert api.list_tasks() == []
    with pytest.raises(httpx.HTTPStatusError) as excinfo:
        api.delete_task(created.id)
    assert excinfo.value.response.status_code == 404


def test_tasks_client_requires_target() -> None:
    """Test that the client needs a base URL or an httpx client."""
    with pytest.raises(ValueError):
        TasksClient()


def test_add_installs_server_record(board: TaskBoard, api: TasksClient) -> None:
    """Test that an added task ends up with the server's ID."""
    board.set_draft("buy milk")
    assert board.add() is True

    (task,) = board.state.tasks
    assert not is_local_id(task.id)
    assert board.state.draft == ""
    assert [t.id for t in api.list_tasks()] == [task.id]


def test_add_blank_draft_does_nothing(board: TaskBoard, api: TasksClient) -> None:
    """Test that a blank draft neither changes the list nor calls the server."""
    board.set_draft("   ")
    assert board.add() is False
    assert board.state.tasks == ()
    assert api.list_tasks() == []


def test_toggle_and_delete_reach_server(board: TaskBoard, api: TasksClient) -> None:
    """Test that toggling and deleting are mirrored on the server."""
    board.set_draft("walk dog")
    board.add()
    task_id = board.state.tasks[0].id

    assert board.toggle(task_id) is True
    assert board.state.find(task_id).completed is True
    assert api.get_task(task_id).completed is True

    assert board.toggle(task_id) is True
    assert api.get_task(task_id).completed is False

    assert board.delete(task_id) is True
    assert board.state.tasks == ()
    assert api.list_tasks() == []


def test_refresh_loads_server_list(board: TaskBoard, api: TasksClient) -> None:
    """Test that refresh replaces the list with the server's."""
    api.create_task("one")
    api.create_task("two")
    assert board.refresh() is True
    assert [t.text for t in board.state.tasks] == ["one", "two"]


def test_failed_add_reverts_local_list() -> None:
    """Test that a failed add puts the list and draft back."""
    board = TaskBoard(_unreachable_client())
    board.set_draft("offline")
    assert board.add() is False
    assert board.state == BoardState(draft="offline")
    assert board.last_error.startswith("Could not add task")


def test_failed_toggle_and_delete_revert(board: TaskBoard, api: TasksClient) -> None:
    """Test that failed toggle and delete leave the list as it was."""
    board.set_draft("kept")
    board.add()
    before = board.state
    task_id = before.tasks[0].id

    # The record disappears server-side, so both calls answer 404.
    api.delete_task(task_id)

    assert board.toggle(task_id) is False
    assert board.state == before
    assert board.last_error == "Could not update task: 404 Task not found"

    assert board.delete(task_id) is False
    assert board.state == before


def test_refresh_reports_unavailable_service() -> None:
    """Test that a 503 on refresh is shown to the user."""
    board = TaskBoard(TasksClient(http=TestClient(create_app(Settings()))))
    assert board.refresh() is False
    assert board.last_error == "Could not load tasks: 503 Database not initialized"


def test_cli_commands(board: TaskBoard) -> None:
    """Test add, toggle, delete and the error messages of the command parser."""
    out = io.StringIO()
    cli = CLI(board, out=out)

    assert cli.handle_command("a buy milk") is None
    assert cli.handle_command("a walk dog") is None
    assert cli.handle_command("t 1") is None
    assert cli.handle_command("d 2") is None
    assert [(t.text, t.completed) for t in board.state.tasks] == [("buy milk", True)]

    assert cli.handle_command("a   ") == "Task text cannot be empty."
    assert cli.handle_command("t 9").startswith("Usage")
    assert cli.handle_command("bogus").startswith("Unknown command")


def test_cli_run_loop(board: TaskBoard) -> None:
    """Test the draw/read loop until quit."""
    commands = iter(["a buy milk", "", "t 1", "q"])
    out = io.StringIO()
    CLI(board, input_func=lambda prompt: next(commands), out=out).run()

    text = out.getvalue()
    assert "[x] buy milk" in text
    assert text.rstrip().endswith("Goodbye.")
