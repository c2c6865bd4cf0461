"""Local list state for the client.

Every operation returns a new ``BoardState``; earlier states are never
modified, so a previous render can be restored as-is.
"""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import uuid4

from todoapp.models import Task

LOCAL_ID_PREFIX = "local-"


def new_local_id() -> str:
    """Transient id for a task the server has not assigned one to yet."""
    return f"{LOCAL_ID_PREFIX}{uuid4().hex}"


def is_local_id(task_id: str) -> bool:
    """Whether the ID was assigned locally rather than by the server."""
    return task_id.startswith(LOCAL_ID_PREFIX)


@dataclass(frozen=True)
class BoardState:
    """The task list plus the pending new-task text."""

    tasks: tuple[Task, ...] = ()
    draft: str = ""

    def with_draft(self, text: str) -> "BoardState":
        """Copy with a new draft."""
        return replace(self, draft=text)

    def with_tasks(self, tasks: list[Task] | tuple[Task, ...]) -> "BoardState":
        """Copy with a new task list."""
        return replace(self, tasks=tuple(tasks))

    def find(self, task_id: str) -> Task | None:
        """Return the task with this ID, or None."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


def add_task(state: BoardState) -> tuple[BoardState, Task | None]:
    """Append the draft as a new task and clear the draft.

    A blank draft is a no-op and returns the same state with no task.
    """
    if not state.draft.strip():
        return state, None
    task = Task(
        id=new_local_id(),
        text=state.draft,
        completed=False,
        created_at=datetime.now(UTC),
    )
    return BoardState(tasks=state.tasks + (task,), draft=""), task


def toggle_task(state: BoardState, task_id: str) -> BoardState:
    """Flip completed for the matching task only."""
    return state.with_tasks(
        [
            task.model_copy(update={"completed": not task.completed}) if task.id == task_id else task
            for task in state.tasks
        ]
    )


def delete_task(state: BoardState, task_id: str) -> BoardState:
    """Drop the matching task."""
    return state.with_tasks([task for task in state.tasks if task.id != task_id])


def replace_task(state: BoardState, task_id: str, new_task: Task) -> BoardState:
    """Swap the task with ``task_id`` for ``new_task``, keeping its position."""
    return state.with_tasks([new_task if task.id == task_id else task for task in state.tasks])


def render(state: BoardState) -> str:
    """Render the whole list, one numbered line per task in list order."""
    if not state.tasks:
        return "No tasks yet."
    lines = []
    for position, task in enumerate(state.tasks, start=1):
        mark = "x" if task.completed else " "
        lines.append(f"{position:>3}. [{mark}] {task.text}")
    return "\n".join(lines)
