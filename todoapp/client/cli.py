"""Interactive terminal front end for the task list.

The list is redrawn after every command. Numbers refer to positions in
the list as last drawn.
"""

import logging
import sys
from collections.abc import Callable

from todoapp.client.api import TasksClient
from todoapp.client.board import TaskBoard
from todoapp.config import api_url_from_env

logger = logging.getLogger(__name__)

HELP = """Commands:
  a <text>   Add a task
  t <n>      Toggle task n complete/incomplete
  d <n>      Delete task n
  r          Reload the list from the server
  h          Show this help
  q          Quit"""


class CLI:
    """Read-draw loop over a TaskBoard."""

    def __init__(self, board: TaskBoard, input_func: Callable[[str], str] = input, out=None):
        """Input and output default to the terminal."""
        self.board = board
        self.input = input_func
        self.out = out or sys.stdout

    def _print(self, text: str = "") -> None:
        """Write one line to the output stream."""
        print(text, file=self.out)

    def draw(self) -> None:
        """Print the list and the last sync error, if any."""
        self._print("To-Do List")
        self._print(self.board.render())
        if self.board.last_error:
            self._print(f"\n! {self.board.last_error}")

    def run(self) -> None:
        """Main loop: draw, read a command, apply it. Exits on q, EOF or Ctrl-C."""
        self.board.refresh()
        try:
            while True:
                self.draw()
                line = self.input("\n> ").strip()
                if not line:
                    continue
                if line.lower() in ("q", "quit", "exit"):
                    break
                message = self.handle_command(line)
                if message:
                    self._print(message)
        except (KeyboardInterrupt, EOFError):
            pass
        self._print("Goodbye.")

    def handle_command(self, line: str) -> str | None:
        """Apply one command. Returns a message for the user, if any."""
        cmd, _, rest = line.partition(" ")
        cmd = cmd.lower()
        if cmd == "a":
            if not rest.strip():
                return "Task text cannot be empty."
            self.board.set_draft(rest)
            self.board.add()
            return None
        if cmd in ("t", "d"):
            task_id = self._task_id_at(rest)
            if task_id is None:
                return f"Usage: {cmd} <n>; n is a number from the list."
            if cmd == "t":
                self.board.toggle(task_id)
            else:
                self.board.delete(task_id)
            return None
        if cmd == "r":
            self.board.refresh()
            return None
        if cmd in ("h", "help"):
            return HELP
        return "Unknown command. Type 'h' for help."

    def _task_id_at(self, raw: str) -> str | None:
        """Map a 1-based list position to a task ID."""
        raw = raw.strip().rstrip(".")
        if not raw.isdigit():
            return None
        position = int(raw)
        tasks = self.board.state.tasks
        if not 1 <= position <= len(tasks):
            return None
        return tasks[position - 1].id


def main() -> None:
    """Console entry point: run the terminal client against TODOAPP_API_URL."""
    logging.basicConfig(
        level=logging.ERROR,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    client = TasksClient(api_url_from_env())
    try:
        CLI(TaskBoard(client)).run()
    finally:
        client.close()


if __name__ == "__main__":
    main()
