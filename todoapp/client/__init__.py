"""Client side of the task list: local state, API client and terminal UI."""
