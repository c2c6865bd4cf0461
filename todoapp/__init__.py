"""A small task list: a FastAPI service over MongoDB plus a terminal client."""

__version__ = "1.0.0"
