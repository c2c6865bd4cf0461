"""Pydantic models for the task API.

These models describe the JSON contract shared by the service and the client.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


class TaskCreate(BaseModel):
    """Request body for creating a new task.

    ``text`` is optional here so that a missing value is reported as a
    client error by the store rather than as a schema failure.
    """

    text: str | None = Field(default=None, description="The task text (required, non-blank)")


class TaskUpdate(BaseModel):
    """Request body for updating an existing task. Only supplied fields change."""

    text: str | None = Field(default=None, description="New text for the task")
    completed: StrictBool | None = Field(default=None, description="New completion status")

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields keyed by their stored names."""
        return self.model_dump(exclude_none=True)


class Task(BaseModel):
    """A task item as stored and returned by the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique identifier for the task")
    text: str = Field(..., description="The task text")
    completed: bool = Field(default=False, description="Whether the task has been completed")
    created_at: datetime = Field(..., alias="createdAt", description="When the task was created")
    updated_at: datetime | None = Field(
        default=None,
        alias="updatedAt",
        description="When the task was last updated; absent until the first update",
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        """Stored timestamps are UTC; attach the zone when the driver drops it."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Task":
        """Build a task from a raw MongoDB document."""
        return cls(
            id=str(document["_id"]),
            text=document["text"],
            completed=document.get("completed", False),
            created_at=document["createdAt"],
            updated_at=document.get("updatedAt"),
        )


class HealthResponse(BaseModel):
    """Response from the health check endpoint."""

    status: str = "healthy"
    version: str = "1.0.0"
    database: str = "connected"
