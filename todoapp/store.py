"""MongoDB-backed task storage.

``TaskStore`` wraps a single collection. It is created once at startup,
attached to the application and shared by every request handler.
"""

import logging
from datetime import UTC, datetime

from bson import ObjectId
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from todoapp.config import Settings
from todoapp.errors import EmptyTaskText, InvalidTaskId, NoUpdateFields, StoreFailure, TaskNotFound
from todoapp.models import Task, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def parse_task_id(task_id: str) -> ObjectId:
    """Convert a path identifier to an ObjectId, rejecting malformed values."""
    if not ObjectId.is_valid(task_id):
        raise InvalidTaskId()
    return ObjectId(task_id)


class TaskStore:
    """Task CRUD over one MongoDB collection."""

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    async def list_all(self) -> list[Task]:
        """Return all tasks in the collection's natural order."""
        try:
            documents = await self._collection.find({}).to_list(length=None)
        except PyMongoError as exc:
            logger.exception("Error fetching tasks")
            raise StoreFailure("Error fetching tasks") from exc
        return [Task.from_document(document) for document in documents]

    async def get(self, task_id: str) -> Task:
        """Get a task by its ID. Raises TaskNotFound if absent."""
        object_id = parse_task_id(task_id)
        try:
            document = await self._collection.find_one({"_id": object_id})
        except PyMongoError as exc:
            logger.exception("Error fetching task %s", task_id)
            raise StoreFailure("Error fetching task") from exc
        if document is None:
            raise TaskNotFound()
        return Task.from_document(document)

    async def create(self, data: TaskCreate) -> Task:
        """Insert a new, not yet completed task and return it as stored."""
        if not data.text or not data.text.strip():
            raise EmptyTaskText()

        document = {
            "text": data.text,
            "completed": False,
            "createdAt": datetime.now(UTC),
        }
        try:
            result = await self._collection.insert_one(document)
            stored = await self._collection.find_one({"_id": result.inserted_id})
        except PyMongoError as exc:
            logger.exception("Error adding task")
            raise StoreFailure("Error adding task") from exc
        if stored is None:
            raise StoreFailure("Error adding task")
        logger.debug("Created task %s", result.inserted_id)
        return Task.from_document(stored)

    async def update(self, task_id: str, data: TaskUpdate) -> Task:
        """Merge the supplied fields into an existing task.

        The identifier is validated before the body, matching the order in
        which the API reports client errors.
        """
        object_id = parse_task_id(task_id)
        changes = data.changes()
        if not changes:
            raise NoUpdateFields()
        changes["updatedAt"] = datetime.now(UTC)

        try:
            document = await self._collection.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            logger.exception("Error updating task %s", task_id)
            raise StoreFailure("Error updating task") from exc
        if document is None:
            raise TaskNotFound()
        logger.debug("Updated task %s: %s", task_id, sorted(changes))
        return Task.from_document(document)

    async def delete(self, task_id: str) -> None:
        """Remove exactly one task. Raises TaskNotFound if nothing matched."""
        object_id = parse_task_id(task_id)
        try:
            result = await self._collection.delete_one({"_id": object_id})
        except PyMongoError as exc:
            logger.exception("Error deleting task %s", task_id)
            raise StoreFailure("Error deleting task") from exc
        if result.deleted_count == 0:
            raise TaskNotFound()
        logger.debug("Deleted task %s", task_id)


async def connect(settings: Settings) -> tuple[AsyncMongoClient, TaskStore]:
    """Open a client, ping the server once and return a ready store.

    Connection errors propagate to the caller; there is no retry.
    """
    client: AsyncMongoClient = AsyncMongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
    )
    try:
        await client.admin.command("ping")
    except PyMongoError:
        await client.close()
        raise
    collection = client[settings.db_name][settings.collection_name]
    return client, TaskStore(collection)
