"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from todoapp import __version__
from todoapp.config import Settings
from todoapp.errors import StoreNotReady, TaskError
from todoapp.models import HealthResponse, Task, TaskCreate, TaskUpdate
from todoapp.store import TaskStore, connect, parse_task_id

logger = logging.getLogger(__name__)


def get_store(request: Request) -> TaskStore:
    """Return the store attached at startup, or reject the request."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreNotReady()
    return store


def checked_task_id(task_id: str) -> str:
    """Reject a malformed path identifier before the request body is validated."""
    parse_task_id(task_id)
    return task_id


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect to MongoDB before serving and close the connection on shutdown."""
    settings: Settings = app.state.settings
    try:
        client, store = await connect(settings)
    except PyMongoError:
        logger.error("Failed to connect to MongoDB", exc_info=True)
        raise
    logger.info("Connected successfully to MongoDB server")
    app.state.store = store
    try:
        yield
    finally:
        app.state.store = None
        await client.close()
        logger.info("MongoDB connection closed")


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    """Report a task error with its status code and client-facing detail."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 client errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. The store is attached by the lifespan handler."""
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Todo API",
        description="Add, complete and delete short text tasks stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = None

    # Configure CORS for frontend access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TaskError, task_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint."""
        ready = getattr(request.app.state, "store", None) is not None
        return HealthResponse(version=__version__, database="connected" if ready else "unavailable")

    @app.get(
        "/tasks",
        response_model=list[Task],
        response_model_exclude_none=True,
        tags=["Tasks"],
    )
    async def list_tasks(store: TaskStore = Depends(get_store)) -> list[Task]:
        """List all tasks."""
        return await store.list_all()

    @app.post(
        "/tasks",
        response_model=Task,
        response_model_exclude_none=True,
        status_code=status.HTTP_201_CREATED,
        tags=["Tasks"],
    )
    async def create_task(data: TaskCreate, store: TaskStore = Depends(get_store)) -> Task:
        """Create a new task."""
        return await store.create(data)

    @app.get(
        "/tasks/{task_id}",
        response_model=Task,
        response_model_exclude_none=True,
        tags=["Tasks"],
    )
    async def get_task(
        store: TaskStore = Depends(get_store),
        task_id: str = Depends(checked_task_id),
    ) -> Task:
        """Get a specific task by ID."""
        return await store.get(task_id)

    @app.put(
        "/tasks/{task_id}",
        response_model=Task,
        response_model_exclude_none=True,
        tags=["Tasks"],
    )
    async def update_task(
        data: TaskUpdate,
        store: TaskStore = Depends(get_store),
        task_id: str = Depends(checked_task_id),
    ) -> Task:
        """Update an existing task."""
        return await store.update(task_id, data)

    @app.delete(
        "/tasks/{task_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        tags=["Tasks"],
    )
    async def delete_task(
        store: TaskStore = Depends(get_store),
        task_id: str = Depends(checked_task_id),
    ) -> Response:
        """Delete a task."""
        await store.delete(task_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def run() -> None:
    """Serve the API with uvicorn using settings from the environment."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, lifespan="on")


if __name__ == "__main__":
    run()
