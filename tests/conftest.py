"""Pytest fixtures for the task API tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from todoapp.config import Settings
from todoapp.main import create_app
from todoapp.store import TaskStore


@pytest.fixture
def collection():
    """A fresh in-memory MongoDB collection."""
    return AsyncMongoMockClient()["todoapp"]["tasks"]


@pytest.fixture
def store(collection) -> TaskStore:
    """Task store over the in-memory collection."""
    return TaskStore(collection)


@pytest.fixture
def app(store: TaskStore) -> FastAPI:
    """Application with the in-memory store attached in place of a live connection."""
    application = create_app(Settings())
    application.state.store = store
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client for the API.

    Not used as a context manager, so the lifespan handler never opens a
    real MongoDB connection.
    """
    return TestClient(app)
