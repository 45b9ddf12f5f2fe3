"""
Unit tests for the persistent config HTTP surface.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from neo_persistent_config.api import create_config_router, register_exception_handlers
from neo_persistent_config.core.exceptions import StorageError
from neo_persistent_config.repositories.persistent_repository import PersistentRepository
from neo_persistent_config.storage.memory import ArrayStorage


@pytest.fixture
def repository(config_repository):
    storage = ArrayStorage({"test.title": "Stored title"})
    return PersistentRepository(config_repository, storage).set_items([
        {"test.name": {"label": "Site name", "rules": ["required", "max:20"], "options": {"widget": "text"}}},
        "test.title",
    ])


@pytest.fixture
def client(repository):
    app = FastAPI()
    app.include_router(create_config_router(lambda: repository), prefix="/config")
    register_exception_handlers(app)
    return TestClient(app)


class TestConfigRouter:
    """Test the config management endpoints."""

    def test_list_items(self, client):
        """Test items are listed with restored values."""
        response = client.get("/config/")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        name, title = data["items"]
        assert name["id"] == "test.name"
        assert name["label"] == "Site name"
        assert name["value"] == "Origin name"
        assert name["options"] == {"widget": "text"}
        assert title["value"] == "Stored title"

    def test_save_values(self, client, repository):
        response = client.put("/config/", json={"values": {"test.name": "Neo", "unknown": "x"}})

        assert response.status_code == 200
        assert response.json()["data"] == {"saved": ["test.name"]}
        assert repository.storage.get() == {"test.title": "Stored title", "test.name": "Neo"}
        assert repository.get("test.name") == "Neo"

    def test_save_invalid_values(self, client, repository):
        """Test validation errors are returned with item labels."""
        response = client.put("/config/", json={"values": {"test.name": ""}})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "ValidationError"
        assert error["details"]["errors"] == {"test.name": ["The Site name field is required."]}
        assert "test.name" not in repository.storage.get()

    def test_reset_values(self, client, repository):
        client.put("/config/", json={"values": {"test.name": "Neo"}})

        response = client.delete("/config/")

        assert response.status_code == 200
        assert repository.storage.get() == {}
        assert repository.get("test.name") == "Origin name"

    def test_reset_value(self, client, repository):
        client.put("/config/", json={"values": {"test.name": "Neo"}})

        response = client.delete("/config/test.name")

        assert response.status_code == 200
        assert response.json()["data"] == {"key": "test.name"}
        assert repository.storage.get() == {"test.title": "Stored title"}


class TestExceptionHandlers:
    """Test error responses."""

    def test_storage_error(self, client, repository, mocker):
        mocker.patch.object(repository.storage, "clear", side_effect=StorageError("Disk full", details={"path": "/x"}))

        response = client.delete("/config/")

        assert response.status_code == 503
        error = response.json()["error"]
        assert error["code"] == "StorageError"
        assert error["details"] == {}

    def test_other_library_error(self, repository):
        app = FastAPI()
        app.include_router(create_config_router(lambda: repository))
        register_exception_handlers(app, is_production=False)
        repository.set_items([{"key": "test.name", "cast": "decimal"}])

        response = TestClient(app).put("/", json={"values": {"test.name": "1.5"}})

        assert response.status_code == 500
        assert response.json()["error"]["details"] == {"cast": "decimal", "key": "test.name"}
