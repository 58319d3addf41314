import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.repositories import InMemoryRepository
from todo_api.settings import Settings


@pytest.fixture
def settings():
    return Settings(cors_allow_origins=["*"], seed_sample_todos=False)


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def app(settings, repo):
    return create_app(settings=settings, repository=repo)


@pytest.fixture
def client(app):
    return TestClient(app)
