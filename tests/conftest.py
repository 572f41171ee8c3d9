"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment before any notaria import
  - Provide in-memory repositories, a fixed TokenService and a Container
  - Provide an HTTP client over create_app() with the test container

Notes:
  - APP_ENV=test: in-memory store, rate limiting disabled
  - Settings cache and limiter singletons are reset per test
"""

import os

os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "test-secret-please-change-0123456789abcdef")

from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from notaria.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from notaria.container import build_container  # noqa: E402
from notaria.crosscutting.rate_limit import reset_rate_limiters  # noqa: E402
from notaria.domain.ownership_policy import Actor  # noqa: E402
from notaria.identity.auth_users import TokenService  # noqa: E402
from notaria.infrastructure.repositories import (  # noqa: E402
    InMemoryProcessRepository,
    InMemoryUserRepository,
)

TEST_SECRET = os.environ["JWT_SECRET"]


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (require PostgreSQL)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    app_config.get_settings.cache_clear()
    reset_rate_limiters()
    yield
    app_config.get_settings.cache_clear()
    reset_rate_limiters()


@pytest.fixture
def process_repo() -> InMemoryProcessRepository:
    return InMemoryProcessRepository()


@pytest.fixture
def user_repo(process_repo: InMemoryProcessRepository) -> InMemoryUserRepository:
    return InMemoryUserRepository(process_repo)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET, 3600)


@pytest.fixture
def actor() -> Actor:
    return Actor(user_id=uuid4(), email="alice@example.com")


@pytest.fixture
def other_actor() -> Actor:
    return Actor(user_id=uuid4(), email="bob@example.com")


@pytest.fixture
def container(user_repo, process_repo, token_service):
    return build_container(
        app_config.get_settings(),
        users=user_repo,
        processes=process_repo,
        token_service=token_service,
    )


@pytest.fixture
def client(container) -> TestClient:
    from notaria.api.main import create_app

    with TestClient(create_app(container)) as test_client:
        yield test_client
