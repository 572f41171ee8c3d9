"""
Name: PostgreSQL Repository Integration Tests

Responsibilities:
  - Verify PostgresUserRepository / PostgresProcessRepository against the
    migrated schema
  - Constraint mapping: unique email and FK RESTRICT -> ConflictError
  - Owner-scoped UPDATE/DELETE and listing order

Setup:
  RUN_INTEGRATION=1 DATABASE_URL=postgresql://... pytest tests/integration
"""

from uuid import uuid4

import pytest

from notaria.crosscutting.exceptions import ConflictError
from notaria.domain.entities import Process, ProcessState
from notaria.infrastructure.repositories.postgres import (
    PostgresProcessRepository,
    PostgresUserRepository,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def users(pool) -> PostgresUserRepository:
    return PostgresUserRepository(pool)


@pytest.fixture
def processes(pool) -> PostgresProcessRepository:
    return PostgresProcessRepository(pool)


def _process(owner_id, repertorio="REP-001", **kwargs) -> Process:
    return Process(id=uuid4(), repertorio=repertorio, owner_id=owner_id, **kwargs)


def test_user_crud_and_unique_email(users):
    alice = users.create_user(email="alice@example.com", password_hash="h", name="Alice")

    assert users.get_user_by_id(alice.id) == alice
    assert users.get_user_by_email("alice@example.com").id == alice.id
    with pytest.raises(ConflictError):
        users.create_user(email="alice@example.com", password_hash="h2")

    updated = users.update_user(alice.id, name="Alice A.")
    assert updated.name == "Alice A."
    assert updated.updated_at >= alice.updated_at


def test_process_lifecycle_is_owner_scoped(users, processes):
    alice = users.create_user(email="alice@example.com", password_hash="h")
    bob = users.create_user(email="bob@example.com", password_hash="h")
    stored = processes.create_process(_process(alice.id, caratula="Poder"))

    assert stored.estado == ProcessState.INICIADO
    assert processes.update_state(stored.id, bob.id, ProcessState.PAUSADO) is None
    paused = processes.update_state(stored.id, alice.id, ProcessState.PAUSADO)
    assert paused.estado == ProcessState.PAUSADO

    assert processes.list_processes(alice.id, paused=False) == []
    assert [p.id for p in processes.list_processes(alice.id, paused=True)] == [
        stored.id
    ]
    assert processes.delete_process(stored.id, bob.id) is False
    assert processes.delete_process(stored.id, alice.id) is True


def test_user_with_processes_cannot_be_deleted(users, processes):
    alice = users.create_user(email="alice@example.com", password_hash="h")
    processes.create_process(_process(alice.id))

    assert processes.count_processes_by_owner(alice.id) == 1
    with pytest.raises(ConflictError):
        users.delete_user(alice.id)


def test_list_is_most_recent_first(users, processes):
    alice = users.create_user(email="alice@example.com", password_hash="h")
    first = processes.create_process(_process(alice.id, "A"))
    second = processes.create_process(_process(alice.id, "B"))

    ids = [p.id for p in processes.list_processes(alice.id)]

    assert ids == [second.id, first.id]
