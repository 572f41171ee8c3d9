"""
Name: Process Use Case Tests

Responsibilities:
  - Validate create/get/list/state/delete over the in-memory store
  - Cover the ownership matrix (foreign process == not found)
  - Cover active/paused listing partition
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from notaria.application.usecases.processes import (
    ChangeProcessStateUseCase,
    CreateProcessInput,
    CreateProcessUseCase,
    DeleteProcessUseCase,
    GetProcessUseCase,
    ListProcessesUseCase,
    ProcessErrorCode,
    ProcessView,
)
from notaria.domain.entities import ProcessState

pytestmark = pytest.mark.unit


def _create(repo, actor, repertorio="REP-001", **fields):
    result = CreateProcessUseCase(repo).execute(
        CreateProcessInput(repertorio=repertorio, actor=actor, **fields)
    )
    assert result.error is None
    return result.process


def test_create_starts_iniciado_and_owned_by_caller(process_repo, actor):
    process = _create(
        process_repo,
        actor,
        caratula="Compraventa",
        cliente="Juan Pérez",
        email_cliente="juan@example.com",
    )

    assert process.estado == ProcessState.INICIADO
    assert process.owner_id == actor.user_id
    assert process.created_at is not None
    assert process.updated_at is not None


def test_create_strips_repertorio(process_repo, actor):
    process = _create(process_repo, actor, repertorio="  REP-002  ")

    assert process.repertorio == "REP-002"


@pytest.mark.parametrize("repertorio", ["", "   ", None])
def test_create_rejects_blank_repertorio(process_repo, actor, repertorio):
    result = CreateProcessUseCase(process_repo).execute(
        CreateProcessInput(repertorio=repertorio, actor=actor)
    )

    assert result.process is None
    assert result.error.code == ProcessErrorCode.VALIDATION_ERROR
    assert process_repo.count_processes_by_owner(actor.user_id) == 0


def test_create_requires_actor(process_repo):
    result = CreateProcessUseCase(process_repo).execute(
        CreateProcessInput(repertorio="REP-001", actor=None)
    )

    assert result.error.code == ProcessErrorCode.VALIDATION_ERROR


def test_get_round_trip_preserves_fields(process_repo, actor):
    created = _create(
        process_repo, actor, caratula="Testamento", cliente="Ana", email_cliente=None
    )

    result = GetProcessUseCase(process_repo).execute(created.id, actor)

    assert result.error is None
    fetched = result.process
    assert (fetched.repertorio, fetched.caratula, fetched.cliente) == (
        "REP-001",
        "Testamento",
        "Ana",
    )
    assert fetched.email_cliente is None


def test_get_foreign_process_is_not_found(process_repo, actor, other_actor):
    created = _create(process_repo, actor)

    foreign = GetProcessUseCase(process_repo).execute(created.id, other_actor)
    missing = GetProcessUseCase(process_repo).execute(uuid4(), actor)

    assert foreign.error.code == ProcessErrorCode.NOT_FOUND
    assert missing.error.code == ProcessErrorCode.NOT_FOUND
    assert foreign.error.message == missing.error.message


def test_change_state_updates_estado(process_repo, actor):
    created = _create(process_repo, actor)

    result = ChangeProcessStateUseCase(process_repo).execute(
        created.id, actor, "Vigente"
    )

    assert result.error is None
    assert result.process.estado == ProcessState.VIGENTE
    assert result.process.updated_at >= created.updated_at


def test_change_state_is_idempotent(process_repo, actor):
    created = _create(process_repo, actor)
    use_case = ChangeProcessStateUseCase(process_repo)

    first = use_case.execute(created.id, actor, "Terminado")
    second = use_case.execute(created.id, actor, "Terminado")

    assert first.error is None
    assert second.error is None
    assert second.process.estado == ProcessState.TERMINADO


def test_change_state_allows_any_transition(process_repo, actor):
    created = _create(process_repo, actor)
    use_case = ChangeProcessStateUseCase(process_repo)

    use_case.execute(created.id, actor, "Cancelado")
    result = use_case.execute(created.id, actor, "Iniciado")

    assert result.process.estado == ProcessState.INICIADO


@pytest.mark.parametrize("estado", ["Archivado", "pausado", "", None])
def test_change_state_rejects_unknown_estado(process_repo, actor, estado):
    created = _create(process_repo, actor)

    result = ChangeProcessStateUseCase(process_repo).execute(
        created.id, actor, estado
    )

    assert result.error.code == ProcessErrorCode.INVALID_STATE
    assert process_repo.get_process(created.id).estado == ProcessState.INICIADO


def test_change_state_by_non_owner_does_not_mutate(process_repo, actor, other_actor):
    created = _create(process_repo, actor)

    result = ChangeProcessStateUseCase(process_repo).execute(
        created.id, other_actor, "Pausado"
    )

    assert result.error.code == ProcessErrorCode.NOT_FOUND
    assert process_repo.get_process(created.id).estado == ProcessState.INICIADO


def test_ownership_checked_before_estado(process_repo, actor, other_actor):
    created = _create(process_repo, actor)

    result = ChangeProcessStateUseCase(process_repo).execute(
        created.id, other_actor, "NoExiste"
    )

    assert result.error.code == ProcessErrorCode.NOT_FOUND


def test_active_and_paused_listings_partition_owned_processes(
    process_repo, actor, other_actor
):
    change = ChangeProcessStateUseCase(process_repo)
    owned = [_create(process_repo, actor, repertorio=f"REP-{i}") for i in range(4)]
    _create(process_repo, other_actor, repertorio="AJENO")
    change.execute(owned[1].id, actor, "Pausado")
    change.execute(owned[3].id, actor, "Pausado")

    listing = ListProcessesUseCase(process_repo)
    active = listing.execute(actor).processes
    paused = listing.execute(actor, view=ProcessView.PAUSED).processes
    everything = listing.execute(actor, view=ProcessView.ALL).processes

    assert all(p.estado != ProcessState.PAUSADO for p in active)
    assert all(p.estado == ProcessState.PAUSADO for p in paused)
    assert {p.id for p in active} | {p.id for p in paused} == {p.id for p in owned}
    assert {p.id for p in everything} == {p.id for p in owned}


def test_active_listing_is_most_recent_first(process_repo, actor):
    first = _create(process_repo, actor, repertorio="REP-A")
    second = _create(process_repo, actor, repertorio="REP-B")

    active = ListProcessesUseCase(process_repo).execute(actor).processes

    assert [p.id for p in active] == [second.id, first.id]


def test_list_without_actor_is_validation_error(process_repo):
    result = ListProcessesUseCase(process_repo).execute(None)

    assert result.error.code == ProcessErrorCode.VALIDATION_ERROR


def test_delete_owned_process(process_repo, actor):
    created = _create(process_repo, actor)

    result = DeleteProcessUseCase(process_repo).execute(created.id, actor)

    assert result.deleted is True
    assert process_repo.get_process(created.id) is None


def test_delete_foreign_process_is_not_found(process_repo, actor, other_actor):
    created = _create(process_repo, actor)

    result = DeleteProcessUseCase(process_repo).execute(created.id, other_actor)

    assert result.error.code == ProcessErrorCode.NOT_FOUND
    assert process_repo.get_process(created.id) is not None
