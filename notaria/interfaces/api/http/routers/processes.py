"""
===============================================================================
TARJETA CRC — notaria/interfaces/api/http/routers/processes.py
===============================================================================

Class/Module:
    Process Router

Responsibilities:
    - Endpoints HTTP de expedientes (todos requieren Bearer).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir ProcessError -> RFC7807 (error_mapping).

Collaborators:
    - notaria.application.usecases.processes
    - dependencies.get_container / current_actor
    - schemas.processes

Notas:
    - /processes/paused/all se declara antes de /processes/{process_id}
      para que "paused" no se intente parsear como UUID.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from notaria.application.usecases.processes import CreateProcessInput, ProcessView
from notaria.container import Container
from notaria.domain.entities import Process
from notaria.domain.ownership_policy import Actor

from ..dependencies import current_actor, get_container
from ..error_mapping import raise_process_error
from ..schemas.processes import (
    CreateProcessReq,
    DeleteProcessRes,
    ProcessesListRes,
    ProcessRes,
    UpdateProcessStateReq,
)

router = APIRouter(prefix="/processes", tags=["processes"])


def to_process_res(process: Process) -> ProcessRes:
    return ProcessRes(
        id=process.id,
        repertorio=process.repertorio,
        caratula=process.caratula,
        cliente=process.cliente,
        email_cliente=process.email_cliente,
        estado=process.estado,
        owner_id=process.owner_id,
        created_at=process.created_at,
        updated_at=process.updated_at,
    )


def to_list_res(processes: list[Process]) -> ProcessesListRes:
    items = [to_process_res(p) for p in processes]
    return ProcessesListRes(processes=items, count=len(items))


def _list(container: Container, actor: Actor, view: ProcessView) -> ProcessesListRes:
    result = container.list_processes.execute(actor, view=view)
    if result.error is not None:
        raise_process_error(result.error)
    return to_list_res(result.processes)


@router.get("", response_model=ProcessesListRes)
def list_active_processes(
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    """Bandeja principal: procesos del usuario salvo los Pausado."""
    return _list(container, actor, ProcessView.ACTIVE)


@router.get("/paused/all", response_model=ProcessesListRes)
def list_paused_processes(
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    return _list(container, actor, ProcessView.PAUSED)


@router.get("/{process_id}", response_model=ProcessRes)
def get_process(
    process_id: UUID,
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.get_process.execute(process_id, actor)
    if result.error is not None:
        raise_process_error(result.error, process_id)
    return to_process_res(result.process)


@router.post("", response_model=ProcessRes, status_code=status.HTTP_201_CREATED)
def create_process(
    req: CreateProcessReq,
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.create_process.execute(
        CreateProcessInput(
            repertorio=req.repertorio,
            caratula=req.caratula,
            cliente=req.cliente,
            email_cliente=req.email_cliente,
            actor=actor,
        )
    )
    if result.error is not None:
        raise_process_error(result.error)
    return to_process_res(result.process)


@router.put("/{process_id}/estado", response_model=ProcessRes)
def update_process_state(
    process_id: UUID,
    req: UpdateProcessStateReq,
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.change_process_state.execute(process_id, actor, req.estado)
    if result.error is not None:
        raise_process_error(result.error, process_id)
    return to_process_res(result.process)


@router.delete("/{process_id}", response_model=DeleteProcessRes)
def delete_process(
    process_id: UUID,
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.delete_process.execute(process_id, actor)
    if result.error is not None:
        raise_process_error(result.error, process_id)
    return DeleteProcessRes(process_id=process_id, deleted=result.deleted)
