"""
===============================================================================
TARJETA CRC — notaria/interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    User Router

Responsibilities:
    - Lectura de cuentas (cualquier usuario autenticado).
    - Autogestión: PUT/DELETE y listado de procesos solo sobre la propia cuenta
      (403 para cuentas ajenas).

Collaborators:
    - notaria.application.usecases.users
    - routers.processes.to_list_res (mismo shape de listado)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from notaria.application.usecases.users import UpdateUserInput
from notaria.container import Container
from notaria.domain.ownership_policy import Actor
from notaria.identity.users import User

from ..dependencies import current_actor, get_container
from ..error_mapping import raise_user_error
from ..schemas.processes import ProcessesListRes
from ..schemas.users import DeleteUserRes, UpdateUserReq, UserRes, UsersListRes
from .processes import to_list_res

router = APIRouter(prefix="/users", tags=["users"])


def to_user_res(user: User) -> UserRes:
    return UserRes(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.get("", response_model=UsersListRes)
def list_users(
    _actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.list_users.execute()
    users = [to_user_res(u) for u in result.users]
    return UsersListRes(users=users, count=len(users))


@router.get("/{user_id}", response_model=UserRes)
def get_user(
    user_id: UUID,
    _actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.get_user.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return to_user_res(result.user)


@router.put("/{user_id}", response_model=UserRes)
def update_user(
    user_id: UUID,
    req: UpdateUserReq,
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.update_user.execute(
        UpdateUserInput(
            user_id=user_id,
            actor=actor,
            email=req.email,
            name=req.name,
            password=req.password,
            current_password=req.current_password,
        )
    )
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return to_user_res(result.user)


@router.delete("/{user_id}", response_model=DeleteUserRes)
def delete_user(
    user_id: UUID,
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.delete_user.execute(user_id, actor)
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return DeleteUserRes(user_id=user_id, deleted=result.deleted)


@router.get("/{user_id}/processes", response_model=ProcessesListRes)
def list_user_processes(
    user_id: UUID,
    actor: Actor = Depends(current_actor),
    container: Container = Depends(get_container),
):
    result = container.list_user_processes.execute(user_id, actor)
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return to_list_res(result.processes)
