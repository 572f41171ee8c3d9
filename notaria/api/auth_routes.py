"""
===============================================================================
TARJETA CRC — notaria/api/auth_routes.py (Registro, Login y Sesión)
===============================================================================

Responsabilidades:
  - Exponer registro/login con JWT (Bearer), /auth/me y cambio de password.
  - Aplicar el limitador anti fuerza bruta en login.
  - Traducir AuthResult/UserResult -> DTOs o RFC7807.

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP ↔ caso de uso.
  - Fail-safe security: credenciales inválidas -> 401 sin distinguir causa.

Colaboradores:
  - container.Container: register_user / authenticate_user / get_user /
    change_password
  - identity.auth_users.require_user
  - crosscutting.rate_limit.enforce_login_rate_limit
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from ..container import Container
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..crosscutting.rate_limit import enforce_login_rate_limit
from ..identity.auth_users import AuthIdentity, require_user
from ..interfaces.api.http.dependencies import get_container
from ..interfaces.api.http.error_mapping import raise_user_error
from ..interfaces.api.http.routers.users import to_user_res
from ..interfaces.api.http.schemas.users import (
    AuthRes,
    ChangePasswordReq,
    LoginReq,
    RegisterReq,
    UserRes,
)

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


def _to_auth_res(result) -> AuthRes:
    return AuthRes(
        token=result.token,
        expires_in=result.expires_in,
        user=to_user_res(result.user),
    )


@router.post("/register", response_model=AuthRes, status_code=status.HTTP_201_CREATED)
def register(req: RegisterReq, container: Container = Depends(get_container)):
    """Crea la cuenta y devuelve un access token (sesión iniciada)."""
    result = container.register_user.execute(req.email, req.password, name=req.name)
    if result.error is not None:
        raise_user_error(result.error)
    return _to_auth_res(result)


@router.post("/login", response_model=AuthRes)
def login(
    req: LoginReq,
    request: Request,
    container: Container = Depends(get_container),
):
    enforce_login_rate_limit(request, req.email)

    result = container.authenticate_user.execute(req.email, req.password)
    if result.error is not None:
        raise_user_error(result.error)
    return _to_auth_res(result)


@router.get("/me", response_model=UserRes)
def me(
    identity: AuthIdentity = Depends(require_user()),
    container: Container = Depends(get_container),
):
    """
    Usuario autenticado.

    El token es stateless: si la cuenta fue borrada después de emitirlo,
    responde 404.
    """
    result = container.get_user.execute(identity.user_id)
    if result.error is not None:
        raise_user_error(result.error, identity.user_id)
    return to_user_res(result.user)


@router.put("/change-password", response_model=UserRes)
def change_password(
    req: ChangePasswordReq,
    identity: AuthIdentity = Depends(require_user()),
    container: Container = Depends(get_container),
):
    """Cambia el password de la cuenta autenticada (exige el actual)."""
    result = container.change_password.execute(
        identity.user_id, req.current_password, req.new_password
    )
    if result.error is not None:
        raise_user_error(result.error, identity.user_id)
    return to_user_res(result.user)


__all__ = ["router"]
