"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (JWT + Argon2)

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - TokenService: emitir y verificar JWT de acceso con expiración.
    - Guardia de acceso: dependencia FastAPI que exige Bearer válido.

Colaboradores:
    - crosscutting.config.get_settings: secreto y TTL del token.
    - crosscutting.error_responses: unauthorized estándar (RFC7807).
    - notaria.context: setea user_id para los logs.
    - container.Container: provee el TokenService al request.

Decisiones de diseño:
    - Token stateless: la guardia NO consulta la DB; un usuario borrado con
      token vigente sigue autenticado hasta que el token expire.
    - verify() no lanza: devuelve TokenVerification con identity o error.
    - Claims mínimos: sub, email, iat, exp.
    - No loguear secretos ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Header, Request

from ..context import set_user_context
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

_password_hasher = PasswordHasher()


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verifica password vs hash almacenado."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


# ---------------------------------------------------------------------------
# Tokens JWT
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthIdentity:
    """Identidad embebida en el token ({userId, email})."""

    user_id: UUID
    email: str


class TokenErrorCode(str, Enum):
    EXPIRED = "EXPIRED"
    MALFORMED = "MALFORMED"


@dataclass(frozen=True)
class TokenVerification:
    identity: AuthIdentity | None = None
    error: TokenErrorCode | None = None

    @property
    def ok(self) -> bool:
        return self.identity is not None


class TokenService:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      TokenService

    Responsabilidades:
      - issue(identity) -> (token, expires_in)
      - verify(token) -> TokenVerification (EXPIRED | MALFORMED | identity)

    Colaboradores:
      - PyJWT (HS256)
    ----------------------------------------------------------------------------
    """

    def __init__(self, secret: str, ttl_seconds: int, *, clock=None):
        if not secret:
            raise ValueError("secret es requerido")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds debe ser > 0")
        self._secret = secret
        self.ttl_seconds = int(ttl_seconds)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def issue(self, identity: AuthIdentity) -> tuple[str, int]:
        now = self._clock()
        payload: dict[str, object] = {
            CLAIM_SUB: str(identity.user_id),
            CLAIM_EMAIL: identity.email,
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int((now + timedelta(seconds=self.ttl_seconds)).timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        return token, self.ttl_seconds

    def verify(self, token: str) -> TokenVerification:
        # R: jwt.decode valida firma antes de exponer cualquier claim.
        # R: exp se compara contra self._clock, el mismo reloj de issue().
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={
                    "require": [CLAIM_SUB, CLAIM_EMAIL, CLAIM_EXP],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError:
            return TokenVerification(error=TokenErrorCode.MALFORMED)

        exp = payload.get(CLAIM_EXP)
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return TokenVerification(error=TokenErrorCode.MALFORMED)
        if exp <= self._clock().timestamp():
            return TokenVerification(error=TokenErrorCode.EXPIRED)

        email = payload.get(CLAIM_EMAIL)
        try:
            user_id = UUID(str(payload.get(CLAIM_SUB)))
        except ValueError:
            return TokenVerification(error=TokenErrorCode.MALFORMED)
        if not isinstance(email, str) or not email:
            return TokenVerification(error=TokenErrorCode.MALFORMED)

        return TokenVerification(identity=AuthIdentity(user_id=user_id, email=email))


def build_token_service() -> TokenService:
    s = get_settings()
    return TokenService(s.jwt_secret, s.jwt_access_ttl_seconds)


# ---------------------------------------------------------------------------
# Guardia de acceso (FastAPI)
# ---------------------------------------------------------------------------

_TOKEN_ERROR_DETAIL = {
    TokenErrorCode.EXPIRED: "Token expirado.",
    TokenErrorCode.MALFORMED: "Token inválido.",
}


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def _token_service_from(request: Request) -> TokenService:
    container = getattr(request.app.state, "container", None)
    if container is not None:
        return container.token_service
    return build_token_service()


def require_user() -> Callable:
    """Dependency FastAPI: exige un Bearer válido y devuelve AuthIdentity."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
    ) -> AuthIdentity:
        token = _extract_bearer_token(authorization)
        if not token:
            raise unauthorized("Falta token Bearer.")

        result = _token_service_from(request).verify(token)
        if not result.ok:
            logger.info("token rechazado", extra={"reason": result.error.value})
            raise unauthorized(_TOKEN_ERROR_DETAIL[result.error])

        request.state.identity = result.identity
        set_user_context(str(result.identity.user_id))
        return result.identity

    return dependency
