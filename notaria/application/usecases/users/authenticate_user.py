"""
===============================================================================
USE CASE: Authenticate User (login)
===============================================================================

Valida credenciales y emite access token.

Seguridad:
    - "Email inexistente" y "password incorrecto" responden igual
      (UNAUTHORIZED, mismo mensaje) para no enumerar cuentas.
    - El email se normaliza (trim/lower) igual que en el registro.
===============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable

from ....domain.repositories import UserRepository
from ....identity.auth_users import AuthIdentity, TokenService, verify_password
from .credentials import normalize_email
from .user_results import AuthResult, UserErrorCode, user_error

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."


class AuthenticateUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        token_service: TokenService,
        *,
        password_verifier: Callable[[str, str], bool] = verify_password,
    ) -> None:
        self._users = repository
        self._tokens = token_service
        self._verify = password_verifier

    def execute(self, email: str, password: str) -> AuthResult:
        normalized_email = normalize_email(email)
        user = (
            self._users.get_user_by_email(normalized_email)
            if normalized_email
            else None
        )

        if user is None or not self._verify(password or "", user.password_hash):
            logger.info("login rechazado")
            return AuthResult(
                error=user_error(UserErrorCode.UNAUTHORIZED, INVALID_CREDENTIALS)
            )

        token, expires_in = self._tokens.issue(
            AuthIdentity(user_id=user.id, email=user.email)
        )
        return AuthResult(user=user, token=token, expires_in=expires_in)
