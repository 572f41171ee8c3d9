"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Alta de usuario + emisión del primer access token (login implícito).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Responsibilities:
    - Normalizar y validar email; validar largo de password.
    - Hashear password (Argon2) antes de persistir.
    - Email duplicado -> CONFLICT (constraint única del store).
    - Emitir token con {user_id, email}.

Collaborators:
    - UserRepository.create_user
    - identity.auth_users.hash_password / TokenService

Error Mapping:
    - VALIDATION_ERROR: email con formato inválido / password corto
    - CONFLICT: email ya registrado
===============================================================================
"""

from __future__ import annotations

import logging
from typing import Callable

from ....crosscutting.exceptions import ConflictError
from ....domain.repositories import UserRepository
from ....identity.auth_users import AuthIdentity, TokenService, hash_password
from .credentials import is_valid_email, normalize_email, password_problem
from .user_results import AuthResult, UserErrorCode, user_error

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        token_service: TokenService,
        *,
        min_password_chars: int = 6,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self._users = repository
        self._tokens = token_service
        self._min_password_chars = min_password_chars
        self._hash = password_hasher

    def execute(
        self, email: str, password: str, *, name: str | None = None
    ) -> AuthResult:
        normalized_email = normalize_email(email)
        if not is_valid_email(normalized_email):
            return self._validation_error("A valid email is required.")

        problem = password_problem(password, min_chars=self._min_password_chars)
        if problem:
            return self._validation_error(problem)

        if self._users.get_user_by_email(normalized_email) is not None:
            return self._conflict()

        try:
            user = self._users.create_user(
                email=normalized_email,
                password_hash=self._hash(password),
                name=(name or "").strip() or None,
            )
        except ConflictError:
            # R: carrera entre el chequeo previo y el INSERT.
            return self._conflict()

        token, expires_in = self._tokens.issue(
            AuthIdentity(user_id=user.id, email=user.email)
        )
        logger.info("usuario registrado", extra={"user_id": str(user.id)})
        return AuthResult(user=user, token=token, expires_in=expires_in)

    @staticmethod
    def _validation_error(message: str) -> AuthResult:
        return AuthResult(error=user_error(UserErrorCode.VALIDATION_ERROR, message))

    @staticmethod
    def _conflict() -> AuthResult:
        return AuthResult(
            error=user_error(UserErrorCode.CONFLICT, "Email already registered.")
        )
