"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a AppHTTPException.
  - Único lugar donde un resultado de negocio se convierte en status code.

Mapeo:
  - VALIDATION_ERROR / INVALID_STATE -> 400
  - UNAUTHORIZED -> 401
  - FORBIDDEN -> 403
  - NOT_FOUND -> 404
  - CONFLICT -> 409

Colaboradores:
  - application.usecases.processes.ProcessError
  - application.usecases.users.UserError
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn
from uuid import UUID

from notaria.application.usecases.processes import ProcessError, ProcessErrorCode
from notaria.application.usecases.users import UserError, UserErrorCode
from notaria.crosscutting.error_responses import (
    conflict,
    forbidden,
    internal_error,
    invalid_state,
    not_found,
    unauthorized,
    validation_error,
)


def raise_process_error(error: ProcessError, process_id: UUID | None = None) -> NoReturn:
    if error.code == ProcessErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == ProcessErrorCode.INVALID_STATE:
        raise invalid_state(error.message)
    if error.code == ProcessErrorCode.NOT_FOUND:
        raise not_found("Process", str(process_id or "-"))

    # Código nuevo sin mapear
    raise internal_error(error.message)


def raise_user_error(error: UserError, user_id: UUID | None = None) -> NoReturn:
    if error.code == UserErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    if error.code == UserErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message)
    if error.code == UserErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == UserErrorCode.NOT_FOUND:
        raise not_found("User", str(user_id or "-"))
    if error.code == UserErrorCode.CONFLICT:
        raise conflict(error.message)

    raise internal_error(error.message)
