# notaria/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones internas de infraestructura
===============================================================================

Los casos de uso devuelven errores tipados (resultados); estas excepciones son
para fallas que vienen de abajo (DB caída, violación de constraint) y que
api/exception_handlers.py traduce a RFC7807.

Cada instancia lleva:
- error_code estable
- error_id (UUID) para cruzar la respuesta con el log
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class NotariaError(Exception):
    """Base para errores internos del backend."""

    error_code: str = "NOTARIA_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(NotariaError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class ConflictError(NotariaError):
    """Violación de unicidad o de FK (email duplicado, usuario con procesos)."""

    error_code: str = "CONFLICT"
