"""
===============================================================================
TARJETA CRC — domain/ownership_policy.py
===============================================================================

Módulo:
    Política de propiedad (procesos y cuentas de usuario)

Responsabilidades:
    - Reglas puras de acceso: sin DB, sin FastAPI.
    - Un proceso solo es visible/mutable por su owner.
    - Una cuenta solo es mutable por el propio usuario.

Colaboradores:
    - domain.entities.Process
    - application/usecases: procesos (404 si no es owner) y usuarios (403).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from .entities import Process


@dataclass(frozen=True, slots=True)
class Actor:
    """Identidad autenticada que ejecuta un caso de uso."""

    user_id: UUID | None
    email: str | None = None


def owns_process(process: Process, actor: Actor | None) -> bool:
    if actor is None or actor.user_id is None:
        return False
    return process.owner_id == actor.user_id


def is_self(user_id: UUID, actor: Actor | None) -> bool:
    """True si el actor opera sobre su propia cuenta."""
    if actor is None or actor.user_id is None:
        return False
    return actor.user_id == user_id
