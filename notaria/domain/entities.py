"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Process, ProcessState)

Responsabilidades:
    - Definir el expediente notarial ("proceso") y su catálogo de estados.
    - Parsear estados recibidos como texto sin aceptar valores fuera del enum.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.ownership_policy: decide quién puede ver/mutar un proceso.
    - application/usecases/processes: crean y transicionan procesos.

Principios:
    - Sin dependencias a DB/FastAPI.
    - owner_id se fija al crear y no cambia.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID


def utcnow() -> datetime:
    """Fecha/hora UTC."""
    return datetime.now(timezone.utc)


class ProcessState(str, Enum):
    """
    Estados del ciclo de vida de un proceso.

    No hay grafo de transiciones: cualquier estado puede pasar a cualquier otro.
    """

    INICIADO = "Iniciado"
    VIGENTE = "Vigente"
    EN_REVISION = "EnRevision"
    TERMINADO = "Terminado"
    REPARADO = "Reparado"
    CANCELADO = "Cancelado"
    PAUSADO = "Pausado"

    @classmethod
    def parse(cls, value: object) -> Optional["ProcessState"]:
        """Devuelve el estado exacto (case-sensitive) o None si no existe."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


INITIAL_STATE = ProcessState.INICIADO


@dataclass(frozen=True, slots=True)
class Process:
    """Expediente notarial perteneciente a un único usuario."""

    id: UUID
    repertorio: str
    owner_id: UUID
    estado: ProcessState = INITIAL_STATE
    caratula: Optional[str] = None
    cliente: Optional[str] = None
    email_cliente: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_paused(self) -> bool:
        return self.estado == ProcessState.PAUSADO

    def with_state(self, estado: ProcessState, *, at: datetime | None = None) -> "Process":
        """Copia con el nuevo estado y updated_at refrescado."""
        return replace(self, estado=estado, updated_at=at or utcnow())
