"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/process.py
============================================================
Class: InMemoryProcessRepository

Responsibilities:
  - Almacenar procesos en memoria (tests / APP_ENV=test).
  - Mismo contrato que Postgres: mutaciones acotadas por owner y
    orden created_at DESC.
  - Emular la FK owner_id -> users cuando hay un repositorio de usuarios
    asociado (ConflictError si el dueño no existe).

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Las entidades son inmutables (frozen), se reemplazan completas.
  - Desempate por orden de inserción (más nuevo primero) cuando los
    created_at coinciden.
============================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, Iterable, List, Optional, Protocol
from uuid import UUID

from ....crosscutting.exceptions import ConflictError
from ....domain.entities import Process, ProcessState


class _OwnerLookup(Protocol):
    def get_user_by_id(self, user_id: UUID): ...


class InMemoryProcessRepository:
    """Repositorio in-memory, thread-safe, para procesos."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._processes: Dict[UUID, Process] = {}
        self._insert_order: Dict[UUID, int] = {}
        self._sequence = count()
        self._owners: _OwnerLookup | None = None

    def bind_owners(self, owners: _OwnerLookup) -> None:
        """Asocia el store de usuarios contra el que se valida owner_id."""
        self._owners = owners

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _sorted(self, items: Iterable[Process]) -> List[Process]:
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(
            items,
            key=lambda p: (p.created_at or epoch, self._insert_order.get(p.id, -1)),
            reverse=True,
        )

    def create_process(self, process: Process) -> Process:
        # R: fuera del lock propio; el repo de usuarios toma el suyo.
        owners = self._owners
        if owners is not None and owners.get_user_by_id(process.owner_id) is None:
            raise ConflictError("processes.owner_id no referencia a un usuario")

        now = self._now()
        stored = Process(
            id=process.id,
            repertorio=process.repertorio,
            caratula=process.caratula,
            cliente=process.cliente,
            email_cliente=process.email_cliente,
            estado=process.estado,
            owner_id=process.owner_id,
            created_at=process.created_at or now,
            updated_at=process.updated_at or now,
        )
        with self._lock:
            if stored.id in self._processes:
                raise ValueError(f"Process {stored.id} already exists")
            self._processes[stored.id] = stored
            self._insert_order[stored.id] = next(self._sequence)
        return stored

    def get_process(self, process_id: UUID) -> Optional[Process]:
        with self._lock:
            return self._processes.get(process_id)

    def list_processes(
        self,
        owner_id: UUID,
        *,
        paused: bool | None = None,
    ) -> List[Process]:
        with self._lock:
            values = [p for p in self._processes.values() if p.owner_id == owner_id]
            if paused is not None:
                values = [p for p in values if p.is_paused == paused]
            return self._sorted(values)

    def update_state(
        self,
        process_id: UUID,
        owner_id: UUID,
        estado: ProcessState,
    ) -> Optional[Process]:
        with self._lock:
            current = self._processes.get(process_id)
            if current is None or current.owner_id != owner_id:
                return None
            updated = current.with_state(estado, at=self._now())
            self._processes[process_id] = updated
            return updated

    def delete_process(self, process_id: UUID, owner_id: UUID) -> bool:
        with self._lock:
            current = self._processes.get(process_id)
            if current is None or current.owner_id != owner_id:
                return False
            del self._processes[process_id]
            self._insert_order.pop(process_id, None)
            return True

    def count_processes_by_owner(self, owner_id: UUID) -> int:
        with self._lock:
            return sum(1 for p in self._processes.values() if p.owner_id == owner_id)

    def ping(self) -> bool:
        return True
