"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/process.py
============================================================
Class: PostgresProcessRepository

Responsibilities:
- Acceso a datos de procesos en PostgreSQL (SQL crudo).
- Mutaciones acotadas por owner: UPDATE/DELETE ... WHERE id AND owner_id.
- Listados determinísticos: created_at DESC, id DESC.

Collaborators:
- PostgresRepositoryBase
- domain.entities.Process, ProcessState
- Tabla: processes

Notes:
- La regla "Pausado no aparece en el listado activo" es un filtro de
  visibilidad; acá solo se aplica el flag `paused` que manda application.
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Process, ProcessState
from .base import PostgresRepositoryBase


class PostgresProcessRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del ProcessRepository."""

    _SELECT_COLUMNS = """
        id, repertorio, caratula, cliente, email_cliente,
        estado, owner_id, created_at, updated_at
    """

    _ORDER_BY = "ORDER BY created_at DESC, id DESC"

    def _row_to_process(self, row: tuple) -> Process:
        (
            process_id,
            repertorio,
            caratula,
            cliente,
            email_cliente,
            estado,
            owner_id,
            created_at,
            updated_at,
        ) = row

        state = ProcessState.parse(estado)
        if state is None:
            # R: el CHECK de la tabla lo impide; si pasa, es drift de esquema.
            raise DatabaseError(f"Invalid process estado in database: {estado}")

        return Process(
            id=process_id,
            repertorio=repertorio,
            caratula=caratula,
            cliente=cliente,
            email_cliente=email_cliente,
            estado=state,
            owner_id=owner_id,
            created_at=created_at,
            updated_at=updated_at,
        )

    def create_process(self, process: Process) -> Process:
        row = self._fetchone(
            query=f"""
                INSERT INTO processes (
                    id, repertorio, caratula, cliente, email_cliente, estado, owner_id
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=(
                process.id,
                process.repertorio,
                process.caratula,
                process.cliente,
                process.email_cliente,
                process.estado.value,
                process.owner_id,
            ),
            context_msg="PostgresProcessRepository: create_process failed",
            extra={"process_id": str(process.id), "owner_id": str(process.owner_id)},
        )
        return self._row_to_process(row)

    def get_process(self, process_id: UUID) -> Optional[Process]:
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} FROM processes WHERE id = %s",
            params=(process_id,),
            context_msg="PostgresProcessRepository: get_process failed",
            extra={"process_id": str(process_id)},
        )
        return self._row_to_process(row) if row else None

    def list_processes(
        self,
        owner_id: UUID,
        *,
        paused: bool | None = None,
    ) -> list[Process]:
        conditions = ["owner_id = %s"]
        params: list[object] = [owner_id]

        if paused is True:
            conditions.append("estado = %s")
            params.append(ProcessState.PAUSADO.value)
        elif paused is False:
            conditions.append("estado <> %s")
            params.append(ProcessState.PAUSADO.value)

        rows = self._fetchall(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM processes
                WHERE {" AND ".join(conditions)}
                {self._ORDER_BY}
            """,
            params=params,
            context_msg="PostgresProcessRepository: list_processes failed",
            extra={"owner_id": str(owner_id), "paused": paused},
        )
        return [self._row_to_process(r) for r in rows]

    def update_state(
        self,
        process_id: UUID,
        owner_id: UUID,
        estado: ProcessState,
    ) -> Optional[Process]:
        row = self._fetchone(
            query=f"""
                UPDATE processes
                SET estado = %s, updated_at = now()
                WHERE id = %s AND owner_id = %s
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=(estado.value, process_id, owner_id),
            context_msg="PostgresProcessRepository: update_state failed",
            extra={"process_id": str(process_id), "estado": estado.value},
        )
        return self._row_to_process(row) if row else None

    def delete_process(self, process_id: UUID, owner_id: UUID) -> bool:
        deleted = self._execute(
            query="DELETE FROM processes WHERE id = %s AND owner_id = %s",
            params=(process_id, owner_id),
            context_msg="PostgresProcessRepository: delete_process failed",
            extra={"process_id": str(process_id)},
        )
        return deleted > 0

    def count_processes_by_owner(self, owner_id: UUID) -> int:
        row = self._fetchone(
            query="SELECT COUNT(*) FROM processes WHERE owner_id = %s",
            params=(owner_id,),
            context_msg="PostgresProcessRepository: count_processes_by_owner failed",
            extra={"owner_id": str(owner_id)},
        )
        return int(row[0]) if row else 0
