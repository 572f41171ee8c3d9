"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Credential store: crear, leer, actualizar y borrar usuarios en `users`.
  - Mapear filas -> `User`.
  - Email duplicado / usuario con procesos -> ConflictError (constraints de DB).

Collaborators:
  - PostgresRepositoryBase (ejecución + errores)
  - identity.users.User

Constraints / Notes:
  - Retorna None cuando no existe el recurso.
  - El email llega normalizado (lower/trim) desde application.
  - Orden estable en listados: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from ....identity.users import User
from .base import PostgresRepositoryBase

# R: Lista explícita de columnas (contrato con migraciones).
_USER_COLUMNS = "id, email, password_hash, name, created_at, updated_at"

_USER_ORDER_BY = "created_at DESC, id DESC"


def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        email=row[1],
        password_hash=row[2],
        name=row[3],
        created_at=row[4],
        updated_at=row[5],
    )


class PostgresUserRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del UserRepository."""

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str | None = None,
    ) -> User:
        user_id = uuid4()
        row = self._fetchone(
            query=f"""
                INSERT INTO users (id, email, password_hash, name)
                VALUES (%s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
            """,
            params=(user_id, email, password_hash, name),
            context_msg="PostgresUserRepository: create_user failed",
            extra={"user_id": str(user_id)},
        )
        return _row_to_user(row)

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            context_msg="PostgresUserRepository: get_user_by_id failed",
            extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
            params=(email,),
            context_msg="PostgresUserRepository: get_user_by_email failed",
            extra={},
        )
        return _row_to_user(row) if row else None

    def list_users(self) -> list[User]:
        rows = self._fetchall(
            query=f"SELECT {_USER_COLUMNS} FROM users ORDER BY {_USER_ORDER_BY}",
            params=(),
            context_msg="PostgresUserRepository: list_users failed",
            extra={},
        )
        return [_row_to_user(r) for r in rows]

    def update_user(
        self,
        user_id: UUID,
        *,
        email: str | None = None,
        name: str | None = None,
        password_hash: str | None = None,
    ) -> Optional[User]:
        """
        Update dinámico: SET solo con los campos presentes.

        Sin cambios => devuelve el usuario actual (si existe).
        """
        updates: list[str] = []
        params: list[object] = []

        for column, value in (
            ("email", email),
            ("name", name),
            ("password_hash", password_hash),
        ):
            if value is not None:
                updates.append(f"{column} = %s")
                params.append(value)

        if not updates:
            return self.get_user_by_id(user_id)

        updates.append("updated_at = now()")
        params.append(user_id)

        # updates se arma con nombres de columna fijos, nunca con input.
        row = self._fetchone(
            query=f"""
                UPDATE users
                SET {", ".join(updates)}
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=params,
            context_msg="PostgresUserRepository: update_user failed",
            extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def delete_user(self, user_id: UUID) -> bool:
        # R: FK processes.owner_id ON DELETE RESTRICT -> ConflictError si tiene procesos.
        deleted = self._execute(
            query="DELETE FROM users WHERE id = %s",
            params=(user_id,),
            context_msg="PostgresUserRepository: delete_user failed",
            extra={"user_id": str(user_id)},
        )
        return deleted > 0
