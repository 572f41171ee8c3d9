"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Credential store en memoria (tests / APP_ENV=test).
  - Replicar las constraints de la tabla `users`:
      - email único -> ConflictError
      - no borrar un usuario con procesos (FK RESTRICT) -> ConflictError
      - procesos de un usuario inexistente (FK owner_id) -> ConflictError

Collaborators:
  - identity.users.User
  - InMemoryProcessRepository (opcional, para emular la FK)
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from ....crosscutting.exceptions import ConflictError
from ....identity.users import User
from .process import InMemoryProcessRepository


class InMemoryUserRepository:
    def __init__(self, processes: InMemoryProcessRepository | None = None) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}
        self._processes = processes
        if processes is not None:
            processes.bind_owners(self)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _email_taken(self, email: str, *, exclude: UUID | None = None) -> bool:
        return any(u.email == email and u.id != exclude for u in self._users.values())

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str | None = None,
    ) -> User:
        now = self._now()
        with self._lock:
            if self._email_taken(email):
                raise ConflictError("users.email duplicado")
            user = User(
                id=uuid4(),
                email=email,
                password_hash=password_hash,
                name=name,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            return user

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def list_users(self) -> List[User]:
        with self._lock:
            values = list(self._users.values())
        return sorted(values, key=lambda u: u.created_at, reverse=True)

    def update_user(
        self,
        user_id: UUID,
        *,
        email: str | None = None,
        name: str | None = None,
        password_hash: str | None = None,
    ) -> Optional[User]:
        changes = {
            key: value
            for key, value in (
                ("email", email),
                ("name", name),
                ("password_hash", password_hash),
            )
            if value is not None
        }
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            if not changes:
                return current
            if email is not None and self._email_taken(email, exclude=user_id):
                raise ConflictError("users.email duplicado")
            updated = replace(current, updated_at=self._now(), **changes)
            self._users[user_id] = updated
            return updated

    def delete_user(self, user_id: UUID) -> bool:
        with self._lock:
            if user_id not in self._users:
                return False
            if (
                self._processes is not None
                and self._processes.count_processes_by_owner(user_id) > 0
            ):
                raise ConflictError("processes.owner_id referencia al usuario")
            del self._users[user_id]
            return True
