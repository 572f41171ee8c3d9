"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for users and processes (ports).
- Keep application/domain independent from PostgreSQL or in-memory storage.

Collaborators
- domain.entities: Process, ProcessState
- identity.users: User
- infrastructure.repositories: postgres and in_memory implementations

Constraints
- Pure interfaces only: no side effects, no SQL.
- Listing methods return created_at DESC (most recent first).
- Duplicate email / user-with-processes violations raise ConflictError.
"""

from typing import List, Optional, Protocol
from uuid import UUID

from ..identity.users import User
from .entities import Process, ProcessState


class UserRepository(Protocol):
    """R: Interface for user (credential store) persistence."""

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str | None = None,
    ) -> User:
        """
        R: Persist a new user and return it with id/timestamps.

        Raises:
            ConflictError: if the email is already registered.
        """
        ...

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Lookup by normalized (lowercase) email."""
        ...

    def list_users(self) -> List[User]:
        ...

    def update_user(
        self,
        user_id: UUID,
        *,
        email: str | None = None,
        name: str | None = None,
        password_hash: str | None = None,
    ) -> Optional[User]:
        """
        R: Update only the provided fields and refresh updated_at.

        Returns None if the user does not exist.

        Raises:
            ConflictError: if the new email belongs to another user.
        """
        ...

    def delete_user(self, user_id: UUID) -> bool:
        """
        R: Hard delete. Returns False if the user did not exist.

        Raises:
            ConflictError: if the user still owns processes.
        """
        ...


class ProcessRepository(Protocol):
    """
    R: Interface for process persistence.

    Every mutation is scoped by owner_id: implementations MUST only touch rows
    where both id and owner_id match.
    """

    def create_process(self, process: Process) -> Process:
        """R: Persist a new process; returns the stored record."""
        ...

    def get_process(self, process_id: UUID) -> Optional[Process]:
        ...

    def list_processes(
        self,
        owner_id: UUID,
        *,
        paused: bool | None = None,
    ) -> List[Process]:
        """
        R: List processes of an owner.

        paused=None -> all, False -> estado != Pausado, True -> only Pausado.
        """
        ...

    def update_state(
        self,
        process_id: UUID,
        owner_id: UUID,
        estado: ProcessState,
    ) -> Optional[Process]:
        """
        R: UPDATE ... WHERE id AND owner_id; refreshes updated_at.

        Returns None when no row matched.
        """
        ...

    def delete_process(self, process_id: UUID, owner_id: UUID) -> bool:
        ...

    def count_processes_by_owner(self, owner_id: UUID) -> int:
        ...
