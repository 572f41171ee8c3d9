"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelo de Usuario

Responsabilidades:
    - Definir el dataclass User usado por registro, login y autogestión.
    - Ofrecer una vista pública sin password_hash.

Colaboradores:
    - identity/auth_users.py: hashea/verifica password_hash.
    - infrastructure/repositories/*/user.py: mapean filas -> User.
    - application/usecases/users: casos de uso de cuenta.

Notas:
    - Solo "shapes" de datos; el hash nunca sale por la API.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class User:
    """Usuario registrado (email único)."""

    id: UUID
    email: str
    password_hash: str
    name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
