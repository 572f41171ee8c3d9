"""
============================================================
TARJETA CRC — infrastructure/repositories/__init__.py
============================================================
Module: infrastructure.repositories (Public Export Surface)

Policy:
  - Solo re-exporta símbolos; no debe tener side effects.
============================================================
"""

from .in_memory import InMemoryProcessRepository, InMemoryUserRepository
from .postgres import PostgresProcessRepository, PostgresUserRepository

__all__ = [
    # Postgres
    "PostgresProcessRepository",
    "PostgresUserRepository",
    # InMemory
    "InMemoryProcessRepository",
    "InMemoryUserRepository",
]
