"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Responsabilidades:
    - Centralizar exports del dominio (entidades, puertos, política).

Reglas:
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import INITIAL_STATE, Process, ProcessState
from .ownership_policy import Actor, is_self, owns_process
from .repositories import ProcessRepository, UserRepository

__all__ = [
    "INITIAL_STATE",
    "Process",
    "ProcessState",
    "Actor",
    "is_self",
    "owns_process",
    "ProcessRepository",
    "UserRepository",
]
