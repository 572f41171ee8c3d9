"""
===============================================================================
TARJETA CRC — schemas/__init__.py
===============================================================================

Paquete de Schemas HTTP (DTOs Pydantic) por bounded context
(processes / users).

Reglas:
    - Schemas NO importan infraestructura ni ejecutan casos de uso.
===============================================================================
"""

__all__ = []
