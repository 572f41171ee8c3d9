"""
===============================================================================
TARJETA CRC — notaria/interfaces/api/http/routers/__init__.py
===============================================================================

Routers HTTP por bounded context (processes / users). Solo re-exporta.
===============================================================================
"""

from .processes import router as processes_router
from .users import router as users_router

__all__ = [
    "processes_router",
    "users_router",
]
