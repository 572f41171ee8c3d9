"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - APIRouter raíz que compone los routers de negocio.
  - Declarar responses RFC7807 para OpenAPI.

Notas:
  - Se incluye desde notaria/api/main.py con prefix="/api".
  - Las rutas de autenticación viven en notaria/api/auth_routes.py.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from notaria.crosscutting.error_responses import OPENAPI_ERROR_RESPONSES

from .routers import processes_router, users_router


def build_router() -> APIRouter:
    """Construye el router raíz (sin side effects al importar)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(processes_router)
    api_router.include_router(users_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]
