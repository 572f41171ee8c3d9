"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias comunes de routers)
===============================================================================

Responsabilidades:
  - Resolver el Container guardado en app.state.
  - Exponer `current_actor` como dependencia única para rutas protegidas.

Colaboradores:
  - notaria.container.Container
  - notaria.identity.auth_users.require_user
  - notaria.domain.ownership_policy.Actor
===============================================================================
"""

from __future__ import annotations

from fastapi import Depends, Request

from notaria.container import Container
from notaria.crosscutting.error_responses import service_unavailable
from notaria.domain.ownership_policy import Actor
from notaria.identity.auth_users import AuthIdentity, require_user


def get_container(request: Request) -> Container:
    container = getattr(request.app.state, "container", None)
    if container is None:
        # R: el lifespan todavía no terminó de arrancar (o falló la DB).
        raise service_unavailable("Container")
    return container


def current_actor(
    identity: AuthIdentity = Depends(require_user()),
) -> Actor:
    return Actor(user_id=identity.user_id, email=identity.email)
