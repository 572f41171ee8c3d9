"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (handle explícito, sin estado global)

Responsabilidades:
  - Abrir el pool una vez (lifespan de la app) y devolverlo al caller.
  - Configurar cada conexión con statement_timeout.
  - Cerrar el pool en shutdown (idempotente).

Colaboradores:
  - psycopg_pool.ConnectionPool
  - api/main.py (lifespan) y container.build_container (inyección en repos)
===============================================================================
"""

from __future__ import annotations

from functools import partial

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger


def _configure_connection(conn, *, statement_timeout_ms: int) -> None:
    # R: guardrail contra queries colgadas.
    if statement_timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
        conn.commit()


def open_pool(
    database_url: str,
    *,
    min_size: int,
    max_size: int,
    statement_timeout_ms: int = 0,
) -> ConnectionPool:
    """Crea y abre el pool. El caller es dueño de su ciclo de vida."""
    if min_size < 0 or max_size <= 0 or min_size > max_size:
        raise ValueError(
            f"Tamaño de pool inválido (min={min_size}, max={max_size})"
        )

    logger.info(
        "Inicializando pool DB",
        extra={"min_size": min_size, "max_size": max_size},
    )
    pool = ConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        configure=partial(
            _configure_connection, statement_timeout_ms=statement_timeout_ms
        ),
        open=True,
    )
    logger.info("Pool DB inicializado")
    return pool


def close_pool(pool: ConnectionPool | None) -> None:
    """Cierra el pool si está abierto."""
    if pool is None or pool.closed:
        return
    logger.info("Cerrando pool DB")
    pool.close()
    logger.info("Pool DB cerrado")
