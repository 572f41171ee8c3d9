"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
- Ejecutar SQL parametrizado sobre el pool inyectado.
- Traducir violaciones de integridad a ConflictError y el resto a DatabaseError,
  siempre con logging estructurado.

Collaborators:
- psycopg_pool.ConnectionPool
- crosscutting.exceptions.DatabaseError / ConflictError
- crosscutting.logger.logger

Notes:
- La conexión del pool hace commit al salir del `with` sin error.
============================================================
"""

from __future__ import annotations

from typing import Iterable

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import ConflictError, DatabaseError
from ....crosscutting.logger import logger


class PostgresRepositoryBase:
    def __init__(self, pool: ConnectionPool):
        if pool is None:
            raise ValueError("pool es requerido")
        self._pool = pool

    def ping(self) -> bool:
        """R: SELECT 1 para readiness."""
        return self._fetchone(
            query="SELECT 1", params=(), context_msg="ping failed", extra={}
        ) == (1,)

    def _run(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict,
        fetch: str,
    ):
        try:
            with self._pool.connection() as conn:
                cur = conn.execute(query, tuple(params))
                if fetch == "one":
                    return cur.fetchone()
                if fetch == "all":
                    return cur.fetchall()
                return cur.rowcount
        except (pg_errors.UniqueViolation, pg_errors.ForeignKeyViolation) as exc:
            logger.warning(context_msg, extra={**extra, "error": type(exc).__name__})
            raise ConflictError(f"{context_msg}: {type(exc).__name__}", original_error=exc) from exc
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        return self._run(
            query=query, params=params, context_msg=context_msg, extra=extra, fetch="one"
        )

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        return self._run(
            query=query, params=params, context_msg=context_msg, extra=extra, fetch="all"
        )

    def _execute(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        """R: Devuelve rowcount."""
        return self._run(
            query=query, params=params, context_msg=context_msg, extra=extra, fetch=None
        )
