"""
CRC — infrastructure/db

Pool de conexiones PostgreSQL (psycopg_pool) abierto/cerrado por el lifespan.
"""

from .pool import close_pool, open_pool

__all__ = ["open_pool", "close_pool"]
