"""
PostgreSQL Repository Implementations.

Raw parameterised SQL over an injected psycopg ConnectionPool.
"""

from .process import PostgresProcessRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresProcessRepository",
    "PostgresUserRepository",
]
