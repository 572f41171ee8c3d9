"""
In-Memory Repository Implementations.

For testing and APP_ENV=test. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .process import InMemoryProcessRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryProcessRepository",
    "InMemoryUserRepository",
]
