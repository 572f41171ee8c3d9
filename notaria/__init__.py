"""Notaría 2.0 backend: users, JWT auth and notarial process tracking."""

__version__ = "2.0.0"
