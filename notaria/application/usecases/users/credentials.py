"""
Reglas de credenciales compartidas por registro y actualización de cuenta.

- Email: trim + lowercase; forma `algo@dominio.tld`.
- Password: largo mínimo configurable (default 6).
"""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def password_problem(password: str | None, *, min_chars: int) -> str | None:
    """Mensaje de error o None si el password es aceptable."""
    if not password:
        return "Password is required."
    if len(password) < min_chars:
        return f"Password must be at least {min_chars} characters."
    return None
