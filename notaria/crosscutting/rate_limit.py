# notaria/crosscutting/rate_limit.py
"""
===============================================================================
MÓDULO: Rate limiting in-memory
===============================================================================

Dos limitadores:

1) TokenBucket + RateLimitMiddleware (global, por IP)
   - Suaviza bursts sobre toda la API
   - Headers x-ratelimit-remaining / x-ratelimit-limit

2) FixedWindowLimiter (login)
   - N intentos por ventana (default: 5 cada 15 minutos) por IP y por email
   - X-Forwarded-For solo se usa con TRUST_PROXY_HEADERS=true
   - Lo consume el endpoint POST /api/auth/login

Ambos responden RFC7807 429 con Retry-After y son thread-safe.
En APP_ENV=test quedan deshabilitados.

Colaboradores:
  - crosscutting.config
  - crosscutting.error_responses
  - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

from .error_responses import app_exception_handler, rate_limited
from .logger import logger


@dataclass
class Bucket:
    tokens: float
    last_refill: float


class TokenBucket:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      TokenBucket

    Responsabilidades:
      - Token-bucket por key con refill por tiempo
      - Eviction LRU cuando se supera max_buckets

    Colaboradores:
      - RateLimitMiddleware
    ----------------------------------------------------------------------------
    """

    def __init__(self, rps: float, burst: int, *, max_buckets: int = 10_000):
        if rps <= 0:
            raise ValueError("rps debe ser > 0")
        if burst <= 0:
            raise ValueError("burst debe ser > 0")
        self.rps = float(rps)
        self.burst = int(burst)
        self.max_buckets = int(max_buckets)

        self._buckets: "OrderedDict[str, Bucket]" = OrderedDict()
        self._lock = threading.Lock()

    def consume(self, key: str) -> tuple[bool, float, int]:
        """Devuelve (permitido, segundos hasta el próximo token, restantes)."""
        with self._lock:
            now = time.monotonic()
            bucket = self._buckets.get(key)
            if bucket is None:
                if len(self._buckets) >= self.max_buckets:
                    self._buckets.popitem(last=False)
                bucket = Bucket(tokens=float(self.burst), last_refill=now)
                self._buckets[key] = bucket

            elapsed = now - bucket.last_refill
            if elapsed > 0:
                bucket.tokens = min(self.burst, bucket.tokens + elapsed * self.rps)
                bucket.last_refill = now
            self._buckets.move_to_end(key, last=True)

            if bucket.tokens >= 1:
                bucket.tokens -= 1
                return True, 0.0, int(bucket.tokens)

            return False, (1 - bucket.tokens) / self.rps, 0

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()


class FixedWindowLimiter:
    """
    Contador de intentos por key dentro de una ventana fija.

    La ventana arranca con el primer intento; al vencer, el contador vuelve a 0.
    Las keys se guardan en orden LRU: las ventanas vencidas al frente se
    descartan y el total nunca supera max_keys.
    """

    def __init__(
        self,
        max_attempts: int,
        window_seconds: int,
        *,
        max_keys: int = 10_000,
        clock=time.monotonic,
    ):
        if max_attempts <= 0:
            raise ValueError("max_attempts debe ser > 0")
        if window_seconds <= 0:
            raise ValueError("window_seconds debe ser > 0")
        self.max_attempts = int(max_attempts)
        self.window_seconds = int(window_seconds)
        self.max_keys = int(max_keys)
        self._clock = clock
        self._windows: "OrderedDict[str, tuple[float, int]]" = OrderedDict()
        self._lock = threading.Lock()

    def _evict(self, now: float) -> None:
        while self._windows:
            started, _ = next(iter(self._windows.values()))
            if now - started < self.window_seconds:
                break
            self._windows.popitem(last=False)
        while len(self._windows) >= self.max_keys:
            self._windows.popitem(last=False)

    def hit(self, key: str) -> tuple[bool, int]:
        """Registra un intento. Devuelve (permitido, retry_after en segundos)."""
        with self._lock:
            now = self._clock()
            current = self._windows.get(key)
            if current is None:
                self._evict(now)
                started, count = now, 0
            else:
                started, count = current
                if now - started >= self.window_seconds:
                    started, count = now, 0

            if count >= self.max_attempts:
                self._windows[key] = (started, count)
                self._windows.move_to_end(key, last=True)
                retry_after = int(self.window_seconds - (now - started)) + 1
                return False, max(1, retry_after)

            self._windows[key] = (started, count + 1)
            self._windows.move_to_end(key, last=True)
            return True, 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def clear(self) -> None:
        with self._lock:
            self._windows.clear()


_rate_limiter: Optional[TokenBucket] = None
_login_limiter: Optional[FixedWindowLimiter] = None
_limiter_lock = threading.Lock()


def get_rate_limiter() -> TokenBucket:
    global _rate_limiter
    with _limiter_lock:
        if _rate_limiter is None:
            from .config import get_settings

            s = get_settings()
            _rate_limiter = TokenBucket(rps=s.rate_limit_rps, burst=s.rate_limit_burst)
        return _rate_limiter


def get_login_limiter() -> FixedWindowLimiter:
    global _login_limiter
    with _limiter_lock:
        if _login_limiter is None:
            from .config import get_settings

            s = get_settings()
            _login_limiter = FixedWindowLimiter(
                s.login_rate_limit_attempts, s.login_rate_limit_window_seconds
            )
        return _login_limiter


def reset_rate_limiters() -> None:
    global _rate_limiter, _login_limiter
    with _limiter_lock:
        _rate_limiter = None
        _login_limiter = None


def is_rate_limiting_enabled() -> bool:
    from .config import get_settings

    s = get_settings()
    if not s.rate_limit_enabled or s.is_test_env():
        return False
    return s.rate_limit_rps > 0 and s.rate_limit_burst > 0


def get_client_identifier(request) -> str:
    """
    IP del cliente.

    X-Forwarded-For solo cuenta con TRUST_PROXY_HEADERS=true; si no, la IP
    del socket.
    """
    from .config import get_settings

    if get_settings().trust_proxy_headers:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return f"ip:{forwarded_for.split(',')[0].strip()}"

    client = request.client
    if client and client.host:
        return f"ip:{client.host}"

    return "ip:unknown"


def enforce_login_rate_limit(request, email: str | None = None) -> None:
    """
    Consume un intento de login para el cliente y para el email.

    Raises:
        AppHTTPException 429 con Retry-After si se agotaron los intentos.
    """
    if not is_rate_limiting_enabled():
        return

    limiter = get_login_limiter()
    keys = [f"login:{get_client_identifier(request)}"]
    normalized_email = (email or "").strip().lower()
    if normalized_email:
        keys.append(f"login:email:{normalized_email}")

    for key in keys:
        allowed, retry_after = limiter.hit(key)
        if not allowed:
            logger.warning(
                "demasiados intentos de login",
                extra={"limit_key": key.split(":", 2)[1], "retry_after": retry_after},
            )
            raise rate_limited(retry_after)


class RateLimitMiddleware:
    """
    ASGI middleware de rate limit global.

    Excluye health/docs y preflight CORS.
    """

    EXCLUDED_PATHS = {
        "/healthz",
        "/readyz",
        "/api/health",
        "/openapi.json",
        "/docs",
        "/redoc",
    }

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if (
            scope["type"] != "http"
            or not is_rate_limiting_enabled()
            or scope.get("path", "") in self.EXCLUDED_PATHS
            or scope.get("method", "").upper() == "OPTIONS"
        ):
            await self.app(scope, receive, send)
            return

        from starlette.requests import Request

        request = Request(scope, receive)
        client_id = get_client_identifier(request)

        limiter = get_rate_limiter()
        allowed, retry_after, remaining = limiter.consume(client_id)

        if not allowed:
            retry_after_int = max(1, int(retry_after) + 1)
            logger.warning(
                "rate limit excedido",
                extra={
                    "client_id": client_id,
                    "path": scope.get("path", ""),
                    "retry_after": retry_after_int,
                },
            )

            exc = rate_limited(retry_after_int)
            exc.headers = {
                **(exc.headers or {}),
                "x-ratelimit-remaining": "0",
                "x-ratelimit-limit": str(limiter.burst),
            }
            response = await app_exception_handler(request, exc)
            await response(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                hdrs = list(message.get("headers", []))
                hdrs.append((b"x-ratelimit-remaining", str(remaining).encode()))
                hdrs.append((b"x-ratelimit-limit", str(limiter.burst).encode()))
                message["headers"] = hdrs
            await send(message)

        await self.app(scope, receive, send_with_headers)
