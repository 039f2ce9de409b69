"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y User-Agent para todas las llamadas al
  directorio.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

JSON_MEDIA_TYPE = "application/json"


def build_timeout(*, connect_timeout_ms: int, read_timeout_ms: int) -> httpx.Timeout:
    """Convierte los límites en milisegundos a un `httpx.Timeout`.

    write/pool usan el límite de lectura: la petición más grande es un array
    de 10 nombres.
    """

    read = read_timeout_ms / 1000
    return httpx.Timeout(read, connect=connect_timeout_ms / 1000)


def build_client(
    settings: AppSettings | None = None,
    *,
    connect_timeout_ms: int | None = None,
    read_timeout_ms: int | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten igual.
    - Cada llamada abre su propio cliente: no hay estado compartido entre hilos.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": JSON_MEDIA_TYPE,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=settings.api_base_url,
        timeout=build_timeout(
            connect_timeout_ms=connect_timeout_ms or settings.connect_timeout_ms,
            read_timeout_ms=read_timeout_ms or settings.read_timeout_ms,
        ),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
