"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base URL, timeouts y headers para todas las llamadas a la tienda.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings, load_settings

JSON_HEADERS = {
    "Accept": "application/json",
}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando a la tienda.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    settings = settings or load_settings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        **JSON_HEADERS,
    }
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
