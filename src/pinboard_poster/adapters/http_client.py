"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers de las peticiones a la API.
- Facilita testeo: se puede sustituir el transporte por `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from pinboard_poster.core.config import PosterSettings


def build_client(
    settings: PosterSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    El cliente gestiona su propio pool de conexiones y puede compartirse
    entre hilos.
    """

    settings = settings or PosterSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/xml, application/json;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
