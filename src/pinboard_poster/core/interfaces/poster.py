"""Contrato de un cliente que publica pins.

Por qué Protocol:
- La CLI y los tests dependen de la forma (`add_pin`/`delete_pin`), no de
  la implementación HTTP concreta.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from pinboard_poster.core.domain.models import PinConfig, PinResult


@runtime_checkable
class PinPoster(Protocol):
    """Contrato mínimo para publicar/borrar bookmarks.

    Reglas de diseño:
    - Las llamadas son síncronas (un round trip por llamada).
    - Los fallos esperados se devuelven como valores, no como excepciones.
    """

    def post_pin(self, config: PinConfig) -> PinResult:
        """Añade un bookmark y devuelve el resultado etiquetado."""

        ...

    def remove_pin(self, url: str) -> PinResult:
        """Borra el bookmark de `url` y devuelve el resultado etiquetado."""

        ...

    def get_logger(self) -> logging.Logger:
        ...
