"""Taxonomía de errores del cliente.

Reglas:
- Las excepciones se lanzan dentro del Core/adaptadores y se convierten en
  `PinResult` + un registro de log en el borde (`PinboardPoster`).
- Ningún error esperado llega al llamador como excepción.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Categoría de fallo reportada en `PinResult.error`."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    TRANSPORT = "transport"
    REMOTE_API = "remote_api"


class PinboardError(Exception):
    """Base de los errores del cliente."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        result_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.result_code = result_code


class ConfigurationError(PinboardError):
    """No hay token resoluble o el endpoint configurado no es válido."""

    kind = ErrorKind.CONFIGURATION


class PinValidationError(PinboardError):
    """Faltan campos obligatorios del pin o son inválidos."""

    kind = ErrorKind.VALIDATION


class TransportError(PinboardError):
    """Fallo de red (DNS, conexión, timeout)."""

    kind = ErrorKind.TRANSPORT


class RemoteAPIError(PinboardError):
    """Status HTTP distinto de 200 o código de error en el cuerpo."""

    kind = ErrorKind.REMOTE_API
