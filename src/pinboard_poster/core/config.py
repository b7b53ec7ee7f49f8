"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar el adaptador HTTP.
- Resuelve el token de la API desde una de tres fuentes, en orden de precedencia:
  argumento explícito > fichero de properties > variable de entorno.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

API_ENDPOINT = "https://api.pinboard.in/v1/"
TOKEN_PROPERTY = "pinboard_api_token"
# Clave usada por las primeras versiones de `local.properties`.
_TOKEN_PROPERTY_ALIASES = (TOKEN_PROPERTY, "pinboard-api-token")
_PROPERTY_LINE = re.compile(r"(?P<key>[^=:\s]+)\s*(?:[=:]\s*|\s+|$)(?P<value>.*)$")


class PosterSettings(BaseSettings):
    """Ajustes de transporte del cliente.

    El token no vive aquí: se resuelve aparte para que la precedencia
    argumento > fichero > entorno sea explícita.
    """

    model_config = SettingsConfigDict(
        env_prefix="PINBOARD_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_endpoint: str = Field(
        default=API_ENDPOINT,
        description="Base URL de la API (se le añade `posts/add`, `posts/delete`).",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="pinboard-poster/1.0 (+https://pinboard.in/api/)",
        min_length=1,
        description="User-Agent de las peticiones.",
    )


@dataclass(frozen=True)
class TokenValue:
    """Token pasado directamente (`user:HEX`)."""

    token: str = field(repr=False)


@dataclass(frozen=True)
class PropertiesFile:
    """Fichero de properties con el token bajo `pinboard_api_token`."""

    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))


@dataclass(frozen=True)
class EnvironmentToken:
    """Token leído solo de `PINBOARD_API_TOKEN`."""


class TokenEnvSettings(BaseSettings):
    """Fuente `entorno` del token: `PINBOARD_API_TOKEN` (entorno > `.env`)."""

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    pinboard_api_token: str | None = Field(
        default=None,
        description="Token de la API (user:HEX).",
    )


TokenSource = Union[TokenValue, PropertiesFile, EnvironmentToken]


def parse_properties(text: str) -> dict[str, str]:
    """Parsea un fichero `.properties` sencillo (sin continuaciones de línea).

    La clave termina en el primer `=`, `:` o espacio; un `=`/`:` tras la
    clave (con espacios alrededor) es el separador y no forma parte del valor.
    """

    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        match = _PROPERTY_LINE.match(line)
        if match is None:
            continue
        key, value = match.group("key"), match.group("value")
        if key:
            data[key] = value.strip()
    return data


def read_token_property(path: Path) -> str | None:
    """Lee el token de un fichero de properties; `None` si no existe o no lo contiene."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.debug("Properties file not readable: %s (%s)", path, exc)
        return None

    properties = {key.lower(): value for key, value in parse_properties(text).items()}
    for key in _TOKEN_PROPERTY_ALIASES:
        value = properties.get(key)
        if value:
            return value
    logger.debug("No %s key in %s", TOKEN_PROPERTY, path)
    return None


def read_token_env() -> str | None:
    """Lee `PINBOARD_API_TOKEN` del entorno o, si no está, del `.env` del proyecto."""

    value = (TokenEnvSettings().pinboard_api_token or "").strip()
    return value or None


def coerce_token_source(source: object) -> TokenSource:
    """Normaliza lo que acepta el constructor del cliente a un `TokenSource`.

    - `str` -> `TokenValue`
    - `os.PathLike` -> `PropertiesFile`
    - `None` -> `EnvironmentToken`

    Cualquier otra cosa es un error de programación y se lanza `TypeError`.
    """

    if source is None:
        return EnvironmentToken()
    if isinstance(source, (TokenValue, PropertiesFile, EnvironmentToken)):
        return source
    if isinstance(source, str):
        return TokenValue(source)
    if isinstance(source, os.PathLike):
        return PropertiesFile(Path(source))
    raise TypeError(f"Unsupported token source: {type(source).__name__}")


def resolve_api_token(source: TokenSource) -> str | None:
    """Resuelve el token; `None` si ninguna fuente lo proporciona."""

    if isinstance(source, TokenValue):
        token = source.token.strip()
        return token or None
    if isinstance(source, PropertiesFile):
        return read_token_property(source.path) or read_token_env()
    return read_token_env()


def redact_token(token: str | None) -> str:
    """Oculta la parte secreta del token (`user:****`)."""

    if not token:
        return "<none>"
    user, sep, _secret = token.partition(":")
    if sep:
        return f"{user}:****"
    return "****"
