"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Modelos inmutables (`frozen`) con defaults documentados en `Field`.
- La validación de negocio (URL/título) la hace el cliente para poder
  devolver `False` en lugar de lanzar al construir el pin.

Nota:
- Estos modelos describen *qué* se publica, no *cómo* se envía.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from pinboard_poster.core.errors import ErrorKind

MAX_TAGS = 100


class PinConfig(BaseModel):
    """Parámetros de `posts/add`.

    Ver https://pinboard.in/api/#posts_add
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        description="URL del bookmark.",
    )
    description: str = Field(
        ...,
        description="Título del bookmark.",
    )
    extended: str = Field(
        default="",
        description="Notas/descripcion extendida.",
    )
    tags: tuple[str, ...] = Field(
        default=(),
        description=f"Hasta {MAX_TAGS} tags; se envían separados por espacios.",
    )
    dt: datetime | None = Field(
        default=None,
        description="Fecha de creación; si es None la asigna Pinboard.",
    )
    replace: bool = Field(
        default=True,
        description="Reemplazar un bookmark existente con la misma URL.",
    )
    shared: bool = Field(
        default=True,
        description="Bookmark público.",
    )
    to_read: bool = Field(
        default=False,
        description="Marcar como 'leer más tarde'.",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(value.split())
        return value

    @field_validator("tags")
    @classmethod
    def _drop_blank_tags(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(tag.strip() for tag in value if tag.strip())

    @classmethod
    def builder(cls, url: str, description: str) -> "PinConfigBuilder":
        return PinConfigBuilder(url, description)


class PinConfigBuilder:
    """Builder fluido para `PinConfig`.

    Defaults: público, reemplaza duplicados, no marcado para leer.
    """

    def __init__(self, url: str, description: str) -> None:
        self._url = url
        self._description = description
        self._extended = ""
        self._tags: tuple[str, ...] = ()
        self._dt: datetime | None = None
        self._replace = True
        self._shared = True
        self._to_read = False

    def url(self, url: str) -> "PinConfigBuilder":
        self._url = url
        return self

    def description(self, description: str) -> "PinConfigBuilder":
        self._description = description
        return self

    def extended(self, extended: str) -> "PinConfigBuilder":
        self._extended = extended
        return self

    def tags(self, *tags: str) -> "PinConfigBuilder":
        self._tags = tuple(tags)
        return self

    def dt(self, dt: datetime | None) -> "PinConfigBuilder":
        self._dt = dt
        return self

    def replace(self, replace: bool) -> "PinConfigBuilder":
        self._replace = replace
        return self

    def shared(self, shared: bool) -> "PinConfigBuilder":
        self._shared = shared
        return self

    def to_read(self, to_read: bool) -> "PinConfigBuilder":
        self._to_read = to_read
        return self

    def build(self) -> PinConfig:
        return PinConfig(
            url=self._url,
            description=self._description,
            extended=self._extended,
            tags=self._tags,
            dt=self._dt,
            replace=self._replace,
            shared=self._shared,
            to_read=self._to_read,
        )


class PinResult(BaseModel):
    """Resultado de una llamada a la API.

    `bool(result)` equivale a `result.ok`.
    """

    model_config = ConfigDict(frozen=True)

    ok: bool = Field(
        ...,
        description="True si Pinboard respondió 200 con `done`.",
    )
    error: ErrorKind | None = Field(
        default=None,
        description="Categoría del fallo (None si ok).",
    )
    status_code: int | None = Field(
        default=None,
        description="Status HTTP, si hubo respuesta.",
    )
    result_code: str | None = Field(
        default=None,
        description="Código devuelto por la API (`done`, `item already exists`, ...).",
    )
    message: str | None = Field(
        default=None,
        description="Detalle legible del fallo.",
    )

    def __bool__(self) -> bool:
        return self.ok


def join_tags(tags: Iterable[str]) -> str:
    return " ".join(tags)
