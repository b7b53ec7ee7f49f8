"""Cliente de la API de Pinboard (`posts/add`, `posts/delete`).

Implementación:
- Resuelve el token una sola vez al construir (argumento > properties > entorno).
- Valida en local antes de tocar la red; el token ausente se detecta en la
  primera llamada, no al construir.
- Cada llamada es un GET síncrono; el resultado es `True`/`False` (o un
  `PinResult` con la categoría del fallo) más registros de log.

Notas:
- 200 + `<result code="done" />` => éxito
- cualquier otro status o código => `RemoteAPIError`
"""

from __future__ import annotations

import json
import logging
import os
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlparse

import httpx
import pydantic

from pinboard_poster.adapters.http_client import build_client
from pinboard_poster.core.config import (
    API_ENDPOINT,
    PosterSettings,
    TokenSource,
    coerce_token_source,
    redact_token,
    resolve_api_token,
)
from pinboard_poster.core.domain.models import MAX_TAGS, PinConfig, PinResult, join_tags
from pinboard_poster.core.errors import (
    ConfigurationError,
    PinboardError,
    PinValidationError,
    RemoteAPIError,
    TransportError,
)

AUTH_TOKEN = "auth_token"
DONE = "done"

_ERROR_LEVELS = {
    ConfigurationError: logging.ERROR,
    PinValidationError: logging.ERROR,
    TransportError: logging.WARNING,
    RemoteAPIError: logging.WARNING,
}


def is_valid_url(url: str) -> bool:
    if not url or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return bool(parsed.scheme and parsed.netloc)


def yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def format_dt(dt: datetime) -> str:
    """Formato ISO-8601 en UTC que espera Pinboard (`2010-12-11T19:48:02Z`)."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_add_params(config: PinConfig) -> dict[str, str]:
    params: dict[str, str] = {
        "url": config.url.strip(),
        "description": config.description.strip(),
    }
    if config.extended.strip():
        params["extended"] = config.extended
    if config.tags:
        params["tags"] = join_tags(config.tags)
    if config.dt is not None:
        params["dt"] = format_dt(config.dt)
    params["shared"] = yes_no(config.shared)
    params["toread"] = yes_no(config.to_read)
    params["replace"] = yes_no(config.replace)
    return params


def parse_result_code(body: str) -> str | None:
    """Extrae el código de resultado del cuerpo (XML por defecto, JSON con `format=json`)."""

    text = (body or "").strip()
    if not text:
        return None

    if text.startswith("{"):
        try:
            data = json.loads(text)
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None
        code = data.get("result_code", data.get("result"))
        return code if isinstance(code, str) else None

    try:
        root = ET.fromstring(text)
    except ET.ParseError:
        return None
    if root.tag != "result":
        return None
    code = root.get("code")
    if code is None:
        code = (root.text or "").strip() or None
    return code


def _describe_errors(exc: pydantic.ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


class PinboardPoster:
    """Publica y borra bookmarks en Pinboard.

    `source` acepta un token (`str`), una ruta a un fichero de properties
    (`os.PathLike`), `None` (solo entorno) o directamente un `TokenSource`.
    """

    def __init__(
        self,
        source: TokenSource | str | os.PathLike[str] | None = None,
        *,
        settings: PosterSettings | None = None,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._source = coerce_token_source(source)
        self._settings = settings or PosterSettings()
        self._api_token = resolve_api_token(self._source)
        self.api_endpoint: str = self._settings.api_endpoint
        self.logger = logger or logging.getLogger(__name__)

        self._owns_client = client is None
        self._client = client or build_client(self._settings, transport=transport)

    @property
    def api_token(self) -> str | None:
        return self._api_token

    @property
    def settings(self) -> PosterSettings:
        return self._settings

    @property
    def token_source(self) -> TokenSource:
        return self._source

    def get_logger(self) -> logging.Logger:
        return self.logger

    # --- API pública -----------------------------------------------------

    def add_pin(
        self,
        url: PinConfig | str,
        description: str = "",
        extended: str = "",
        tags: Any = (),
        dt: datetime | None = None,
        replace: bool = True,
        shared: bool = True,
        to_read: bool = False,
    ) -> bool:
        """Añade un pin; acepta un `PinConfig` o los campos sueltos."""

        if isinstance(url, PinConfig):
            return self.post_pin(url).ok
        try:
            config = PinConfig(
                url=url or "",
                description=description or "",
                extended=extended or "",
                tags=tags,
                dt=dt,
                replace=replace,
                shared=shared,
                to_read=to_read,
            )
        except pydantic.ValidationError as exc:
            return self._failure(PinValidationError(f"Invalid pin: {_describe_errors(exc)}")).ok
        return self.post_pin(config).ok

    def delete_pin(self, url: str) -> bool:
        return self.remove_pin(url).ok

    def post_pin(self, config: PinConfig) -> PinResult:
        try:
            token = self._require_token()
            endpoint = self._endpoint("posts/add")
            if not is_valid_url(config.url):
                raise PinValidationError("Please specify a valid URL to pin.")
            if not config.description.strip():
                raise PinValidationError("Please specify a valid description.")
            if len(config.tags) > MAX_TAGS:
                raise PinValidationError(f"Too many tags ({len(config.tags)}), the maximum is {MAX_TAGS}.")
            return self._call(endpoint, build_add_params(config), token)
        except PinboardError as exc:
            return self._failure(exc)

    def remove_pin(self, url: str) -> PinResult:
        try:
            token = self._require_token()
            endpoint = self._endpoint("posts/delete")
            if not is_valid_url(url):
                raise PinValidationError("Please specify a valid URL to delete.")
            return self._call(endpoint, {"url": url.strip()}, token)
        except PinboardError as exc:
            return self._failure(exc)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "PinboardPoster":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- internos --------------------------------------------------------

    def _require_token(self) -> str:
        if not self._api_token:
            raise ConfigurationError("Please specify a valid API token. (eg. user:TOKEN)")
        return self._api_token

    def _endpoint(self, method: str) -> str:
        if not is_valid_url(self.api_endpoint):
            raise ConfigurationError(f"Please specify a valid API end point. (eg. {API_ENDPOINT})")
        if self.api_endpoint.endswith("/"):
            return f"{self.api_endpoint}{method}"
        return f"{self.api_endpoint}/{method}"

    def _call(self, endpoint: str, params: dict[str, str], token: str) -> PinResult:
        try:
            request_url = httpx.URL(endpoint, params={**params, AUTH_TOKEN: token})
        except httpx.InvalidURL as exc:
            raise PinValidationError(f"Invalid request URL: {exc}") from exc
        self.logger.debug(
            "HTTP Request: %s",
            request_url.copy_set_param(AUTH_TOKEN, redact_token(token)),
        )

        try:
            response = self._client.get(request_url)
        except httpx.HTTPError as exc:
            raise TransportError(f"HTTP request failed: {exc!r}") from exc

        body = response.text
        self.logger.debug("HTTP Result: %s", response.status_code)
        self.logger.debug("HTTP Response:\n%s", body)

        result_code = parse_result_code(body)
        if response.status_code != 200:
            raise RemoteAPIError(
                f"HTTP {response.status_code}: {body.strip()[:200]}",
                status_code=response.status_code,
                result_code=result_code,
            )
        if result_code != DONE:
            raise RemoteAPIError(
                f"API result: {result_code or body.strip()[:200]}",
                status_code=response.status_code,
                result_code=result_code,
            )

        return PinResult(ok=True, status_code=response.status_code, result_code=result_code)

    def _failure(self, exc: PinboardError) -> PinResult:
        self.logger.log(_ERROR_LEVELS.get(type(exc), logging.ERROR), exc.message)
        return PinResult(
            ok=False,
            error=exc.kind,
            status_code=exc.status_code,
            result_code=exc.result_code,
            message=exc.message,
        )
