"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pinboard_poster.core.config import (
    EnvironmentToken,
    PropertiesFile,
    TokenSource,
    TokenValue,
    redact_token,
)
from pinboard_poster.core.domain.models import PinResult


def describe_source(source: TokenSource) -> str:
    if isinstance(source, TokenValue):
        return "argument"
    if isinstance(source, PropertiesFile):
        return f"properties file ({source.path}) / environment"
    if isinstance(source, EnvironmentToken):
        return "environment"
    return type(source).__name__


def build_config_table(
    *,
    source: TokenSource,
    token: str | None,
    endpoint: str,
    timeout: float,
) -> Table:
    """Tabla con la configuración resuelta (token ofuscado)."""

    table = Table(title="Pinboard Poster")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Value", style="dim")

    table.add_row("Token source", "OK", describe_source(source))
    table.add_row("API token", "OK" if token else "MISSING", redact_token(token))
    table.add_row("API end point", "OK", endpoint)
    table.add_row("Timeout", "OK", f"{timeout:g}s")
    return table


_DONE_LABELS = {"add": "Added", "delete": "Deleted"}


def print_result(console: Console, *, verb: str, url: str, result: PinResult) -> None:
    """Imprime una línea de estado para `add`/`delete`."""

    if result.ok:
        console.print(Text.assemble((f"{_DONE_LABELS.get(verb, verb)}: ", "bold green"), url))
        return

    line = Text.assemble((f"Failed to {verb}: ", "bold red"), url)
    if result.error is not None:
        line.append(f" [{result.error.value}]", style="red")
    if result.message:
        line.append(f" {result.message}", style="dim")
    console.print(line)
