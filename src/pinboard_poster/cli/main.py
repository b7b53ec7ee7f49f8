"""CLI de pinboard-poster (Typer + Rich).

Equivale a los programas de ejemplo de la librería: añade y borra un pin
usando el token del argumento, de `local.properties` o de
`PINBOARD_API_TOKEN`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from pinboard_poster.adapters.pinboard import PinboardPoster
from pinboard_poster.cli.ui_components import build_config_table, print_result
from pinboard_poster.core.config import EnvironmentToken, PropertiesFile, TokenSource, TokenValue
from pinboard_poster.core.domain.models import PinConfig

app = typer.Typer(no_args_is_help=True, help="Add and delete Pinboard bookmarks.")

_console = Console()

DEFAULT_PROPERTIES = Path("local.properties")

TokenOption = typer.Option(None, "--token", help="API token (user:TOKEN).")
PropertiesOption = typer.Option(
    None,
    "--properties",
    "-p",
    help="Properties file with pinboard_api_token (default: ./local.properties if present).",
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Show HTTP requests and responses.")


def _token_source(token: Optional[str], properties: Optional[Path]) -> TokenSource:
    if token:
        return TokenValue(token)
    if properties is not None:
        return PropertiesFile(properties)
    if DEFAULT_PROPERTIES.is_file():
        return PropertiesFile(DEFAULT_PROPERTIES)
    return EnvironmentToken()


def _verbose_logger() -> logging.Logger:
    """Logger propio de la invocación (fuera del árbol de `logging.getLogger`)."""

    logger = logging.Logger("pinboard_poster.cli", level=logging.DEBUG)
    logger.addHandler(RichHandler(console=_console, show_path=False))
    return logger


def _build_poster(token: Optional[str], properties: Optional[Path], verbose: bool) -> PinboardPoster:
    logger = _verbose_logger() if verbose else None
    return PinboardPoster(_token_source(token, properties), logger=logger)


@app.command()
def add(
    url: str = typer.Argument(..., help="URL of the bookmark."),
    title: str = typer.Argument(..., help="Title of the bookmark."),
    extended: str = typer.Option("", "--extended", "-e", help="Extended description."),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)."),
    private: bool = typer.Option(False, "--private", help="Make the bookmark private."),
    to_read: bool = typer.Option(False, "--to-read", help="Mark the bookmark as unread."),
    no_replace: bool = typer.Option(False, "--no-replace", help="Fail if the URL is already bookmarked."),
    token: Optional[str] = TokenOption,
    properties: Optional[Path] = PropertiesOption,
    verbose: bool = VerboseOption,
) -> None:
    """Add a bookmark."""

    config = (
        PinConfig.builder(url, title)
        .extended(extended)
        .tags(*(tag or []))
        .shared(not private)
        .to_read(to_read)
        .replace(not no_replace)
        .build()
    )
    with _build_poster(token, properties, verbose) as poster:
        result = poster.post_pin(config)

    print_result(_console, verb="add", url=url, result=result)
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def delete(
    url: str = typer.Argument(..., help="URL of the bookmark."),
    token: Optional[str] = TokenOption,
    properties: Optional[Path] = PropertiesOption,
    verbose: bool = VerboseOption,
) -> None:
    """Delete a bookmark."""

    with _build_poster(token, properties, verbose) as poster:
        result = poster.remove_pin(url)

    print_result(_console, verb="delete", url=url, result=result)
    if not result.ok:
        raise typer.Exit(code=1)


@app.command(name="config")
def show_config(
    token: Optional[str] = TokenOption,
    properties: Optional[Path] = PropertiesOption,
) -> None:
    """Show the resolved configuration (token redacted)."""

    with _build_poster(token, properties, False) as poster:
        table = build_config_table(
            source=poster.token_source,
            token=poster.api_token,
            endpoint=poster.api_endpoint,
            timeout=poster.settings.http_timeout_seconds,
        )
    _console.print(table)
    if not poster.api_token:
        raise typer.Exit(code=1)


def run() -> None:
    app()
