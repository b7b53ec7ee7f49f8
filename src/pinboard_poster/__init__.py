"""Cliente mínimo para publicar y borrar bookmarks en Pinboard.

Uso:

    >>> from pinboard_poster import PinboardPoster, PinConfig
    >>> poster = PinboardPoster("user:TOKEN")
    >>> poster.add_pin(PinConfig.builder("https://example.com", "Example").tags("test").build())
"""

from __future__ import annotations

import logging

from pinboard_poster.adapters.pinboard import PinboardPoster
from pinboard_poster.core.config import (
    EnvironmentToken,
    PosterSettings,
    PropertiesFile,
    TokenValue,
)
from pinboard_poster.core.domain.models import PinConfig, PinConfigBuilder, PinResult
from pinboard_poster.core.errors import ErrorKind

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "EnvironmentToken",
    "ErrorKind",
    "PinConfig",
    "PinConfigBuilder",
    "PinResult",
    "PinboardPoster",
    "PosterSettings",
    "PropertiesFile",
    "TokenValue",
]
