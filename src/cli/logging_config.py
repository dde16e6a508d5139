"""Logging de la CLI (Rich).

Los módulos usan `logging.getLogger(__name__)`; aquí solo se decide a dónde va
la salida. Se escribe a stderr para no mezclar logs con `--json`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx loguea cada request en INFO.
    logging.getLogger("httpx").setLevel(max(logging.WARNING, logging.getLogger().level))
