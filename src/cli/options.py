"""Settings a partir de flags de la CLI.

Un valor inválido (flag o env var) se reporta como error de uso de Typer en
lugar de un traceback.
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError

from core.config import AppSettings, load_settings


def settings_from_cli(**overrides: Any) -> AppSettings:
    try:
        return load_settings(**overrides)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        raise typer.BadParameter(details) from exc
