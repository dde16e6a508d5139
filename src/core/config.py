"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el cliente HTTP y el orquestador lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://magazinestore.azurewebsites.net"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "magazine-store"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "magazine-store"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "magazine-store"
    return Path.home() / ".config" / "magazine-store"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="MAGSTORE_",
        extra="ignore",
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="URL base de la tienda de revistas.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="magazine-store/0.1",
        min_length=1,
        description="User-Agent enviado a la tienda.",
    )
    fetch_max_concurrency: int = Field(
        default=8,
        ge=1,
        le=100,
        description="Máximo de descargas de categorías en paralelo.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


def env_files() -> tuple[str, ...]:
    """`.env` del proyecto primero (dev), luego el global de usuario.

    Se resuelve en cada llamada: `XDG_CONFIG_HOME` puede cambiar en runtime.
    """

    return (".env", str(get_user_env_file()))


def load_settings(**overrides: Any) -> AppSettings:
    """Settings de entorno + `.env`, con overrides (p.ej. flags de la CLI).

    Los overrides pasan por la misma validación que las env vars; un valor
    inválido lanza `pydantic.ValidationError`. Los `None` se ignoran.
    """

    values = {k: v for k, v in overrides.items() if v is not None}
    return AppSettings(_env_file=env_files(), **values)
