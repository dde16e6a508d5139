"""Decodificación de respuestas JSON de la tienda.

La tienda envuelve casi todo en `{"data": ...}`. Un campo ausente no es un
error: se devuelve `None` y el llamador decide el valor por defecto.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.domain.errors import DecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_body(text: str, *, operation: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise DecodeError(f"{operation}: invalid JSON body ({exc})", operation=operation) from exc


def extract_field(payload: Any, name: str) -> Any | None:
    """Devuelve `payload[name]` si el payload es un objeto y lo contiene."""

    if isinstance(payload, dict):
        return payload.get(name)
    return None


def decode_list(items: Any, model: type[ModelT], *, operation: str) -> list[ModelT]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise DecodeError(
            f"{operation}: expected a list, got {type(items).__name__}",
            operation=operation,
        )
    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as exc:
        raise DecodeError(f"{operation}: {exc.error_count()} invalid item(s)", operation=operation) from exc


def decode_strings(items: Any, *, operation: str) -> list[str]:
    if items is None:
        return []
    if not isinstance(items, list) or not all(isinstance(i, str) for i in items):
        raise DecodeError(f"{operation}: expected a list of strings", operation=operation)
    return list(items)
