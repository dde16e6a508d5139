"""Errores del dominio para el acceso a la tienda de revistas.

Por qué aquí:
- El orquestador (Core) necesita distinguir fallos de la tienda sin importar
  `httpx` ni conocer detalles del adaptador.
"""

from __future__ import annotations


class StoreError(Exception):
    """Fallo de una operación contra la tienda remota."""

    def __init__(self, message: str, *, operation: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code


class TransportError(StoreError):
    """La petición no se completó (red, timeout o status no-2xx)."""


class DecodeError(StoreError):
    """El cuerpo no es JSON o no tiene la forma esperada."""
