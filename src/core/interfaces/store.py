"""Contrato de acceso a la tienda de revistas.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- El orquestador se prueba con un fake en memoria, sin red.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import Magazine, Subscriber


@runtime_checkable
class MagazineStore(Protocol):
    """Operaciones de la API remota.

    Reglas de diseño:
    - Todo es asíncrono porque es I/O (HTTP).
    - Los fallos se señalan con `core.domain.errors.StoreError`.
    """

    async def get_token(self) -> str: ...

    async def get_categories(self, token: str) -> list[str]: ...

    async def get_magazines(self, token: str, category: str) -> list[Magazine]: ...

    async def get_subscribers(self, token: str) -> list[Subscriber]: ...

    async def submit_answer(self, token: str, subscriber_ids: Sequence[str]) -> str:
        """Envía la respuesta y devuelve el cuerpo crudo de la tienda."""

        ...
