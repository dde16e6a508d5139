"""Cálculo de suscriptores calificados.

Un suscriptor califica si tiene al menos una revista en *cada* categoría del
catálogo. Con un catálogo vacío todos califican (cuantificador universal sobre
un conjunto vacío).
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.domain.models import CatalogByCategory, Subscriber


def category_id_sets(catalog: CatalogByCategory | None) -> list[frozenset[int]]:
    """Conjunto de ids de revista por categoría, en el orden del catálogo."""

    if not catalog:
        return []
    return [frozenset(m.id for m in magazines or ()) for magazines in catalog.values()]


def is_qualified(magazine_ids: Iterable[int] | None, category_ids: Sequence[frozenset[int]]) -> bool:
    owned = set(magazine_ids or ())
    # all() corta en la primera categoría sin intersección.
    return all(not owned.isdisjoint(ids) for ids in category_ids)


def qualify_subscribers(
    subscribers: Sequence[Subscriber] | None,
    catalog: CatalogByCategory | None,
) -> list[str]:
    """Ids de los suscriptores calificados, en el orden de entrada."""

    category_ids = category_id_sets(catalog)
    return [
        subscriber.id
        for subscriber in subscribers or ()
        if is_qualified(subscriber.magazine_ids, category_ids)
    ]
