"""Orquestación fetch → cálculo → envío.

Este módulo encadena las llamadas a la tienda y el cálculo de calificados.
La CLI solo presenta resultados; toda la secuencia vive aquí para poder
reutilizarla (tests, otros entry-points) sin efectos de UI.

Política de fallos:
- Cada paso es *best-effort*: un `StoreError` se registra en log, se anota como
  `StepOutcome` fallido y el paso devuelve un valor vacío. El pipeline sigue y
  el envío se intenta igualmente.
- Con `strict=True` un pipeline degradado no envía la respuesta.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from pydantic import ValidationError

from adapters.response_decoder import extract_field, parse_body
from core.config import AppSettings
from core.domain.errors import DecodeError, StoreError
from core.domain.models import AnswerReport, Magazine, PipelineResult, StepOutcome
from core.interfaces.store import MagazineStore
from core.services.qualification import qualify_subscribers

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    warning: Callable[[str], None] | None = None
    step_done: Callable[[StepOutcome], None] | None = None


async def _best_effort(
    step: str,
    call: Awaitable[T],
    default: T,
    *,
    steps: list[StepOutcome],
    hooks: PipelineHooks,
) -> T:
    try:
        value = await call
    except StoreError as exc:
        logger.error("%s failed: %s", step, exc)
        outcome = StepOutcome(step=step, ok=False, error=str(exc), status_code=exc.status_code)
        if hooks.warning:
            hooks.warning(f"{step} failed: {exc}")
        value = default
    else:
        outcome = StepOutcome(step=step)
    steps.append(outcome)
    if hooks.step_done:
        hooks.step_done(outcome)
    return value


def decode_answer(raw: str) -> AnswerReport | None:
    """Interpreta `{"data": {...}}` de la respuesta del envío, si lo hay."""

    try:
        payload = parse_body(raw, operation="answer")
    except DecodeError:
        logger.warning("answer: response is not JSON")
        return None
    data = extract_field(payload, "data")
    if not isinstance(data, dict):
        return None
    try:
        return AnswerReport.model_validate(data)
    except ValidationError:
        logger.warning("answer: unexpected verdict shape: %s", data)
        return None


async def run_pipeline(
    *,
    settings: AppSettings,
    store: MagazineStore,
    hooks: PipelineHooks | None = None,
    submit: bool = True,
    strict: bool = False,
) -> PipelineResult:
    hooks = hooks or PipelineHooks()
    steps: list[StepOutcome] = []

    token = await _best_effort("token", store.get_token(), "", steps=steps, hooks=hooks)
    categories = await _best_effort("categories", store.get_categories(token), [], steps=steps, hooks=hooks)

    sem = asyncio.Semaphore(max(1, settings.fetch_max_concurrency))

    async def fetch_category(category: str) -> list[Magazine]:
        async with sem:
            return await _best_effort(
                f"magazines[{category}]",
                store.get_magazines(token, category),
                [],
                steps=steps,
                hooks=hooks,
            )

    # Categorías y suscriptores no dependen entre sí: se piden a la vez.
    *magazine_lists, subscribers = await asyncio.gather(
        *(fetch_category(category) for category in categories),
        _best_effort("subscribers", store.get_subscribers(token), [], steps=steps, hooks=hooks),
    )
    catalog = dict(zip(categories, magazine_lists))

    qualified_ids = qualify_subscribers(subscribers, catalog)
    logger.info(
        "%d of %d subscribers qualify across %d categories",
        len(qualified_ids),
        len(subscribers),
        len(catalog),
    )

    result = PipelineResult(
        token=token,
        categories=categories,
        catalog=catalog,
        subscribers=subscribers,
        qualified_ids=qualified_ids,
        steps=steps,
    )

    if not submit:
        return result
    if strict and result.degraded:
        message = "Answer not submitted: upstream steps failed (strict mode)."
        logger.warning(message)
        if hooks.warning:
            hooks.warning(message)
        return result

    raw = await _best_effort(
        "answer",
        store.submit_answer(token, qualified_ids),
        None,
        steps=result.steps,
        hooks=hooks,
    )
    if raw is not None:
        result.submitted = True
        result.answer_raw = raw
        result.answer = decode_answer(raw)
    return result
