"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación en el borde (JSON de la tienda) sin acoplar el Core a HTTP.
- Los alias (`firstName`, `magazineIds`) quedan declarados junto al campo.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Magazine(BaseModel):
    """Revista del catálogo. `id` es único dentro del catálogo."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int = Field(..., description="Identificador de la revista.")
    name: str = Field(default="", description="Nombre comercial.")
    category: str = Field(default="", description="Categoría a la que pertenece.")


class Subscriber(BaseModel):
    """Suscriptor y las revistas a las que está suscrito.

    `magazine_ids` se trata como un conjunto: los duplicados no importan.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str = Field(..., description="Identificador opaco del suscriptor.")
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    magazine_ids: list[int] = Field(
        default_factory=list,
        alias="magazineIds",
        description="Ids de `Magazine` suscritos (orden del origen).",
    )

    @field_validator("magazine_ids", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


CatalogByCategory = Mapping[str, Sequence[Magazine]]


class AnswerReport(BaseModel):
    """Veredicto devuelto por `/api/answer/{token}` (campo `data`)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    total_time: str | None = Field(default=None, alias="totalTime")
    answer_correct: bool | None = Field(default=None, alias="answerCorrect")
    should_be: list[str] | None = Field(default=None, alias="shouldBe")


class StepOutcome(BaseModel):
    """Resultado estructurado de un paso del pipeline.

    Permite distinguir "cero suscriptores calificados" de "la tienda falló".
    """

    step: str = Field(..., min_length=1)
    ok: bool = True
    error: str | None = None
    status_code: int | None = None


class PipelineResult(BaseModel):
    """Salida completa de una ejecución."""

    token: str = ""
    categories: list[str] = Field(default_factory=list)
    catalog: dict[str, list[Magazine]] = Field(default_factory=dict)
    subscribers: list[Subscriber] = Field(default_factory=list)
    qualified_ids: list[str] = Field(default_factory=list)
    submitted: bool = False
    answer: AnswerReport | None = None
    answer_raw: str | None = None
    steps: list[StepOutcome] = Field(default_factory=list)

    @property
    def failed_steps(self) -> list[StepOutcome]:
        return [s for s in self.steps if not s.ok]

    @property
    def degraded(self) -> bool:
        return bool(self.failed_steps)
