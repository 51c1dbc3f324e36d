"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Unifica los resultados de todas las fuentes de subdominios.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class ResultKind(str, Enum):
    """Tipo de elemento entregado por una fuente."""

    SUBDOMAIN = "subdomain"
    ERROR = "error"


class ResultItem(BaseModel):
    """Un elemento del stream de resultados de una fuente.

    `value` (hostname) y `error` son excluyentes según `kind`. Un hostname
    puede ser la cadena vacía (la fuente lo ocultó).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    source: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Identificador de la fuente que produjo el resultado.",
    )
    kind: ResultKind = Field(
        ...,
        description="Subdominio encontrado o error terminal de la ejecución.",
    )
    value: str | None = Field(
        default=None,
        description="Hostname descubierto (solo para kind=subdomain).",
    )
    error: Exception | None = Field(
        default=None,
        description="Error terminal (solo para kind=error).",
    )

    @model_validator(mode="after")
    def _check_payload(self) -> "ResultItem":
        if self.kind is ResultKind.SUBDOMAIN:
            if self.value is None or self.error is not None:
                raise ValueError("subdomain results carry a value and no error")
        elif self.error is None or self.value is not None:
            raise ValueError("error results carry an error and no value")
        return self

    @classmethod
    def subdomain(cls, source: str, value: str) -> "ResultItem":
        return cls(source=source, kind=ResultKind.SUBDOMAIN, value=value)

    @classmethod
    def failure(cls, source: str, error: Exception) -> "ResultItem":
        return cls(source=source, kind=ResultKind.ERROR, error=error)


class RunStatistics(BaseModel):
    """Totales de una ejecución, visibles solo cuando el stream se cerró."""

    model_config = ConfigDict(frozen=True)

    errors: int = Field(default=0, ge=0, description="Errores entregados en el stream.")
    results: int = Field(default=0, ge=0, description="Subdominios entregados en el stream.")
    time_taken: timedelta = Field(
        default_factory=timedelta,
        description="Tiempo desde el inicio de la ejecución hasta el cierre del stream.",
    )
    skipped: bool = Field(
        default=False,
        description="True si no había credencial disponible y no se consultó la red.",
    )


class EnumerationResult(BaseModel):
    """Agregado de una enumeración de un dominio sobre varias fuentes."""

    domain: str = Field(
        ...,
        min_length=1,
        max_length=253,
        description="Dominio objetivo normalizado.",
    )
    hostnames: list[str] = Field(
        default_factory=list,
        description="Hostnames únicos encontrados (ordenados).",
    )
    errors: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Mensajes de error por fuente.",
    )
    statistics: dict[str, RunStatistics] = Field(
        default_factory=dict,
        description="Estadísticas de la ejecución de cada fuente.",
    )
