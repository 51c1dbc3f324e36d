"""Contrato de la API de búsqueda de Quake (360.net).

Documentación de la API: https://quake.360.net/quake/#/help

Aquí solo vive el formato de cable: cuerpo de la petición, parseo estructural
de la respuesta y normalización de hostnames. La interpretación de
`code`/`message` es responsabilidad de la fuente.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic.config import ConfigDict

from core.errors import DecodeFailure

PAGE_SIZE = 100
HOST_FIELD = "service.http.host"

# Quake devuelve este marcador cuando la cuenta no tiene permiso para ver el host.
NO_PERMISSION_SENTINEL = "暂无权限"


class QueryRequest(BaseModel):
    """Petición de una página de resultados para un dominio."""

    model_config = ConfigDict(frozen=True)

    domain: str = Field(..., min_length=1, description="Dominio objetivo.")
    start: int = Field(default=0, ge=0, description="Offset del primer registro de la página.")
    size: int = Field(default=PAGE_SIZE, gt=0, description="Registros por página.")

    @classmethod
    def for_page(cls, domain: str, page: int, size: int = PAGE_SIZE) -> "QueryRequest":
        return cls(domain=domain, start=(page - 1) * size, size=size)

    def to_body(self) -> dict[str, Any]:
        return {
            "query": f"domain: {self.domain}",
            "start": self.start,
            "size": self.size,
            "ignore_cache": False,
            "include": [HOST_FIELD],
        }


class _QuakeModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _null_means_missing(cls, data: Any) -> Any:
        # Quake manda `null` en campos vacíos; equivale a campo ausente.
        if data is None:
            return {}
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class _HTTPInfo(_QuakeModel):
    host: str = ""


class _Service(_QuakeModel):
    http: _HTTPInfo = Field(default_factory=_HTTPInfo)


class _Entry(_QuakeModel):
    service: _Service = Field(default_factory=_Service)


class _Pagination(_QuakeModel):
    total: int = 0


class _Meta(_QuakeModel):
    pagination: _Pagination = Field(default_factory=_Pagination)


class QueryResponse(_QuakeModel):
    """Respuesta de `/api/v3/search/quake_service`."""

    code: int = 0
    message: str = ""
    data: list[_Entry] = Field(default_factory=list)
    meta: _Meta = Field(default_factory=_Meta)

    @property
    def total(self) -> int:
        return self.meta.pagination.total

    def hosts(self) -> list[str]:
        return [entry.service.http.host for entry in self.data]


def decode_response(body: bytes | str, *, source: str = "quake") -> QueryResponse:
    """Parsea el cuerpo crudo. Cualquier estructura inválida es `DecodeFailure`."""

    try:
        return QueryResponse.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeFailure(source, f"invalid response body: {exc.error_count()} error(s), {exc.errors()[0]['msg']}") from exc


def normalize_host(host: str) -> str:
    """Sustituye por "" los hosts ocultos por falta de permisos."""

    if NO_PERMISSION_SENTINEL in host:
        return ""
    return host


def page_count(total: int, size: int = PAGE_SIZE) -> int:
    return max(1, total // size + 1)
