"""Contratos de las fuentes de subdominios.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que registro, pipeline y CLI traten todas las fuentes igual y que
  la política de selección de credenciales sea intercambiable en tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, AsyncIterator, Protocol, Sequence, runtime_checkable

from core.domain.models import ResultItem, RunStatistics

if TYPE_CHECKING:
    from core.cancellation import CancelToken


@runtime_checkable
class ResultStream(Protocol):
    """Stream de resultados de una ejecución.

    `statistics` solo es válido una vez cerrado el stream.
    """

    def __aiter__(self) -> AsyncIterator[ResultItem]: ...

    async def aclose(self) -> None: ...

    async def __aenter__(self) -> "ResultStream": ...

    async def __aexit__(self, *exc_info: object) -> None: ...

    @property
    def closed(self) -> bool: ...

    @property
    def statistics(self) -> RunStatistics: ...


@runtime_checkable
class SubdomainSource(Protocol):
    """Contrato mínimo de una fuente pasiva de subdominios."""

    name: str

    def is_default(self) -> bool: ...

    def has_recursive_support(self) -> bool: ...

    def needs_key(self) -> bool: ...

    def add_api_keys(self, keys: Sequence[str]) -> None: ...

    def run(self, domain: str, token: CancelToken | None = None) -> ResultStream:
        """Lanza la búsqueda de `domain` y devuelve el stream de resultados."""

        ...

    def statistics(self) -> RunStatistics:
        """Estadísticas de la última ejecución cerrada."""

        ...


@runtime_checkable
class CredentialSelector(Protocol):
    """Estrategia de selección de credencial."""

    def select(self, pool: Sequence[str], seed: str) -> str | None:
        """Devuelve una credencial del `pool` o `None` si no hay ninguna usable."""

        ...
