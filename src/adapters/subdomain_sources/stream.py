"""Stream de resultados de una ejecución de fuente.

Por qué un wrapper sobre el async generator:
- El productor (el bucle de la fuente) solo avanza cuando el consumidor pide
  el siguiente elemento: no hay buffer y el consumidor lento frena a la fuente.
- El cierre ocurre una única vez, termine como termine la ejecución, y es el
  punto a partir del cual las estadísticas son legibles.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import AsyncIterator, Callable

from core.domain.models import ResultItem, ResultKind, RunStatistics


@dataclass
class RunState:
    """Contadores de una única ejecución (un escritor: el productor)."""

    errors: int = 0
    results: int = 0
    skipped: bool = False
    started_at: float = field(default_factory=time.monotonic)

    def record(self, item: ResultItem) -> None:
        if item.kind is ResultKind.ERROR:
            self.errors += 1
        else:
            self.results += 1

    def snapshot(self) -> RunStatistics:
        return RunStatistics(
            errors=self.errors,
            results=self.results,
            time_taken=timedelta(seconds=time.monotonic() - self.started_at),
            skipped=self.skipped,
        )


ProducerFactory = Callable[[RunState], AsyncIterator[ResultItem]]


class SourceRun:
    """Iterador asíncrono de `ResultItem` con cierre idempotente.

    Salir con `break` sin `aclose()` ni `async with` deja el stream abierto
    hasta que el event loop finaliza el generador (p.ej. al terminar
    `asyncio.run`); hasta entonces `statistics` no es legible.
    """

    def __init__(
        self,
        source: str,
        producer: ProducerFactory,
        *,
        on_close: Callable[[RunStatistics], None] | None = None,
    ) -> None:
        self.source = source
        self._state = RunState()
        self._producer = self._finalizing(producer(self._state))
        self._on_close = on_close
        self._statistics: RunStatistics | None = None

    async def _finalizing(self, inner: AsyncIterator[ResultItem]) -> AsyncIterator[ResultItem]:
        try:
            async for item in inner:
                yield item
        finally:
            aclose = getattr(inner, "aclose", None)
            if aclose is not None:
                await aclose()
            self._close()

    def __aiter__(self) -> "SourceRun":
        return self

    async def __anext__(self) -> ResultItem:
        if self.closed:
            raise StopAsyncIteration
        try:
            item = await self._producer.__anext__()
        except BaseException:
            # StopAsyncIteration incluido: fin normal del productor.
            self._close()
            raise
        self._state.record(item)
        return item

    async def aclose(self) -> None:
        if self.closed:
            return
        try:
            await self._producer.aclose()
        finally:
            self._close()

    async def __aenter__(self) -> "SourceRun":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _close(self) -> None:
        if self._statistics is not None:
            return
        self._statistics = self._state.snapshot()
        if self._on_close is not None:
            self._on_close(self._statistics)

    @property
    def closed(self) -> bool:
        return self._statistics is not None

    @property
    def statistics(self) -> RunStatistics:
        if self._statistics is None:
            raise RuntimeError("statistics are only available once the result stream is closed")
        return self._statistics

    async def collect(self) -> list[ResultItem]:
        """Drena el stream completo (útil en tests y scripts)."""

        return [item async for item in self]
