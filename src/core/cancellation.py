"""Cancelación cooperativa para las ejecuciones de fuentes.

Un `CancelToken` combina una cancelación explícita (`cancel()`) y un deadline
opcional. Se comprueba en cada punto de suspensión: la llamada de red
(`guard`) y la pausa entre páginas (`sleep`).
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, TypeVar

T = TypeVar("T")


class OperationCancelled(Exception):
    """La operación se interrumpió por cancelación o deadline."""


class CancelToken:
    def __init__(self, timeout: float | None = None) -> None:
        self._event = asyncio.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def _reason(self) -> str:
        return "operation cancelled" if self._event.is_set() else "deadline exceeded"

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Espera `awaitable` salvo que el token se cancele antes.

        Lanza `OperationCancelled` si gana la cancelación.
        """

        if self.cancelled:
            close = getattr(awaitable, "close", None)
            if callable(close):
                close()
            raise OperationCancelled(self._reason())

        work = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {work, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
            if work in done:
                return work.result()
        finally:
            for task in (work, waiter):
                if not task.done():
                    task.cancel()
            await asyncio.gather(work, waiter, return_exceptions=True)
        raise OperationCancelled(self._reason())

    async def sleep(self, delay: float) -> None:
        """Duerme `delay` segundos o hasta que el token se cancele."""

        if delay <= 0 or self.cancelled:
            return
        remaining = self.remaining()
        timeout = delay if remaining is None else min(delay, remaining)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({waiter}, timeout=timeout)
        finally:
            if not waiter.done():
                waiter.cancel()
            await asyncio.gather(waiter, return_exceptions=True)
