"""Orquestación de la enumeración de subdominios.

La CLI delega aquí todo lo que no es presentación: normalizar el dominio,
drenar cada fuente, deduplicar hostnames y recoger estadísticas. Los efectos
de UI (impresión, progreso) llegan por `PipelineHooks`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from core.cancellation import CancelToken
from core.domain.models import EnumerationResult, ResultItem, ResultKind
from core.interfaces.source import SubdomainSource

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Callbacks opcionales para capas de UI."""

    on_result: Callable[[ResultItem], None] | None = None
    on_error: Callable[[ResultItem], None] | None = None
    source_done: Callable[[str], None] | None = None


def normalize_domain(value: str) -> str:
    """`  Example.COM. ` -> `example.com`. Lanza `ValueError` si queda vacío."""

    domain = value.strip().lower().rstrip(".")
    if not domain or any(ch.isspace() for ch in domain) or "/" in domain:
        raise ValueError(f"invalid domain: {value!r}")
    return domain


def normalize_hostname(value: str) -> str:
    return value.strip().lower().rstrip(".")


async def enumerate_domain(
    *,
    domain: str,
    sources: Sequence[SubdomainSource],
    token: CancelToken | None = None,
    hooks: PipelineHooks | None = None,
) -> EnumerationResult:
    """Ejecuta las fuentes en orden y agrega sus resultados."""

    hooks = hooks or PipelineHooks()
    domain = normalize_domain(domain)
    token = token or CancelToken()

    hostnames: set[str] = set()
    result = EnumerationResult(domain=domain)

    for source in sources:
        async with source.run(domain, token) as stream:
            async for item in stream:
                if item.kind is ResultKind.ERROR:
                    logger.warning("Source %s failed for %s: %s", source.name, domain, item.error)
                    result.errors.setdefault(source.name, []).append(str(item.error))
                    if hooks.on_error:
                        hooks.on_error(item)
                    continue

                hostname = normalize_hostname(item.value or "")
                if not hostname or hostname in hostnames:
                    continue
                hostnames.add(hostname)
                if hooks.on_result:
                    hooks.on_result(item.model_copy(update={"value": hostname}))

        statistics = stream.statistics
        result.statistics[source.name] = statistics
        if statistics.skipped:
            logger.info("Source %s skipped: no API key configured", source.name)
        if hooks.source_done:
            hooks.source_done(source.name)

    result.hostnames = sorted(hostnames)
    return result
