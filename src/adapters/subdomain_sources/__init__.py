"""Fuentes de subdominios (registro).

Por qué un paquete:
- Agrupa un módulo por fuente pasiva.
- Cada módulo implementa `core.interfaces.source.SubdomainSource`.
"""

from __future__ import annotations

from typing import Callable, Iterable

from adapters.subdomain_sources.quake import QuakeSource
from adapters.subdomain_sources.stream import RunState, SourceRun
from core.config import AppSettings
from core.interfaces.source import SubdomainSource

SOURCES: dict[str, Callable[[AppSettings], SubdomainSource]] = {
    QuakeSource.name: QuakeSource,
}

# Pool de keys de cada fuente a partir de la configuración.
_KEY_POOLS: dict[str, Callable[[AppSettings], list[str]]] = {
    QuakeSource.name: AppSettings.quake_key_pool,
}


def build_sources(
    settings: AppSettings | None = None,
    *,
    names: Iterable[str] | None = None,
    include_all: bool = False,
) -> list[SubdomainSource]:
    """Instancia las fuentes pedidas y les carga sus API keys.

    Sin `names` se usan las fuentes por defecto (o todas con `include_all`).
    Lanza `KeyError` si se pide una fuente desconocida.
    """

    settings = settings or AppSettings()
    requested = [n.strip().lower() for n in names or [] if n.strip()]
    for name in requested:
        if name not in SOURCES:
            raise KeyError(name)

    sources: list[SubdomainSource] = []
    for name, factory in SOURCES.items():
        source = factory(settings)
        if requested:
            if name not in requested:
                continue
        elif not include_all and not source.is_default():
            continue
        if source.needs_key():
            source.add_api_keys(_KEY_POOLS[name](settings))
        sources.append(source)
    return sources


__all__ = [
    "QuakeSource",
    "RunState",
    "SOURCES",
    "SourceRun",
    "build_sources",
]
