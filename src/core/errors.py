"""Taxonomía de errores de las fuentes.

Ninguno de estos errores se propaga al llamador: las fuentes los entregan
como `ResultItem` de tipo error en el stream de resultados.
"""

from __future__ import annotations


class SourceError(Exception):
    """Error terminal de una ejecución de fuente."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source
        self.message = message

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


class TransportFailure(SourceError):
    """Fallo de red, timeout, cancelación o status HTTP inesperado."""


class DecodeFailure(SourceError):
    """El cuerpo de la respuesta no tiene la estructura esperada."""


class UpstreamFailure(SourceError):
    """La API respondió con un código de error propio (`code != 0`)."""

    def __init__(self, source: str, message: str, *, code: int) -> None:
        super().__init__(source, message)
        self.code = code
