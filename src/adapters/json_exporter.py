"""Exportación JSON de una enumeración.

Por qué JSON:
- Interoperabilidad con otras herramientas de recon y pipelines.
- Permite persistir resultados sin depender de la salida de consola.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import EnumerationResult


def export_enumeration_json(*, result: EnumerationResult, output_path: Path) -> Path:
    """Exporta `EnumerationResult` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = result.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
