"""Logging de la aplicación.

Las librerías (core/adapters) solo usan `logging.getLogger(__name__)`;
la CLI es la única que instala handlers.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "subscout-rich"


def configure_logging(level: str = "WARNING", *, verbose: bool = False, console: Console | None = None) -> None:
    """Instala un `RichHandler` en el logger raíz (idempotente)."""

    root = logging.getLogger()
    resolved = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=True,
        show_path=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(resolved)
    root.addHandler(handler)
    root.setLevel(resolved)

    # httpx loguea cada request en INFO; solo interesa en modo verbose.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
