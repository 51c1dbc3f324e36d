"""Selección de credenciales para fuentes con API key."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from core.interfaces.source import CredentialSelector

logger = logging.getLogger(__name__)


class RandomCredentialSelector(CredentialSelector):
    """Elige una key al azar entre las usables del pool.

    `seed` es el nombre de la fuente; solo se usa para el log cuando no hay key.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def select(self, pool: Sequence[str], seed: str) -> str | None:
        usable = [key.strip() for key in pool if key and key.strip()]
        if not usable:
            logger.debug("Cannot use the %s source because there was no API key defined for it.", seed)
            return None
        return self._rng.choice(usable)
