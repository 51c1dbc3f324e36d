"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/fuentes) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "subscout"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "subscout"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "subscout"
    return Path.home() / ".config" / "subscout"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# subscout user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


def split_key_pool(raw: str) -> list[str]:
    """Separa una lista de keys `a,b, c` descartando entradas vacías."""

    return [part.strip() for part in raw.split(",") if part.strip()]


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBSCOUT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="subscout/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones a las APIs.",
    )

    quake_api_keys: str = Field(
        default="",
        description="API keys de Quake (360.net) separadas por comas.",
    )
    quake_endpoint: str = Field(
        default="https://quake.360.net/api/v3/search/quake_service",
        min_length=8,
        description="Endpoint de búsqueda de servicios de Quake.",
    )
    quake_page_delay_seconds: float = Field(
        default=3.0,
        ge=0,
        description="Pausa entre páginas para respetar el rate limit de Quake.",
    )

    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging por defecto de la CLI.",
    )

    def quake_key_pool(self) -> list[str]:
        return split_key_pool(self.quake_api_keys)
