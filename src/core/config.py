"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) para que el cliente del
  directorio y los tests lean la misma configuración.
- `LookupOptions` (timeouts y timestamp por llamada) toma sus defaults de aquí.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "mc-identity"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la librería.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para el cliente y sus consumidores.
    """

    model_config = SettingsConfigDict(
        env_prefix="MC_IDENTITY_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://api.mojang.com/",
        min_length=8,
        description="Base URL del directorio de cuentas.",
    )
    connect_timeout_ms: int = Field(
        default=30_000,
        gt=0,
        description="Timeout de conexión por defecto (milisegundos).",
    )
    read_timeout_ms: int = Field(
        default=30_000,
        gt=0,
        description="Timeout de lectura por defecto (milisegundos).",
    )
    user_agent: str = Field(
        default="mc-identity/0.1",
        min_length=1,
        description="User-Agent para las peticiones al directorio.",
    )


class LookupOptions(BaseModel):
    """Opciones por llamada del cliente del directorio.

    Los campos en `None` toman el valor de `AppSettings`.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int | None = Field(
        default=None,
        ge=0,
        description=(
            "Instante (ms desde epoch) para la búsqueda por nombre. Se envía como "
            "`?at=<segundos>`, pero el servicio lo ignora desde WEB-3367."
        ),
    )
    connect_timeout_ms: int | None = Field(
        default=None,
        gt=0,
        description="Timeout de conexión para esta llamada (milisegundos).",
    )
    read_timeout_ms: int | None = Field(
        default=None,
        gt=0,
        description="Timeout de lectura para esta llamada (milisegundos).",
    )

    def timeouts(self, settings: AppSettings) -> tuple[int, int]:
        """Devuelve `(connect_ms, read_ms)` ya resueltos contra `settings`."""

        return (
            self.connect_timeout_ms or settings.connect_timeout_ms,
            self.read_timeout_ms or settings.read_timeout_ms,
        )
