"""Configuración del panel a partir de variables de entorno CLINICDASH_*."""

from __future__ import annotations

import os
import uuid
from dataclasses import dataclass
from pathlib import Path

from clinicdash.app.bootstrap_logging import configure_logging, get_logger, set_run_context

LOGGER = get_logger(__name__)

_ENV_RANGO_DIAS = "CLINICDASH_RANGO_DIAS"
_ENV_TAMANO_PAGINA = "CLINICDASH_TAMANO_PAGINA"
_ENV_LOG_LEVEL = "CLINICDASH_LOG_LEVEL"
_ENV_LOG_JSON = "CLINICDASH_LOG_JSON"
_ENV_LOG_DIR = "CLINICDASH_LOG_DIR"

_NIVELES_LOG = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class ConfiguracionPanel:
    dias_rango_defecto: int = 30
    tamano_pagina: int = 20
    log_level: str = "INFO"
    log_json: bool = True
    log_dir: Path = Path("./logs")


def cargar_configuracion() -> ConfiguracionPanel:
    defaults = ConfiguracionPanel()
    return ConfiguracionPanel(
        dias_rango_defecto=_entero_positivo(_ENV_RANGO_DIAS, defaults.dias_rango_defecto),
        tamano_pagina=_entero_positivo(_ENV_TAMANO_PAGINA, defaults.tamano_pagina),
        log_level=_nivel_log(defaults.log_level),
        log_json=_flag(_ENV_LOG_JSON, defaults.log_json),
        log_dir=_ruta(_ENV_LOG_DIR, defaults.log_dir),
    )


def iniciar_logging(config: ConfiguracionPanel | None = None, app_name: str = "clinicdash") -> ConfiguracionPanel:
    """Configura el logging con los valores de entorno y abre un run_id nuevo."""
    if config is None:
        config = cargar_configuracion()
    configure_logging(app_name, config.log_dir, level=config.log_level, json=config.log_json)
    set_run_context(uuid.uuid4().hex[:8])
    return config


def _entero_positivo(nombre: str, defecto: int) -> int:
    valor = os.getenv(nombre, "").strip()
    if not valor:
        return defecto
    try:
        numero = int(valor)
    except ValueError:
        LOGGER.warning("config_valor_invalido variable=%s", nombre)
        return defecto
    if numero <= 0:
        LOGGER.warning("config_valor_invalido variable=%s", nombre)
        return defecto
    return numero


def _nivel_log(defecto: str) -> str:
    valor = os.getenv(_ENV_LOG_LEVEL, "").strip().upper()
    if not valor:
        return defecto
    if valor not in _NIVELES_LOG:
        LOGGER.warning("config_valor_invalido variable=%s", _ENV_LOG_LEVEL)
        return defecto
    return valor


def _flag(nombre: str, defecto: bool) -> bool:
    valor = os.getenv(nombre, "").strip().lower()
    if not valor:
        return defecto
    return valor in {"1", "true", "yes", "on"}


def _ruta(nombre: str, defecto: Path) -> Path:
    valor = os.getenv(nombre, "").strip()
    if not valor:
        return defecto
    return Path(valor).expanduser()
