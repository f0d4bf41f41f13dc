from __future__ import annotations

import contextvars
import json
import logging
import sys
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator

from clinicdash.app.common.log_redaction import redact_text, redact_value

_RUN_ID: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default="-")
_RECALCULO_ID: contextvars.ContextVar[str] = contextvars.ContextVar("recalculo_id", default="-")
_RECUPERADO_KEY = "error_recuperado"
_CAMPOS_CONTEXTO = ("run_id", "recalculo_id")
_RESERVED_KEYS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}

ARCHIVO_OPERATIVO = "app.log"
ARCHIVO_RECUPERADOS = "errores_recuperados.log"


class _ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID.get()
        record.recalculo_id = _RECALCULO_ID.get()
        return True


class _SoloRecuperadosFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return bool(getattr(record, _RECUPERADO_KEY, False))


class _StructuredFormatter(logging.Formatter):
    """JSON o ``clave=valor``; los errores recuperados solo llevan traza donde se pide."""

    def __init__(self, *, json_mode: bool, trazas_recuperadas: bool) -> None:
        super().__init__()
        self._json_mode = json_mode
        self._trazas_recuperadas = trazas_recuperadas

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_text(record.getMessage()),
            "run_id": getattr(record, "run_id", "-"),
            "recalculo_id": getattr(record, "recalculo_id", "-"),
            "line": record.lineno,
        }
        payload.update(_extra_fields(record))
        if record.exc_info and self._incluir_traza(record):
            payload["traceback"] = redact_text(self.formatException(record.exc_info))
        if self._json_mode:
            return json.dumps(payload, ensure_ascii=False, default=str)
        return " ".join(f"{key}={value}" for key, value in payload.items())

    def _incluir_traza(self, record: logging.LogRecord) -> bool:
        return self._trazas_recuperadas or not getattr(record, _RECUPERADO_KEY, False)


class ContextLoggerAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        merged = {"run_id": _RUN_ID.get(), "recalculo_id": _RECALCULO_ID.get(), **extra}
        kwargs["extra"] = redact_value(merged)
        return redact_value(msg), kwargs


def configure_logging(app_name: str, log_dir: Path, level: str = "INFO", json: bool = True) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    operativo = _StructuredFormatter(json_mode=json, trazas_recuperadas=False)
    context_filter = _ContextFilter()

    console = logging.StreamHandler(stream=sys.__stderr__)
    console.setFormatter(operativo)
    console.addFilter(context_filter)

    app_file = RotatingFileHandler(log_dir / ARCHIVO_OPERATIVO, maxBytes=2_000_000, backupCount=5, encoding="utf-8")
    app_file.setFormatter(operativo)
    app_file.addFilter(context_filter)

    recuperados_file = RotatingFileHandler(
        log_dir / ARCHIVO_RECUPERADOS, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    recuperados_file.setFormatter(_StructuredFormatter(json_mode=json, trazas_recuperadas=True))
    recuperados_file.addFilter(context_filter)
    recuperados_file.addFilter(_SoloRecuperadosFilter())

    root_logger.addHandler(console)
    root_logger.addHandler(app_file)
    root_logger.addHandler(recuperados_file)
    logging.captureWarnings(True)
    get_logger(__name__).info("logging_configured", extra={"app_name": app_name})


def get_logger(name: str) -> logging.LoggerAdapter:
    return ContextLoggerAdapter(logging.getLogger(name), {})


def set_run_context(run_id: str) -> None:
    _RUN_ID.set(run_id)


@contextmanager
def contexto_recalculo(recalculo_id: str) -> Iterator[str]:
    """Etiqueta con ``recalculo_id`` todo lo registrado durante un recálculo del panel."""
    token = _RECALCULO_ID.set(recalculo_id)
    try:
        yield recalculo_id
    finally:
        _RECALCULO_ID.reset(token)


def registrar_error_recuperado(
    logger: logging.LoggerAdapter,
    exc: Exception,
    operacion: str,
    **contexto: Any,
) -> None:
    """Un único registro: resumido en el log operativo y con traza en el de recuperados."""
    logger.error(
        "error_recuperado operacion=%s tipo=%s",
        operacion,
        type(exc).__name__,
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={_RECUPERADO_KEY: True, "operacion": operacion, "contexto": contexto},
    )


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_KEYS and key not in _CAMPOS_CONTEXTO and key != _RECUPERADO_KEY
    }
