"""Entidad de dominio de citas del panel de consultas."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from clinicdash.app.domain.enums import EstadoCita, estado_desde_valor
from clinicdash.app.domain.exceptions import ValidationError


@dataclass(frozen=True, slots=True)
class Cita:
    """Consulta agendada tal como la entrega la fuente de datos (inmutable)."""

    id: str
    nombre: str = ""
    apellidos: str = ""
    fecha_consulta: date | str | None = None
    hora_consulta: str = ""
    motivo_consulta: str = ""
    estado: EstadoCita | str = EstadoCita.PENDIENTE
    notas: str = ""
    duracion: Optional[float] = None
    costo_consulta: Optional[float] = None
    seguro_medico: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombre or ''} {self.apellidos or ''}".strip()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if isinstance(self.fecha_consulta, date):
            data["fecha_consulta"] = self.fecha_consulta.isoformat()
        data["estado"] = self.estado.value if isinstance(self.estado, EstadoCita) else self.estado
        return data


# clave snake_case -> nombre del campo en los registros de origen
_ALIAS_CAMPOS: dict[str, str] = {
    "fecha_consulta": "fechaConsulta",
    "hora_consulta": "horaConsulta",
    "motivo_consulta": "motivoConsulta",
    "costo_consulta": "costoConsulta",
    "seguro_medico": "seguroMedico",
}


def cita_desde_mapping(datos: Mapping[str, Any]) -> Cita:
    """Construye una ``Cita`` aceptando claves snake_case o camelCase."""
    if not isinstance(datos, Mapping):
        raise ValidationError("El registro de cita debe ser un mapping.")
    cita_id = _leer(datos, "id")
    if cita_id in (None, ""):
        raise ValidationError("id obligatorio en el registro de cita.")
    estado_raw = _leer(datos, "estado")
    return Cita(
        id=str(cita_id),
        nombre=_texto(_leer(datos, "nombre")),
        apellidos=_texto(_leer(datos, "apellidos")),
        fecha_consulta=_fecha(_leer(datos, "fecha_consulta")),
        hora_consulta=_texto(_leer(datos, "hora_consulta")),
        motivo_consulta=_texto(_leer(datos, "motivo_consulta")),
        estado=estado_desde_valor(estado_raw) or _texto(estado_raw),
        notas=_texto(_leer(datos, "notas")),
        duracion=_numero(_leer(datos, "duracion")),
        costo_consulta=_numero(_leer(datos, "costo_consulta")),
        seguro_medico=_texto_opcional(_leer(datos, "seguro_medico")),
        telefono=_texto_opcional(_leer(datos, "telefono")),
        email=_texto_opcional(_leer(datos, "email")),
    )


def citas_desde_registros(registros: Iterable[Mapping[str, Any]]) -> list[Cita]:
    return [cita_desde_mapping(registro) for registro in registros]


def _leer(datos: Mapping[str, Any], clave: str) -> Any:
    if clave in datos:
        return datos[clave]
    alias = _ALIAS_CAMPOS.get(clave)
    if alias is None:
        return None
    return datos.get(alias)


def _texto(valor: Any) -> str:
    if valor is None:
        return ""
    return str(valor)


def _texto_opcional(valor: Any) -> Optional[str]:
    if valor is None:
        return None
    texto = str(valor).strip()
    return texto or None


def _numero(valor: Any) -> Optional[float]:
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, (int, float)):
        return valor
    try:
        return float(str(valor).strip())
    except ValueError:
        return None


def _fecha(valor: Any) -> date | str | None:
    if valor is None:
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    texto = str(valor).strip()
    try:
        return date.fromisoformat(texto[:10])
    except ValueError:
        # se conserva para que el motor la descarte como fecha inválida
        return texto
