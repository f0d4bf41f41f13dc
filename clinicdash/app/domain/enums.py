# domain/enums.py
from __future__ import annotations
from enum import Enum


class EstadoCita(str, Enum):
    COMPLETADA = "completada"
    CANCELADA = "cancelada"
    PENDIENTE = "pendiente"
    PRESENTE = "presente"
    REPROGRAMADA = "reprogramada"
    NO_ASISTIO = "no_asistio"


class CampoOrdenCita(str, Enum):
    FECHA_CONSULTA = "fechaConsulta"
    HORA_CONSULTA = "horaConsulta"
    NOMBRE = "nombre"
    MOTIVO_CONSULTA = "motivoConsulta"


class DireccionOrden(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Estados que cuentan como asistencia efectiva.
ESTADOS_ASISTIDOS: frozenset[EstadoCita] = frozenset({EstadoCita.COMPLETADA, EstadoCita.PRESENTE})


def estado_desde_valor(valor: object) -> EstadoCita | None:
    if isinstance(valor, EstadoCita):
        return valor
    if not isinstance(valor, str):
        return None
    try:
        return EstadoCita(valor.strip())
    except ValueError:
        return None
