from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from clinicdash.app.domain.enums import EstadoCita

COLORES_ESTADO: dict[EstadoCita, str] = {
    EstadoCita.COMPLETADA: "#10b981",
    EstadoCita.CANCELADA: "#ef4444",
    EstadoCita.PENDIENTE: "#f59e0b",
    EstadoCita.PRESENTE: "#3b82f6",
    EstadoCita.REPROGRAMADA: "#8b5cf6",
    EstadoCita.NO_ASISTIO: "#6b7280",
}

ETIQUETAS_ESTADO: dict[EstadoCita, str] = {
    EstadoCita.COMPLETADA: "Completadas",
    EstadoCita.CANCELADA: "Canceladas",
    EstadoCita.PENDIENTE: "Pendientes",
    EstadoCita.PRESENTE: "Presentes",
    EstadoCita.REPROGRAMADA: "Reprogramadas",
    EstadoCita.NO_ASISTIO: "No Asistieron",
}

# Índice 0 = domingo, como en el calendario del panel.
DIAS_SEMANA: tuple[str, ...] = ("Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado")

MOTIVO_DESCONOCIDO = "Desconocido"
PERIODO_SIN_RANGO = "Todos los datos"


@dataclass(frozen=True, slots=True)
class EstadisticasGenerales:
    total: int
    porcentaje_asistencia: float
    porcentaje_cancelacion: float
    porcentaje_pendientes: float
    porcentaje_presentes: float
    completadas: int
    canceladas: int
    pendientes: int
    presentes: int
    periodo: str


@dataclass(frozen=True, slots=True)
class DatoGraficoEstado:
    estado: EstadoCita
    etiqueta: str
    valor: int
    color: str


@dataclass(frozen=True, slots=True)
class DatoGraficoMotivo:
    motivo: str
    cantidad: int


@dataclass(frozen=True, slots=True)
class DatoTendencia:
    fecha: str
    fecha_formateada: str
    total: int = 0
    completada: int = 0
    cancelada: int = 0
    pendiente: int = 0
    presente: int = 0
    reprogramada: int = 0
    no_asistio: int = 0

    def conteo(self, estado: EstadoCita) -> int:
        return getattr(self, estado.value)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class DatoSemana:
    dia: int
    nombre: str
    total: int
    asistidas: int
    tasa: float


@dataclass(frozen=True, slots=True)
class PuntoDispersion:
    dia: int
    hora: int
    cantidad: int
    nombre_dia: str


DatosDispersion = dict[EstadoCita, list[PuntoDispersion]]


def porcentaje(valor: int, total: int) -> float:
    if total == 0:
        return 0.0
    return valor / total * 100
