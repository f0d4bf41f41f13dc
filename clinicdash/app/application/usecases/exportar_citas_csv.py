from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Sequence

from clinicdash.app.application.estadisticas.temporales import fecha_de_cita
from clinicdash.app.bootstrap_logging import get_logger
from clinicdash.app.domain.citas import Cita
from clinicdash.app.domain.enums import EstadoCita
from clinicdash.app.domain.exceptions import ExportacionVaciaError

LOGGER = get_logger(__name__)

COLUMNAS_EXPORTACION: tuple[str, ...] = (
    "nombre_completo",
    "motivo_consulta",
    "fecha",
    "hora",
    "estado",
    "notas",
)
MENSAJE_SIN_DATOS = "No hay datos filtrados para exportar."


@dataclass(frozen=True, slots=True)
class FilaExportacionCita:
    nombre_completo: str
    motivo_consulta: str
    fecha: str
    hora: str
    estado: str
    notas: str

    def as_row(self) -> tuple[str, ...]:
        return tuple(getattr(self, columna) for columna in COLUMNAS_EXPORTACION)


def filas_exportacion(citas: Sequence[Cita]) -> list[FilaExportacionCita]:
    return [
        FilaExportacionCita(
            nombre_completo=cita.nombre_completo,
            motivo_consulta=cita.motivo_consulta or "",
            fecha=_fecha_corta(fecha_de_cita(cita)),
            hora=cita.hora_consulta or "",
            estado=cita.estado.value if isinstance(cita.estado, EstadoCita) else str(cita.estado or ""),
            notas=cita.notas or "",
        )
        for cita in citas
    ]


class ExportarCitasCSV:
    def execute(self, citas: Sequence[Cita], destino: str | Path) -> str:
        if not citas:
            raise ExportacionVaciaError(MENSAJE_SIN_DATOS)
        path = Path(destino)
        path.parent.mkdir(parents=True, exist_ok=True)
        filas = filas_exportacion(citas)
        with path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(COLUMNAS_EXPORTACION)
            writer.writerows(fila.as_row() for fila in filas)
        LOGGER.info("citas_exportadas filas=%s destino=%s", len(filas), path.name)
        return path.as_posix()


def _fecha_corta(valor: date | None) -> str:
    if valor is None:
        return "N/A"
    return valor.strftime("%d/%m/%Y")
