from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable, Sequence

from clinicdash.app.application.citas.rango_fechas import RangoFechas, normalizar_rango
from clinicdash.app.application.estadisticas.dtos import (
    COLORES_ESTADO,
    ETIQUETAS_ESTADO,
    MOTIVO_DESCONOCIDO,
    PERIODO_SIN_RANGO,
    DatoGraficoEstado,
    DatoGraficoMotivo,
    EstadisticasGenerales,
    porcentaje,
)
from clinicdash.app.domain.citas import Cita
from clinicdash.app.domain.enums import EstadoCita, estado_desde_valor


def contar_por_estado(citas: Iterable[Cita]) -> dict[EstadoCita, int]:
    conteos = {estado: 0 for estado in EstadoCita}
    for cita in citas:
        estado = estado_desde_valor(cita.estado)
        if estado is not None:
            conteos[estado] += 1
    return conteos


def calcular_estadisticas_generales(citas: Sequence[Cita], rango: RangoFechas | None) -> EstadisticasGenerales:
    total = len(citas)
    conteos = contar_por_estado(citas)
    completadas = conteos[EstadoCita.COMPLETADA]
    canceladas = conteos[EstadoCita.CANCELADA]
    pendientes = conteos[EstadoCita.PENDIENTE]
    presentes = conteos[EstadoCita.PRESENTE]
    return EstadisticasGenerales(
        total=total,
        porcentaje_asistencia=porcentaje(completadas + presentes, total),
        porcentaje_cancelacion=porcentaje(canceladas, total),
        porcentaje_pendientes=porcentaje(pendientes, total),
        porcentaje_presentes=porcentaje(presentes, total),
        completadas=completadas,
        canceladas=canceladas,
        pendientes=pendientes,
        presentes=presentes,
        periodo=etiqueta_periodo(rango),
    )


def etiqueta_periodo(rango: RangoFechas | None) -> str:
    normalizado = normalizar_rango(rango)
    if normalizado is None:
        return PERIODO_SIN_RANGO
    desde = _fecha_larga(normalizado.desde) if normalizado.desde is not None else "Inicio"
    hasta = _fecha_larga(normalizado.hasta) if normalizado.hasta is not None else "Actual"
    return f"{desde} - {hasta}"


def calcular_grafico_estados(citas: Iterable[Cita]) -> list[DatoGraficoEstado]:
    conteos = contar_por_estado(citas)
    return [
        DatoGraficoEstado(
            estado=estado,
            etiqueta=ETIQUETAS_ESTADO[estado],
            valor=conteos[estado],
            color=COLORES_ESTADO[estado],
        )
        for estado in EstadoCita
    ]


def calcular_grafico_motivos(citas: Iterable[Cita]) -> list[DatoGraficoMotivo]:
    conteos = Counter(cita.motivo_consulta or MOTIVO_DESCONOCIDO for cita in citas)
    # sorted es estable: los empates conservan el orden de primera aparición
    ordenados = sorted(conteos.items(), key=lambda item: -item[1])
    return [DatoGraficoMotivo(motivo=motivo, cantidad=cantidad) for motivo, cantidad in ordenados]


def _fecha_larga(valor: date) -> str:
    return valor.strftime("%d/%m/%Y")
