"""
Agregados temporales del panel: tendencia diaria, asistencia por día de la
semana y correlación hora/día.

La tendencia rellena con ceros los días sin citas solo cuando el rango tiene
los dos extremos; con un único extremo (o sin rango) se emiten únicamente los
días observados.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from clinicdash.app.application.citas.motor_filtrado import fecha_iso
from clinicdash.app.application.citas.rango_fechas import RangoFechas, dias_del_rango, normalizar_rango
from clinicdash.app.application.estadisticas.dtos import (
    DIAS_SEMANA,
    DatoSemana,
    DatosDispersion,
    DatoTendencia,
    PuntoDispersion,
    porcentaje,
)
from clinicdash.app.domain.citas import Cita
from clinicdash.app.domain.enums import ESTADOS_ASISTIDOS, EstadoCita, estado_desde_valor

_HORA_DEFECTO = "00:00"


def calcular_tendencia(citas: Iterable[Cita], rango: RangoFechas | None) -> list[DatoTendencia]:
    conteos_por_dia: dict[date, dict[str, int]] = {}
    for cita in citas:
        fecha = fecha_de_cita(cita)
        if fecha is None:
            continue
        conteos = conteos_por_dia.setdefault(fecha, _conteos_vacios())
        conteos["total"] += 1
        estado = estado_desde_valor(cita.estado)
        if estado is not None:
            conteos[estado.value] += 1

    normalizado = normalizar_rango(rango)
    if normalizado is not None and normalizado.completo:
        return [_dato_tendencia(dia, conteos_por_dia.get(dia, _conteos_vacios())) for dia in dias_del_rango(normalizado)]
    return [_dato_tendencia(dia, conteos_por_dia[dia]) for dia in sorted(conteos_por_dia)]


def calcular_asistencia_semanal(citas: Iterable[Cita]) -> list[DatoSemana]:
    totales = [0] * len(DIAS_SEMANA)
    asistidas = [0] * len(DIAS_SEMANA)
    for cita in citas:
        fecha = fecha_de_cita(cita)
        if fecha is None:
            continue
        dia = dia_semana(fecha)
        totales[dia] += 1
        if estado_desde_valor(cita.estado) in ESTADOS_ASISTIDOS:
            asistidas[dia] += 1
    return [
        DatoSemana(
            dia=dia,
            nombre=nombre,
            total=totales[dia],
            asistidas=asistidas[dia],
            tasa=porcentaje(asistidas[dia], totales[dia]),
        )
        for dia, nombre in enumerate(DIAS_SEMANA)
    ]


def calcular_dispersion(citas: Iterable[Cita]) -> DatosDispersion:
    puntos: dict[EstadoCita, dict[tuple[int, int], int]] = {estado: {} for estado in EstadoCita}
    for cita in citas:
        estado = estado_desde_valor(cita.estado)
        fecha = fecha_de_cita(cita)
        if estado is None or fecha is None:
            continue
        clave = (dia_semana(fecha), _hora_entera(cita.hora_consulta))
        puntos[estado][clave] = puntos[estado].get(clave, 0) + 1
    return {
        estado: [
            PuntoDispersion(dia=dia, hora=hora, cantidad=cantidad, nombre_dia=DIAS_SEMANA[dia])
            for (dia, hora), cantidad in por_clave.items()
        ]
        for estado, por_clave in puntos.items()
    }


def fecha_de_cita(cita: Cita) -> date | None:
    texto = fecha_iso(cita.fecha_consulta)
    if texto is None:
        return None
    try:
        return date.fromisoformat(texto)
    except ValueError:
        return None


def dia_semana(fecha: date) -> int:
    """Día de la semana con domingo = 0 ... sábado = 6."""
    return (fecha.weekday() + 1) % 7


def _hora_entera(hora: str | None) -> int:
    texto = hora if isinstance(hora, str) and hora else _HORA_DEFECTO
    try:
        return int(texto.split(":")[0])
    except ValueError:
        return 0


def _conteos_vacios() -> dict[str, int]:
    conteos = {estado.value: 0 for estado in EstadoCita}
    conteos["total"] = 0
    return conteos


def _dato_tendencia(dia: date, conteos: dict[str, int]) -> DatoTendencia:
    return DatoTendencia(fecha=dia.isoformat(), fecha_formateada=dia.strftime("%d/%m"), **conteos)
