from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

from clinicdash.app.application.citas.rango_fechas import (
    DIAS_RANGO_DEFECTO,
    RangoFechas,
    normalizar_rango,
    rango_por_defecto,
)
from clinicdash.app.common.search_utils import distinct_sorted
from clinicdash.app.domain.citas import Cita
from clinicdash.app.domain.enums import CampoOrdenCita, DireccionOrden, EstadoCita, estado_desde_valor

MOTIVO_TODOS = "all"
HORA_MINIMA = 0.0
HORA_MAXIMA = 24.0

TODOS_LOS_ESTADOS: frozenset[EstadoCita] = frozenset(EstadoCita)


@dataclass(frozen=True, slots=True)
class FiltrosCitasDTO:
    rango_fechas: RangoFechas | None = None
    filtro_motivo: str = MOTIVO_TODOS
    filtro_estados: frozenset[EstadoCita] = field(default_factory=lambda: TODOS_LOS_ESTADOS)
    texto_busqueda: str = ""
    ordenar_por: CampoOrdenCita = CampoOrdenCita.FECHA_CONSULTA
    orden: DireccionOrden = DireccionOrden.DESC
    rango_horario: tuple[float, float] = (HORA_MINIMA, HORA_MAXIMA)


def filtros_por_defecto(hoy: date, dias: int = DIAS_RANGO_DEFECTO) -> FiltrosCitasDTO:
    return FiltrosCitasDTO(rango_fechas=rango_por_defecto(hoy, dias))


def normalizar_filtros_citas(filtros: FiltrosCitasDTO) -> FiltrosCitasDTO:
    return FiltrosCitasDTO(
        rango_fechas=normalizar_rango(filtros.rango_fechas),
        filtro_motivo=_normalizar_motivo(filtros.filtro_motivo),
        filtro_estados=_normalizar_estados(filtros.filtro_estados),
        texto_busqueda=(filtros.texto_busqueda or "").strip(),
        ordenar_por=_normalizar_enum(filtros.ordenar_por, CampoOrdenCita, CampoOrdenCita.FECHA_CONSULTA),
        orden=_normalizar_enum(filtros.orden, DireccionOrden, DireccionOrden.DESC),
        rango_horario=_normalizar_rango_horario(filtros.rango_horario),
    )


def contar_filtros_activos(filtros: FiltrosCitasDTO) -> int:
    rango = filtros.rango_fechas
    estados = len(filtros.filtro_estados)
    return (
        int(rango is not None and rango.desde is not None)
        + int(filtros.filtro_motivo != MOTIVO_TODOS)
        + int(0 < estados < len(TODOS_LOS_ESTADOS))
        + int(bool(filtros.texto_busqueda))
    )


def motivos_unicos(citas: Iterable[Cita | None]) -> list[str]:
    return distinct_sorted(cita.motivo_consulta for cita in citas if cita is not None)


def _normalizar_motivo(motivo: str | None) -> str:
    if motivo is None or motivo == "":
        return MOTIVO_TODOS
    return motivo


def _normalizar_estados(estados: Iterable[Any] | None) -> frozenset[EstadoCita]:
    if estados is None:
        return TODOS_LOS_ESTADOS
    if isinstance(estados, str):
        estados = (estados,)
    normalizados = (estado_desde_valor(valor) for valor in estados)
    return frozenset(estado for estado in normalizados if estado is not None)


def _normalizar_enum(valor: Any, tipo: type, defecto: Any) -> Any:
    if isinstance(valor, tipo):
        return valor
    try:
        return tipo(str(valor).strip())
    except ValueError:
        return defecto


def _normalizar_rango_horario(rango: Any) -> tuple[float, float]:
    try:
        inicio, fin = (float(valor) for valor in rango)
    except (TypeError, ValueError):
        return (HORA_MINIMA, HORA_MAXIMA)
    inicio = min(max(inicio, HORA_MINIMA), HORA_MAXIMA)
    fin = min(max(fin, HORA_MINIMA), HORA_MAXIMA)
    if inicio > fin:
        inicio, fin = fin, inicio
    return (inicio, fin)
