from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Sequence

from clinicdash.app.application.citas.diagnosticos import ReceptorDiagnosticos
from clinicdash.app.application.citas.filtros import FiltrosCitasDTO, filtros_por_defecto, normalizar_filtros_citas
from clinicdash.app.application.citas.motor_filtrado import filtrar_citas
from clinicdash.app.application.citas.rango_fechas import RangoFechas
from clinicdash.app.application.estadisticas.distribuciones import (
    calcular_estadisticas_generales,
    calcular_grafico_estados,
    calcular_grafico_motivos,
)
from clinicdash.app.application.estadisticas.dtos import (
    DatoGraficoEstado,
    DatoGraficoMotivo,
    DatoSemana,
    DatosDispersion,
    DatoTendencia,
    EstadisticasGenerales,
)
from clinicdash.app.application.estadisticas.temporales import (
    calcular_asistencia_semanal,
    calcular_dispersion,
    calcular_tendencia,
)
from clinicdash.app.bootstrap_logging import contexto_recalculo, get_logger, registrar_error_recuperado
from clinicdash.app.config import ConfiguracionPanel, cargar_configuracion
from clinicdash.app.domain.citas import Cita
from clinicdash.app.domain.exceptions import ColeccionCitasInvalidaError

LOGGER = get_logger(__name__)

MENSAJE_DATOS_NO_DISPONIBLES = "Los datos de citas no están disponibles o tienen un formato incorrecto."
MENSAJE_ERROR_PROCESADO = "Error al procesar los datos. Por favor, actualice la página o verifique los filtros."


@dataclass(frozen=True, slots=True)
class ResultadoPanelCitas:
    filtradas: tuple[Cita, ...]
    estadisticas: EstadisticasGenerales
    grafico_estados: tuple[DatoGraficoEstado, ...]
    grafico_motivos: tuple[DatoGraficoMotivo, ...]
    grafico_tendencia: tuple[DatoTendencia, ...]
    grafico_semanal: tuple[DatoSemana, ...]
    dispersion: DatosDispersion = field(default_factory=dict)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class PaginacionCitasDTO:
    limit: int
    offset: int


@dataclass(frozen=True, slots=True)
class ResultadoPaginaCitasDTO:
    items: tuple[Cita, ...]
    total: int


def aplicar_filtros(
    citas: Any,
    filtros: FiltrosCitasDTO,
    diagnosticos_receptor: ReceptorDiagnosticos | None = None,
) -> ResultadoPanelCitas:
    """Filtra, ordena y agrega las citas. Nunca lanza: los fallos quedan en ``error``."""
    try:
        coleccion = _validar_coleccion(citas)
        filtros_norm = normalizar_filtros_citas(filtros)
        filtradas = filtrar_citas(coleccion, filtros_norm, diagnosticos_receptor)
        return _construir_resultado(filtradas, filtros_norm)
    except ColeccionCitasInvalidaError:
        LOGGER.warning("citas_coleccion_invalida tipo=%s", type(citas).__name__)
        return resultado_vacio(filtros, MENSAJE_DATOS_NO_DISPONIBLES)
    except Exception as exc:
        registrar_error_recuperado(LOGGER, exc, "aplicar_filtros", tipo_coleccion=type(citas).__name__)
        return resultado_vacio(filtros, MENSAJE_ERROR_PROCESADO)


def resultado_vacio(filtros: FiltrosCitasDTO | None, error: str | None = None) -> ResultadoPanelCitas:
    rango = filtros.rango_fechas if isinstance(filtros, FiltrosCitasDTO) else None
    if not isinstance(rango, RangoFechas):
        rango = None
    try:
        estadisticas = calcular_estadisticas_generales((), rango)
        tendencia = tuple(calcular_tendencia((), rango))
    except (AttributeError, TypeError, ValueError):
        estadisticas = calcular_estadisticas_generales((), None)
        tendencia = ()
    return ResultadoPanelCitas(
        filtradas=(),
        estadisticas=estadisticas,
        grafico_estados=tuple(calcular_grafico_estados(())),
        grafico_motivos=(),
        grafico_tendencia=tendencia,
        grafico_semanal=tuple(calcular_asistencia_semanal(())),
        dispersion=calcular_dispersion(()),
        error=error,
    )


def paginar_citas(citas: Sequence[Cita], paginacion: PaginacionCitasDTO) -> ResultadoPaginaCitasDTO:
    limit = max(paginacion.limit, 0)
    offset = max(paginacion.offset, 0)
    return ResultadoPaginaCitasDTO(items=tuple(citas[offset : offset + limit]), total=len(citas))


@dataclass(frozen=True, slots=True)
class ProcesarPanelCitas:
    reloj: Callable[[], date] = date.today
    configuracion: ConfiguracionPanel = field(default_factory=cargar_configuracion)

    def ejecutar(
        self,
        citas: Any,
        filtros: FiltrosCitasDTO | None = None,
        diagnosticos_receptor: ReceptorDiagnosticos | None = None,
    ) -> ResultadoPanelCitas:
        if filtros is None:
            filtros = self.filtros_iniciales()
        with contexto_recalculo(uuid.uuid4().hex[:8]):
            resultado = aplicar_filtros(citas, filtros, diagnosticos_receptor)
            LOGGER.info(
                "panel_recalculado filtradas=%s ok=%s",
                len(resultado.filtradas),
                resultado.ok,
            )
        return resultado

    def filtros_iniciales(self) -> FiltrosCitasDTO:
        return filtros_por_defecto(self.reloj(), self.configuracion.dias_rango_defecto)

    def primera_pagina(self, resultado: ResultadoPanelCitas) -> ResultadoPaginaCitasDTO:
        return paginar_citas(resultado.filtradas, PaginacionCitasDTO(limit=self.configuracion.tamano_pagina, offset=0))


def _validar_coleccion(citas: Any) -> Sequence[Any]:
    if not isinstance(citas, (list, tuple)):
        raise ColeccionCitasInvalidaError(f"Se esperaba una lista de citas, se recibió {type(citas).__name__}.")
    return citas


def _construir_resultado(filtradas: list[Cita], filtros: FiltrosCitasDTO) -> ResultadoPanelCitas:
    rango = filtros.rango_fechas
    return ResultadoPanelCitas(
        filtradas=tuple(filtradas),
        estadisticas=calcular_estadisticas_generales(filtradas, rango),
        grafico_estados=tuple(calcular_grafico_estados(filtradas)),
        grafico_motivos=tuple(calcular_grafico_motivos(filtradas)),
        grafico_tendencia=tuple(calcular_tendencia(filtradas, rango)),
        grafico_semanal=tuple(calcular_asistencia_semanal(filtradas)),
        dispersion=calcular_dispersion(filtradas),
    )
