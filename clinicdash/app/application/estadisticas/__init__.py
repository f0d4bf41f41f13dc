from clinicdash.app.application.estadisticas.distribuciones import (
    calcular_estadisticas_generales,
    calcular_grafico_estados,
    calcular_grafico_motivos,
    etiqueta_periodo,
)
from clinicdash.app.application.estadisticas.dtos import (
    DatoGraficoEstado,
    DatoGraficoMotivo,
    DatoSemana,
    DatosDispersion,
    DatoTendencia,
    EstadisticasGenerales,
    PuntoDispersion,
)
from clinicdash.app.application.estadisticas.temporales import (
    calcular_asistencia_semanal,
    calcular_dispersion,
    calcular_tendencia,
)

__all__ = [
    "DatoGraficoEstado",
    "DatoGraficoMotivo",
    "DatoSemana",
    "DatoTendencia",
    "DatosDispersion",
    "EstadisticasGenerales",
    "PuntoDispersion",
    "calcular_asistencia_semanal",
    "calcular_dispersion",
    "calcular_estadisticas_generales",
    "calcular_grafico_estados",
    "calcular_grafico_motivos",
    "calcular_tendencia",
    "etiqueta_periodo",
]
