from clinicdash.app.application.citas.diagnosticos import Diagnostico, RecolectorDiagnosticos
from clinicdash.app.application.citas.filtros import (
    FiltrosCitasDTO,
    contar_filtros_activos,
    filtros_por_defecto,
    motivos_unicos,
    normalizar_filtros_citas,
)
from clinicdash.app.application.citas.motor_filtrado import filtrar_citas, hora_a_decimal, ordenar_citas
from clinicdash.app.application.citas.rango_fechas import RangoFechas, rango_por_defecto, resolver_rango

__all__ = [
    "Diagnostico",
    "FiltrosCitasDTO",
    "RangoFechas",
    "RecolectorDiagnosticos",
    "contar_filtros_activos",
    "filtrar_citas",
    "filtros_por_defecto",
    "hora_a_decimal",
    "motivos_unicos",
    "normalizar_filtros_citas",
    "ordenar_citas",
    "rango_por_defecto",
    "resolver_rango",
]
