from __future__ import annotations

from datetime import date

import pytest

from clinicdash.app.application.citas.rango_fechas import RangoFechas
from clinicdash.app.application.estadisticas.distribuciones import (
    calcular_estadisticas_generales,
    calcular_grafico_estados,
    calcular_grafico_motivos,
    etiqueta_periodo,
)
from clinicdash.app.application.estadisticas.temporales import (
    calcular_asistencia_semanal,
    calcular_dispersion,
    calcular_tendencia,
    dia_semana,
)
from clinicdash.app.domain.enums import EstadoCita


def test_estadisticas_generales_porcentajes(crear_cita) -> None:
    citas = [
        crear_cita("1", estado=EstadoCita.COMPLETADA),
        crear_cita("2", estado=EstadoCita.PRESENTE),
        crear_cita("3", estado=EstadoCita.CANCELADA),
        crear_cita("4", estado=EstadoCita.PENDIENTE),
        crear_cita("5", estado=EstadoCita.NO_ASISTIO),
    ]

    stats = calcular_estadisticas_generales(citas, None)

    assert stats.total == 5
    assert stats.completadas == 1
    assert stats.presentes == 1
    assert stats.canceladas == 1
    assert stats.pendientes == 1
    assert stats.porcentaje_asistencia == pytest.approx(40.0)
    assert stats.porcentaje_cancelacion == pytest.approx(20.0)
    assert stats.porcentaje_pendientes == pytest.approx(20.0)
    assert stats.porcentaje_presentes == pytest.approx(20.0)
    assert stats.periodo == "Todos los datos"


def test_estadisticas_generales_sin_citas_son_cero() -> None:
    stats = calcular_estadisticas_generales([], RangoFechas(desde=date(2024, 1, 1), hasta=date(2024, 1, 31)))

    assert stats.total == 0
    assert stats.porcentaje_asistencia == 0
    assert stats.porcentaje_cancelacion == 0
    assert stats.porcentaje_pendientes == 0
    assert stats.porcentaje_presentes == 0
    assert stats.periodo == "01/01/2024 - 31/01/2024"


def test_etiqueta_periodo_con_extremos_abiertos() -> None:
    assert etiqueta_periodo(RangoFechas(desde=date(2024, 3, 5))) == "05/03/2024 - Actual"
    assert etiqueta_periodo(RangoFechas(hasta=date(2024, 3, 5))) == "Inicio - 05/03/2024"
    assert etiqueta_periodo(None) == "Todos los datos"


def test_grafico_estados_seis_categorias_en_orden_y_suma_total(crear_cita) -> None:
    citas = [
        crear_cita("1", estado=EstadoCita.REPROGRAMADA),
        crear_cita("2", estado=EstadoCita.REPROGRAMADA),
        crear_cita("3", estado=EstadoCita.NO_ASISTIO),
        crear_cita("4", estado=EstadoCita.COMPLETADA),
    ]

    grafico = calcular_grafico_estados(citas)

    assert [dato.estado for dato in grafico] == list(EstadoCita)
    assert [dato.etiqueta for dato in grafico] == [
        "Completadas",
        "Canceladas",
        "Pendientes",
        "Presentes",
        "Reprogramadas",
        "No Asistieron",
    ]
    assert [dato.color for dato in grafico] == [
        "#10b981",
        "#ef4444",
        "#f59e0b",
        "#3b82f6",
        "#8b5cf6",
        "#6b7280",
    ]
    assert [dato.valor for dato in grafico] == [1, 0, 0, 0, 2, 1]
    assert sum(dato.valor for dato in grafico) == len(citas)


def test_grafico_motivos_por_frecuencia_con_empates_estables(crear_cita) -> None:
    citas = [
        crear_cita("1", motivo="Revisión"),
        crear_cita("2", motivo=""),
        crear_cita("3", motivo="Control"),
        crear_cita("4", motivo="Control"),
        crear_cita("5", motivo="Urgencia"),
    ]

    grafico = calcular_grafico_motivos(citas)

    assert [(dato.motivo, dato.cantidad) for dato in grafico] == [
        ("Control", 2),
        ("Revisión", 1),
        ("Desconocido", 1),
        ("Urgencia", 1),
    ]


def test_tendencia_rellena_dias_sin_datos(crear_cita) -> None:
    citas = [
        crear_cita("1", fecha=date(2024, 1, 1), estado=EstadoCita.COMPLETADA),
        crear_cita("2", fecha=date(2024, 1, 1), estado=EstadoCita.CANCELADA),
    ]

    tendencia = calcular_tendencia(citas, RangoFechas(desde=date(2024, 1, 1), hasta=date(2024, 1, 3)))

    assert [dato.fecha for dato in tendencia] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert [dato.fecha_formateada for dato in tendencia] == ["01/01", "02/01", "03/01"]
    assert tendencia[0].total == 2
    assert tendencia[0].completada == 1
    assert tendencia[0].cancelada == 1
    assert tendencia[1].total == 0
    assert tendencia[2].to_dict() == {
        "fecha": "2024-01-03",
        "fecha_formateada": "03/01",
        "total": 0,
        "completada": 0,
        "cancelada": 0,
        "pendiente": 0,
        "presente": 0,
        "reprogramada": 0,
        "no_asistio": 0,
    }


def test_tendencia_rango_completo_sin_citas_emite_un_dato_por_dia() -> None:
    rango = RangoFechas(desde=date(2024, 2, 20), hasta=date(2024, 3, 1))

    tendencia = calcular_tendencia([], rango)

    fechas = [dato.fecha for dato in tendencia]
    assert len(tendencia) == (rango.hasta - rango.desde).days + 1
    assert fechas == sorted(set(fechas))
    assert all(dato.total == 0 for dato in tendencia)


def test_tendencia_con_un_solo_extremo_emite_solo_dias_observados(crear_cita) -> None:
    citas = [
        crear_cita("1", fecha=date(2024, 1, 9)),
        crear_cita("2", fecha=date(2024, 1, 3), estado=EstadoCita.PENDIENTE),
        crear_cita("3", fecha=date(2024, 1, 9)),
    ]

    solo_desde = calcular_tendencia(citas, RangoFechas(desde=date(2024, 1, 1)))
    sin_rango = calcular_tendencia(citas, None)

    assert [dato.fecha for dato in solo_desde] == ["2024-01-03", "2024-01-09"]
    assert solo_desde == sin_rango
    assert solo_desde[0].conteo(EstadoCita.PENDIENTE) == 1
    assert solo_desde[1].completada == 2


def test_asistencia_semanal_siete_dias_de_domingo_a_sabado(crear_cita) -> None:
    citas = [
        crear_cita("lunes_ok", fecha=date(2024, 1, 1), estado=EstadoCita.COMPLETADA),
        crear_cita("lunes_presente", fecha=date(2024, 1, 8), estado=EstadoCita.PRESENTE),
        crear_cita("lunes_cancelada", fecha=date(2024, 1, 15), estado=EstadoCita.CANCELADA),
        crear_cita("lunes_falta", fecha=date(2024, 1, 22), estado=EstadoCita.NO_ASISTIO),
        crear_cita("domingo", fecha=date(2024, 1, 7), estado=EstadoCita.PENDIENTE),
    ]

    semana = calcular_asistencia_semanal(citas)

    assert [dato.dia for dato in semana] == list(range(7))
    assert [dato.nombre for dato in semana] == [
        "Domingo",
        "Lunes",
        "Martes",
        "Miércoles",
        "Jueves",
        "Viernes",
        "Sábado",
    ]
    assert (semana[1].total, semana[1].asistidas, semana[1].tasa) == (4, 2, 50.0)
    assert (semana[0].total, semana[0].asistidas, semana[0].tasa) == (1, 0, 0.0)
    assert all(dato.tasa == 0 for dato in semana[2:])


def test_dispersion_agrupa_por_dia_y_hora_observados(crear_cita) -> None:
    citas = [
        crear_cita("1", fecha=date(2024, 1, 1), hora="09:15"),
        crear_cita("2", fecha=date(2024, 1, 8), hora="09:45"),
        crear_cita("3", fecha=date(2024, 1, 1), hora="11:00"),
        crear_cita("4", fecha=date(2024, 1, 6), hora="09:00", estado=EstadoCita.CANCELADA),
    ]

    dispersion = calcular_dispersion(citas)

    assert set(dispersion) == set(EstadoCita)
    completadas = [(p.dia, p.hora, p.cantidad, p.nombre_dia) for p in dispersion[EstadoCita.COMPLETADA]]
    assert completadas == [(1, 9, 2, "Lunes"), (1, 11, 1, "Lunes")]
    assert [(p.dia, p.hora, p.cantidad) for p in dispersion[EstadoCita.CANCELADA]] == [(6, 9, 1)]
    assert dispersion[EstadoCita.PENDIENTE] == []


def test_dia_semana_domingo_es_cero() -> None:
    assert dia_semana(date(2024, 1, 7)) == 0
    assert dia_semana(date(2024, 1, 1)) == 1
    assert dia_semana(date(2024, 1, 6)) == 6
