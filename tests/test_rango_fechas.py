from __future__ import annotations

from datetime import date, datetime

from clinicdash.app.application.citas.rango_fechas import (
    RangoFechas,
    RangoResuelto,
    contiene,
    dias_del_rango,
    rango_por_defecto,
    resolver_rango,
)


def test_resolver_rango_sin_rango_es_no_acotado() -> None:
    resuelto = resolver_rango(None)

    assert resuelto == RangoResuelto()
    assert resuelto.acotado is False


def test_resolver_rango_lleva_extremos_a_inicio_y_fin_de_dia() -> None:
    resuelto = resolver_rango(RangoFechas(desde=date(2024, 1, 1), hasta=date(2024, 1, 3)))

    assert resuelto.inicio == datetime(2024, 1, 1, 0, 0)
    assert resuelto.fin == datetime(2024, 1, 3, 23, 59, 59, 999000)


def test_resolver_rango_reduce_datetimes_a_fecha() -> None:
    resuelto = resolver_rango(
        RangoFechas(desde=datetime(2024, 2, 1, 15, 30), hasta=datetime(2024, 2, 10, 8, 0))
    )

    assert resuelto.inicio == datetime(2024, 2, 1, 0, 0)
    assert resuelto.fin == datetime(2024, 2, 10, 23, 59, 59, 999000)


def test_rango_invertido_se_conserva_y_no_contiene_ningun_dia() -> None:
    rango = RangoFechas(desde=date(2024, 2, 10), hasta=date(2024, 2, 1))

    resuelto = resolver_rango(rango)

    assert resuelto.inicio == datetime(2024, 2, 10, 0, 0)
    assert resuelto.fin == datetime(2024, 2, 1, 23, 59, 59, 999000)
    assert not contiene(resuelto, datetime(2024, 2, 5, 12, 0))
    assert not contiene(resuelto, datetime(2024, 2, 10, 9, 0))
    assert list(dias_del_rango(rango)) == []


def test_resolver_rango_con_un_solo_extremo() -> None:
    solo_desde = resolver_rango(RangoFechas(desde=date(2024, 1, 5)))
    solo_hasta = resolver_rango(RangoFechas(hasta=date(2024, 1, 5)))

    assert solo_desde.inicio == datetime(2024, 1, 5, 0, 0)
    assert solo_desde.fin is None
    assert solo_hasta.inicio is None
    assert solo_hasta.fin == datetime(2024, 1, 5, 23, 59, 59, 999000)


def test_contiene_incluye_el_mismo_dia_en_ambos_extremos() -> None:
    solo_desde = resolver_rango(RangoFechas(desde=date(2024, 1, 5)))
    solo_hasta = resolver_rango(RangoFechas(hasta=date(2024, 1, 5)))

    assert contiene(solo_desde, datetime(2024, 1, 5, 0, 0))
    assert not contiene(solo_desde, datetime(2024, 1, 4, 23, 59))
    assert contiene(solo_hasta, datetime(2024, 1, 5, 23, 59))
    assert not contiene(solo_hasta, datetime(2024, 1, 6, 0, 0))


def test_rango_por_defecto_cubre_los_ultimos_treinta_dias() -> None:
    rango = rango_por_defecto(date(2024, 3, 31))

    assert rango == RangoFechas(desde=date(2024, 3, 1), hasta=date(2024, 3, 31))
    assert rango_por_defecto(datetime(2024, 3, 31, 18, 0), dias=7).desde == date(2024, 3, 24)


def test_dias_del_rango_itera_inclusivo_y_requiere_ambos_extremos() -> None:
    dias = list(dias_del_rango(RangoFechas(desde=date(2024, 2, 27), hasta=date(2024, 3, 1))))

    assert dias == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
    assert list(dias_del_rango(RangoFechas(desde=date(2024, 2, 27)))) == []
