from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator

DIAS_RANGO_DEFECTO = 30

_INICIO_DIA = time.min
_FIN_DIA = time(23, 59, 59, 999000)


@dataclass(frozen=True, slots=True)
class RangoFechas:
    desde: date | None = None
    hasta: date | None = None

    @property
    def completo(self) -> bool:
        return self.desde is not None and self.hasta is not None


@dataclass(frozen=True, slots=True)
class RangoResuelto:
    inicio: datetime | None = None
    fin: datetime | None = None

    @property
    def acotado(self) -> bool:
        return self.inicio is not None or self.fin is not None


def rango_por_defecto(hoy: date, dias: int = DIAS_RANGO_DEFECTO) -> RangoFechas:
    hoy = _solo_fecha(hoy)
    return RangoFechas(desde=hoy - timedelta(days=dias), hasta=hoy)


def normalizar_rango(rango: RangoFechas | None) -> RangoFechas | None:
    """Reduce los extremos a fechas. Un rango invertido se conserva y no contiene ningún día."""
    if rango is None:
        return None
    desde = _solo_fecha(rango.desde) if rango.desde is not None else None
    hasta = _solo_fecha(rango.hasta) if rango.hasta is not None else None
    return RangoFechas(desde=desde, hasta=hasta)


def resolver_rango(rango: RangoFechas | None) -> RangoResuelto:
    normalizado = normalizar_rango(rango)
    if normalizado is None:
        return RangoResuelto()
    inicio = datetime.combine(normalizado.desde, _INICIO_DIA) if normalizado.desde is not None else None
    fin = datetime.combine(normalizado.hasta, _FIN_DIA) if normalizado.hasta is not None else None
    return RangoResuelto(inicio=inicio, fin=fin)


def contiene(rango: RangoResuelto, instante: datetime) -> bool:
    if rango.inicio is not None and instante < rango.inicio:
        return False
    if rango.fin is not None and instante > rango.fin:
        return False
    return True


def dias_del_rango(rango: RangoFechas) -> Iterator[date]:
    normalizado = normalizar_rango(rango)
    if normalizado is None or not normalizado.completo:
        return
    actual = normalizado.desde
    while actual <= normalizado.hasta:
        yield actual
        actual += timedelta(days=1)


def _solo_fecha(valor: date) -> date:
    if isinstance(valor, datetime):
        return valor.date()
    return valor
