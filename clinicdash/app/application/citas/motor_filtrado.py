"""
Motor de filtrado y ordenación de citas.

Aplica, en orden fijo, los predicados del panel (validez del registro, hora,
rango de fechas, motivo, estado, franja horaria y búsqueda libre) y después una
ordenación estable por varias claves. Nunca muta la colección recibida: un
registro mal formado como mucho queda excluido y se notifica como diagnóstico.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime
from functools import cmp_to_key
from typing import Callable, Iterable, Sequence

from clinicdash.app.application.citas.diagnosticos import (
    FECHA_INVALIDA,
    HORA_DECIMAL_INVALIDA,
    HORA_INVALIDA,
    REGISTRO_NO_CITA,
    ReceptorDiagnosticos,
    emitir,
)
from clinicdash.app.application.citas.filtros import MOTIVO_TODOS, FiltrosCitasDTO, normalizar_filtros_citas
from clinicdash.app.application.citas.rango_fechas import RangoResuelto, contiene, resolver_rango
from clinicdash.app.common.search_utils import matches_any
from clinicdash.app.domain.citas import Cita
from clinicdash.app.domain.enums import DireccionOrden, estado_desde_valor

_HORA_RE = re.compile(r"^\d{2}:\d{2}$")
_HORA_DECIMAL_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_HORA_SIN_VALOR = "25:00"

Comparador = Callable[[Cita, Cita], int]


def filtrar_citas(
    citas: Iterable[Cita | None],
    filtros: FiltrosCitasDTO,
    diagnosticos_receptor: ReceptorDiagnosticos | None = None,
) -> list[Cita]:
    """Devuelve una lista nueva con las citas que superan todos los filtros, ya ordenada."""
    filtros_norm = normalizar_filtros_citas(filtros)
    rango = resolver_rango(filtros_norm.rango_fechas)
    seleccionadas: list[Cita] = []
    for cita in citas:
        instante = _instante_valido(cita, diagnosticos_receptor)
        if instante is None:
            continue
        if _cumple_filtros(cita, instante, filtros_norm, rango, diagnosticos_receptor):
            seleccionadas.append(cita)
    return ordenar_citas(seleccionadas, filtros_norm.orden)


def ordenar_citas(citas: Sequence[Cita], orden: DireccionOrden = DireccionOrden.ASC) -> list[Cita]:
    comparador = _comparar_citas
    if orden is DireccionOrden.DESC:
        comparador = _invertir(_comparar_citas)
    return sorted(citas, key=cmp_to_key(comparador))


def hora_a_decimal(
    hora: str | None,
    diagnosticos_receptor: ReceptorDiagnosticos | None = None,
    cita_id: str | None = None,
) -> float:
    """Convierte ``HH:MM`` a horas decimales; un valor mal formado vale 0."""
    match = _HORA_DECIMAL_RE.match(hora) if isinstance(hora, str) else None
    if match is None:
        emitir(diagnosticos_receptor, HORA_DECIMAL_INVALIDA, cita_id, str(hora))
        return 0.0
    horas = int(match.group(1))
    minutos = int(match.group(2))
    if horas > 23 or minutos > 59:
        emitir(diagnosticos_receptor, HORA_DECIMAL_INVALIDA, cita_id, hora)
        return 0.0
    return horas + minutos / 60


def instante_cita(cita: Cita) -> datetime | None:
    """Fecha y hora combinadas de la cita, o ``None`` si alguna parte no es válida."""
    hora = cita.hora_consulta
    if not isinstance(hora, str) or not _HORA_RE.match(hora):
        return None
    fecha = fecha_iso(cita.fecha_consulta)
    if fecha is None:
        return None
    try:
        return datetime.fromisoformat(f"{fecha}T{hora}:00")
    except ValueError:
        return None


def fecha_iso(valor: date | str | None) -> str | None:
    if isinstance(valor, datetime):
        return valor.date().isoformat()
    if isinstance(valor, date):
        return valor.isoformat()
    if isinstance(valor, str) and valor.strip():
        return valor.strip()[:10]
    return None


def _instante_valido(cita: object, receptor: ReceptorDiagnosticos | None) -> datetime | None:
    if cita is None:
        return None
    if not isinstance(cita, Cita):
        emitir(receptor, REGISTRO_NO_CITA, None, type(cita).__name__)
        return None
    if not isinstance(cita.hora_consulta, str) or not _HORA_RE.match(cita.hora_consulta):
        emitir(receptor, HORA_INVALIDA, cita.id, str(cita.hora_consulta))
        return None
    instante = instante_cita(cita)
    if instante is None:
        detalle = f"{fecha_iso(cita.fecha_consulta)}T{cita.hora_consulta}:00"
        emitir(receptor, FECHA_INVALIDA, cita.id, detalle)
    return instante


def _cumple_filtros(
    cita: Cita,
    instante: datetime,
    filtros: FiltrosCitasDTO,
    rango: RangoResuelto,
    receptor: ReceptorDiagnosticos | None,
) -> bool:
    if rango.acotado and not contiene(rango, instante):
        return False
    if filtros.filtro_motivo != MOTIVO_TODOS and (cita.motivo_consulta or "") != filtros.filtro_motivo:
        return False
    if estado_desde_valor(cita.estado) not in filtros.filtro_estados:
        return False
    hora = hora_a_decimal(cita.hora_consulta, receptor, cita.id)
    desde_hora, hasta_hora = filtros.rango_horario
    if not desde_hora <= hora <= hasta_hora:
        return False
    return matches_any(filtros.texto_busqueda, cita.nombre, cita.apellidos, cita.motivo_consulta, cita.notas)


def _comparar_citas(a: Cita, b: Cita) -> int:
    resultado = _cmp(a.hora_consulta or _HORA_SIN_VALOR, b.hora_consulta or _HORA_SIN_VALOR)
    if resultado != 0:
        return resultado
    resultado = _cmp_locale(a.motivo_consulta or "", b.motivo_consulta or "")
    if resultado != 0:
        return resultado
    resultado = _cmp_locale(a.nombre_completo, b.nombre_completo)
    if resultado != 0:
        return resultado
    return _cmp_instantes(instante_cita(a), instante_cita(b))


def _cmp_instantes(a: datetime | None, b: datetime | None) -> int:
    if a is not None and b is not None:
        return _cmp(a, b)
    if a is not None:
        return -1
    if b is not None:
        return 1
    return 0


def _cmp_locale(a: str, b: str) -> int:
    return _cmp(_clave_locale(a), _clave_locale(b))


def _clave_locale(texto: str) -> tuple[str, str]:
    # Primero sin acentos ni mayúsculas; el texto original desempata.
    base = unicodedata.normalize("NFKD", texto)
    sin_acentos = "".join(caracter for caracter in base if not unicodedata.combining(caracter))
    return (sin_acentos.casefold(), texto)


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)


def _invertir(comparador: Comparador) -> Comparador:
    def _comparar(a: Cita, b: Cita) -> int:
        return -comparador(a, b)

    return _comparar

