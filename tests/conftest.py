from __future__ import annotations

from datetime import date
from typing import Callable

import pytest

from clinicdash.app.domain.citas import Cita
from clinicdash.app.domain.enums import EstadoCita


@pytest.fixture()
def crear_cita() -> Callable[..., Cita]:
    def _crear(
        cita_id: str = "c1",
        *,
        fecha: date | str | None = date(2024, 1, 10),
        hora: str = "09:00",
        estado: EstadoCita | str = EstadoCita.COMPLETADA,
        motivo: str = "Control",
        nombre: str = "Ana",
        apellidos: str = "García",
        notas: str = "",
    ) -> Cita:
        return Cita(
            id=cita_id,
            nombre=nombre,
            apellidos=apellidos,
            fecha_consulta=fecha,
            hora_consulta=hora,
            motivo_consulta=motivo,
            estado=estado,
            notas=notas,
        )

    return _crear
