from __future__ import annotations

from datetime import date, datetime

import pytest

from clinicdash.app.domain.citas import Cita, cita_desde_mapping, citas_desde_registros
from clinicdash.app.domain.enums import EstadoCita, estado_desde_valor
from clinicdash.app.domain.exceptions import ValidationError


def test_cita_desde_mapping_acepta_claves_camel_case() -> None:
    cita = cita_desde_mapping(
        {
            "id": 7,
            "nombre": "Luis",
            "apellidos": "Pardo",
            "fechaConsulta": "2024-04-02",
            "horaConsulta": "12:45",
            "motivoConsulta": "Revisión",
            "estado": "reprogramada",
            "notas": None,
            "costoConsulta": "850.5",
            "seguroMedico": "  ",
            "telefono": "555 123 4567",
        }
    )

    assert cita == Cita(
        id="7",
        nombre="Luis",
        apellidos="Pardo",
        fecha_consulta=date(2024, 4, 2),
        hora_consulta="12:45",
        motivo_consulta="Revisión",
        estado=EstadoCita.REPROGRAMADA,
        notas="",
        costo_consulta=850.5,
        seguro_medico=None,
        telefono="555 123 4567",
    )


def test_cita_desde_mapping_conserva_fecha_ilegible_y_estado_desconocido() -> None:
    cita = cita_desde_mapping(
        {"id": "x", "fecha_consulta": "31/12/2024", "hora_consulta": "09:00", "estado": "archivada"}
    )

    assert cita.fecha_consulta == "31/12/2024"
    assert cita.estado == "archivada"


def test_cita_desde_mapping_reduce_datetime_a_fecha() -> None:
    cita = cita_desde_mapping({"id": "x", "fechaConsulta": datetime(2024, 4, 2, 10, 0)})

    assert cita.fecha_consulta == date(2024, 4, 2)


def test_cita_desde_mapping_exige_id() -> None:
    with pytest.raises(ValidationError):
        cita_desde_mapping({"nombre": "Sin id"})
    with pytest.raises(ValidationError):
        citas_desde_registros([{"id": "ok"}, "no-es-mapping"])


def test_cita_to_dict_y_nombre_completo() -> None:
    cita = Cita(id="1", nombre="Eva", apellidos="", fecha_consulta=date(2024, 1, 1), estado=EstadoCita.PRESENTE)

    data = cita.to_dict()

    assert cita.nombre_completo == "Eva"
    assert data["fecha_consulta"] == "2024-01-01"
    assert data["estado"] == "presente"


def test_estado_desde_valor() -> None:
    assert estado_desde_valor(" cancelada ") is EstadoCita.CANCELADA
    assert estado_desde_valor(EstadoCita.PENDIENTE) is EstadoCita.PENDIENTE
    assert estado_desde_valor("CANCELADA") is None
    assert estado_desde_valor(None) is None
