"""Canal de diagnósticos para registros de cita mal formados."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from clinicdash.app.bootstrap_logging import get_logger

LOGGER = get_logger(__name__)

REGISTRO_NO_CITA = "registro_no_cita"
HORA_INVALIDA = "hora_invalida"
FECHA_INVALIDA = "fecha_invalida"
HORA_DECIMAL_INVALIDA = "hora_decimal_invalida"


@dataclass(frozen=True, slots=True)
class Diagnostico:
    codigo: str
    cita_id: str | None
    detalle: str = ""


class ReceptorDiagnosticos(Protocol):
    def registrar(self, diagnostico: Diagnostico) -> None: ...


@dataclass(slots=True)
class RecolectorDiagnosticos:
    """Acumula diagnósticos en memoria para que el llamador los muestre o inspeccione."""

    items: list[Diagnostico] = field(default_factory=list)

    def registrar(self, diagnostico: Diagnostico) -> None:
        self.items.append(diagnostico)

    def codigos(self) -> tuple[str, ...]:
        return tuple(item.codigo for item in self.items)

    def __len__(self) -> int:
        return len(self.items)


def emitir(
    receptor: ReceptorDiagnosticos | None,
    codigo: str,
    cita_id: str | None,
    detalle: str = "",
) -> None:
    # Solo se registra el id de la cita: nunca datos del paciente.
    LOGGER.warning("cita_diagnostico codigo=%s cita_id=%s", codigo, cita_id or "-")
    if receptor is not None:
        receptor.registrar(Diagnostico(codigo=codigo, cita_id=cita_id, detalle=detalle))
