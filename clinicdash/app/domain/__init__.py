from clinicdash.app.domain.citas import Cita, cita_desde_mapping, citas_desde_registros
from clinicdash.app.domain.enums import *  # noqa: F401,F403
from clinicdash.app.domain.exceptions import *  # noqa: F401,F403

__all__ = [
    "Cita",
    "cita_desde_mapping",
    "citas_desde_registros",
]
