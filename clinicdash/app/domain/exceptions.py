# domain/exceptions.py
"""
Excepciones del dominio.

Propósito:
- Distinguir errores de reglas de negocio (dominio) de errores técnicos.
- Permitir que la capa de aplicación traduzca errores a mensajes para el usuario.
"""


class DomainError(Exception):
    """Error base del dominio."""


class ValidationError(DomainError):
    """Registro en estado inválido o violación de invariantes."""


class BusinessRuleError(DomainError):
    """Violación de regla de negocio (p. ej., exportar un listado vacío)."""


class ColeccionCitasInvalidaError(ValidationError):
    """La colección de citas recibida no es una lista de registros."""


class ExportacionVaciaError(BusinessRuleError):
    """No hay citas filtradas que exportar."""
