"""
Excepciones personalizadas para la aplicación.

Estas excepciones proporcionan una forma estructurada de manejar errores de lógica de negocio
y mapearlos a códigos de estado HTTP apropiados en la capa de API.

Taxonomía estable expuesta a la capa HTTP:
- INVALID_ARGUMENT: entrada ausente o mal formada (id <= 0, DTO nulo, texto vacío)
- NOT_FOUND: el id referenciado no existe
- CONFLICT: violación de unicidad
- UNKNOWN: fallo de almacenamiento/conectividad o cualquier error no previsto
"""

from enum import Enum
from typing import Optional, Any


class ErrorKind(str, Enum):
    """Tipo estable de error entregado a quien llama a la capa de negocio."""
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNKNOWN = "unknown"


class AppException(Exception):
    """Excepción base para todos los errores de la aplicación."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentException(AppException):
    """Excepción para argumentos inválidos o ausentes."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if field:
            details = details or {}
            details["field"] = field
        super().__init__(
            message=message,
            kind=ErrorKind.INVALID_ARGUMENT,
            status_code=400,
            details=details,
        )


class NotFoundException(AppException):
    """Excepción cuando un recurso no se encuentra."""

    def __init__(
        self,
        resource: str,
        identifier: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"{resource} no encontrado"
        if identifier is not None:
            message += f": {identifier}"
        super().__init__(
            message=message,
            kind=ErrorKind.NOT_FOUND,
            status_code=404,
            details=details,
        )


class ConflictException(AppException):
    """Excepción cuando se intenta crear o actualizar un recurso duplicado."""

    def __init__(
        self,
        resource: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"{resource} duplicado (ya existe)"
        if field and value:
            message += f": {field}='{value}'"
        super().__init__(
            message=message,
            kind=ErrorKind.CONFLICT,
            status_code=409,
            details=details,
        )


def error_kind_of(exc: BaseException) -> ErrorKind:
    """
    Clasifica cualquier excepción dentro de la taxonomía de la aplicación.

    Args:
        exc: Excepción a clasificar

    Returns:
        El ErrorKind de la excepción; UNKNOWN si no es una AppException
    """
    if isinstance(exc, AppException):
        return exc.kind
    return ErrorKind.UNKNOWN
