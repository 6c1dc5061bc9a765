""" Utilidades principales y componentes compartidos para la aplicación.

Este paquete contiene:

- Excepciones personalizadas y taxonomía de errores
- Funciones auxiliares de paginación
"""

from .exceptions import (
    ErrorKind,
    AppException,
    InvalidArgumentException,
    NotFoundException,
    ConflictException,
    error_kind_of,
)
from .pagination import (
    PaginationMeta,
    normalize_page_params,
    calculate_skip,
    calculate_pagination_meta,
    create_paginated_response,
)

__all__ = [
    # Excepciones
    "ErrorKind",
    "AppException",
    "InvalidArgumentException",
    "NotFoundException",
    "ConflictException",
    "error_kind_of",
    # paginacion
    "PaginationMeta",
    "normalize_page_params",
    "calculate_skip",
    "calculate_pagination_meta",
    "create_paginated_response",
]
