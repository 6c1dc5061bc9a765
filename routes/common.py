"""
Conversión de errores de la capa de servicio a respuestas HTTP.

    INVALID_ARGUMENT -> 400
    NOT_FOUND        -> 404
    CONFLICT         -> 409
    UNKNOWN          -> 500 (mensaje genérico, sin SQL ni trazas)
"""

from fastapi import HTTPException, status
import logging

from core.exceptions import AppException, ErrorKind, error_kind_of

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}


def handle_service_exception(e: Exception) -> HTTPException:
    """Convert service layer exceptions to HTTP exceptions."""
    kind = error_kind_of(e)
    if kind in _STATUS_BY_KIND:
        return HTTPException(status_code=_STATUS_BY_KIND[kind], detail=e.message)
    elif isinstance(e, AppException):
        return HTTPException(status_code=e.status_code, detail=e.message)
    else:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error interno del servidor"
        )
