"""
Modelos comunes de respuesta para la API.

Estos modelos proporcionan respuestas consistentes y estandarizadas
para todos los endpoints de la API
"""
from typing import Optional, Any
from pydantic import BaseModel, Field
from datetime import datetime, timezone


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SuccessResponse(BaseModel):
    """Respuesta estándar exitosa."""
    success: bool = Field(True, description="Indica si la operación fue exitosa")
    message: str = Field(..., description="Mensaje descriptivo de la operación")
    data: Optional[Any] = Field(None, description="Datos de respuesta")
    timestamp: datetime = Field(default_factory=_utc_now, description="Timestamp de la respuesta")


class DeleteResponse(BaseModel):
    """Respuesta estándar para operaciones de eliminación física."""
    success: bool = Field(True, description="Indica si la eliminación fue exitosa")
    message: str = Field(..., description="Mensaje descriptivo")
    deleted_id: int = Field(..., description="ID del registro eliminado")
    timestamp: datetime = Field(default_factory=_utc_now)


class HealthCheckResponse(BaseModel):
    """Respuesta del health check."""
    status: str = Field(..., description="Estado general (healthy/unhealthy)")
    service: str = Field(..., description="Nombre del servicio")
    version: str = Field(..., description="Versión de la API")
    database: str = Field(..., description="Estado de la base de datos")
    environment: str = Field(..., description="Entorno (production/development)")
    timestamp: datetime = Field(default_factory=_utc_now)


def create_success_response(message: str, data: Any = None) -> dict:
    """Helper para crear respuestas exitosas."""
    return SuccessResponse(message=message, data=data).model_dump()


def create_delete_response(message: str, deleted_id: int) -> dict:
    """Helper para crear respuestas de eliminación."""
    return DeleteResponse(message=message, deleted_id=deleted_id).model_dump()
