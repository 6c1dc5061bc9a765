from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class BaseDTO(BaseModel):
    """Forma de transferencia común a todas las entidades.

    Los campos de auditoría son solo de salida: se ignoran al crear o
    actualizar. `create_at` refleja la fecha de creación de la entidad y
    `delete_at` la última modificación mientras la entidad está inactiva
    (None si está activa).
    """
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(0, ge=0)
    nombre: str = Field(..., min_length=1)
    create_at: Optional[datetime] = None
    delete_at: Optional[datetime] = None
    update_at: Optional[datetime] = None
    is_active: bool = True


class StatusUpdate(BaseModel):
    """Cuerpo para activar/desactivar lógicamente un registro."""
    status: bool
