from pydantic import BaseModel, Field
from typing import Optional

from models.base import BaseDTO


class ClienteDTO(BaseDTO):
    nombre: str = Field(..., min_length=1, max_length=100)
    apellido: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=200)
    telefono: Optional[str] = Field(None, max_length=20)


class ClienteUpdate(BaseModel):
    """Actualización parcial: solo se aplican los campos presentes (no None).
    El `id` lo fija el endpoint a partir de la ruta."""
    id: int = 0
    nombre: Optional[str] = Field(None, min_length=1, max_length=100)
    apellido: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, min_length=3, max_length=200)
    telefono: Optional[str] = Field(None, max_length=20)
