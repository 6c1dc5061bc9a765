from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal

from models.base import BaseDTO


class ProductoDTO(BaseDTO):
    """Precio y stock no se acotan aquí: la capa de negocio rechaza
    valores negativos antes de llegar a la base de datos."""
    nombre: str = Field(..., min_length=1, max_length=150)
    descripcion: Optional[str] = Field(None, max_length=500)
    precio: Decimal = Field(..., max_digits=18, decimal_places=2)
    stock: int = 0


class ProductoUpdate(BaseModel):
    """Actualización parcial: solo se aplican los campos presentes (no None)."""
    id: int = 0
    nombre: Optional[str] = Field(None, min_length=1, max_length=150)
    descripcion: Optional[str] = Field(None, max_length=500)
    precio: Optional[Decimal] = Field(None, max_digits=18, decimal_places=2)
    stock: Optional[int] = None


class StockUpdate(BaseModel):
    nuevo_stock: int


class ResumenInventarioDTO(BaseModel):
    total_productos: int
    unidades: int
    valor_total: Decimal
