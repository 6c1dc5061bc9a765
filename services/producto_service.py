"""
Servicio para la lógica de negocio de productos.

Reglas de dominio:
- el nombre es único (sin distinguir mayúsculas)
- precio >= 0 y stock >= 0, verificados antes de tocar la base de datos
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
import logging

from config import settings
from services.base_service import BaseService, UniqueFieldRule, log_errors
from services.interfaces import ProductoServiceInterface
from services.mappers import producto_mapper
from repositories.producto_repository import ProductoRepository
from database.models import ProductoORM
from models.productos import ProductoDTO, ProductoUpdate, ResumenInventarioDTO
from core.exceptions import InvalidArgumentException

logger = logging.getLogger(__name__)


def _as_decimal(valor: Any, campo: str) -> Decimal:
    try:
        return Decimal(str(valor))
    except (InvalidOperation, ValueError):
        raise InvalidArgumentException(f"El campo '{campo}' debe ser numérico", field=campo)


class ProductoService(BaseService[ProductoORM, ProductoDTO, ProductoUpdate], ProductoServiceInterface):
    """Service for managing producto business logic."""

    required_fields = ("nombre",)

    def __init__(self, repository: ProductoRepository):
        """
        Initialize producto service.

        Args:
            repository: ProductoRepository instance
        """
        super().__init__(repository, producto_mapper, UniqueFieldRule("nombre"))
        self.repository: ProductoRepository = repository

    def validate_values(self, valores: Dict[str, Any]) -> None:
        super().validate_values(valores)
        if valores.get("precio") is not None and _as_decimal(valores["precio"], "precio") < 0:
            raise InvalidArgumentException("El precio no puede ser negativo", field="precio")
        if valores.get("stock") is not None and valores["stock"] < 0:
            raise InvalidArgumentException("El stock no puede ser negativo", field="stock")

    @log_errors("buscar por nombre")
    def search_by_nombre(self, termino: str) -> List[ProductoDTO]:
        """
        Busca productos por nombre o descripción (coincidencia parcial).

        Raises:
            InvalidArgumentException: Si el término está vacío
        """
        if not termino or not termino.strip():
            raise InvalidArgumentException("El nombre no puede estar vacío", field="nombre")
        return self.mapper.to_dtos(self.repository.search_by_nombre(termino.strip()))

    @log_errors("obtener con stock")
    def get_con_stock(self, stock_minimo: int = 1) -> List[ProductoDTO]:
        """
        Productos con al menos `stock_minimo` unidades.

        Raises:
            InvalidArgumentException: Si stock_minimo es negativo
        """
        if stock_minimo < 0:
            raise InvalidArgumentException(
                "El stock mínimo no puede ser negativo",
                field="stock_minimo"
            )
        return self.mapper.to_dtos(self.repository.get_con_stock(stock_minimo))

    @log_errors("obtener sin stock")
    def get_sin_stock(self) -> List[ProductoDTO]:
        return self.mapper.to_dtos(self.repository.get_sin_stock())

    @log_errors("obtener por rango de precio")
    def get_by_rango_precio(
        self,
        precio_minimo: Decimal,
        precio_maximo: Decimal
    ) -> List[ProductoDTO]:
        """
        Productos con precio dentro de [precio_minimo, precio_maximo].

        Raises:
            InvalidArgumentException: Si algún límite es negativo o el mínimo supera al máximo
        """
        minimo = _as_decimal(precio_minimo, "precio_minimo")
        maximo = _as_decimal(precio_maximo, "precio_maximo")
        if minimo < 0 or maximo < 0:
            raise InvalidArgumentException("Los precios no pueden ser negativos", field="precio")
        if minimo > maximo:
            raise InvalidArgumentException(
                "El precio mínimo no puede ser mayor al precio máximo",
                field="precio_minimo"
            )
        return self.mapper.to_dtos(self.repository.get_by_rango_precio(minimo, maximo))

    @log_errors("obtener recientes")
    def get_recientes(self, dias: Optional[int] = None) -> List[ProductoDTO]:
        """Productos creados en los últimos `dias` días (por defecto settings.dias_recientes)."""
        dias = settings.dias_recientes if dias is None else dias
        if dias <= 0:
            raise InvalidArgumentException("Los días deben ser mayores a 0", field="dias")
        return self.mapper.to_dtos(self.repository.get_recientes(dias))

    @log_errors("actualizar stock de")
    def update_stock(self, producto_id: int, nuevo_stock: int) -> bool:
        """
        Actualiza solo el stock de un producto.

        Args:
            producto_id: ID del producto
            nuevo_stock: Nuevo stock (>= 0)

        Returns:
            True si se actualizó

        Raises:
            InvalidArgumentException: Si el id o el stock son inválidos
            NotFoundException: Si el producto no existe
        """
        self._validate_id(producto_id, field="producto_id")
        if nuevo_stock is None or nuevo_stock < 0:
            raise InvalidArgumentException("El stock no puede ser negativo", field="stock")
        self._get_existing_or_fail(producto_id)
        actualizado = self.repository.update_stock(producto_id, nuevo_stock)
        logger.info(f"Stock del producto {producto_id} actualizado a {nuevo_stock}")
        return actualizado

    def validate_unique_nombre(self, nombre: Optional[str], exclude_id: Optional[int] = None) -> bool:
        return self.validate_unique(nombre, exclude_id)

    @log_errors("calcular resumen de")
    def get_resumen_inventario(self, solo_activos: bool = True) -> ResumenInventarioDTO:
        resumen = self.repository.get_resumen_inventario(solo_activos)
        return ResumenInventarioDTO.model_validate(resumen.model_dump())
