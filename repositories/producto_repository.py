"""
Repositorio para la entidad Producto.
Gestiona todas las operaciones de base de datos relacionadas con los productos.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, field_validator

from repositories.base_repository import BaseRepository
from database.context import DbContext
from database.models import ProductoORM
from core.exceptions import ConflictException, InvalidArgumentException
from utils.datetime_utils import utc_now
import logging

logger = logging.getLogger(__name__)


class ResumenInventario(BaseModel):
    """Fila del resumen de inventario obtenida por SQL crudo."""
    total_productos: int
    unidades: int
    valor_total: Decimal

    @field_validator("valor_total", mode="before")
    @classmethod
    def quantize_valor_total(cls, v):
        # SUM(precio * stock) puede llegar como float; se lleva a la escala de Numeric(18,2)
        return Decimal(str(v)).quantize(Decimal("0.01"))


class ProductoRepository(BaseRepository[ProductoORM]):
    """Repositorio para la gestión de entidades de producto."""

    def __init__(self, context: DbContext):
        """
        Inicializa el repositorio de productos.

        Args:
            context: Contexto de persistencia
        """
        super().__init__(context, ProductoORM)

    def search_by_nombre(self, termino: str) -> List[ProductoORM]:
        """
        Busca productos cuyo nombre o descripción contenga el término.

        Args:
            termino: Texto a buscar

        Returns:
            Lista de productos ordenada por nombre
        """
        return self.search(termino, "nombre", "descripcion")

    def get_con_stock(self, stock_minimo: int) -> List[ProductoORM]:
        """
        Obtiene los productos con al menos `stock_minimo` unidades.

        Args:
            stock_minimo: Umbral inferior de stock (inclusive)

        Returns:
            Lista de productos ordenada por nombre
        """
        return (
            self.db.query(ProductoORM)
            .filter(ProductoORM.stock >= stock_minimo)
            .order_by(ProductoORM.nombre, ProductoORM.id)
            .all()
        )

    def get_sin_stock(self) -> List[ProductoORM]:
        """Obtiene los productos agotados, ordenados por nombre."""
        return (
            self.db.query(ProductoORM)
            .filter(ProductoORM.stock <= 0)
            .order_by(ProductoORM.nombre, ProductoORM.id)
            .all()
        )

    def get_by_rango_precio(
        self,
        precio_minimo: Decimal,
        precio_maximo: Decimal
    ) -> List[ProductoORM]:
        """
        Obtiene los productos cuyo precio está en [precio_minimo, precio_maximo].

        Args:
            precio_minimo: Límite inferior (inclusive)
            precio_maximo: Límite superior (inclusive)

        Returns:
            Lista de productos ordenada por precio
        """
        return (
            self.db.query(ProductoORM)
            .filter(
                ProductoORM.precio >= precio_minimo,
                ProductoORM.precio <= precio_maximo,
            )
            .order_by(ProductoORM.precio, ProductoORM.id)
            .all()
        )

    def exists_nombre(self, nombre: str, exclude_id: Optional[int] = None) -> bool:
        """
        Verifica si un nombre de producto ya existe.

        Args:
            nombre: Nombre a verificar
            exclude_id: ID de producto a excluir (para actualizaciones)

        Returns:
            True si el nombre existe, False en caso contrario
        """
        return self.exists_by_field("nombre", nombre, exclude_id)

    def is_nombre_unique(self, nombre: str, exclude_id: Optional[int] = None) -> bool:
        return not self.exists_nombre(nombre, exclude_id)

    def update_stock(self, producto_id: int, nuevo_stock: int) -> bool:
        """
        Actualiza solo el stock de un producto con un UPDATE directo.

        No pasa por la unidad de trabajo del ORM, así que estampa
        updated_at explícitamente.

        Args:
            producto_id: ID del producto
            nuevo_stock: Nuevo valor de stock

        Returns:
            True si se actualizó una fila
        """
        if nuevo_stock < 0:
            raise InvalidArgumentException("El stock no puede ser negativo", field="stock")
        filas = (
            self.db.query(ProductoORM)
            .filter(ProductoORM.id == producto_id)
            .update(
                {ProductoORM.stock: nuevo_stock, ProductoORM.updated_at: utc_now()},
                synchronize_session="evaluate",
            )
        )
        self.context.save_changes()
        return filas > 0

    def get_resumen_inventario(self, solo_activos: bool = True) -> ResumenInventario:
        """
        Calcula totales de inventario con SQL crudo.

        Args:
            solo_activos: Si True, considera solo productos activos

        Returns:
            ResumenInventario con número de productos, unidades y valor total
        """
        sql = (
            "SELECT COUNT(*) AS total_productos, "
            "COALESCE(SUM(stock), 0) AS unidades, "
            "COALESCE(SUM(precio * stock), 0) AS valor_total "
            "FROM productos"
        )
        params = {}
        if solo_activos:
            sql += " WHERE is_active = :activo"
            params["activo"] = True
        return self.context.query_first_or_default(
            sql, params, result_type=ResumenInventario
        )

    def _validate(self, entity: ProductoORM) -> None:
        if entity.precio is not None and Decimal(str(entity.precio)) < 0:
            raise InvalidArgumentException("El precio no puede ser negativo", field="precio")
        if entity.stock is not None and entity.stock < 0:
            raise InvalidArgumentException("El stock no puede ser negativo", field="stock")

    def create(self, entity: ProductoORM) -> ProductoORM:
        """Crea un producto validando precio, stock y nombre único."""
        self._validate(entity)
        if self.exists_nombre(entity.nombre):
            raise ConflictException("Producto", field="nombre", value=entity.nombre)
        return super().create(entity)

    def update(self, entity: ProductoORM) -> ProductoORM:
        """Actualiza un producto validando precio, stock y nombre único."""
        try:
            self._validate(entity)
        except InvalidArgumentException:
            self.context.rollback()
            raise
        if self.exists_nombre(entity.nombre, exclude_id=entity.id):
            self.context.rollback()
            raise ConflictException("Producto", field="nombre", value=entity.nombre)
        return super().update(entity)
