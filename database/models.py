from datetime import datetime

from sqlalchemy import Column, String, Integer, DateTime, Numeric, Boolean, CheckConstraint, Index, inspect
from sqlalchemy.orm import declarative_base, declared_attr, column_property

Base = declarative_base()


class AuditableMixin:
    """Campos comunes de toda entidad persistida: activación lógica y auditoría.

    Las marcas de tiempo las estampa la capa de persistencia a través de
    `mark_created` / `mark_modified` antes de cada flush (ver database.context).
    """
    is_active = Column(Boolean, default=True, nullable=False)
    #auditoría (nombres de columna del esquema de base de datos existente)
    updated_at = Column("fecha_modificacion", DateTime, nullable=True)

    @declared_attr
    def created_at(cls):
        #active_history: el valor previo se carga antes de sobrescribirlo
        return column_property(
            Column("fecha_creacion", DateTime, nullable=False),
            active_history=True,
        )

    def mark_created(self, now: datetime) -> None:
        self.created_at = now
        self.updated_at = now

    def mark_modified(self, now: datetime) -> None:
        # created_at es inmutable: si alguien lo cambió se restaura el valor cargado
        historial = inspect(self).attrs.created_at.history
        if historial.deleted and historial.deleted[0] is not None:
            self.created_at = historial.deleted[0]
        self.updated_at = now


#ORM: Clientes
class ClienteORM(AuditableMixin, Base):
    __tablename__ = "clientes"
    id = Column("id_cliente", Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(100), nullable=False)
    apellido = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False)
    telefono = Column(String(20), nullable=True)

    __table_args__ = (
        Index("ux_clientes_email", "email", unique=True),
    )


#ORM: Productos
class ProductoORM(AuditableMixin, Base):
    __tablename__ = "productos"
    id = Column("id_producto", Integer, primary_key=True, autoincrement=True)
    nombre = Column(String(150), nullable=False)
    descripcion = Column(String(500), nullable=True)
    precio = Column(Numeric(18, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("precio >= 0", name="ck_productos_precio_no_negativo"),
        CheckConstraint("stock >= 0", name="ck_productos_stock_no_negativo"),
    )


__all__ = [
    "Base",
    "AuditableMixin",
    "ClienteORM",
    "ProductoORM",
]
