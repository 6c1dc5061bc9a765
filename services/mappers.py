"""
Mapeo campo a campo entre entidades ORM y DTOs.

Los campos de dominio se copian por nombre en ambos sentidos. Los campos de
auditoría se mapean en un solo sentido (entidad -> DTO), porque los nombres
del DTO no coinciden con los de la entidad:

    entidad.created_at                       -> dto.create_at
    entidad.updated_at                       -> dto.update_at
    entidad.updated_at si is_active es False -> dto.delete_at (None si activa)
    entidad.is_active                        -> dto.is_active

Nada de lo que traiga el DTO en esos campos llega a la entidad.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from database.models import AuditableMixin, ClienteORM, ProductoORM
from models.base import BaseDTO
from models.clientes import ClienteDTO
from models.productos import ProductoDTO

T = TypeVar('T', bound=AuditableMixin)
D = TypeVar('D', bound=BaseDTO)


class EntityMapper(Generic[T, D]):
    """Estrategia de mapeo y fusión parcial para un par entidad/DTO."""

    def __init__(self, entity_class: Type[T], dto_class: Type[D], campos: Sequence[str]):
        """
        Args:
            entity_class: Clase ORM
            dto_class: Clase del DTO
            campos: Campos de dominio comunes a entidad y DTO (sin id ni auditoría)
        """
        self.entity_class = entity_class
        self.dto_class = dto_class
        self.campos = tuple(campos)

    @staticmethod
    def audit_fields(entity: T) -> Dict[str, Any]:
        return {
            "id": entity.id,
            "create_at": entity.created_at,
            "update_at": entity.updated_at,
            "delete_at": None if entity.is_active else entity.updated_at,
            "is_active": entity.is_active,
        }

    def to_dto(self, entity: Optional[T]) -> Optional[D]:
        if entity is None:
            return None
        datos = {campo: getattr(entity, campo) for campo in self.campos}
        datos.update(self.audit_fields(entity))
        return self.dto_class.model_validate(datos)

    def to_dtos(self, entities: Sequence[T]) -> List[D]:
        return [self.to_dto(entity) for entity in entities]

    def to_entity(self, dto: D) -> T:
        """Construye una entidad nueva (sin id ni auditoría) a partir del DTO."""
        return self.entity_class(**{campo: getattr(dto, campo) for campo in self.campos})

    def apply(self, entity: T, dto: D) -> T:
        """Reemplaza todos los campos de dominio de la entidad con los del DTO."""
        for campo in self.campos:
            setattr(entity, campo, getattr(dto, campo))
        return entity

    def partial_values(self, parcial: BaseModel) -> Dict[str, Any]:
        """Campos de dominio presentes (no None) en un DTO parcial."""
        return {
            campo: valor
            for campo, valor in parcial.model_dump(exclude_none=True).items()
            if campo in self.campos
        }

    def merge_partial(self, entity: T, valores: Dict[str, Any]) -> List[str]:
        """
        Fusiona valores parciales sobre la entidad.

        Returns:
            Nombres de los campos cuyo valor cambió
        """
        cambiados = []
        for campo, valor in valores.items():
            if getattr(entity, campo) != valor:
                setattr(entity, campo, valor)
                cambiados.append(campo)
        return cambiados


cliente_mapper: EntityMapper[ClienteORM, ClienteDTO] = EntityMapper(
    ClienteORM, ClienteDTO, ("nombre", "apellido", "email", "telefono")
)

producto_mapper: EntityMapper[ProductoORM, ProductoDTO] = EntityMapper(
    ProductoORM, ProductoDTO, ("nombre", "descripcion", "precio", "stock")
)
