"""
Servicio base con operaciones de lógica de negocio comunes.
Esta clase proporciona una base para las clases de servicio que implementan
la lógica de negocio y coordinan las operaciones del repositorio.

El comportamiento específico de cada entidad se inyecta por composición:
- EntityMapper: mapeo entidad <-> DTO y fusión de actualizaciones parciales
- UniqueFieldRule: qué campo debe ser único (sin distinguir mayúsculas)
"""

from dataclasses import dataclass
from functools import wraps
from typing import Any, Dict, TypeVar, Generic, List, Optional, Tuple
import logging

from pydantic import BaseModel

from repositories.base_repository import BaseRepository
from services.interfaces import CrudServiceInterface
from services.mappers import EntityMapper
from database.models import AuditableMixin
from models.base import BaseDTO
from core.exceptions import (
    AppException,
    ConflictException,
    InvalidArgumentException,
    NotFoundException,
)

logger = logging.getLogger(__name__)

# Type variables
T = TypeVar('T', bound=AuditableMixin)  # ORM Model
D = TypeVar('D', bound=BaseDTO)         # DTO
P = TypeVar('P', bound=BaseModel)       # DTO parcial


@dataclass(frozen=True)
class UniqueFieldRule:
    """Campo que no puede repetirse entre registros de la entidad."""
    field: str


def log_errors(operacion: str):
    """
    Registra cualquier error de la operación y lo vuelve a lanzar sin cambios.

    Los errores de dominio (AppException) se registran como warning; el resto
    como error con traza.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except AppException as e:
                logger.warning(f"No se pudo {operacion} {self.resource}: {e.message}")
                raise
            except Exception as e:
                logger.error(f"Error al {operacion} {self.resource}: {e}", exc_info=True)
                raise
        return wrapper
    return decorator


class BaseService(CrudServiceInterface[D, P], Generic[T, D, P]):
    """
    Servicio base que proporciona operaciones lógicas de negocio comunes.
    Esta clase debe ser heredada por servicios de entidades específicas.

    Solo acepta y devuelve DTOs; las entidades ORM no salen de esta capa.
    """

    # Campos de texto obligatorios que no pueden quedar en blanco
    required_fields: Tuple[str, ...] = ("nombre",)

    def __init__(
        self,
        repository: BaseRepository[T],
        mapper: EntityMapper[T, D],
        unique_rule: Optional[UniqueFieldRule] = None
    ):
        """
        Inicializa el servicio.

        Args:
            repository: The repository instance for data access
            mapper: Estrategia de mapeo entidad/DTO
            unique_rule: Regla de unicidad opcional
        """
        self.repository = repository
        self.mapper = mapper
        self.unique_rule = unique_rule
        self.resource = mapper.entity_class.__name__.replace("ORM", "")

    # ==================== Validaciones ====================

    @staticmethod
    def _validate_id(id: Optional[int], field: str = "id") -> None:
        if id is None or id <= 0:
            raise InvalidArgumentException("ID inválido", field=field)

    def _get_existing_or_fail(self, id: int) -> T:
        entity = self.repository.get_by_id(id)
        if entity is None:
            raise NotFoundException(resource=self.resource, identifier=id)
        return entity

    def validate_values(self, valores: Dict[str, Any]) -> None:
        """
        Validaciones de dominio sobre los valores a persistir.

        Se invoca antes de cualquier acceso a la base de datos con todos los
        campos (create/update) o solo con los presentes (update_partial).

        Raises:
            InvalidArgumentException: Si un campo obligatorio está en blanco
        """
        for campo in self.required_fields:
            if campo in valores:
                valor = valores[campo]
                if valor is None or not str(valor).strip():
                    raise InvalidArgumentException(
                        f"El campo '{campo}' es obligatorio",
                        field=campo
                    )

    def _is_unique(self, value: Optional[str], exclude_id: Optional[int] = None) -> bool:
        if value is None or not value.strip():
            return False
        if self.unique_rule is None:
            return True
        return not self.repository.exists_by_field(
            self.unique_rule.field, value, exclude_id
        )

    def _check_unique(self, valores: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
        if self.unique_rule is None or self.unique_rule.field not in valores:
            return
        valor = valores[self.unique_rule.field]
        if not self._is_unique(valor, exclude_id):
            raise ConflictException(
                resource=self.resource,
                field=self.unique_rule.field,
                value=valor
            )

    # ==================== Lectura ====================

    @log_errors("obtener")
    def get_all(self) -> List[D]:
        """
        Obtiene todos los registros (activos e inactivos).

        Returns:
            Lista de DTOs
        """
        return self.mapper.to_dtos(self.repository.get_all())

    @log_errors("obtener")
    def get_by_id(self, id: int) -> Optional[D]:
        """
        Obtiene un registro por su ID.

        Args:
            id: ID del registro (> 0)

        Returns:
            El DTO o None si no existe

        Raises:
            InvalidArgumentException: Si id <= 0
        """
        self._validate_id(id)
        return self.mapper.to_dto(self.repository.get_by_id(id))

    @log_errors("paginar")
    def get_paged(self, page: int, page_size: int) -> Tuple[List[D], int]:
        """
        Obtiene una página de registros.

        Args:
            page: Número de página (1-indexed)
            page_size: Items por página

        Returns:
            Tuple of (list of DTOs, total count)
        """
        items, total = self.repository.get_paged(page, page_size)
        return self.mapper.to_dtos(items), total

    # ==================== Escritura ====================

    @log_errors("crear")
    def create(self, dto: D) -> D:
        """
        Crea un registro nuevo.

        Args:
            dto: Datos del registro

        Returns:
            El DTO creado, con id y fechas de auditoría

        Raises:
            InvalidArgumentException: Si dto es None o tiene valores inválidos
            ConflictException: Si el campo único ya existe
        """
        if dto is None:
            raise InvalidArgumentException("Los datos son obligatorios", field="dto")

        entity = self.mapper.to_entity(dto)
        valores = {campo: getattr(entity, campo) for campo in self.mapper.campos}
        self.validate_values(valores)
        self._check_unique(valores)

        created = self.repository.create(entity)
        logger.info(f"{self.resource} {created.id} creado")
        return self.mapper.to_dto(created)

    @log_errors("actualizar")
    def update(self, dto: D) -> D:
        """
        Reemplaza todos los campos de dominio de un registro existente.

        La fecha de creación se conserva; la de modificación se renueva.

        Args:
            dto: Datos completos del registro, con id

        Returns:
            El DTO actualizado

        Raises:
            InvalidArgumentException: Si dto es None o dto.id <= 0
            NotFoundException: Si no existe el registro
            ConflictException: Si el campo único pertenece a otro registro
        """
        if dto is None:
            raise InvalidArgumentException("Los datos son obligatorios", field="dto")
        self._validate_id(dto.id)

        valores = {campo: getattr(dto, campo) for campo in self.mapper.campos}
        self.validate_values(valores)
        existing = self._get_existing_or_fail(dto.id)
        self._check_unique(valores, exclude_id=dto.id)

        self.mapper.apply(existing, dto)
        updated = self.repository.update(existing)
        logger.info(f"{self.resource} {updated.id} actualizado")
        return self.mapper.to_dto(updated)

    @log_errors("actualizar parcialmente")
    def update_partial(self, parcial: P) -> bool:
        """
        Aplica solo los campos presentes (no None) del DTO parcial.

        Args:
            parcial: DTO parcial con id

        Returns:
            True si la operación se completó

        Raises:
            InvalidArgumentException: Si parcial.id <= 0 o un valor es inválido
            NotFoundException: Si no existe el registro
            ConflictException: Si el campo único pertenece a otro registro
        """
        if parcial is None:
            raise InvalidArgumentException("Los datos son obligatorios", field="dto")
        self._validate_id(parcial.id)

        valores = self.mapper.partial_values(parcial)
        self.validate_values(valores)
        existing = self._get_existing_or_fail(parcial.id)
        self._check_unique(valores, exclude_id=parcial.id)

        cambiados = self.mapper.merge_partial(existing, valores)
        if cambiados:
            self.repository.update(existing)
            logger.info(f"{self.resource} {parcial.id} actualizado parcialmente: {cambiados}")
        return True

    @log_errors("eliminar")
    def delete(self, id: int) -> bool:
        """
        Elimina físicamente un registro.

        Args:
            id: ID del registro

        Returns:
            True si se eliminó

        Raises:
            InvalidArgumentException: Si id <= 0
            NotFoundException: Si no existe el registro
        """
        self._validate_id(id)
        self._get_existing_or_fail(id)
        eliminado = self.repository.delete(id)
        logger.info(f"{self.resource} {id} eliminado")
        return eliminado

    @log_errors("cambiar estado de")
    def set_active(self, id: int, status: bool) -> bool:
        """
        Activa o desactiva lógicamente un registro sin tocar otros campos.

        Args:
            id: ID del registro
            status: Nuevo estado

        Returns:
            True si se aplicó el cambio

        Raises:
            InvalidArgumentException: Si id <= 0
            NotFoundException: Si no existe el registro
        """
        self._validate_id(id)
        self._get_existing_or_fail(id)
        return self.repository.set_active(id, status)

    @log_errors("validar unicidad de")
    def validate_unique(self, value: Optional[str], exclude_id: Optional[int] = None) -> bool:
        """
        Indica si `value` está disponible para el campo único.

        Args:
            value: Valor a verificar
            exclude_id: ID a excluir (el propio registro al actualizar)

        Returns:
            False si el valor está en blanco o ya existe; True en caso contrario
        """
        return self._is_unique(value, exclude_id)
