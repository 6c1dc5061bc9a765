"""
Repositorio base con operaciones CRUD comunes:
Este repositorio genérico proporciona operaciones de base de datos estándar
que se pueden reutilizar en todos los repositorios de entidades.

Los errores del almacenamiento (violaciones de restricciones, pérdida de
conexión) se propagan sin modificar; el repositorio no reintenta.
"""

from typing import TypeVar, Generic, List, Optional, Type, Tuple
from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session
import logging

from database.context import DbContext
from database.models import AuditableMixin
from utils.datetime_utils import days_ago, utc_now

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=AuditableMixin)


def _escape_like(termino: str) -> str:
    """Escapa los comodines de LIKE para buscar el texto literal."""
    return (
        termino.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


class BaseRepository(Generic[T]):
    """
    Repositorio genérico proporciona operaciones CRUD estándar

    Esta clase debe ser heredada por repositorios de entidades específicos.
    """

    def __init__(self, context: DbContext, model_class: Type[T]):
        """
        Inicializa el repositorio.

        Args:
            context: Contexto de persistencia de la unidad de trabajo
            model_class: Clase del modelo ORM para este repositorio
        """
        self.context = context
        self.model_class = model_class

    @property
    def db(self) -> Session:
        return self.context.session

    def _query(self) -> Query:
        return self.db.query(self.model_class)

    # ==================== Lectura ====================

    def get_all(self) -> List[T]:
        """
        Obtiene todas las entidades, activas e inactivas.

        Returns:
            Lista de entidades ordenada por id
        """
        return self._query().order_by(self.model_class.id).all()

    def get_by_id(self, id: int) -> Optional[T]:
        """
        Obtiene una entidad por su ID.

        Args:
            id: ID de la entidad

        Returns:
            La entidad o None si no existe
        """
        return self.db.get(self.model_class, id)

    def get_paged(
        self,
        page: int,
        page_size: int,
        solo_activos: bool = False
    ) -> Tuple[List[T], int]:
        """
        Obtiene una página de entidades ordenadas por id.

        Args:
            page: Número de página (1-indexed)
            page_size: Items por página
            solo_activos: Si True, filtra is_active

        Returns:
            Tupla (entidades de la página, total)
        """
        query = self._query()
        if solo_activos:
            query = query.filter(self.model_class.is_active.is_(True))
        query = query.order_by(self.model_class.id)
        return self.context.get_paged_with_count(query, page, page_size)

    def exists_by_field(
        self,
        field: str,
        value: str,
        exclude_id: Optional[int] = None
    ) -> bool:
        """
        Verifica si existe una entidad con el valor dado (sin distinguir mayúsculas).

        Args:
            field: Nombre del atributo a comparar
            value: Valor a buscar
            exclude_id: ID opcional a excluir de la verificación (para actualizaciones)

        Returns:
            True si existe otra entidad con ese valor
        """
        columna = getattr(self.model_class, field)
        query = self.db.query(self.model_class.id).filter(
            func.lower(columna) == value.lower()
        )
        if exclude_id:
            query = query.filter(self.model_class.id != exclude_id)
        return query.first() is not None

    def search(self, termino: str, *fields: str) -> List[T]:
        """
        Busca por coincidencia parcial (insensible a mayúsculas) en uno o más campos.

        Args:
            termino: Texto a buscar
            *fields: Atributos de texto donde buscar

        Returns:
            Entidades ordenadas por nombre y luego por id
        """
        patron = f"%{_escape_like(termino)}%"
        condiciones = [
            getattr(self.model_class, field).ilike(patron, escape="\\")
            for field in fields
        ]
        return (
            self._query()
            .filter(or_(*condiciones))
            .order_by(self.model_class.nombre, self.model_class.id)
            .all()
        )

    def get_recientes(self, dias: int) -> List[T]:
        """
        Obtiene las entidades creadas en los últimos `dias` días.

        Args:
            dias: Ventana en días hacia atrás desde ahora (UTC)

        Returns:
            Entidades de la más reciente a la más antigua
        """
        desde = days_ago(dias)
        return (
            self._query()
            .filter(self.model_class.created_at >= desde)
            .order_by(self.model_class.created_at.desc(), self.model_class.id)
            .all()
        )

    # ==================== Escritura ====================

    def create(self, entity: T) -> T:
        """
        Crea una nueva entidad.

        Args:
            entity: La entidad a crear

        Returns:
            La entidad creada con su id asignado
        """
        self.db.add(entity)
        self.context.save_changes()
        self.db.refresh(entity)
        logger.debug(f"{self.model_class.__name__} {entity.id} creado")
        return entity

    def update(self, entity: T) -> T:
        """
        Actualiza una entidad existente, identificada por entity.id.

        Args:
            entity: La entidad a actualizar (adjunta a la sesión o separada)

        Returns:
            La entidad actualizada
        """
        if entity not in self.db:
            entity = self.db.merge(entity)
        # una actualización completa renueva updated_at aunque ningún campo cambie
        entity.updated_at = utc_now()
        self.context.save_changes()
        self.db.refresh(entity)
        return entity

    def delete(self, id: int) -> bool:
        """
        Elimina físicamente una entidad.

        Args:
            id: ID de la entidad

        Returns:
            True si la entidad existía y fue eliminada
        """
        entity = self.get_by_id(id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.context.save_changes()
        return True

    def set_active(self, id: int, status: bool) -> bool:
        """
        Cambia el estado lógico (is_active) sin alterar otros campos.

        Args:
            id: ID de la entidad
            status: Nuevo valor de is_active

        Returns:
            True si la entidad existe
        """
        entity = self.get_by_id(id)
        if entity is None:
            return False
        entity.is_active = status
        self.context.save_changes()
        return True
