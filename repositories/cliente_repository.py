"""
Repositorio para la entidad Cliente.
Gestiona todas las operaciones de base de datos relacionadas con los clientes.
"""

from typing import List, Optional
from sqlalchemy import func

from repositories.base_repository import BaseRepository
from database.context import DbContext
from database.models import ClienteORM
from core.exceptions import ConflictException
import logging

logger = logging.getLogger(__name__)


class ClienteRepository(BaseRepository[ClienteORM]):
    """Repositorio para la gestión de entidades de cliente."""

    def __init__(self, context: DbContext):
        """
        Inicializa el repositorio de clientes.

        Args:
            context: Contexto de persistencia
        """
        super().__init__(context, ClienteORM)

    def get_by_email(self, email: str) -> Optional[ClienteORM]:
        """
        Busca un cliente por email exacto (insensible a mayúsculas).

        Args:
            email: Email a buscar

        Returns:
            ClienteORM o None si no se encuentra
        """
        return self.db.query(ClienteORM).filter(
            func.lower(ClienteORM.email) == email.lower()
        ).first()

    def search_by_nombre(self, termino: str) -> List[ClienteORM]:
        """
        Busca clientes cuyo nombre o apellido contenga el término.

        Args:
            termino: Texto a buscar

        Returns:
            Lista de clientes ordenada por nombre
        """
        return self.search(termino, "nombre", "apellido")

    def exists_email(self, email: str, exclude_id: Optional[int] = None) -> bool:
        """
        Verifica si un email ya está registrado.

        Args:
            email: Email a verificar
            exclude_id: ID de cliente a excluir (para actualizaciones)

        Returns:
            True si el email existe, False en caso contrario
        """
        return self.exists_by_field("email", email, exclude_id)

    def is_email_unique(self, email: str, exclude_id: Optional[int] = None) -> bool:
        return not self.exists_email(email, exclude_id)

    def create(self, entity: ClienteORM) -> ClienteORM:
        """Crea un cliente rechazando emails ya registrados."""
        if self.exists_email(entity.email):
            raise ConflictException("Cliente", field="email", value=entity.email)
        return super().create(entity)

    def update(self, entity: ClienteORM) -> ClienteORM:
        """Actualiza un cliente verificando que ningún otro use el mismo email."""
        if self.exists_email(entity.email, exclude_id=entity.id):
            self.context.rollback()
            raise ConflictException("Cliente", field="email", value=entity.email)
        return super().update(entity)
