"""
Servicio para la lógica de negocio de clientes.

El email es único entre todos los clientes (activos o no), sin distinguir
mayúsculas y minúsculas.
"""

from typing import List, Optional
import logging

from config import settings
from services.base_service import BaseService, UniqueFieldRule, log_errors
from services.interfaces import ClienteServiceInterface
from services.mappers import cliente_mapper
from repositories.cliente_repository import ClienteRepository
from database.models import ClienteORM
from models.clientes import ClienteDTO, ClienteUpdate
from core.exceptions import InvalidArgumentException

logger = logging.getLogger(__name__)


class ClienteService(BaseService[ClienteORM, ClienteDTO, ClienteUpdate], ClienteServiceInterface):
    """Service for managing cliente business logic."""

    required_fields = ("nombre", "apellido", "email")

    def __init__(self, repository: ClienteRepository):
        """
        Initialize cliente service.

        Args:
            repository: ClienteRepository instance
        """
        super().__init__(repository, cliente_mapper, UniqueFieldRule("email"))
        self.repository: ClienteRepository = repository

    @log_errors("buscar por email")
    def get_by_email(self, email: str) -> Optional[ClienteDTO]:
        """
        Busca un cliente por email exacto.

        Args:
            email: Email a buscar

        Returns:
            El cliente o None

        Raises:
            InvalidArgumentException: Si el email está vacío
        """
        if not email or not email.strip():
            raise InvalidArgumentException("El email no puede estar vacío", field="email")
        return self.mapper.to_dto(self.repository.get_by_email(email.strip()))

    @log_errors("buscar por nombre")
    def search_by_nombre(self, termino: str) -> List[ClienteDTO]:
        """
        Busca clientes por nombre o apellido (coincidencia parcial).

        Raises:
            InvalidArgumentException: Si el término está vacío
        """
        if not termino or not termino.strip():
            raise InvalidArgumentException(
                "El término de búsqueda no puede estar vacío",
                field="nombre"
            )
        return self.mapper.to_dtos(self.repository.search_by_nombre(termino.strip()))

    @log_errors("obtener recientes")
    def get_recientes(self, dias: Optional[int] = None) -> List[ClienteDTO]:
        """Clientes creados en los últimos `dias` días (por defecto settings.dias_recientes)."""
        dias = settings.dias_recientes if dias is None else dias
        if dias <= 0:
            raise InvalidArgumentException("Los días deben ser mayores a 0", field="dias")
        return self.mapper.to_dtos(self.repository.get_recientes(dias))

    def validate_unique_email(self, email: Optional[str], exclude_id: Optional[int] = None) -> bool:
        return self.validate_unique(email, exclude_id)
