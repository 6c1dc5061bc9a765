"""
Contexto de persistencia.

Envuelve la sesión SQLAlchemy de una unidad de trabajo (una petición) y ofrece:
- ciclo de guardado con estampado de auditoría (created_at / updated_at)
- paginación sobre consultas tipadas
- ejecución de SQL crudo parametrizado sobre la conexión y transacción actuales
"""

from enum import Enum
import logging
import re
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from config import settings
from core.exceptions import InvalidArgumentException
from core.pagination import normalize_page_params, calculate_skip
from database.models import AuditableMixin
from utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)

R = TypeVar('R')

_IDENTIFICADOR = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class CommandType(str, Enum):
    """Tipo de comando para SQL crudo."""
    TEXT = "text"
    STORED_PROCEDURE = "stored_procedure"


@event.listens_for(Session, "before_flush")
def _stamp_audit_fields(session: Session, flush_context, instances) -> None:
    """Estampa los campos de auditoría de toda entidad nueva o modificada.

    Se registra sobre la clase Session, por lo que aplica a cualquier sesión
    de la aplicación (incluidas las de pruebas).
    """
    now = utc_now()
    for obj in session.new:
        if isinstance(obj, AuditableMixin):
            obj.mark_created(now)
    for obj in session.dirty:
        if isinstance(obj, AuditableMixin) and session.is_modified(obj, include_collections=False):
            obj.mark_modified(now)


class DbContext:
    """
    Contexto de persistencia de una unidad de trabajo.

    No se comparte entre peticiones concurrentes: cada petición obtiene su
    propia sesión (ver database.db.get_db).
    """

    def __init__(self, session: Session, command_timeout: Optional[int] = None):
        """
        Inicializa el contexto.

        Args:
            session: Sesión SQLAlchemy de la unidad de trabajo
            command_timeout: Timeout por defecto para SQL crudo (segundos);
                si es None se usa settings.command_timeout
        """
        self.session = session
        self.command_timeout = command_timeout or settings.command_timeout

    # ==================== Ciclo de guardado ====================

    def save_changes(self) -> None:
        """
        Confirma los cambios pendientes.

        El estampado de auditoría ocurre en el evento before_flush.

        Raises:
            SQLAlchemyError: Se propaga sin modificar tras hacer rollback
        """
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error al guardar cambios: {e}")
            self.session.rollback()
            raise

    def rollback(self) -> None:
        """Descarta los cambios pendientes de la unidad de trabajo."""
        self.session.rollback()

    # ==================== Paginación ====================

    def get_paged(self, query: Query, page: int, page_size: int) -> Query:
        """
        Devuelve la ventana `page` de una consulta ordenada.

        Args:
            query: Consulta ya filtrada y ordenada
            page: Número de página (1-indexed; <= 0 se trata como 1)
            page_size: Tamaño de página (<= 0 usa el tamaño por defecto)

        Returns:
            La consulta con offset/limit aplicados (sin ejecutar)
        """
        page, page_size = normalize_page_params(page, page_size)
        return query.offset(calculate_skip(page, page_size)).limit(page_size)

    def get_paged_with_count(
        self,
        query: Query,
        page: int,
        page_size: int
    ) -> Tuple[List[Any], int]:
        """
        Ejecuta la página solicitada y el conteo total de la consulta.

        Args:
            query: Consulta ya filtrada y ordenada
            page: Número de página (1-indexed)
            page_size: Tamaño de página

        Returns:
            Tupla (items de la página, total de filas de la consulta completa)
        """
        total = query.order_by(None).count()
        items = self.get_paged(query, page, page_size).all()
        return items, total

    # ==================== SQL crudo ====================

    def query(
        self,
        sql: str,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[int] = None,
        command_type: CommandType = CommandType.TEXT,
        result_type: Optional[Callable[..., R]] = None,
    ) -> List[Any]:
        """
        Ejecuta una consulta SQL cruda parametrizada.

        Args:
            sql: Texto SQL con parámetros nombrados (`:nombre`), o el nombre
                del procedimiento si command_type es STORED_PROCEDURE
            params: Valores de los parámetros (siempre enlazados, nunca concatenados)
            timeout: Timeout en segundos; por defecto el del contexto
            command_type: TEXT o STORED_PROCEDURE
            result_type: Tipo con el que construir cada fila (p. ej. un modelo
                pydantic); si es None se devuelven diccionarios

        Returns:
            Lista de filas
        """
        result = self._execute(sql, params, timeout, command_type)
        return [self._build_row(row, result_type) for row in result.mappings().all()]

    def query_first_or_default(
        self,
        sql: str,
        params: Optional[dict[str, Any]] = None,
        timeout: Optional[int] = None,
        command_type: CommandType = CommandType.TEXT,
        result_type: Optional[Callable[..., R]] = None,
    ) -> Optional[Any]:
        """
        Igual que `query` pero devuelve solo la primera fila, o None.
        """
        result = self._execute(sql, params, timeout, command_type)
        row = result.mappings().first()
        if row is None:
            return None
        return self._build_row(row, result_type)

    def _execute(
        self,
        sql: str,
        params: Optional[dict[str, Any]],
        timeout: Optional[int],
        command_type: CommandType,
    ):
        params = params or {}
        if command_type == CommandType.STORED_PROCEDURE:
            sql = self._stored_procedure_sql(sql, params)
        return self.session.execute(
            text(sql),
            params,
            execution_options={"command_timeout": timeout or self.command_timeout},
        )

    @staticmethod
    def _stored_procedure_sql(nombre: str, params: dict[str, Any]) -> str:
        """Construye `EXEC nombre @p = :p, ...` validando los identificadores."""
        if not _IDENTIFICADOR.match(nombre or ""):
            raise InvalidArgumentException(
                f"Nombre de procedimiento inválido: {nombre!r}",
                field="sql"
            )
        for clave in params:
            if not _IDENTIFICADOR.match(clave) or "." in clave:
                raise InvalidArgumentException(
                    f"Nombre de parámetro inválido: {clave!r}",
                    field="params"
                )
        argumentos = ", ".join(f"@{clave} = :{clave}" for clave in params)
        return f"EXEC {nombre} {argumentos}".rstrip()

    @staticmethod
    def _build_row(row, result_type: Optional[Callable[..., R]]):
        datos = dict(row)
        if result_type is None:
            return datos
        return result_type(**datos)
