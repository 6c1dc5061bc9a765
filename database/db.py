"""módulo de base de datos con manejo de errores y configuración centralizada."""
from typing import Generator
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

# import ORM classes and Base from models.py
from .models import (
    Base,
    ClienteORM,
    ProductoORM,
)

#import configuration
from config import settings

logger = logging.getLogger(__name__)


def _connect_args() -> dict:
    """Argumentos de conexión según el driver configurado."""
    if settings.is_sqlite:
        return {"check_same_thread": False}
    #pyodbc: timeout de login en segundos
    return {"timeout": settings.command_timeout}


#engine / session con configuración centralizada
engine = create_engine(
    settings.database_url,
    echo=settings.debug_mode,
    future=True,
    pool_pre_ping=True,  #verifica conexiones antes de usarlas
    pool_recycle=3600,   #recicla conexiones cada hora
    connect_args=_connect_args(),
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@event.listens_for(Engine, "before_cursor_execute")
def _apply_command_timeout(conn, cursor, statement, parameters, context, executemany):
    """Aplica la opción de ejecución `command_timeout` a conexiones DB-API que la soportan.

    pyodbc expone `Connection.timeout` (segundos, 0 = sin límite); otros drivers
    no tienen un equivalente por sentencia y se ignoran.
    """
    if context is None:
        return
    timeout = context.execution_options.get("command_timeout")
    if timeout is None:
        return
    dbapi_connection = conn.connection.dbapi_connection
    if hasattr(dbapi_connection, "timeout"):
        dbapi_connection.timeout = timeout


def get_db() -> Generator[Session, None, None]:
    """dependencia de FastAPI que provee una sesión por petición.

    Yields:
        Session: Sesión de SQLAlchemy

    Nota:
        - Hace rollback automático si hay excepciones SQLAlchemy
        - Cierra la sesión de forma segura
        - No captura errores de negocio (AppException)
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Error de base de datos en sesión: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def create_tables() -> None:
    """Crear tablas ORM en la base de datos.

    Raises:
        SQLAlchemyError: Si hay error al crear las tablas
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tablas de base de datos creadas/verificadas exitosamente")
    except SQLAlchemyError as e:
        logger.error(f"Error al crear tablas: {e}", exc_info=True)
        raise


def get_database_url() -> str:
    """Obtiene la URL de la base de datos (sin credenciales sensibles)."""
    return engine.url.render_as_string(hide_password=True)
