from .db import (
    SessionLocal,
    create_tables,
    engine,
    get_db,
    get_database_url,
)
from .models import Base, AuditableMixin, ClienteORM, ProductoORM
from .context import DbContext, CommandType

__all__ = [
    "SessionLocal",
    "create_tables",
    "engine",
    "get_db",
    "get_database_url",
    "Base",
    "AuditableMixin",
    "ClienteORM",
    "ProductoORM",
    "DbContext",
    "CommandType",
]
