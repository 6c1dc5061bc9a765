"""
Utilidades para manejo de fechas.

Todas las marcas de auditoría se guardan en UTC sin información de zona
horaria (columnas DateTime "naive"), por eso estas funciones devuelven
datetimes naive expresados en UTC.
"""
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """
    Obtiene la fecha y hora actual en UTC.

    Returns:
        datetime: Fecha y hora actual en UTC, sin tzinfo.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def days_ago(dias: int) -> datetime:
    """
    Calcula el instante (UTC) de hace `dias` días.

    Args:
        dias: Número de días hacia atrás.

    Returns:
        datetime: Límite inferior naive en UTC.
    """
    return utc_now() - timedelta(days=dias)
