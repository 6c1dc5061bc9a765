"""
Utilidades del sistema.
"""
from .datetime_utils import utc_now, days_ago

__all__ = ["utc_now", "days_ago"]
