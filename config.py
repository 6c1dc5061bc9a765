"""
Configuración centralizada de la aplicación usando pydantic-settings.

Este módulo maneja todas las variables de entorno y configuraciones
de la aplicación de manera tipada y validada.
"""
import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Configuración de la aplicación cargada desde variables de entorno."""

    # Database
    database_url: str = Field(
        default="sqlite:///./evaluacion.db",
        description="URL de conexión a la base de datos"
    )
    command_timeout: int = Field(
        default=30,
        ge=1,
        le=600,
        description="Timeout por defecto (segundos) para comandos SQL crudos"
    )

    # CORS Configuration
    cors_allowed_origins: str = Field(
        default="http://localhost,http://localhost:3000,http://localhost:5000,http://localhost:8000",
        description="Orígenes permitidos para CORS, separados por coma"
    )

    # Application
    app_name: str = Field(
        default="API Evaluación",
        description="Nombre de la aplicación"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Versión de la aplicación"
    )
    debug_mode: bool = Field(
        default=False,
        description="Modo debug (solo para desarrollo)"
    )

    # Paginación
    default_page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Tamaño de página por defecto para listados"
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        le=500,
        description="Tamaño máximo de página permitido"
    )

    # Consultas de registros recientes
    dias_recientes: int = Field(
        default=30,
        ge=1,
        description="Ventana por defecto (días) para los listados de recientes"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Valida que el nivel de logging sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(
                f"Nivel de log '{v}' no válido. Usando 'INFO'. "
                f"Niveles válidos: {valid_levels}"
            )
            return "INFO"
        return v_upper

    @property
    def cors_origins_list(self) -> list[str]:
        """Devuelve la lista de orígenes CORS permitidos."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Determina si la app está en modo producción."""
        return not self.debug_mode

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Instancia global de configuración
settings = Settings()


def configure_logging():
    """Configura el sistema de logging de la aplicación."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=log_format,
        handlers=[
            logging.StreamHandler(),
        ]
    )

    # Reducir verbosidad de librerías externas
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.info(f"Logging configurado en nivel {settings.log_level}")
    logger.info(f"Aplicación: {settings.app_name} v{settings.app_version}")
    logger.info(f"Modo: {'Desarrollo' if settings.debug_mode else 'Producción'}")

