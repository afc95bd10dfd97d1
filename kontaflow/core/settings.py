"""
Configuración de KontaFlow por ambiente

Los valores se resuelven en este orden de prioridad creciente:
defaults de BaseConfig, clase del ambiente (development, production,
testing) y variables de entorno o archivos .env del ambiente.
"""

import json
import os
from decimal import Decimal
from functools import lru_cache
from typing import Annotated, List, Optional, Union

from pydantic import computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Configuración base compartida entre todos los ambientes"""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignorar variables extra del .env
    )

    # Identidad de la API
    PROJECT_NAME: str = "KontaFlow API"
    PROJECT_DESCRIPTION: str = "Multi-tenant double-entry bookkeeping API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # Ambiente y nivel de log
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Conexión a PostgreSQL (o DATABASE_URL completa)
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "kontaflow"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False

    # Orígenes permitidos, separados por coma o como lista JSON
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    # Autenticación de desarrollo: cabecera con el id del usuario
    AUTH_USER_HEADER: str = "x-user-id"

    # Tamaños de página por defecto y máximos
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    DEFAULT_ACCOUNT_PAGE_SIZE: int = 100
    MAX_ACCOUNT_PAGE_SIZE: int = 500
    DEFAULT_CURRENCY_PAGE_SIZE: int = 50

    # Valores por defecto de la configuración contable de cada grupo
    DEFAULT_MINIMUM_APPROVAL_AMOUNT: Decimal = Decimal("50000.00")
    DEFAULT_AMOUNT_DECIMALS: int = 2
    DEFAULT_EXCHANGE_RATE_DECIMALS: int = 4

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        elif isinstance(v, str):
            return json.loads(v)
        return []

    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construir URL de base de datos síncrona (migraciones)."""
        if self.DATABASE_URL:
            return self.DATABASE_URL.replace("postgresql+asyncpg", "postgresql+psycopg2")
        return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def ASYNC_SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construir URL de base de datos asíncrona desde componentes."""
        if self.DATABASE_URL:
            url = self.DATABASE_URL.replace("postgresql+psycopg2", "postgresql+asyncpg")
            if url.startswith("postgresql://"):
                url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return url
        return f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @model_validator(mode='after')
    def validate_environment_specific_settings(self):
        """Validar configuraciones específicas del ambiente."""
        if self.ENVIRONMENT == "production" and self.DEBUG:
            self.DEBUG = False  # Forzar DEBUG=False en producción
        return self


class DevelopmentConfig(BaseConfig):
    """Configuración para desarrollo"""

    model_config = SettingsConfigDict(
        env_file=[".env.development", ".env.local"],  # .env.local tiene prioridad
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"

    # Frontends locales habituales
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]


class ProductionConfig(BaseConfig):
    """Configuración para producción"""

    model_config = SettingsConfigDict(
        env_file=".env.production",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    ENVIRONMENT: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Debe ser configurado vía variables de entorno
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []


class TestingConfig(BaseConfig):
    """Configuración para testing"""

    model_config = SettingsConfigDict(
        env_file=".env.testing",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    ENVIRONMENT: str = "testing"
    DEBUG: bool = True
    LOG_LEVEL: str = "WARNING"

    # Los tests sustituyen el motor por SQLite en memoria
    DATABASE_URL: Optional[str] = "sqlite+aiosqlite:///:memory:"
    DB_NAME: str = "kontaflow_test"


# Clase de configuración según ENVIRONMENT
config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


@lru_cache()
def get_settings() -> BaseConfig:
    """
    Devuelve la configuración del ambiente indicado en ENVIRONMENT.

    Se instancia una sola vez por proceso.
    """
    env = os.getenv("ENVIRONMENT", "development").lower()
    config_class = config_map.get(env, DevelopmentConfig)
    return config_class()


# Configuración activa del proceso
settings = get_settings()
