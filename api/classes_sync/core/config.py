"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.

Dos niveles:
- Settings: lectura de entorno / .env (pydantic-settings), una vez al arrancar.
- ReconciliationConfig: snapshot inmutable que recibe el motor de sync.
  El motor nunca lee variables de entorno por su cuenta.
"""
import json
from dataclasses import dataclass
from typing import List

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    Backends:
    - SOURCE_BACKEND: 'airtable' (default) o 'memory' (solo tests, arranca vacio)
    - TARGET_BACKEND: 'webflow' (default) o 'memory' (solo tests, arranca vacio)
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Classes Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=4000)

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    # Seleccion de clientes
    SOURCE_BACKEND: str = Field(default="airtable")
    TARGET_BACKEND: str = Field(default="webflow")

    # Airtable (Source)
    AIRTABLE_TOKEN: str = Field(default="")
    AIRTABLE_BASE_ID: str = Field(default="")
    AIRTABLE_TABLE_NAME: str = Field(default="Biaw Classes")
    AIRTABLE_API_URL: str = Field(default="https://api.airtable.com/v0")

    # Webflow (Target)
    WEBFLOW_TOKEN: str = Field(default="")
    WEBFLOW_COLLECTION_ID: str = Field(default="")
    WEBFLOW_API_URL: str = Field(default="https://api.webflow.com/v2")
    # Campo del item Webflow que guarda el id del record Airtable
    WEBFLOW_SOURCE_ID_FIELD: str = Field(default="sourceRecordId")

    # HTTP
    HTTP_TIMEOUT_S: int = Field(default=30)

    # Motor de reconciliacion
    # 1 = secuencial
    SYNC_MAX_CONCURRENCY: int = Field(default=1, ge=1, le=32)
    # Omitir updates cuyo contenido no cambio (opt-in)
    SYNC_SKIP_UNCHANGED: bool = Field(default=False)

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


@dataclass(frozen=True)
class ReconciliationConfig:
    """
    Configuracion del motor de reconciliacion.

    Se construye una vez (startup o CLI) y no se muta despues.
    """

    source_collection: str
    source_id_field: str = "sourceRecordId"
    max_concurrency: int = 1
    skip_unchanged: bool = False

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ReconciliationConfig":
        return cls(
            source_collection=settings.AIRTABLE_TABLE_NAME,
            source_id_field=settings.WEBFLOW_SOURCE_ID_FIELD,
            max_concurrency=settings.SYNC_MAX_CONCURRENCY,
            skip_unchanged=settings.SYNC_SKIP_UNCHANGED,
        )


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
