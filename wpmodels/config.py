"""
Configuración del cliente de modelos de WordPress
Raíz del API, nonce y credenciales opcionales de Basic Auth
"""

import os
import logging
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class ApiSettings(BaseModel):
    """Configuración del proceso consumida por sync y transporte"""

    model_config = {"frozen": True}

    root: str = Field(description="Raíz del REST API, p. ej. https://ejemplo.com/wp-json/")
    nonce: Optional[str] = Field(default=None, description="Nonce para la cabecera X-WP-Nonce")
    username: Optional[str] = Field(default=None, description="Usuario para Basic Auth")
    app_password: Optional[str] = Field(default=None, description="Application password de WordPress")
    timeout: float = Field(default=30.0, description="Timeout de las peticiones HTTP en segundos")

    @field_validator('root')
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("root no puede estar vacío")
        return value if value.endswith('/') else value + '/'

    @property
    def has_basic_auth(self) -> bool:
        return bool(self.username and self.app_password)

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Construye la configuración a partir de variables de entorno (.env incluido)"""
        load_dotenv(find_dotenv(usecwd=True))

        root = os.getenv('WP_API_ROOT')
        if not root:
            wp_url = os.getenv('WP_URL')
            if wp_url:
                root = f"{wp_url.rstrip('/')}/wp-json/"

        if not root:
            raise ValueError("Debes configurar WP_API_ROOT o WP_URL")

        settings = cls(
            root=root,
            nonce=os.getenv('WP_API_NONCE') or None,
            username=os.getenv('WP_USER') or os.getenv('WP_USERNAME') or None,
            app_password=os.getenv('WP_APP_PASSWORD') or os.getenv('WP_PASSWORD') or None,
            timeout=float(os.getenv('WP_API_TIMEOUT') or 30.0),
        )
        logger.info(
            f"WP_API_ROOT={settings.root} NONCE={'SET' if settings.nonce else 'MISSING'} "
            f"BASIC_AUTH={'SET' if settings.has_basic_auth else 'MISSING'}"
        )
        return settings
