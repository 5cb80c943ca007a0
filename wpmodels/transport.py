"""
Transporte HTTP para los recursos del REST API de WordPress
Traduce create/read/update/delete a peticiones httpx
"""

import logging
from base64 import b64encode
from datetime import datetime
from typing import Any, Dict, Optional

import httpx

from .config import ApiSettings
from .dates import format_iso8601

logger = logging.getLogger(__name__)

METHOD_MAP = {
    'create': 'POST',
    'read': 'GET',
    'update': 'PUT',
    'delete': 'DELETE',
}


def encode_value(value: Any) -> Any:
    """Prepara un valor para JSON: fechas a ISO-8601, recursos anidados a su id"""
    from .resources import Resource

    if isinstance(value, Resource):
        return value.id
    if isinstance(value, datetime):
        return format_iso8601(value)
    if isinstance(value, dict):
        return {key: encode_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_value(item) for item in value]
    return value


class HttpTransport:
    """Cliente HTTP que ejecuta las operaciones de persistencia"""

    def __init__(self, settings: ApiSettings, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        }

        # Basic Auth con application password, si está configurado
        if settings.has_basic_auth:
            credentials = f"{settings.username}:{settings.app_password}"
            token = b64encode(credentials.encode()).decode('ascii')
            self.headers['Authorization'] = f'Basic {token}'

        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=settings.timeout)

    async def __call__(self, method: str, instance, options: Optional[Dict[str, Any]] = None) -> Any:
        """Realiza la petición HTTP correspondiente a `method` sobre `instance`"""
        options = options or {}
        http_method = METHOD_MAP[method]
        url = options.get('url') or instance.url()

        body = None
        if method in ('create', 'update'):
            data = options.get('data')
            if data is None:
                data = instance.to_json()
            body = encode_value(data)

        request = self.client.build_request(
            http_method,
            url,
            headers=self.headers,
            params=options.get('params'),
            json=body,
        )

        before_send = options.get('before_send')
        if before_send:
            before_send(request)

        logger.debug(f"{http_method} {request.url}")
        response = await self.client.send(request)
        response.raise_for_status()

        if not response.content:
            return None
        return response.json()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
