"""
Sync autenticado
Añade la cabecera X-WP-Nonce antes de cada operación de red
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from .config import ApiSettings

logger = logging.getLogger(__name__)

SYNC_METHODS = ('create', 'read', 'update', 'delete')

NONCE_HEADER = 'X-WP-Nonce'

Transport = Callable[[str, Any, Dict[str, Any]], Awaitable[Any]]


class AuthenticatedSync:
    """Envuelve el transporte inyectando el nonce del proceso"""

    def __init__(self, settings: ApiSettings, transport: Transport):
        self.settings = settings
        self.transport = transport

    async def __call__(self, method: str, instance, options: Optional[Dict[str, Any]] = None) -> Any:
        if method not in SYNC_METHODS:
            raise ValueError(f"Método de sync no soportado: {method}")

        # Copia: nunca se modifican las opciones del llamador
        options = dict(options or {})

        nonce = self.settings.nonce
        if nonce is not None:
            before_send = options.get('before_send')

            def send_with_nonce(request):
                request.headers[NONCE_HEADER] = nonce
                if before_send:
                    return before_send(request)

            options['before_send'] = send_with_nonce

        return await self.transport(method, instance, options)
