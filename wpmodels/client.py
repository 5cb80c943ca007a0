"""
Cliente de modelos del REST API de WordPress
Reúne configuración, transporte y sync autenticado, y fabrica recursos
"""

import logging
from typing import Any, Dict, Optional, Union

import httpx

from .config import ApiSettings
from .kinds import ResourceKind
from .resources import Resource, ResourceCollection
from .sync import AuthenticatedSync
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class WordPressAPI:
    """Punto de entrada: crea recursos y colecciones ligados a un sitio"""

    def __init__(self, settings: Optional[ApiSettings] = None, client: Optional[httpx.AsyncClient] = None):
        # Sin configuración explícita se lee del entorno (.env incluido)
        settings = settings or ApiSettings.from_env()
        self.settings = settings
        self.transport = HttpTransport(settings, client=client)
        self.sync = AuthenticatedSync(settings, self.transport)
        logger.info(f"WordPress API inicializado: {settings.root}")

    @classmethod
    def from_env(cls, client: Optional[httpx.AsyncClient] = None) -> "WordPressAPI":
        return cls(ApiSettings.from_env(), client=client)

    async def __aenter__(self) -> "WordPressAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    # === Fábrica ===

    def create(self, kind: Union[ResourceKind, str], attributes: Optional[Dict[str, Any]] = None,
               parse: bool = False) -> Resource:
        """Crea un recurso del tipo indicado (sin petición de red)"""
        return Resource(self, kind, attributes, parse=parse)

    def collection(self, kind: Union[ResourceKind, str], models=(), parent: Any = None) -> ResourceCollection:
        """Colección local; las revisiones necesitan `parent` (id del post)"""
        return ResourceCollection(self, kind, models, parent=parent)

    def user(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.USER, attributes, **kwargs)

    def taxonomy(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.TAXONOMY, attributes, **kwargs)

    def term(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.TERM, attributes, **kwargs)

    def post(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.POST, attributes, **kwargs)

    def page(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.PAGE, attributes, **kwargs)

    def post_revision(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.POST_REVISION, attributes, **kwargs)

    def media(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.MEDIA, attributes, **kwargs)

    def comment(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.COMMENT, attributes, **kwargs)

    def post_type(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.POST_TYPE, attributes, **kwargs)

    def post_status(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.POST_STATUS, attributes, **kwargs)

    def schema(self, attributes: Optional[Dict[str, Any]] = None, **kwargs) -> Resource:
        return self.create(ResourceKind.SCHEMA, attributes, **kwargs)
