"""
Capacidades compartidas entre tipos de recurso

TimeStamped: serialización de fechas y expansión del autor.
Hierarchical: resolución del recurso padre.

Son objetos sin estado; cada tipo de recurso declara cuáles usa en la
tabla de `kinds.py`.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Set

from .dates import TIMESTAMP_FIELDS, format_iso8601, parse_iso8601

logger = logging.getLogger(__name__)

# Referencias fuertes a las cargas en segundo plano hasta que terminan
_background_tasks: Set[asyncio.Task] = set()


class Capability:
    """Comportamiento base: no transforma nada"""

    name = "capability"

    def serialize(self, resource, attributes: Dict[str, Any]) -> Dict[str, Any]:
        return attributes

    def deserialize(self, resource, payload: Dict[str, Any]) -> Dict[str, Any]:
        return payload

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class TimeStamped(Capability):
    """Contenido con fechas y autor (posts, páginas, media, comentarios)"""

    name = "timestamped"

    def serialize(self, resource, attributes: Dict[str, Any]) -> Dict[str, Any]:
        """Convierte los datetime de vuelta a cadenas ISO-8601 sin tocar el recurso"""
        attributes = dict(attributes)
        for key in TIMESTAMP_FIELDS:
            if isinstance(attributes.get(key), datetime):
                attributes[key] = format_iso8601(attributes[key])
        return attributes

    def deserialize(self, resource, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Convierte las fechas a datetime y el autor en un recurso User"""
        payload = dict(payload)

        for key in TIMESTAMP_FIELDS:
            if isinstance(payload.get(key), str):
                payload[key] = parse_iso8601(payload[key])

        if 'author' in payload:
            payload['author'] = self._expand_author(resource, payload['author'])

        return payload

    def _expand_author(self, resource, author: Any) -> Any:
        from .kinds import ResourceKind
        from .resources import Resource

        if author is None or isinstance(author, Resource):
            return author
        if isinstance(author, dict):
            return resource.api.create(ResourceKind.USER, author, parse=True)
        return resource.api.create(ResourceKind.USER, {'id': author})


class Hierarchical(Capability):
    """Contenido con campo `parent` (posts, páginas, revisiones, comentarios)"""

    name = "hierarchical"

    def parent(self, resource, collection=None):
        """
        Devuelve el recurso referenciado por `parent`.

        Si hay una colección cargada del tipo padre se devuelve el objeto
        en caché. Si no, se crea un recurso nuevo con ese id y se lanza
        `fetch()` en segundo plano: el objeto se devuelve vacío y se
        rellena al terminar la petición (la tarea queda en `request`).
        """
        parent_id = resource.get('parent')

        # 0 (o ausente) significa "sin padre"
        if not parent_id:
            return None

        parent_kind = resource.spec.parent_kind

        cache = self._local_collection(resource, parent_kind, collection)
        if cache is not None:
            cached = cache.get(parent_id)
            if cached is not None:
                return cached
            logger.debug(f"{parent_kind.value} {parent_id} no está en la colección local")

        parent = resource.api.create(parent_kind, {'id': parent_id})
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                f"⚠️ Sin event loop activo: {parent_kind.value} {parent_id} queda sin cargar; "
                f"usa `await parent.fetch()`"
            )
            return parent

        parent.request = loop.create_task(parent.fetch())
        _background_tasks.add(parent.request)
        parent.request.add_done_callback(_background_tasks.discard)
        parent.request.add_done_callback(self._report_failure)
        logger.debug(f"Cargando {parent_kind.value} {parent_id} de forma asíncrona")
        return parent

    @staticmethod
    def _local_collection(resource, parent_kind, collection=None) -> Optional[Any]:
        if collection is not None:
            if collection.kind is not parent_kind:
                raise ValueError(
                    f"Se esperaba una colección de {parent_kind.value}, "
                    f"no de {collection.kind.value}"
                )
            return collection

        own = resource.collection
        if own is not None and own.kind is parent_kind:
            return own
        return None

    @staticmethod
    def _report_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"❌ Error cargando el recurso padre: {error}")


TIME_STAMPED = TimeStamped()
HIERARCHICAL = Hierarchical()
