"""
Recursos del REST API de WordPress
Un único constructor genérico que compone la tabla de tipos con sus capacidades
"""

import copy
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

import httpx

from .capabilities import HIERARCHICAL
from .kinds import KindSpec, ResourceKind, get_spec
from .observable import Events, ObservableModel

logger = logging.getLogger(__name__)


class Resource(ObservableModel):
    """
    Instancia de un recurso remoto (post, página, usuario...).

    El comportamiento depende de la entrada `KindSpec` del tipo: campo
    identificador, endpoint, defaults, capacidades y si se puede guardar
    o eliminar. `api` aporta la configuración, el sync autenticado y la
    fábrica de recursos anidados.
    """

    def __init__(
        self,
        api,
        kind: Union[ResourceKind, str],
        attributes: Optional[Dict[str, Any]] = None,
        *,
        parse: bool = False,
        collection: Optional["ResourceCollection"] = None,
    ):
        super().__init__(None)
        self.api = api
        self.spec: KindSpec = get_spec(kind)
        self.collection = collection
        # Tarea de la última carga asíncrona lanzada por parent()
        self.request = None
        self._server_id = None

        self._attributes.update(self.spec.build_defaults())
        if attributes:
            if parse:
                self._apply_server_payload(self.parse(attributes), silent=True)
            else:
                self.set(attributes, silent=True)

    def __repr__(self) -> str:
        return f"<{self.kind.value} {self.id!r}>"

    @property
    def kind(self) -> ResourceKind:
        return self.spec.kind

    @property
    def id(self) -> Any:
        if self.spec.id_field is None:
            return None
        return self.get(self.spec.id_field)

    def is_new(self) -> bool:
        if self.spec.singleton:
            return False
        return self.id is None

    def set(self, key: Any, value: Any = None, *, silent: bool = False) -> "Resource":
        changes = key if isinstance(key, dict) else {key: value}
        id_field = self.spec.id_field
        if (
            id_field in changes
            and self._server_id is not None
            and changes[id_field] != self._server_id
        ):
            raise ValueError(
                f"{id_field} de {self.kind.value} asignado por el servidor "
                f"({self._server_id!r}) no se puede modificar"
            )
        return super().set(changes, silent=silent)

    # === Serialización ===

    def to_json(self) -> Dict[str, Any]:
        """Atributos listos para el cable; el estado del recurso no cambia"""
        attributes = self.attributes
        for capability in self.spec.capabilities:
            attributes = capability.serialize(self, attributes)
        return attributes

    def parse(self, payload: Any) -> Any:
        """Transforma la respuesta del servidor en atributos locales"""
        if not isinstance(payload, dict):
            return payload
        for capability in self.spec.capabilities:
            payload = capability.deserialize(self, payload)
        return payload

    def clone(self) -> "Resource":
        """Copia independiente; los recursos anidados (autor) se comparten"""
        attributes = {
            key: value if isinstance(value, Resource) else copy.deepcopy(value)
            for key, value in self._attributes.items()
        }
        return self.api.create(self.kind, attributes)

    # === URLs ===

    def url(self) -> str:
        root = self.api.settings.root
        if self.spec.url_builder is not None:
            return self.spec.url_builder(root, self)

        base = self.spec.endpoint(root)
        if self.spec.singleton or self.is_new():
            return base
        return f"{base}/{self.id}"

    # === Relaciones ===

    def parent(self, collection: Optional["ResourceCollection"] = None) -> Optional["Resource"]:
        """Recurso padre (ver `Hierarchical.parent`)"""
        if not self.spec.has_capability(HIERARCHICAL):
            raise AttributeError(f"{self.kind.value} no es un recurso jerárquico")
        return HIERARCHICAL.parent(self, collection)

    # === Persistencia ===

    async def fetch(self, **options) -> "Resource":
        """Carga el recurso desde el servidor"""
        payload = await self._sync('read', options)
        self._apply_server_payload(self.parse(payload))
        self.trigger('sync', self, payload)
        return self

    async def save(self, attributes: Optional[Dict[str, Any]] = None, **options) -> bool:
        """Crea (POST) o actualiza (PUT) el recurso; False si el tipo es inmutable"""
        if self.spec.immutable:
            logger.warning(f"⚠️ {self.kind.value} es de solo lectura: save() rechazado")
            return False

        if attributes:
            self.set(attributes)

        method = 'create' if self.is_new() else 'update'
        payload = await self._sync(method, options)
        if isinstance(payload, dict):
            self._apply_server_payload(self.parse(payload))
        self.trigger('sync', self, payload)
        return True

    async def destroy(self, **options) -> bool:
        """Elimina el recurso en el servidor; False si es inmutable o nuevo"""
        if self.spec.immutable:
            logger.warning(f"⚠️ {self.kind.value} es de solo lectura: destroy() rechazado")
            return False

        if self.is_new():
            self._forget()
            return False

        payload = await self._sync('delete', options)
        self._forget()
        self.trigger('sync', self, payload)
        return True

    async def _sync(self, method: str, options: Dict[str, Any]) -> Any:
        try:
            return await self.api.sync(method, self, options)
        except httpx.HTTPError as e:
            logger.error(f"❌ {method} {self.kind.value} {self.id!r}: {e}")
            self.trigger('error', self, e)
            raise

    def _apply_server_payload(self, attributes: Any, *, silent: bool = False) -> None:
        if not isinstance(attributes, dict):
            return
        id_field = self.spec.id_field
        if id_field and attributes.get(id_field) is not None:
            self._server_id = None
            super().set(attributes, silent=silent)
            self._server_id = attributes[id_field]
        else:
            self.set(attributes, silent=silent)

    def _forget(self) -> None:
        self.trigger('destroy', self, self.collection)
        if self.collection is not None:
            self.collection.remove(self)


class ResourceCollection(Events):
    """Colección local de recursos de un mismo tipo"""

    def __init__(self, api, kind: Union[ResourceKind, str], models: Iterable[Any] = (),
                 parent: Any = None):
        super().__init__()
        self.api = api
        self.spec: KindSpec = get_spec(kind)
        # Post al que pertenecen las revisiones
        self.parent = parent
        self.models: List[Resource] = []
        for model in models:
            self.add(model, silent=True)

    @property
    def kind(self) -> ResourceKind:
        return self.spec.kind

    def __len__(self) -> int:
        return len(self.models)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.models)

    def __contains__(self, item: Any) -> bool:
        if isinstance(item, Resource):
            return item in self.models
        return self.get(item) is not None

    def __repr__(self) -> str:
        return f"<ResourceCollection {self.kind.value} ({len(self)})>"

    def url(self) -> str:
        root = self.api.settings.root
        if self.spec.collection_url_builder is not None:
            return self.spec.collection_url_builder(root, self)
        return self.spec.endpoint(root)

    def to_json(self) -> List[Dict[str, Any]]:
        return [model.to_json() for model in self.models]

    def get(self, resource_id: Any) -> Optional[Resource]:
        if resource_id is None:
            return None
        for model in self.models:
            if model.id == resource_id:
                return model
        return None

    def add(self, model: Union[Resource, Dict[str, Any]], *, parse: bool = False,
            silent: bool = False) -> Resource:
        """Añade un recurso (o lo construye a partir de un dict)"""
        if not isinstance(model, Resource):
            model = self.api.create(self.kind, model, parse=parse)
        elif model.kind is not self.kind:
            raise ValueError(
                f"No se puede añadir {model.kind.value} a una colección de {self.kind.value}"
            )

        existing = self.get(model.id)
        if existing is not None and existing is not model:
            existing.set(model.attributes, silent=silent)
            return existing

        if model not in self.models:
            model.collection = self
            self.models.append(model)
            if not silent:
                self.trigger('add', model, self)
        return model

    def remove(self, model: Resource, *, silent: bool = False) -> Optional[Resource]:
        if model not in self.models:
            return None
        self.models.remove(model)
        if model.collection is self:
            model.collection = None
        if not silent:
            self.trigger('remove', model, self)
        return model

    def reset(self, models: Iterable[Any] = (), *, parse: bool = False) -> "ResourceCollection":
        for model in self.models:
            if model.collection is self:
                model.collection = None
        self.models = []
        for model in models:
            self.add(model, parse=parse, silent=True)
        self.trigger('reset', self)
        return self

    async def fetch(self, params: Optional[Dict[str, Any]] = None, **options) -> "ResourceCollection":
        """Carga la colección completa desde el endpoint del tipo"""
        url = self.url()
        if params is not None:
            options['params'] = params
        try:
            payload = await self.api.sync('read', self, options)
        except httpx.HTTPError as e:
            logger.error(f"❌ Error cargando {self.kind.value} desde {url}: {e}")
            self.trigger('error', self, e)
            raise

        if isinstance(payload, dict):
            # Los endpoints de taxonomías, tipos y estados devuelven un objeto por slug
            payload = list(payload.values())

        self.reset(payload or [], parse=True)
        self.trigger('sync', self, payload)
        return self
