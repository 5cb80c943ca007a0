"""
Tabla de identidad y valores por defecto de cada tipo de recurso
Campo identificador, endpoint, defaults, capacidades y restricciones
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .capabilities import HIERARCHICAL, TIME_STAMPED, Capability
from .dates import now


class ResourceKind(str, Enum):
    """Tipos de recurso expuestos por el REST API (conjunto cerrado)"""

    USER = "User"
    TAXONOMY = "Taxonomy"
    TERM = "Term"
    POST = "Post"
    PAGE = "Page"
    POST_REVISION = "PostRevision"
    MEDIA = "Media"
    COMMENT = "Comment"
    POST_TYPE = "PostType"
    POST_STATUS = "PostStatus"
    SCHEMA = "Schema"


@dataclass(frozen=True)
class KindSpec:
    """Contrato declarativo de un tipo de recurso"""
    kind: ResourceKind
    path: str
    defaults: Dict[str, Any]
    id_field: Optional[str] = 'id'
    capabilities: Tuple[Capability, ...] = ()
    parent_kind: Optional[ResourceKind] = None
    immutable: bool = False
    singleton: bool = False
    url_builder: Optional[Callable[[str, Any], str]] = field(default=None, compare=False)
    collection_url_builder: Optional[Callable[[str, Any], str]] = field(default=None, compare=False)

    def build_defaults(self) -> Dict[str, Any]:
        """Defaults nuevos para cada instancia: nunca se comparten referencias"""
        return {
            key: value() if callable(value) else copy.deepcopy(value)
            for key, value in self.defaults.items()
        }

    def has_capability(self, capability: Capability) -> bool:
        return any(cap is capability for cap in self.capabilities)

    def endpoint(self, root: str) -> str:
        return f"{root}{self.path}"


def _revision_url(root: str, resource) -> str:
    revision_id = resource.get('id') or ''
    parent = resource.get('parent') or ''
    return f"{root}wp/v2/posts/{parent}/revisions/{revision_id}"


def _revision_collection_url(root: str, collection) -> str:
    # Las revisiones solo existen bajo un post concreto
    if not collection.parent:
        raise ValueError("Una colección de revisiones necesita el id del post padre")
    return f"{root}wp/v2/posts/{collection.parent}/revisions"


_CONTENT_TIMESTAMPS = {
    'date': now,
    'date_gmt': now,
    'modified': now,
    'modified_gmt': now,
}


KINDS: Dict[ResourceKind, KindSpec] = {
    ResourceKind.USER: KindSpec(
        kind=ResourceKind.USER,
        path='wp/v2/users',
        defaults={
            # 'me' carga el usuario autenticado
            'id': 'me',
            'avatar_url': {},
            'capabilities': {},
            'description': '',
            'email': '',
            'extra_capabilities': {},
            'first_name': '',
            'last_name': '',
            'link': '',
            'name': '',
            'nickname': '',
            'registered_date': now,
            'roles': [],
            'slug': '',
            'url': '',
            'username': '',
            '_links': {},
        },
    ),
    ResourceKind.TAXONOMY: KindSpec(
        kind=ResourceKind.TAXONOMY,
        path='wp/v2/taxonomies',
        id_field='slug',
        defaults={
            'name': '',
            'slug': None,
            'description': '',
            'labels': {},
            'types': [],
            'show_cloud': False,
            'hierarchical': False,
        },
    ),
    ResourceKind.TERM: KindSpec(
        kind=ResourceKind.TERM,
        path='wp/v2/terms/tag',
        defaults={
            'id': None,
            'name': '',
            'slug': '',
            'description': '',
            'parent': None,
            'count': 0,
            'link': '',
            'taxonomy': '',
            '_links': {},
        },
    ),
    ResourceKind.POST: KindSpec(
        kind=ResourceKind.POST,
        path='wp/v2/posts',
        capabilities=(TIME_STAMPED, HIERARCHICAL),
        parent_kind=ResourceKind.POST,
        defaults={
            'id': None,
            **_CONTENT_TIMESTAMPS,
            'guid': {},
            'link': '',
            'password': '',
            'type': 'post',
            'title': {},
            'content': {},
            'author': None,
            'excerpt': {},
            'featured_image': None,
            'comment_status': 'open',
            'ping_status': 'open',
            'sticky': False,
            'format': 'standard',
            '_links': {},
        },
    ),
    ResourceKind.PAGE: KindSpec(
        kind=ResourceKind.PAGE,
        path='wp/v2/pages',
        capabilities=(TIME_STAMPED, HIERARCHICAL),
        parent_kind=ResourceKind.PAGE,
        defaults={
            'id': None,
            **_CONTENT_TIMESTAMPS,
            'guid': {},
            'link': '',
            'password': '',
            'slug': '',
            'type': 'page',
            'title': {},
            'content': {},
            'author': None,
            'excerpt': {},
            'featured_image': None,
            'comment_status': 'closed',
            'ping_status': 'closed',
            'menu_order': None,
            'template': '',
            '_links': {},
        },
    ),
    ResourceKind.POST_REVISION: KindSpec(
        kind=ResourceKind.POST_REVISION,
        path='wp/v2/posts',
        capabilities=(TIME_STAMPED, HIERARCHICAL),
        parent_kind=ResourceKind.POST,
        url_builder=_revision_url,
        collection_url_builder=_revision_collection_url,
        defaults={
            'id': None,
            'author': None,
            **_CONTENT_TIMESTAMPS,
            'guid': {},
            'parent': 0,
            'slug': '',
            'title': {},
            'content': {},
            'excerpt': {},
            '_links': {},
        },
    ),
    ResourceKind.MEDIA: KindSpec(
        kind=ResourceKind.MEDIA,
        path='wp/v2/media',
        capabilities=(TIME_STAMPED,),
        defaults={
            'id': None,
            **_CONTENT_TIMESTAMPS,
            'guid': {},
            'link': '',
            'password': '',
            'slug': '',
            'type': 'attachment',
            'title': {},
            'author': None,
            'comment_status': 'open',
            'ping_status': 'open',
            'alt_text': '',
            'caption': '',
            'description': '',
            'media_type': '',
            'media_details': {},
            'post': None,
            'source_url': '',
            '_links': {},
        },
    ),
    ResourceKind.COMMENT: KindSpec(
        kind=ResourceKind.COMMENT,
        path='wp/v2/comments',
        capabilities=(TIME_STAMPED, HIERARCHICAL),
        parent_kind=ResourceKind.COMMENT,
        defaults={
            'id': None,
            'author': None,
            'author_email': '',
            'author_ip': '',
            'author_name': '',
            'author_url': '',
            'author_user_agent': '',
            'content': {},
            'date': now,
            'date_gmt': now,
            'karma': 0,
            'link': '',
            'parent': 0,
            'type': '',
            '_links': {},
        },
    ),
    ResourceKind.POST_TYPE: KindSpec(
        kind=ResourceKind.POST_TYPE,
        path='wp/v2/types',
        id_field='slug',
        immutable=True,
        defaults={
            'slug': None,
            'name': '',
            'description': '',
            'labels': {},
            'hierarchical': False,
        },
    ),
    ResourceKind.POST_STATUS: KindSpec(
        kind=ResourceKind.POST_STATUS,
        path='wp/v2/statuses',
        id_field='slug',
        immutable=True,
        defaults={
            'slug': None,
            'name': '',
            'public': True,
            'protected': False,
            'private': False,
            'queryable': True,
            'show_in_list': True,
            '_links': {},
        },
    ),
    ResourceKind.SCHEMA: KindSpec(
        kind=ResourceKind.SCHEMA,
        path='wp/v2',
        id_field=None,
        immutable=True,
        singleton=True,
        defaults={
            'namespace': '',
            '_links': '',
            'routes': {},
        },
    ),
}


def get_spec(kind: Union[ResourceKind, str]) -> KindSpec:
    """Busca el contrato de un tipo; acepta el enum, su valor ('Post') o su nombre ('post')"""
    if isinstance(kind, ResourceKind):
        return KINDS[kind]

    for member in ResourceKind:
        if kind in (member.value, member.name) or kind.lower() in (
            member.value.lower(), member.name.lower()
        ):
            return KINDS[member]
    raise KeyError(f"Tipo de recurso desconocido: {kind}")
