"""
Modelos tipados y observables sobre el REST API de WordPress
"""

from .client import WordPressAPI
from .config import ApiSettings
from .kinds import KINDS, KindSpec, ResourceKind, get_spec
from .resources import Resource, ResourceCollection
from .sync import NONCE_HEADER, AuthenticatedSync

__all__ = [
    'ApiSettings',
    'AuthenticatedSync',
    'KINDS',
    'KindSpec',
    'NONCE_HEADER',
    'Resource',
    'ResourceCollection',
    'ResourceKind',
    'WordPressAPI',
    'get_spec',
]
