"""
Fixtures compartidos: API con transporte HTTP simulado
"""
import json
from typing import Callable, List, Optional

import httpx
import pytest

from wpmodels import ApiSettings, WordPressAPI

ROOT = "http://wp.test/wp-json/"


class FakeWordPress:
    """Servidor falso: registra las peticiones y responde con `handler`"""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self.handler = handler or (lambda request: httpx.Response(200, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def body(self, index: int = -1):
        return json.loads(self.requests[index].content)


@pytest.fixture
def server():
    return FakeWordPress()


@pytest.fixture
def make_api(server):
    """Crea un WordPressAPI cuyo cliente httpx habla con `server`"""

    def factory(nonce: Optional[str] = None, **settings) -> WordPressAPI:
        client = httpx.AsyncClient(transport=httpx.MockTransport(server))
        return WordPressAPI(ApiSettings(root=ROOT, nonce=nonce, **settings), client=client)

    return factory


@pytest.fixture
def api(make_api):
    return make_api()
