import asyncio

import httpx
import pytest

from wpmodels import ResourceKind


def test_no_parent_returns_none(api, server):
    comment = api.comment({'id': 3, 'parent': 0})

    assert comment.parent() is None
    assert server.requests == []


def test_missing_parent_field_returns_none(api, server):
    # Los posts no traen `parent` por defecto
    assert api.post({'id': 3}).parent() is None
    assert server.requests == []


def test_cache_hit_with_explicit_collection(api, server):
    posts = api.collection(ResourceKind.POST, [{'id': 5, 'title': {'rendered': "Padre"}}])
    post = api.post({'id': 9, 'parent': 5})

    first = post.parent(posts)
    second = post.parent(posts)

    assert first is posts.get(5)
    assert first is second
    assert server.requests == []


def test_cache_hit_through_own_collection(api, server):
    pages = api.collection(ResourceKind.PAGE, [{'id': 1}, {'id': 2, 'parent': 1}])

    assert pages.get(2).parent() is pages.get(1)
    assert server.requests == []


def test_cache_miss_fetches_in_background(api, server):
    server.handler = lambda request: httpx.Response(200, json={
        'id': 7,
        'title': {'rendered': "Padre"},
        'date': "2015-03-04T10:20:30",
    })

    async def run():
        page = api.page({'id': 3, 'parent': 7})
        parent = page.parent()

        # Todavía sin rellenar: la petición no ha salido
        assert parent.kind is ResourceKind.PAGE
        assert parent.id == 7
        assert parent.get('title') == {}
        assert server.requests == []

        await parent.request
        return parent

    parent = asyncio.run(run())

    assert len(server.requests) == 1
    assert str(server.requests[0].url) == "http://wp.test/wp-json/wp/v2/pages/7"
    assert parent.get('title') == {'rendered': "Padre"}


def test_cache_miss_is_not_memoized(api, server):
    server.handler = lambda request: httpx.Response(200, json={'id': 7})

    async def run():
        comment = api.comment({'id': 3, 'parent': 7})
        first = comment.parent()
        second = comment.parent()
        await asyncio.gather(first.request, second.request)
        return first, second

    first, second = asyncio.run(run())

    assert first is not second
    assert len(server.requests) == 2


def test_id_missing_from_collection_falls_back_to_fetch(api, server):
    server.handler = lambda request: httpx.Response(200, json={'id': 8})

    async def run():
        posts = api.collection(ResourceKind.POST, [{'id': 5}])
        parent = api.post({'id': 9, 'parent': 8}).parent(posts)
        await parent.request
        return parent, posts

    parent, posts = asyncio.run(run())

    assert parent.id == 8
    assert parent not in posts
    assert len(server.requests) == 1


def test_revision_parent_is_a_post(api, server):
    server.handler = lambda request: httpx.Response(200, json={'id': 40})

    async def run():
        revision = api.post_revision({'id': 41, 'parent': 40})
        parent = revision.parent()
        await parent.request
        return parent

    parent = asyncio.run(run())

    assert parent.kind is ResourceKind.POST
    assert server.requests[0].url.path == "/wp-json/wp/v2/posts/40"


def test_failed_background_fetch_surfaces_on_task(api, server):
    server.handler = lambda request: httpx.Response(404, json={'code': 'rest_post_invalid_id'})

    async def run():
        parent = api.post({'id': 9, 'parent': 77}).parent()
        with pytest.raises(httpx.HTTPStatusError):
            await parent.request

    asyncio.run(run())


def test_collection_of_another_kind_is_rejected(api):
    pages = api.collection(ResourceKind.PAGE, [{'id': 5}])

    with pytest.raises(ValueError):
        api.post({'id': 9, 'parent': 5}).parent(pages)


def test_non_hierarchical_kinds_have_no_parent(api):
    with pytest.raises(AttributeError):
        api.media({'id': 1}).parent()


def test_cache_miss_without_event_loop_returns_unloaded_parent(api, server):
    parent = api.page({'id': 3, 'parent': 7}).parent()

    assert parent.kind is ResourceKind.PAGE
    assert parent.id == 7
    assert parent.get('title') == {}
    assert parent.request is None
    assert server.requests == []


def test_background_fetch_is_tracked_until_done(api, server):
    from wpmodels.capabilities import _background_tasks

    server.handler = lambda request: httpx.Response(200, json={'id': 7})

    async def run():
        parent = api.comment({'id': 3, 'parent': 7}).parent()
        assert parent.request in _background_tasks
        await parent.request
        # Los callbacks de finalización corren en la siguiente vuelta del loop
        await asyncio.sleep(0)
        return parent

    parent = asyncio.run(run())

    assert parent.request not in _background_tasks
