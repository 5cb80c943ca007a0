from datetime import datetime

import pytest

from wpmodels import KINDS, ResourceKind, get_spec
from wpmodels.capabilities import HIERARCHICAL, TIME_STAMPED
from tests.conftest import ROOT


def test_every_kind_is_in_the_table():
    assert set(KINDS) == set(ResourceKind)


@pytest.mark.parametrize("kind, id_field", [
    (ResourceKind.USER, 'id'),
    (ResourceKind.TAXONOMY, 'slug'),
    (ResourceKind.TERM, 'id'),
    (ResourceKind.POST, 'id'),
    (ResourceKind.PAGE, 'id'),
    (ResourceKind.POST_REVISION, 'id'),
    (ResourceKind.MEDIA, 'id'),
    (ResourceKind.COMMENT, 'id'),
    (ResourceKind.POST_TYPE, 'slug'),
    (ResourceKind.POST_STATUS, 'slug'),
    (ResourceKind.SCHEMA, None),
])
def test_identity_fields(kind, id_field):
    assert KINDS[kind].id_field == id_field


def test_capability_table():
    both = {ResourceKind.POST, ResourceKind.PAGE, ResourceKind.POST_REVISION, ResourceKind.COMMENT}
    for kind, spec in KINDS.items():
        assert spec.has_capability(HIERARCHICAL) == (kind in both)
        assert spec.has_capability(TIME_STAMPED) == (kind in both or kind is ResourceKind.MEDIA)


def test_immutable_kinds():
    immutable = {kind for kind, spec in KINDS.items() if spec.immutable}
    assert immutable == {ResourceKind.POST_TYPE, ResourceKind.POST_STATUS, ResourceKind.SCHEMA}


def test_parent_kinds_are_declared():
    assert KINDS[ResourceKind.POST].parent_kind is ResourceKind.POST
    assert KINDS[ResourceKind.PAGE].parent_kind is ResourceKind.PAGE
    assert KINDS[ResourceKind.COMMENT].parent_kind is ResourceKind.COMMENT
    assert KINDS[ResourceKind.POST_REVISION].parent_kind is ResourceKind.POST


def test_endpoints():
    assert KINDS[ResourceKind.POST].endpoint(ROOT) == ROOT + "wp/v2/posts"
    assert KINDS[ResourceKind.TERM].endpoint(ROOT) == ROOT + "wp/v2/terms/tag"
    assert KINDS[ResourceKind.POST_STATUS].endpoint(ROOT) == ROOT + "wp/v2/statuses"


def test_defaults_are_fresh_per_instance():
    spec = KINDS[ResourceKind.POST]
    first = spec.build_defaults()
    second = spec.build_defaults()

    first['title']['rendered'] = "Hola"
    first['_links'].setdefault('self', []).append({'href': 'x'})

    assert second['title'] == {}
    assert second['_links'] == {}
    assert spec.defaults['title'] == {}


def test_timestamp_defaults_are_generated():
    defaults = KINDS[ResourceKind.PAGE].build_defaults()
    assert isinstance(defaults['date'], datetime)
    assert isinstance(defaults['modified_gmt'], datetime)
    assert isinstance(KINDS[ResourceKind.USER].build_defaults()['registered_date'], datetime)


def test_get_spec_accepts_names():
    assert get_spec("post").kind is ResourceKind.POST
    assert get_spec("PostRevision").kind is ResourceKind.POST_REVISION
    assert get_spec("post_type").kind is ResourceKind.POST_TYPE
    assert get_spec(ResourceKind.MEDIA).kind is ResourceKind.MEDIA


def test_get_spec_rejects_unknown_kinds():
    with pytest.raises(KeyError):
        get_spec("widget")
