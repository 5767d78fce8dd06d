import dataclasses

import pytest

from ..builders import ResourceReprBuilder
from ..models import LinkRepr, ResourceRepr, is_templated


@pytest.mark.parametrize(
    ("href", "expected"),
    [
        ("/api/foo", False),
        ("/api/foo/{id}", True),
        ("/api/foo{?page}", True),
        ("/api/foo?q={}", False),
    ],
)
def test_is_templated(href, expected):
    assert is_templated(href) is expected


def test_link_repr():
    assert LinkRepr("self", "/api/foo/{id}").templated is True
    assert LinkRepr("self", "/api/foo/{id}", templated=False).templated is False
    with pytest.raises(dataclasses.FrozenInstanceError):
        LinkRepr("self", "/api/foo").href = "/api/bar"  # type: ignore


class TestResourceReprBuilder:
    def test_elements_and_links(self):
        builder = ResourceReprBuilder()
        builder.add_element("id", 1)
        builder.add_elements({"name": "foo", "id": 2})
        builder.add_link(LinkRepr("self", "/api/foo/2"))
        builder.add_link(LinkRepr("alternate", "/api/foo/2.json"))
        builder.add_link(LinkRepr("alternate", "/api/foo/2.xml"))
        resource = builder()
        assert resource.elements == {"id": 2, "name": "foo"}
        assert resource["name"] == "foo"
        assert resource.get_element("id") == 2
        assert resource.get_link("self").href == "/api/foo/2"
        assert [link.href for link in resource.get_links_by_rel("alternate")] == [
            "/api/foo/2.json",
            "/api/foo/2.xml",
        ]
        assert resource.get_links_by_rel("next") == ()
        with pytest.raises(KeyError):
            resource.get_link("next")

    def test_embed(self):
        child = ResourceRepr(elements=[("id", 1)])
        other = ResourceRepr(elements=[("id", 2)])
        builder = ResourceReprBuilder()
        builder.embed("single", child)
        builder.embed("forced", child, force_collection=True)
        builder.embed("merged", child)
        builder.embed("merged", other)
        builder.embed("empty", [])
        resource = builder()
        assert resource.get_embedded("single") is child
        assert resource.get_embedded("forced") == (child,)
        assert resource.get_embedded("merged") == (child, other)
        assert resource.get_embedded("empty") == ()

    def test_embed_rejects_others(self):
        builder = ResourceReprBuilder()
        with pytest.raises(TypeError):
            builder.embed("items", [object()])  # type: ignore
        with pytest.raises(TypeError):
            builder.embed("item", object())  # type: ignore
