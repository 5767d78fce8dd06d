import pytest

from ..exceptions import UnknownTypeError
from ..metadata import (
    MetadataMap,
    PaginationParamType,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedResourceMetadata,
)
from .testing import FooBar, InheritFooBar


class TestRouteBasedResourceMetadata:
    def test_defaults(self):
        metadata = RouteBasedResourceMetadata(FooBar, "foo-bar", "object_property")
        assert metadata.resource_identifier == "id"
        assert metadata.route_identifier_placeholder == "id"
        assert metadata.route_params == {}
        assert metadata.identifiers_to_placeholders_mapping == {"id": "id"}
        assert metadata.max_depth == 10

    def test_legacy_placeholder(self):
        metadata = RouteBasedResourceMetadata(
            FooBar,
            "foo-bar",
            "object_property",
            resource_identifier="key",
            route_identifier_placeholder="foo_bar_id",
        )
        assert metadata.identifiers_to_placeholders_mapping == {"key": "foo_bar_id"}

    def test_immutable_options(self):
        route_params = {"type": "foo"}
        metadata = RouteBasedResourceMetadata(
            FooBar, "foo-bar", "object_property", route_params=route_params
        )
        route_params["type"] = "bar"
        assert metadata.route_params == {"type": "foo"}
        with pytest.raises(TypeError):
            metadata.route_params["type"] = "bar"  # type: ignore


class TestCollectionMetadata:
    def test_defaults(self):
        metadata = RouteBasedCollectionMetadata(FooBar, "foo-bar", "foo-bars")
        assert metadata.pagination_param == "page"
        assert metadata.pagination_param_type is PaginationParamType.QUERY
        assert metadata.route_params == {}
        assert metadata.query_string_arguments == {}

    def test_pagination_param_type_by_value(self):
        metadata = RouteBasedCollectionMetadata(
            FooBar, "foo-bar", "foo-bars", pagination_param_type="placeholder"
        )
        assert metadata.pagination_param_type is PaginationParamType.PLACEHOLDER
        with pytest.raises(ValueError):
            RouteBasedCollectionMetadata(
                FooBar, "foo-bar", "foo-bars", pagination_param_type="header"
            )


class TestMetadataMap:
    def test_exact_lookup(self):
        metadata = UrlBasedResourceMetadata(FooBar, "/api/foo-bar", "object_property")
        metadata_map = MetadataMap([metadata])
        assert metadata_map.has(FooBar)
        assert FooBar in metadata_map
        assert not metadata_map.has(InheritFooBar)
        assert metadata_map.get(FooBar) is metadata
        assert list(metadata_map) == [metadata]
        assert len(metadata_map) == 1

    def test_unknown_type(self):
        with pytest.raises(UnknownTypeError, match="not in metadata map"):
            MetadataMap().get(FooBar)

    def test_last_registration_wins(self):
        first = UrlBasedResourceMetadata(FooBar, "/api/first", "object_property")
        second = UrlBasedResourceMetadata(FooBar, "/api/second", "object_property")
        metadata_map = MetadataMap([first])
        metadata_map.add(second)
        assert metadata_map.get(FooBar) is second
        assert len(metadata_map) == 1
