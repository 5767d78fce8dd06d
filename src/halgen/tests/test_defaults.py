import pytest

from ..defaults import (
    DataclassExtractor,
    DefaultExtractorRegistryImpl,
    DefaultLinkGeneratorImpl,
    ObjectPropertyExtractor,
    Paginator,
    SimpleRequest,
    TemplateUrlGeneratorImpl,
)
from ..exceptions import ExtractorNotFoundError, UnknownRouteError
from ..hal.models import LinkRepr
from .testing import ROUTES, Child, FooBar, Parent


class TestExtractors:
    def test_object_property(self):
        foo_bar = FooBar("XXXX-YYYY", "BAR", "BAZ")
        foo_bar._hidden = True  # type: ignore
        assert ObjectPropertyExtractor().extract(foo_bar) == {
            "id": "XXXX-YYYY",
            "foo": "BAR",
            "bar": "BAZ",
        }

    def test_dataclass_is_shallow(self):
        child = Child(2, "hello")
        result = DataclassExtractor().extract(Parent(1, "parent", child))
        assert list(result) == ["id", "name", "child", "children"]
        assert result["child"] is child

    def test_dataclass_rejects_others(self):
        with pytest.raises(TypeError):
            DataclassExtractor().extract(FooBar(1))
        with pytest.raises(TypeError):
            DataclassExtractor().extract(Child)

    def test_registry(self):
        custom = ObjectPropertyExtractor()
        registry = DefaultExtractorRegistryImpl({"custom": custom})
        assert registry.has("object_property")
        assert registry.has("dataclass")
        assert registry.get("custom") is custom
        assert not registry.has("nonexistent")
        with pytest.raises(ExtractorNotFoundError):
            registry.get("nonexistent")
        registry.add("nonexistent", custom)
        assert registry.get("nonexistent") is custom


class TestTemplateUrlGeneratorImpl:
    @pytest.fixture
    def url_generator(self):
        return TemplateUrlGeneratorImpl(ROUTES)

    def test_substitution(self, url_generator):
        assert url_generator.generate(SimpleRequest(), "foo-bar", {"id": 1}, {}) == "/api/foo-bar/1"

    def test_quoting(self, url_generator):
        assert (
            url_generator.generate(SimpleRequest(), "foo-bar", {"id": "a b/c"}, {})
            == "/api/foo-bar/a%20b%2Fc"
        )

    def test_unknown_placeholder_left_in_place(self, url_generator):
        assert url_generator.generate(SimpleRequest(), "foo-bar", {}, {}) == "/api/foo-bar/{id}"

    def test_query_and_base_url(self, url_generator):
        assert (
            url_generator.generate(
                SimpleRequest(base_url="https://example.com"),
                "foo-bars",
                {"unused": 1},
                {"sort": "asc", "page": 2},
            )
            == "https://example.com/api/foo-bar?sort=asc&page=2"
        )

    def test_unknown_route(self, url_generator):
        with pytest.raises(UnknownRouteError):
            url_generator.generate(SimpleRequest(), "nonexistent", {}, {})


class TestDefaultLinkGeneratorImpl:
    def test_from_url(self):
        link_generator = DefaultLinkGeneratorImpl(TemplateUrlGeneratorImpl(ROUTES))
        assert link_generator.from_url("self", "/api/foo") == LinkRepr("self", "/api/foo")

    def test_from_route(self):
        link_generator = DefaultLinkGeneratorImpl(TemplateUrlGeneratorImpl(ROUTES))
        link = link_generator.from_route("next", SimpleRequest(), "foo-bars", None, {"page": 2})
        assert link == LinkRepr("next", "/api/foo-bar?page=2", False)
        link = link_generator.from_route("self", SimpleRequest(), "foo-bar")
        assert link.templated is True


class TestPaginator:
    def test_pages(self):
        paginator = Paginator(range(1, 15), item_count_per_page=3)
        assert paginator.total_item_count == 14
        assert paginator.item_count_per_page == 3
        assert list(paginator.get_page_items(1)) == [1, 2, 3]
        assert list(paginator.get_page_items(5)) == [13, 14]
        assert list(paginator) == list(range(1, 15))

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            Paginator([], item_count_per_page=0)
