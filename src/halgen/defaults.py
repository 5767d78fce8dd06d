import dataclasses
import re
import typing
from collections import OrderedDict
from urllib.parse import quote, urlencode

from .exceptions import ExtractorNotFoundError, UnknownRouteError
from .hal.models import LinkRepr
from .interfaces import (
    Extractor,
    ExtractorRegistry,
    LinkGenerator,
    PaginatedCollection,
    Request,
    UrlGenerator,
)


class ObjectPropertyExtractor(Extractor):
    """
    Extracts the public instance attributes of an object, in definition order.
    """

    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        return OrderedDict((k, v) for k, v in vars(instance).items() if not k.startswith("_"))


class DataclassExtractor(Extractor):
    """
    Extracts the fields of a dataclass instance without recursing into
    field values, unlike :py:func:`dataclasses.asdict`.
    """

    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        if not dataclasses.is_dataclass(instance) or isinstance(instance, type):
            raise TypeError(f"{instance!r} is not a dataclass instance")
        return OrderedDict(
            (field.name, getattr(instance, field.name)) for field in dataclasses.fields(instance)
        )


class DefaultExtractorRegistryImpl(ExtractorRegistry):
    extractors: typing.Dict[str, Extractor]

    def has(self, name: str) -> bool:
        return name in self.extractors

    def get(self, name: str) -> Extractor:
        try:
            return self.extractors[name]
        except KeyError:
            raise ExtractorNotFoundError(name)

    def add(self, name: str, extractor: Extractor) -> None:
        self.extractors[name] = extractor

    def __init__(self, extractors: typing.Optional[typing.Mapping[str, Extractor]] = None):
        self.extractors = {
            "object_property": ObjectPropertyExtractor(),
            "dataclass": DataclassExtractor(),
        }
        if extractors is not None:
            self.extractors.update(extractors)


class SimpleRequest(Request):
    _query_params: typing.Mapping[str, typing.Any]
    _route_params: typing.Mapping[str, typing.Any]
    _base_url: typing.Optional[str]

    @property
    def query_params(self) -> typing.Mapping[str, typing.Any]:
        return self._query_params

    @property
    def route_params(self) -> typing.Mapping[str, typing.Any]:
        return self._route_params

    @property
    def base_url(self) -> typing.Optional[str]:
        return self._base_url

    def __init__(
        self,
        query_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        route_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        base_url: typing.Optional[str] = None,
    ):
        self._query_params = dict(query_params) if query_params is not None else {}
        self._route_params = dict(route_params) if route_params is not None else {}
        self._base_url = base_url


placeholder_regex = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class TemplateUrlGeneratorImpl(UrlGenerator):
    """
    Generates URIs out of path templates such as ``/api/user/{id}``, keyed by route name.
    Placeholders with no corresponding route parameter are left untouched.
    """

    routes: typing.Dict[str, str]

    def generate(
        self,
        request: Request,
        route_name: str,
        route_params: typing.Mapping[str, typing.Any],
        query_params: typing.Mapping[str, typing.Any],
    ) -> str:
        try:
            template = self.routes[route_name]
        except KeyError:
            raise UnknownRouteError(route_name)

        def _(m: re.Match) -> str:
            name = m.group(1)
            if name not in route_params:
                return m.group(0)
            return quote(str(route_params[name]), safe="")

        url = placeholder_regex.sub(_, template)
        base_url = request.base_url
        if base_url:
            url = base_url.rstrip("/") + url
        if query_params:
            url += "?" + urlencode(list(query_params.items()), doseq=True)
        return url

    def __init__(self, routes: typing.Mapping[str, str]):
        self.routes = dict(routes)


class DefaultLinkGeneratorImpl(LinkGenerator):
    url_generator: UrlGenerator

    def from_url(self, rel: str, url: str) -> LinkRepr:
        return LinkRepr(rel, url)

    def from_route(
        self,
        rel: str,
        request: Request,
        route_name: str,
        route_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        query_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> LinkRepr:
        return LinkRepr(
            rel,
            self.url_generator.generate(
                request,
                route_name,
                route_params if route_params is not None else {},
                query_params if query_params is not None else {},
            ),
        )

    def __init__(self, url_generator: UrlGenerator):
        self.url_generator = url_generator


class Paginator(PaginatedCollection):
    """
    A :py:class:`PaginatedCollection` over an in-memory sequence.
    """

    items: typing.Sequence[typing.Any]
    _item_count_per_page: int

    @property
    def total_item_count(self) -> int:
        return len(self.items)

    @property
    def item_count_per_page(self) -> int:
        return self._item_count_per_page

    def get_page_items(self, page: int) -> typing.Sequence[typing.Any]:
        offset = (page - 1) * self._item_count_per_page
        return self.items[offset : offset + self._item_count_per_page]

    def __iter__(self) -> typing.Iterator[typing.Any]:
        return iter(self.items)

    def __init__(self, items: typing.Iterable[typing.Any], item_count_per_page: int = 10):
        if item_count_per_page < 1:
            raise ValueError("item_count_per_page must be a positive integer")
        self.items = list(items)
        self._item_count_per_page = item_count_per_page
