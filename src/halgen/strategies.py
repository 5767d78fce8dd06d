"""
Built-in strategies, one per built-in kind of metadata.

Resource strategies render a single object; collection strategies render an
iterable, one page at a time, embedding a resource for every item of the
page under the collection relation.
"""
import abc
import collections.abc
import datetime
import decimal
import typing
import uuid
from collections import OrderedDict
from urllib.parse import unquote_plus, urlencode, urlsplit, urlunsplit

from .exceptions import NotTraversableError, PageOutOfBoundsError, UnexpectedDescriptorKindError
from .hal.builders import ResourceReprBuilder
from .hal.models import LinkRepr, ResourceRepr
from .interfaces import PaginatedCollection, Request, Strategy
from .metadata import (
    AbstractCollectionMetadata,
    AbstractMetadata,
    AbstractResourceMetadata,
    PaginationParamType,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedCollectionMetadata,
    UrlBasedResourceMetadata,
)

if typing.TYPE_CHECKING:
    from .generator import ResourceGenerator  # noqa: F401

SCALAR_TYPES: typing.Tuple[type, ...] = (str, int, float, decimal.Decimal, uuid.UUID)
"""
Types of the values that may be passed as route parameters.  ``bool`` is
covered by ``int``; ``None`` is not a scalar.
"""

_NON_EMBEDDABLE_TYPES: typing.Tuple[type, ...] = SCALAR_TYPES + (
    bytes,
    datetime.date,
    datetime.time,
    datetime.timedelta,
)


def is_scalar(value: typing.Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


class StrategyBase(Strategy, metaclass=abc.ABCMeta):
    expected_metadata_type: typing.ClassVar[typing.Type[AbstractMetadata]]

    def validate_metadata(self, metadata: AbstractMetadata) -> None:
        if not isinstance(metadata, self.expected_metadata_type):
            raise UnexpectedDescriptorKindError(type(metadata), self.expected_metadata_type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ResourceStrategyBase(StrategyBase, metaclass=abc.ABCMeta):
    def extract_instance(
        self,
        builder: ResourceReprBuilder,
        instance: typing.Any,
        metadata: AbstractResourceMetadata,
        generator: "ResourceGenerator",
        request: Request,
        depth: int,
    ) -> typing.Mapping[str, typing.Any]:
        """
        Extracts ``instance`` into ``builder``.  Field values that are themselves
        described in the metadata map are embedded instead of being added as
        elements, until the metadata's maximum depth is reached.  Nested
        collections are always rendered from their first page.

        :return: The fields added as elements.
        """
        data: typing.MutableMapping[str, typing.Any] = OrderedDict(
            generator.extractors.get(metadata.extractor).extract(instance)
        )
        if not metadata.has_reached_max_depth(depth):
            for key, value in list(data.items()):
                if value is None or isinstance(value, _NON_EMBEDDABLE_TYPES):
                    continue
                child_metadata = generator.resolve_metadata(type(value))
                if child_metadata is None:
                    continue
                child = generator.from_object(value, request, depth + 1)
                if isinstance(child_metadata, AbstractCollectionMetadata):
                    # only the items of a nested collection are kept
                    builder.embed(
                        key,
                        child.embedded.get(child_metadata.collection_relation, ()),
                        force_collection=True,
                    )
                else:
                    builder.embed(key, child)
                del data[key]
        builder.add_elements(data)
        return data

    @abc.abstractmethod
    def generate_self_link(
        self,
        data: typing.Mapping[str, typing.Any],
        metadata: AbstractResourceMetadata,
        generator: "ResourceGenerator",
        request: Request,
    ) -> LinkRepr:
        ...  # pragma: nocover

    def create_resource(
        self,
        instance: typing.Any,
        metadata: AbstractMetadata,
        generator: "ResourceGenerator",
        request: Request,
        depth: int = 0,
    ) -> ResourceRepr:
        self.validate_metadata(metadata)
        assert isinstance(metadata, AbstractResourceMetadata)
        builder = ResourceReprBuilder()
        data = self.extract_instance(builder, instance, metadata, generator, request, depth)
        builder.add_link(self.generate_self_link(data, metadata, generator, request))
        return builder()


class UrlBasedResourceStrategy(ResourceStrategyBase):
    expected_metadata_type = UrlBasedResourceMetadata

    def generate_self_link(
        self,
        data: typing.Mapping[str, typing.Any],
        metadata: AbstractResourceMetadata,
        generator: "ResourceGenerator",
        request: Request,
    ) -> LinkRepr:
        assert isinstance(metadata, UrlBasedResourceMetadata)
        return generator.link_generator.from_url("self", metadata.url)


class RouteBasedResourceStrategy(ResourceStrategyBase):
    expected_metadata_type = RouteBasedResourceMetadata

    def build_route_params(
        self, data: typing.Mapping[str, typing.Any], metadata: RouteBasedResourceMetadata
    ) -> typing.Dict[str, typing.Any]:
        """
        Builds route parameters out of the scalar fields of ``data``, renamed
        through the metadata's placeholder mapping.  The metadata's own route
        parameters take precedence over fields of the same name.
        """
        mapping = metadata.identifiers_to_placeholders_mapping
        route_params: typing.Dict[str, typing.Any] = {}
        for key, value in data.items():
            if is_scalar(value):
                route_params[mapping.get(key, key)] = value
        route_params.update(metadata.route_params)
        return route_params

    def generate_self_link(
        self,
        data: typing.Mapping[str, typing.Any],
        metadata: AbstractResourceMetadata,
        generator: "ResourceGenerator",
        request: Request,
    ) -> LinkRepr:
        assert isinstance(metadata, RouteBasedResourceMetadata)
        return generator.link_generator.from_route(
            "self",
            request,
            metadata.route,
            self.build_route_params(data, metadata),
        )


def count_pages(total_item_count: int, item_count_per_page: int) -> int:
    if total_item_count <= 0 or item_count_per_page <= 0:
        return 0
    return -(-total_item_count // item_count_per_page)


def _cast_page(value: typing.Any) -> typing.Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class CollectionStrategyBase(StrategyBase, metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def generate_link_for_page(
        self,
        rel: str,
        page: int,
        metadata: AbstractCollectionMetadata,
        generator: "ResourceGenerator",
        request: Request,
    ) -> LinkRepr:
        ...  # pragma: nocover

    def get_requested_page(
        self, metadata: AbstractCollectionMetadata, request: Request
    ) -> typing.Any:
        if metadata.pagination_param_type is PaginationParamType.PLACEHOLDER:
            params = request.route_params
        else:
            params = request.query_params
        return params.get(metadata.pagination_param, 1)

    def extract_collection(
        self,
        instance: typing.Iterable[typing.Any],
        metadata: AbstractCollectionMetadata,
        generator: "ResourceGenerator",
        request: Request,
        depth: int,
    ) -> ResourceRepr:
        items: typing.Iterable[typing.Any]
        if isinstance(instance, PaginatedCollection):
            total_item_count = int(instance.total_item_count)
            item_count_per_page = int(instance.item_count_per_page)
        else:
            items = list(instance)
            total_item_count = item_count_per_page = len(items)

        page_count = count_pages(total_item_count, item_count_per_page)

        requested: typing.Any
        if depth > 0:
            # the requested page addresses the outermost collection only
            requested = 1
        else:
            requested = self.get_requested_page(metadata, request)
        page = _cast_page(requested)
        if page_count == 0:
            # an empty collection consists of a single empty page
            page = 1
        elif page is None:
            raise PageOutOfBoundsError(requested, page_count)
        elif page < 1 or page > page_count:
            raise PageOutOfBoundsError(page, page_count)

        if isinstance(instance, PaginatedCollection):
            items = instance.get_page_items(page) if page_count > 0 else ()

        builder = ResourceReprBuilder()
        builder.add_link(self.generate_link_for_page("self", page, metadata, generator, request))
        if page_count > 0:
            builder.add_link(self.generate_link_for_page("first", 1, metadata, generator, request))
            if page > 1:
                builder.add_link(
                    self.generate_link_for_page("prev", page - 1, metadata, generator, request)
                )
            if page < page_count:
                builder.add_link(
                    self.generate_link_for_page("next", page + 1, metadata, generator, request)
                )
            builder.add_link(
                self.generate_link_for_page("last", page_count, metadata, generator, request)
            )

        builder.embed(
            metadata.collection_relation,
            [generator.from_object(item, request, depth + 1) for item in items],
            force_collection=True,
        )
        builder.add_element("_total_items", total_item_count)
        builder.add_element("_page", page)
        builder.add_element("_page_count", page_count)
        return builder()

    def create_resource(
        self,
        instance: typing.Any,
        metadata: AbstractMetadata,
        generator: "ResourceGenerator",
        request: Request,
        depth: int = 0,
    ) -> ResourceRepr:
        self.validate_metadata(metadata)
        assert isinstance(metadata, AbstractCollectionMetadata)
        if not isinstance(instance, collections.abc.Iterable):
            raise NotTraversableError(type(instance))
        return self.extract_collection(instance, metadata, generator, request, depth)


class RouteBasedCollectionStrategy(CollectionStrategyBase):
    expected_metadata_type = RouteBasedCollectionMetadata

    def generate_link_for_page(
        self,
        rel: str,
        page: int,
        metadata: AbstractCollectionMetadata,
        generator: "ResourceGenerator",
        request: Request,
    ) -> LinkRepr:
        assert isinstance(metadata, RouteBasedCollectionMetadata)
        route_params = dict(metadata.route_params)
        query_params = dict(request.query_params)
        query_params.update(metadata.query_string_arguments)
        if metadata.pagination_param_type is PaginationParamType.PLACEHOLDER:
            route_params[metadata.pagination_param] = page
        else:
            query_params[metadata.pagination_param] = page
        return generator.link_generator.from_route(
            rel, request, metadata.route, route_params, query_params
        )


class UrlBasedCollectionStrategy(CollectionStrategyBase):
    expected_metadata_type = UrlBasedCollectionMetadata

    def generate_link_for_page(
        self,
        rel: str,
        page: int,
        metadata: AbstractCollectionMetadata,
        generator: "ResourceGenerator",
        request: Request,
    ) -> LinkRepr:
        assert isinstance(metadata, UrlBasedCollectionMetadata)
        if metadata.pagination_param_type is PaginationParamType.PLACEHOLDER:
            url = metadata.url.replace(f"{{{metadata.pagination_param}}}", str(page))
        else:
            scheme, netloc, path, query, _ = urlsplit(metadata.url)
            # the other pairs are kept verbatim so placeholders stay intact
            pairs = [
                pair
                for pair in query.split("&")
                if pair and unquote_plus(pair.split("=", 1)[0]) != metadata.pagination_param
            ]
            pairs.append(urlencode({metadata.pagination_param: page}))
            url = urlunsplit((scheme, netloc, path, "&".join(pairs), ""))
        return generator.link_generator.from_url(rel, url)


def default_strategies() -> typing.Dict[typing.Type[AbstractMetadata], Strategy]:
    return {
        RouteBasedResourceMetadata: RouteBasedResourceStrategy(),
        UrlBasedResourceMetadata: UrlBasedResourceStrategy(),
        RouteBasedCollectionMetadata: RouteBasedCollectionStrategy(),
        UrlBasedCollectionMetadata: UrlBasedCollectionStrategy(),
    }
