"""
Metadata describes how instances of a class are turned into HAL resources.

A metadata object is constructed once at configuration time, registered in a
:py:class:`MetadataMap` under the class it describes, and shared read-only
across all generation calls.  The concrete class of a metadata object (its
"kind") selects the strategy that renders it.
"""
import abc
import enum
import logging
import types
import typing

from .exceptions import UnknownTypeError

logger = logging.getLogger(__name__)


def _freeze(
    mapping: typing.Optional[typing.Mapping[str, typing.Any]]
) -> typing.Mapping[str, typing.Any]:
    return types.MappingProxyType(dict(mapping) if mapping is not None else {})


class AbstractMetadata(metaclass=abc.ABCMeta):
    class_: type
    """
    The class this metadata describes.
    """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.class_.__qualname__})"

    def __init__(self, class_: type):
        self.class_ = class_


class AbstractResourceMetadata(AbstractMetadata):
    extractor: str
    """
    The name of the extractor used to flatten an instance into elements.
    """
    max_depth: int
    """
    The deepest nesting level at which nested objects are still embedded.
    """

    def has_reached_max_depth(self, depth: int) -> bool:
        return depth > self.max_depth

    def __init__(self, class_: type, extractor: str, max_depth: int = 10):
        super().__init__(class_)
        self.extractor = extractor
        self.max_depth = max_depth


class RouteBasedResourceMetadata(AbstractResourceMetadata):
    """
    Describes a resource whose ``self`` link is generated from a named route.

    :param type class_: The class described.
    :param str route: The route name.
    :param str extractor: The extractor name.
    :param str resource_identifier: The element holding the identifier of the resource.
    :param Mapping[str, Any] route_params: Route parameters always passed to the route.
    :param Optional[Mapping[str, str]] identifiers_to_placeholders_mapping: Element names to route placeholder names.
    :param str route_identifier_placeholder: The placeholder for the identifier, used when no mapping is given.
    :param int max_depth: See :py:attr:`AbstractResourceMetadata.max_depth`.
    """

    route: str
    resource_identifier: str
    route_identifier_placeholder: str
    route_params: typing.Mapping[str, typing.Any]
    identifiers_to_placeholders_mapping: typing.Mapping[str, str]

    def __init__(
        self,
        class_: type,
        route: str,
        extractor: str,
        resource_identifier: str = "id",
        route_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        identifiers_to_placeholders_mapping: typing.Optional[typing.Mapping[str, str]] = None,
        route_identifier_placeholder: str = "id",
        max_depth: int = 10,
    ):
        super().__init__(class_, extractor, max_depth)
        self.route = route
        self.resource_identifier = resource_identifier
        self.route_identifier_placeholder = route_identifier_placeholder
        self.route_params = _freeze(route_params)
        if identifiers_to_placeholders_mapping is None:
            identifiers_to_placeholders_mapping = {
                resource_identifier: route_identifier_placeholder
            }
        self.identifiers_to_placeholders_mapping = _freeze(identifiers_to_placeholders_mapping)


class UrlBasedResourceMetadata(AbstractResourceMetadata):
    url: str

    def __init__(self, class_: type, url: str, extractor: str, max_depth: int = 10):
        super().__init__(class_, extractor, max_depth)
        self.url = url


class PaginationParamType(enum.Enum):
    QUERY = "query"
    """Indicates the page number travels as a query string argument"""
    PLACEHOLDER = "placeholder"
    """Indicates the page number travels as a route placeholder"""


class AbstractCollectionMetadata(AbstractMetadata):
    collection_relation: str
    """
    The relation the items are embedded under.
    """
    pagination_param: str
    pagination_param_type: PaginationParamType

    def __init__(
        self,
        class_: type,
        collection_relation: str,
        pagination_param: str = "page",
        pagination_param_type: typing.Union[PaginationParamType, str] = PaginationParamType.QUERY,
    ):
        super().__init__(class_)
        self.collection_relation = collection_relation
        self.pagination_param = pagination_param
        self.pagination_param_type = PaginationParamType(pagination_param_type)


class RouteBasedCollectionMetadata(AbstractCollectionMetadata):
    route: str
    route_params: typing.Mapping[str, typing.Any]
    query_string_arguments: typing.Mapping[str, typing.Any]

    def __init__(
        self,
        class_: type,
        collection_relation: str,
        route: str,
        pagination_param: str = "page",
        pagination_param_type: typing.Union[PaginationParamType, str] = PaginationParamType.QUERY,
        route_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        query_string_arguments: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ):
        super().__init__(class_, collection_relation, pagination_param, pagination_param_type)
        self.route = route
        self.route_params = _freeze(route_params)
        self.query_string_arguments = _freeze(query_string_arguments)


class UrlBasedCollectionMetadata(AbstractCollectionMetadata):
    url: str

    def __init__(
        self,
        class_: type,
        collection_relation: str,
        url: str,
        pagination_param: str = "page",
        pagination_param_type: typing.Union[PaginationParamType, str] = PaginationParamType.QUERY,
    ):
        super().__init__(class_, collection_relation, pagination_param, pagination_param_type)
        self.url = url


class MetadataMap:
    """
    A :py:class:`MetadataMap` associates a class with the metadata describing it.
    Lookups are exact; walking up the class hierarchy is up to the caller.
    """

    _map: typing.Dict[type, AbstractMetadata]

    def has(self, class_: type) -> bool:
        return class_ in self._map

    def get(self, class_: type) -> AbstractMetadata:
        """
        :raises UnknownTypeError: if no metadata is registered for ``class_``.
        """
        try:
            return self._map[class_]
        except KeyError:
            raise UnknownTypeError(class_)

    def add(self, metadata: AbstractMetadata) -> None:
        """
        Registers ``metadata`` under the class it describes, replacing any
        metadata already registered for that class.
        """
        if metadata.class_ in self._map:
            logger.debug("replacing metadata for %r with %r", metadata.class_, metadata)
        self._map[metadata.class_] = metadata

    def __contains__(self, class_: typing.Any) -> bool:
        return self.has(class_)

    def __iter__(self) -> typing.Iterator[AbstractMetadata]:
        return iter(self._map.values())

    def __len__(self) -> int:
        return len(self._map)

    def __init__(self, metadata: typing.Iterable[AbstractMetadata] = ()):
        self._map = {}
        for m in metadata:
            self.add(m)
