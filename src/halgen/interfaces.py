"""
This package contains a series of interface definitions that need to be
implemented by the collaborators of :py:class:`halgen.generator.ResourceGenerator`,
either by :py:mod:`halgen.defaults` or by a framework-dependent implementation.

"""
import abc
import typing

from .hal.models import LinkRepr, ResourceRepr
from .metadata import AbstractMetadata

if typing.TYPE_CHECKING:
    from .generator import ResourceGenerator  # noqa: F401


class Request(metaclass=abc.ABCMeta):
    """
    A :py:class:`Request` is the view of the current HTTP request a generator needs.
    """

    @property
    @abc.abstractmethod
    def query_params(self) -> typing.Mapping[str, typing.Any]:
        """
        Returns the query string arguments of the request.
        """
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def route_params(self) -> typing.Mapping[str, typing.Any]:
        """
        Returns the parameters matched by the route placeholders.
        """
        ...  # pragma: nocover

    @property
    def base_url(self) -> typing.Optional[str]:
        """
        Returns the URL generated links are made absolute against, if any.
        """
        return None


class Extractor(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        """
        Flattens ``instance`` into an ordered mapping of field names to values.

        :param Any instance: The object to extract.
        :return: The extracted fields.
        """
        ...  # pragma: nocover


class ExtractorRegistry(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def has(self, name: str) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get(self, name: str) -> Extractor:
        """
        Returns the extractor registered as ``name``.

        :raises ExtractorNotFoundError: if there is no such extractor.
        """
        ...  # pragma: nocover


class UrlGenerator(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def generate(
        self,
        request: Request,
        route_name: str,
        route_params: typing.Mapping[str, typing.Any],
        query_params: typing.Mapping[str, typing.Any],
    ) -> str:
        """
        Generates a URI for the route named ``route_name``.

        :param Request request: The current request.
        :param str route_name: The route name.
        :param Mapping[str, Any] route_params: Values for the route placeholders.
        :param Mapping[str, Any] query_params: Query string arguments to append.
        :return: An absolute or relative URI.
        """
        ...  # pragma: nocover


class LinkGenerator(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def from_url(self, rel: str, url: str) -> LinkRepr:
        ...  # pragma: nocover

    @abc.abstractmethod
    def from_route(
        self,
        rel: str,
        request: Request,
        route_name: str,
        route_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        query_params: typing.Optional[typing.Mapping[str, typing.Any]] = None,
    ) -> LinkRepr:
        ...  # pragma: nocover


class PaginatedCollection(metaclass=abc.ABCMeta):
    """
    A :py:class:`PaginatedCollection` is a collection that knows how to split itself
    into pages.  Any other iterable is treated as a collection of a single page.
    """

    @property
    @abc.abstractmethod
    def total_item_count(self) -> int:
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def item_count_per_page(self) -> int:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get_page_items(self, page: int) -> typing.Iterable[typing.Any]:
        """
        Returns the items that belong to the 1-based ``page``.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def __iter__(self) -> typing.Iterator[typing.Any]:
        ...  # pragma: nocover


class Strategy(metaclass=abc.ABCMeta):
    """
    A :py:class:`Strategy` renders an instance described by a specific kind of metadata.
    """

    @abc.abstractmethod
    def create_resource(
        self,
        instance: typing.Any,
        metadata: AbstractMetadata,
        generator: "ResourceGenerator",
        request: Request,
        depth: int = 0,
    ) -> ResourceRepr:
        """
        Creates a resource from ``instance``.

        :param Any instance: The object to render.
        :param AbstractMetadata metadata: The metadata resolved for the instance.
        :param ResourceGenerator generator: The generator, for rendering nested objects.
        :param Request request: The current request.
        :param int depth: The nesting level; 0 for a top-level call.
        :raises UnexpectedDescriptorKindError: if the strategy does not handle the kind of ``metadata``.
        """
        ...  # pragma: nocover
