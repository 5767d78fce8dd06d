import logging
import types
import typing

from .exceptions import (
    InvalidMetadataKindError,
    InvalidStrategyError,
    ObjectNotInMetadataMapError,
    StrategyNotFoundError,
)
from .hal.builders import ResourceReprBuilder
from .hal.models import LinkRepr, ResourceRepr
from .interfaces import ExtractorRegistry, LinkGenerator, Request, Strategy
from .metadata import AbstractMetadata, MetadataMap
from .utils import import_string

logger = logging.getLogger(__name__)

MetadataType = typing.Type[AbstractMetadata]


class ResourceGenerator:
    """
    A :py:class:`ResourceGenerator` turns objects into :py:class:`ResourceRepr`
    according to the metadata registered for their classes, delegating the
    actual rendering to the strategy registered for the kind of the metadata.

    :param MetadataMap metadata_map: The metadata map.
    :param ExtractorRegistry extractors: The registry strategies look extractors up in.
    :param LinkGenerator link_generator: The link generator strategies make links with.
    :param Optional[Mapping] strategies: Strategies keyed by metadata kind.  Defaults to
                                         the strategies for the built-in kinds.
    """

    metadata_map: MetadataMap
    extractors: ExtractorRegistry
    link_generator: LinkGenerator
    _strategies: typing.Dict[MetadataType, Strategy]

    @property
    def strategies(self) -> typing.Mapping[MetadataType, Strategy]:
        return types.MappingProxyType(self._strategies)

    def add_strategy(
        self,
        metadata_type: typing.Union[MetadataType, str],
        strategy: typing.Union[Strategy, typing.Type[Strategy], str],
    ) -> None:
        """
        Registers ``strategy`` for metadata of exactly the class ``metadata_type``,
        replacing any strategy registered for it.  Either argument may be given as
        a dotted import path.

        :raises InvalidMetadataKindError: if ``metadata_type`` is not a metadata class.
        :raises InvalidStrategyError: if ``strategy`` is not a strategy.
        """
        resolved_metadata_type: typing.Any = metadata_type
        if isinstance(metadata_type, str):
            try:
                resolved_metadata_type = import_string(metadata_type)
            except (ImportError, AttributeError) as e:
                raise InvalidMetadataKindError(metadata_type) from e
        if not (
            isinstance(resolved_metadata_type, type)
            and issubclass(resolved_metadata_type, AbstractMetadata)
        ):
            raise InvalidMetadataKindError(metadata_type)

        resolved_strategy: typing.Any = strategy
        if isinstance(strategy, str):
            try:
                resolved_strategy = import_string(strategy)
            except (ImportError, AttributeError) as e:
                raise InvalidStrategyError(strategy) from e
        if isinstance(resolved_strategy, type) and issubclass(resolved_strategy, Strategy):
            try:
                resolved_strategy = resolved_strategy()
            except TypeError as e:
                raise InvalidStrategyError(strategy) from e
        if not isinstance(resolved_strategy, Strategy):
            raise InvalidStrategyError(strategy)

        logger.debug("registering %r for %r", resolved_strategy, resolved_metadata_type)
        self._strategies[resolved_metadata_type] = resolved_strategy

    def resolve_metadata(self, class_: type) -> typing.Optional[AbstractMetadata]:
        """
        Returns the metadata registered for ``class_`` or, failing that, for the nearest
        of its ancestors in method resolution order.  Returns None if there is none.
        """
        for candidate in class_.__mro__:
            if self.metadata_map.has(candidate):
                if candidate is not class_:
                    logger.debug("using metadata of %r for %r", candidate, class_)
                return self.metadata_map.get(candidate)
        return None

    def from_array(self, data: typing.Mapping[str, typing.Any], uri: str) -> ResourceRepr:
        """
        Creates a resource whose elements are ``data`` and whose only link is ``self``.
        """
        builder = ResourceReprBuilder()
        builder.add_elements(data)
        builder.add_link(LinkRepr("self", uri))
        return builder()

    def from_object(self, instance: typing.Any, request: Request, depth: int = 0) -> ResourceRepr:
        """
        Creates a resource from ``instance``.

        :param Any instance: The object to render.
        :param Request request: The current request.
        :param int depth: The nesting level; strategies pass ``depth + 1`` when embedding.
        :raises ObjectNotInMetadataMapError: if no metadata describes the instance's class.
        :raises StrategyNotFoundError: if no strategy handles the kind of the metadata.
        """
        metadata = self.resolve_metadata(type(instance))
        if metadata is None:
            raise ObjectNotInMetadataMapError(type(instance))

        strategy = self._strategies.get(type(metadata))
        if strategy is None:
            raise StrategyNotFoundError(type(metadata))

        return strategy.create_resource(instance, metadata, self, request, depth)

    def __init__(
        self,
        metadata_map: MetadataMap,
        extractors: ExtractorRegistry,
        link_generator: LinkGenerator,
        strategies: typing.Optional[
            typing.Mapping[
                typing.Union[MetadataType, str],
                typing.Union[Strategy, typing.Type[Strategy], str],
            ]
        ] = None,
    ):
        self.metadata_map = metadata_map
        self.extractors = extractors
        self.link_generator = link_generator
        self._strategies = {}
        if strategies is None:
            from .strategies import default_strategies

            strategies = default_strategies()
        for metadata_type, strategy in strategies.items():
            self.add_strategy(metadata_type, strategy)
