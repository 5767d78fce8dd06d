"""
Builds a :py:class:`MetadataMap` and a :py:class:`ResourceGenerator` out of
plain configuration mappings such as ones loaded from a settings file::

    config = {
        "metadata_map": [
            {
                "__class__": "RouteBasedResourceMetadata",
                "resource_class": "myapp.models.User",
                "route": "user",
                "extractor": "object_property",
            },
        ],
    }
    generator = build_resource_generator(config, extractors, link_generator)
"""
import abc
import collections.abc
import logging
import typing

from .exceptions import InvalidConfigurationError, InvalidMetadataKindError
from .generator import ResourceGenerator
from .interfaces import ExtractorRegistry, LinkGenerator
from .metadata import (
    AbstractMetadata,
    MetadataMap,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedCollectionMetadata,
    UrlBasedResourceMetadata,
)
from .utils import import_string

logger = logging.getLogger(__name__)

MetadataType = typing.Type[AbstractMetadata]
ConfigEntry = typing.Mapping[str, typing.Any]

CLASS_KEY = "__class__"


def resolve_class(value: typing.Any) -> type:
    if isinstance(value, type):
        return value
    if isinstance(value, str):
        resolved = import_string(value)
        if isinstance(resolved, type):
            return resolved
    raise TypeError(f"{value!r} does not designate a class")


class MetadataFactory(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def __call__(self, metadata_type: MetadataType, entry: ConfigEntry) -> AbstractMetadata:
        """
        Creates a metadata object of ``metadata_type`` from a configuration entry.

        :raises InvalidConfigurationError: if the entry lacks a required key,
                                           or has a malformed value.
        """
        ...  # pragma: nocover


class KeywordMetadataFactory(MetadataFactory):
    """
    Creates metadata by passing configuration keys as keyword arguments.  The
    key naming the described class is resolved and passed as ``class_``.
    """

    class_key: str
    required_keys: typing.Sequence[str]
    optional_keys: typing.Sequence[str]

    def __call__(self, metadata_type: MetadataType, entry: ConfigEntry) -> AbstractMetadata:
        name = metadata_type.__name__
        for key in (self.class_key, *self.required_keys):
            if key not in entry:
                raise InvalidConfigurationError(
                    f"{name} configuration is missing required key {key!r}"
                )
        known_keys = {CLASS_KEY, self.class_key, *self.required_keys, *self.optional_keys}
        unknown_keys = set(entry) - known_keys
        if unknown_keys:
            raise InvalidConfigurationError(
                f"{name} configuration has unknown key(s) {', '.join(sorted(unknown_keys))}"
            )

        try:
            class_ = resolve_class(entry[self.class_key])
        except (ImportError, AttributeError, TypeError) as e:
            raise InvalidConfigurationError(
                f"{name} configuration has an invalid {self.class_key!r}: {entry[self.class_key]!r}"
            ) from e

        kwargs = {
            key: entry[key]
            for key in (*self.required_keys, *self.optional_keys)
            if key in entry
        }
        try:
            return metadata_type(class_, **kwargs)  # type: ignore
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationError(f"{name} configuration is invalid: {e}") from e

    def __init__(
        self,
        class_key: str,
        required_keys: typing.Sequence[str],
        optional_keys: typing.Sequence[str] = (),
    ):
        self.class_key = class_key
        self.required_keys = required_keys
        self.optional_keys = optional_keys


def default_factories() -> typing.Dict[MetadataType, MetadataFactory]:
    return {
        RouteBasedResourceMetadata: KeywordMetadataFactory(
            "resource_class",
            ("route", "extractor"),
            (
                "resource_identifier",
                "route_identifier_placeholder",
                "route_params",
                "identifiers_to_placeholders_mapping",
                "max_depth",
            ),
        ),
        UrlBasedResourceMetadata: KeywordMetadataFactory(
            "resource_class",
            ("url", "extractor"),
            ("max_depth",),
        ),
        RouteBasedCollectionMetadata: KeywordMetadataFactory(
            "collection_class",
            ("collection_relation", "route"),
            (
                "pagination_param",
                "pagination_param_type",
                "route_params",
                "query_string_arguments",
            ),
        ),
        UrlBasedCollectionMetadata: KeywordMetadataFactory(
            "collection_class",
            ("collection_relation", "url"),
            ("pagination_param", "pagination_param_type"),
        ),
    }


class MetadataMapBuilder:
    factories: typing.Dict[MetadataType, MetadataFactory]

    def add_factory(
        self, metadata_type: typing.Union[MetadataType, str], factory: MetadataFactory
    ) -> None:
        self.factories[self.resolve_metadata_type(metadata_type)] = factory

    def resolve_metadata_type(self, value: typing.Any) -> MetadataType:
        """
        Resolves a metadata kind given either as a class, as the name of a
        kind a factory is registered for, or as a dotted path.

        :raises InvalidMetadataKindError: if ``value`` designates no metadata class.
        """
        if isinstance(value, str):
            for metadata_type in self.factories:
                if metadata_type.__name__ == value:
                    return metadata_type
            try:
                resolved = import_string(value)
            except (ImportError, AttributeError) as e:
                raise InvalidMetadataKindError(value) from e
        else:
            resolved = value
        if not (isinstance(resolved, type) and issubclass(resolved, AbstractMetadata)):
            raise InvalidMetadataKindError(value)
        return resolved

    def build_metadata(self, entry: ConfigEntry) -> AbstractMetadata:
        if not isinstance(entry, collections.abc.Mapping):
            raise InvalidConfigurationError(f"metadata entry {entry!r} is not a mapping")
        if CLASS_KEY not in entry:
            raise InvalidConfigurationError(
                f"metadata entry is missing required key {CLASS_KEY!r}"
            )
        metadata_type = self.resolve_metadata_type(entry[CLASS_KEY])
        try:
            factory = self.factories[metadata_type]
        except KeyError:
            raise InvalidConfigurationError(
                f"no factory is registered for metadata of type {metadata_type.__name__}"
            )
        return factory(metadata_type, entry)

    def __call__(self, config: typing.Iterable[ConfigEntry]) -> MetadataMap:
        if isinstance(config, (str, bytes, collections.abc.Mapping)):
            raise InvalidConfigurationError("metadata map configuration must be a list of entries")
        metadata_map = MetadataMap()
        for entry in config:
            metadata = self.build_metadata(entry)
            logger.debug("configured %r", metadata)
            metadata_map.add(metadata)
        return metadata_map

    def __init__(
        self,
        factories: typing.Optional[
            typing.Mapping[typing.Union[MetadataType, str], MetadataFactory]
        ] = None,
    ):
        self.factories = default_factories()
        if factories is not None:
            for metadata_type, factory in factories.items():
                self.add_factory(metadata_type, factory)


def build_resource_generator(
    config: typing.Mapping[str, typing.Any],
    extractors: ExtractorRegistry,
    link_generator: LinkGenerator,
    metadata_map_builder: typing.Optional[MetadataMapBuilder] = None,
) -> ResourceGenerator:
    """
    Builds a :py:class:`ResourceGenerator` out of ``config``.  The metadata map is
    read from the ``"metadata_map"`` key, and additional strategies keyed by
    metadata kind from the ``"strategies"`` key.  Both may be omitted.
    """
    if metadata_map_builder is None:
        metadata_map_builder = MetadataMapBuilder()
    metadata_map = metadata_map_builder(config.get("metadata_map", ()))
    generator = ResourceGenerator(metadata_map, extractors, link_generator)
    strategies = config.get("strategies", {})
    if not isinstance(strategies, collections.abc.Mapping):
        raise InvalidConfigurationError("strategies configuration must be a mapping")
    for metadata_type, strategy in strategies.items():
        generator.add_strategy(metadata_map_builder.resolve_metadata_type(metadata_type), strategy)
    return generator
