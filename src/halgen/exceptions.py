import abc
import typing


def _type_name(value: typing.Any) -> str:
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    return repr(value)


class HALGeneratorException(Exception, metaclass=abc.ABCMeta):
    status: typing.ClassVar[int] = 500
    """
    Advisory HTTP status for callers translating the error into a response.
    """

    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class UnknownTypeError(HALGeneratorException):
    class_: typing.Any

    @property
    def message(self):
        return f"unable to retrieve metadata for {_type_name(self.class_)}; not in metadata map"

    def __init__(self, class_: typing.Any):
        self.class_ = class_


class ObjectNotInMetadataMapError(HALGeneratorException):
    class_: type

    @property
    def message(self):
        return (
            f"cannot generate resource for object of type {_type_name(self.class_)}; "
            "not in metadata map"
        )

    def __init__(self, class_: type):
        self.class_ = class_


class StrategyNotFoundError(HALGeneratorException):
    metadata_type: type

    @property
    def message(self):
        return (
            "unable to generate resource; no strategy available for "
            f"{_type_name(self.metadata_type)} metadata"
        )

    def __init__(self, metadata_type: type):
        self.metadata_type = metadata_type


class InvalidMetadataKindError(HALGeneratorException):
    metadata_type: typing.Any

    @property
    def message(self):
        from .metadata import AbstractMetadata

        return (
            f"metadata class {_type_name(self.metadata_type)} does not exist, "
            f"or does not extend {_type_name(AbstractMetadata)}"
        )

    def __init__(self, metadata_type: typing.Any):
        self.metadata_type = metadata_type


class InvalidStrategyError(HALGeneratorException):
    strategy: typing.Any

    @property
    def message(self):
        from .interfaces import Strategy

        return (
            f"strategy {_type_name(self.strategy)} does not exist, "
            f"or does not implement {_type_name(Strategy)}"
        )

    def __init__(self, strategy: typing.Any):
        self.strategy = strategy


class UnexpectedDescriptorKindError(HALGeneratorException):
    actual: type
    expected: type

    @property
    def message(self):
        return (
            f"Unexpected metadata of type {_type_name(self.actual)}; "
            f"was expecting {_type_name(self.expected)}"
        )

    def __init__(self, actual: type, expected: type):
        self.actual = actual
        self.expected = expected


class NotTraversableError(HALGeneratorException):
    class_: type

    @property
    def message(self):
        return f"{_type_name(self.class_)} instance is not iterable; cannot generate collection"

    def __init__(self, class_: type):
        self.class_ = class_


class PageOutOfBoundsError(HALGeneratorException):
    status = 400
    page: typing.Any
    page_count: int

    @property
    def message(self):
        return (
            f"Page {self.page} is out of bounds. "
            f"Collection has {self.page_count} page{'' if self.page_count == 1 else 's'}."
        )

    def __init__(self, page: typing.Any, page_count: int):
        self.page = page
        self.page_count = page_count


class ExtractorNotFoundError(HALGeneratorException):
    name: str

    @property
    def message(self):
        return f'no extractor registered as "{self.name}"'

    def __init__(self, name: str):
        self.name = name


class UnknownRouteError(HALGeneratorException):
    name: str

    @property
    def message(self):
        return f'no route known as "{self.name}"'

    def __init__(self, name: str):
        self.name = name


class InvalidConfigurationError(HALGeneratorException):
    _message: str

    @property
    def message(self):
        return self._message

    def __init__(self, message: str):
        self._message = message
