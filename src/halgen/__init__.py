from .exceptions import HALGeneratorException  # noqa
from .generator import ResourceGenerator  # noqa
from .hal import LinkRepr, ResourceRepr, ResourceReprBuilder  # noqa
from .metadata import (  # noqa
    MetadataMap,
    PaginationParamType,
    RouteBasedCollectionMetadata,
    RouteBasedResourceMetadata,
    UrlBasedCollectionMetadata,
    UrlBasedResourceMetadata,
)
