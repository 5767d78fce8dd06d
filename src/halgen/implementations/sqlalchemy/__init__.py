from .core import SQLAExtractor  # noqa
from .querying import QueryPaginator  # noqa
