from .core import StarletteRequest, StarletteUrlGenerator  # noqa
from .errors import hal_exception_handler, register_exception_handlers  # noqa
