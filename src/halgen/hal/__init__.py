from .builders import ResourceReprBuilder  # noqa
from .models import LinkRepr, ResourceRepr, is_templated  # noqa
