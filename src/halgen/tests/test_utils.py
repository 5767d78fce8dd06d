import pytest

from ..metadata import MetadataMap, PaginationParamType
from ..utils import import_string


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("halgen.metadata.MetadataMap", MetadataMap),
        ("halgen.metadata:MetadataMap", MetadataMap),
        ("halgen.metadata:PaginationParamType.QUERY", PaginationParamType.QUERY),
    ],
)
def test_import_string(path, expected):
    assert import_string(path) is expected


def test_import_string_failures():
    with pytest.raises(ImportError):
        import_string("halgen.nonexistent.Foo")
    with pytest.raises(ImportError):
        import_string("MetadataMap")
    with pytest.raises(AttributeError):
        import_string("halgen.metadata.Nonexistent")
