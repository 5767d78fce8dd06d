import typing
from collections import OrderedDict

from sqlalchemy import orm  # type: ignore

from ...interfaces import Extractor


class SQLAExtractor(Extractor):
    """
    Extracts the mapped attributes of a SQLAlchemy-mapped instance in the order
    the mapper declares them.  Relationship attributes are extracted only when
    ``include_relationships`` is set, so that related objects can be embedded.

    :param bool include_relationships: Whether to extract relationship attributes.
    """

    include_relationships: bool

    def extract_properties(
        self, sa_mapper: orm.Mapper
    ) -> typing.Iterable[orm.interfaces.MapperProperty]:
        for prop in sa_mapper.iterate_properties:
            if isinstance(prop, orm.ColumnProperty):
                yield prop
            elif isinstance(prop, orm.RelationshipProperty) and self.include_relationships:
                yield prop

    def extract(self, instance: typing.Any) -> typing.Mapping[str, typing.Any]:
        sa_mapper = orm.object_mapper(instance)
        return OrderedDict(
            (prop.key, getattr(instance, prop.key)) for prop in self.extract_properties(sa_mapper)
        )

    def __init__(self, include_relationships: bool = False):
        self.include_relationships = include_relationships
