import dataclasses
import typing

from ..defaults import (
    DefaultExtractorRegistryImpl,
    DefaultLinkGeneratorImpl,
    Paginator,
    TemplateUrlGeneratorImpl,
)
from ..generator import ResourceGenerator
from ..metadata import AbstractMetadata, MetadataMap

ROUTES = {
    "foo-bar": "/api/foo-bar/{id}",
    "foo-bars": "/api/foo-bar",
    "foo-bars-paged": "/api/foo-bar/page/{page}",
    "child": "/api/child/{id}",
    "parent": "/api/parent/{id}",
    "node": "/api/node/{id}",
}


class FooBar:
    def __init__(self, id: typing.Any, foo: typing.Any = None, bar: typing.Any = None):
        self.id = id
        self.foo = foo
        self.bar = bar


class InheritFooBar(FooBar):
    pass


class InheritedClass(InheritFooBar):
    pass


class FooBarCollection(Paginator):
    pass


class NotAnIterable:
    pass


@dataclasses.dataclass
class Child:
    id: int
    message: str


class ChildCollection(Paginator):
    pass


@dataclasses.dataclass
class Parent:
    id: int
    name: str
    child: typing.Optional[Child] = None
    children: typing.Optional[ChildCollection] = None


@dataclasses.dataclass
class Node:
    id: int
    next: typing.Optional["Node"] = None


def make_foo_bars(n: int) -> typing.List[FooBar]:
    return [FooBar(i, foo=f"foo{i}", bar=f"bar{i}") for i in range(1, n + 1)]


def make_generator(
    metadata: typing.Iterable[AbstractMetadata],
    link_generator: typing.Optional[typing.Any] = None,
    **kwargs,
) -> ResourceGenerator:
    if link_generator is None:
        link_generator = DefaultLinkGeneratorImpl(TemplateUrlGeneratorImpl(ROUTES))
    return ResourceGenerator(
        MetadataMap(metadata),
        DefaultExtractorRegistryImpl(),
        link_generator,
        **kwargs,
    )
