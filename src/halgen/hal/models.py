"""
Classes in :py:mod:`halgen.hal.models` are in-memory representations of HAL documents.

A :py:class:`ResourceRepr` is what a resource generator hands back to the caller:
a set of elements, a set of links keyed by relation, and a set of embedded
resources keyed by relation.  Encoding it to a wire format is left to the caller.
"""

import dataclasses
import re
import typing
from collections import OrderedDict

_PLACEHOLDER_RE = re.compile(r"\{[^{}]+\}")


def is_templated(href: str) -> bool:
    """
    Returns True if ``href`` contains an unresolved ``{placeholder}``.
    """
    return _PLACEHOLDER_RE.search(href) is not None


@dataclasses.dataclass(frozen=True)
class LinkRepr:
    """
    :py:class:`LinkRepr` represents a single link object of a ``_links`` node.
    """

    rel: str
    href: str
    templated: typing.Optional[bool] = None

    def __post_init__(self):
        if self.templated is None:
            object.__setattr__(self, "templated", is_templated(self.href))


ElementValue = typing.Any
Embeddable = typing.Union["ResourceRepr", typing.Sequence["ResourceRepr"]]


@dataclasses.dataclass(init=False)
class ResourceRepr:
    """
    :py:class:`ResourceRepr` represents a HAL resource object.
    """

    elements: typing.Mapping[str, ElementValue] = dataclasses.field(default_factory=OrderedDict)
    links: typing.Mapping[str, typing.Tuple[LinkRepr, ...]] = dataclasses.field(
        default_factory=OrderedDict
    )
    embedded: typing.Mapping[str, Embeddable] = dataclasses.field(default_factory=OrderedDict)

    def __getitem__(self, name: str) -> ElementValue:
        return self.elements[name]

    def get_element(self, name: str) -> ElementValue:
        return self.elements[name]

    def get_link(self, rel: str) -> LinkRepr:
        """
        Returns the first link for the relation ``rel``.

        :raises KeyError: if the resource has no link for the relation.
        """
        links = self.links.get(rel)
        if not links:
            raise KeyError(rel)
        return links[0]

    def get_links_by_rel(self, rel: str) -> typing.Tuple[LinkRepr, ...]:
        return self.links.get(rel, ())

    def get_embedded(self, rel: str) -> Embeddable:
        return self.embedded[rel]

    def __init__(
        self,
        *,
        elements: typing.Iterable[typing.Tuple[str, ElementValue]] = (),
        links: typing.Iterable[typing.Tuple[str, typing.Iterable[LinkRepr]]] = (),
        embedded: typing.Iterable[typing.Tuple[str, Embeddable]] = (),
    ):
        """
        :param Iterable[Tuple[str, Any]] elements: a sequence of key-value pairs of the elements.
        :param Iterable[Tuple[str, Iterable[LinkRepr]]] links: a sequence of pairs of a relation and its links.
        :param Iterable[Tuple[str, Embeddable]] embedded: a sequence of pairs of a relation and the embedded resource(s).
        """
        self.elements = OrderedDict(elements)
        self.links = OrderedDict((rel, tuple(links_)) for rel, links_ in links)
        self.embedded = OrderedDict(embedded)
