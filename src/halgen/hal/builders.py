import collections.abc
import typing
from collections import OrderedDict

from .models import ElementValue, LinkRepr, ResourceRepr


class ResourceReprBuilder:
    elements: "OrderedDict[str, ElementValue]"
    links: "OrderedDict[str, typing.List[LinkRepr]]"
    embedded: "OrderedDict[str, typing.Union[ResourceRepr, typing.List[ResourceRepr]]]"

    def add_element(self, name: str, value: ElementValue) -> None:
        self.elements[name] = value

    def add_elements(self, elements: typing.Mapping[str, ElementValue]) -> None:
        for name, value in elements.items():
            self.add_element(name, value)

    def add_link(self, link: LinkRepr) -> None:
        self.links.setdefault(link.rel, []).append(link)

    def embed(
        self,
        rel: str,
        resource: typing.Union[ResourceRepr, typing.Sequence[ResourceRepr]],
        force_collection: bool = False,
    ) -> None:
        """
        Embeds a resource or a list of resources under ``rel``.
        Embedding twice under the same relation turns the entry into a list.

        :param str rel: The relation.
        :param Union[ResourceRepr, Sequence[ResourceRepr]] resource: The resource(s) to embed.
        :param bool force_collection: Keep a single resource in a list.
        """
        if isinstance(resource, ResourceRepr):
            new: typing.Union[ResourceRepr, typing.List[ResourceRepr]] = (
                [resource] if force_collection else resource
            )
        elif isinstance(resource, collections.abc.Iterable):
            new = list(resource)
            for item in new:
                if not isinstance(item, ResourceRepr):
                    raise TypeError(f"{item!r} is not a ResourceRepr")
        else:
            raise TypeError(f"{resource!r} is neither a ResourceRepr nor a sequence of them")

        existing = self.embedded.get(rel)
        if existing is None:
            self.embedded[rel] = new
            return
        merged = existing if isinstance(existing, list) else [existing]
        if isinstance(new, list):
            merged.extend(new)
        else:
            merged.append(new)
        self.embedded[rel] = merged

    def __call__(self) -> ResourceRepr:
        return ResourceRepr(
            elements=self.elements.items(),
            links=self.links.items(),
            embedded=(
                (rel, v if isinstance(v, ResourceRepr) else tuple(v))
                for rel, v in self.embedded.items()
            ),
        )

    def __init__(self):
        self.elements = OrderedDict()
        self.links = OrderedDict()
        self.embedded = OrderedDict()
