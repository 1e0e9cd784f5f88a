"""
Mutable counterparts of :py:mod:`jsonapi_serializer.serde.models`, which let a document be
assembled piece by piece before it gets frozen into its representation by calling the builder.
"""

import abc
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    CollectionDocumentRepr,
    LinkageRepr,
    LinksRepr,
    Missing,
    MissingType,
    Repr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)


class ReprBuilder(metaclass=abc.ABCMeta):
    meta: typing.Dict[str, typing.Any]
    links: typing.Optional[LinksRepr] = None

    @abc.abstractmethod
    def __call__(self) -> Repr:
        ...  # pragma: nocover

    def __init__(self):
        self.meta = {}
        self.links = None


class LinkageReprBuilder(ReprBuilder):
    """
    Builds a relationship object.  The built relationship carries no resource linkage
    unless one is given explicitly.
    """

    @abc.abstractmethod
    def __call__(self) -> LinkageRepr:
        ...  # pragma: nocover


class ToOneRelReprBuilder(LinkageReprBuilder):
    data: typing.Union[None, ResourceIdRepr, MissingType]

    def set(self, type: str, id: str) -> None:
        self.data = ResourceIdRepr(type=type, id=id)

    def nullify(self) -> None:
        self.data = None

    def __call__(self) -> LinkageRepr:
        return LinkageRepr(data=self.data, links=self.links, meta=self.meta)

    def __init__(self):
        super().__init__()
        self.data = Missing


class ToManyRelReprBuilder(LinkageReprBuilder):
    data: typing.Optional[typing.List[ResourceIdRepr]]

    def add(self, type: str, id: str) -> None:
        if self.data is None:
            self.data = []
        self.data.append(ResourceIdRepr(type=type, id=id))

    def empty(self) -> None:
        self.data = []

    def __call__(self) -> LinkageRepr:
        return LinkageRepr(
            data=tuple(self.data) if self.data is not None else Missing,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self):
        super().__init__()
        self.data = None


RelReprBuilder = typing.TypeVar("RelReprBuilder", ToOneRelReprBuilder, ToManyRelReprBuilder)


class ResourceReprBuilder(ReprBuilder):
    type: typing.Optional[str] = None
    id: typing.Optional[str] = None
    attributes: "OrderedDict[str, AttributeValue]"
    relationships: "OrderedDict[str, LinkageReprBuilder]"

    def add_attribute(self, name: str, value: AttributeValue) -> None:
        self.attributes[name] = value

    def _relationship(self, name: str, class_: typing.Type[RelReprBuilder]) -> RelReprBuilder:
        rel = self.relationships.get(name)
        if rel is None:
            rel = self.relationships[name] = class_()
        elif not isinstance(rel, class_):
            raise TypeError(f'relationship "{name}" is already being built as {type(rel).__name__}')
        return typing.cast(RelReprBuilder, rel)

    def to_one_relationship(self, name: str) -> ToOneRelReprBuilder:
        return self._relationship(name, ToOneRelReprBuilder)

    def to_many_relationship(self, name: str) -> ToManyRelReprBuilder:
        return self._relationship(name, ToManyRelReprBuilder)

    def __call__(self) -> ResourceRepr:
        assert self.type is not None
        assert self.id is not None
        return ResourceRepr(
            type=self.type,
            id=self.id,
            attributes=self.attributes.items(),
            relationships=((k, v()) for k, v in self.relationships.items()),
            links=self.links,
            meta=self.meta,
        )

    def __init__(self):
        super().__init__()
        self.attributes = OrderedDict()
        self.relationships = OrderedDict()


class DocumentBuilder(ReprBuilder, metaclass=abc.ABCMeta):
    jsonapi: typing.Dict[str, typing.Any]

    def __init__(self):
        super().__init__()
        self.jsonapi = {}


class SingletonDocumentBuilder(DocumentBuilder):
    data: ResourceReprBuilder

    def __call__(self) -> SingletonDocumentRepr:
        return SingletonDocumentRepr(
            data=self.data(),
            jsonapi=self.jsonapi,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self):
        super().__init__()
        self.data = ResourceReprBuilder()


class CollectionDocumentBuilder(DocumentBuilder):
    data: typing.List[ResourceReprBuilder]

    def next(self) -> ResourceReprBuilder:
        builder = ResourceReprBuilder()
        self.data.append(builder)
        return builder

    def __call__(self) -> CollectionDocumentRepr:
        return CollectionDocumentRepr(
            data=[b() for b in self.data],
            jsonapi=self.jsonapi,
            links=self.links,
            meta=self.meta,
        )

    def __init__(self):
        super().__init__()
        self.data = []
