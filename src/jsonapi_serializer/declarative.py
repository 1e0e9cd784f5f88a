"""
:py:mod:`jsonapi_serializer.declarative` lets you declare resource descriptors
as plain data.

Synopsis
--------

.. code-block:: python

   from jsonapi_serializer.declarative import Attr, Registry, ToMany, ToOne

   registry = Registry()

   registry.resource(
       "companies",
       id="id",
       attributes=["name", "location"],
   )

   people = registry.resource(
       "people",
       id="id",
       attributes=["first_name", "last_name", Attr("age", field=lambda p: p.age or 0)],
       relationships=[
           ToOne("job", "companies", path="employer"),
           ToMany("friends", "people"),
       ],
   )

Destinations given by name are resolved when they are first needed, so
resources may refer to themselves or to resources declared later.
"""

import dataclasses
import typing
from collections import OrderedDict

from .deferred import Deferred
from .exceptions import InvalidDeclarationError, UnknownResourceTypeError
from .models import (
    FieldRef,
    ResourceAttributeDescriptor,
    ResourceDescriptor,
    ResourceRelationshipDescriptor,
    ResourceToManyRelationshipDescriptor,
    ResourceToOneRelationshipDescriptor,
)

Destination = typing.Union[
    str,
    ResourceDescriptor,
    Deferred[ResourceDescriptor],
    typing.Callable[[], ResourceDescriptor],
]
Resolver = typing.Callable[[str], ResourceDescriptor]


@dataclasses.dataclass(frozen=True)
class Attr:
    name: str
    field: typing.Optional[FieldRef] = None


@dataclasses.dataclass(frozen=True)
class Rel:
    name: str
    destination: Destination
    path: typing.Optional[str] = None
    field: typing.Optional[FieldRef] = None


class ToOne(Rel):
    pass


class ToMany(Rel):
    pass


AttributeDeclaration = typing.Union[str, Attr]
RelationshipDeclaration = typing.Union[ToOne, ToMany]


def _resolve_destination(
    destination: Destination, resolver: typing.Optional[Resolver]
) -> typing.Union[ResourceDescriptor, Deferred[ResourceDescriptor]]:
    if isinstance(destination, (ResourceDescriptor, Deferred)):
        return destination
    elif isinstance(destination, str):
        if resolver is None:
            raise InvalidDeclarationError(
                f'destination "{destination}" is given by name, but no registry is there to resolve it'
            )
        return Deferred(resolver, destination)
    elif callable(destination):
        return Deferred(destination)
    else:
        raise InvalidDeclarationError(f"invalid destination: {destination!r}")


def build_attribute(decl: AttributeDeclaration) -> ResourceAttributeDescriptor:
    if isinstance(decl, str):
        return ResourceAttributeDescriptor(decl)
    elif isinstance(decl, Attr):
        return ResourceAttributeDescriptor(decl.name, decl.field)
    else:
        raise InvalidDeclarationError(f"invalid attribute declaration: {decl!r}")


def build_relationship(
    decl: RelationshipDeclaration, resolver: typing.Optional[Resolver] = None
) -> ResourceRelationshipDescriptor:
    descr_class: typing.Type[ResourceRelationshipDescriptor]
    if isinstance(decl, ToOne):
        descr_class = ResourceToOneRelationshipDescriptor
    elif isinstance(decl, ToMany):
        descr_class = ResourceToManyRelationshipDescriptor
    else:
        raise InvalidDeclarationError(f"invalid relationship declaration: {decl!r}")
    return descr_class(
        _resolve_destination(decl.destination, resolver),
        decl.name,
        path=decl.path,
        field=decl.field,
    )


def resource(
    name: str,
    id: FieldRef = "id",
    attributes: typing.Iterable[AttributeDeclaration] = (),
    relationships: typing.Iterable[RelationshipDeclaration] = (),
    resolver: typing.Optional[Resolver] = None,
) -> ResourceDescriptor:
    """
    Builds a :py:class:`ResourceDescriptor` out of declarations.

    :param str name: the resource type name.
    :param FieldRef id: the field that holds the identifier.
    :param Iterable[Union[str, Attr]] attributes: attribute declarations in the order they are rendered.
    :param Iterable[Union[ToOne, ToMany]] relationships: relationship declarations in the order they are rendered.
    :param Optional[Callable[[str], ResourceDescriptor]] resolver: resolves destinations given by name.
    :return: a new :py:class:`ResourceDescriptor`.
    """
    return ResourceDescriptor(
        name,
        identifier=id,
        attributes=[build_attribute(decl) for decl in attributes],
        relationships=[build_relationship(decl, resolver) for decl in relationships],
    )


class Registry:
    """
    A :py:class:`Registry` keeps resource descriptors by their names and resolves
    the destinations of relationships declared by name.
    """

    _descrs: "OrderedDict[str, ResourceDescriptor]"

    def add(self, descr: ResourceDescriptor) -> ResourceDescriptor:
        if descr.name in self._descrs:
            raise InvalidDeclarationError(f'resource "{descr.name}" is already registered')
        self._descrs[descr.name] = descr
        return descr

    def resource(
        self,
        name: str,
        id: FieldRef = "id",
        attributes: typing.Iterable[AttributeDeclaration] = (),
        relationships: typing.Iterable[RelationshipDeclaration] = (),
    ) -> ResourceDescriptor:
        return self.add(resource(name, id, attributes, relationships, resolver=self.__getitem__))

    def __getitem__(self, name: str) -> ResourceDescriptor:
        try:
            return self._descrs[name]
        except KeyError:
            raise UnknownResourceTypeError(name, self._descrs.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._descrs

    def __iter__(self) -> typing.Iterator[ResourceDescriptor]:
        return iter(self._descrs.values())

    def __len__(self) -> int:
        return len(self._descrs)

    def __init__(self):
        self._descrs = OrderedDict()
