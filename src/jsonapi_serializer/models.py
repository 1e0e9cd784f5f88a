import collections.abc
import dataclasses
import typing
from collections import OrderedDict

from .deferred import Deferred
from .exceptions import (
    AttributeNotFoundError,
    IdentifierNotFoundError,
    InvalidDeclarationError,
    InvalidIdentifierError,
    RelationshipNotFoundError,
)
from .serde.interfaces import RelationshipType
from .serde.models import AttributeValue

FieldRef = typing.Union[str, typing.Callable[[typing.Any], typing.Any]]
"""
Tells where a value lives on a native object: either the name of an attribute
(or of a key, when the native object is a mapping), or a callable that takes
the native object and returns the value.
"""


def fetch_field(native: typing.Any, field: FieldRef) -> typing.Any:
    if callable(field):
        return field(native)
    if isinstance(native, collections.abc.Mapping):
        return native[field]
    return getattr(native, field)


def field_name(field: FieldRef) -> str:
    if callable(field):
        return getattr(field, "__name__", repr(field))
    return field


class ResourceMemberDescriptor:
    parent: typing.Optional["ResourceDescriptor"] = None
    name: str
    field: FieldRef

    T = typing.TypeVar("T", bound="ResourceMemberDescriptor")

    def bind(self: T, parent: "ResourceDescriptor") -> T:
        if self.parent is not None and self.parent is not parent:
            raise InvalidDeclarationError(
                f'"{self.name}" is already bound to resource "{self.parent.name}"'
            )
        self.parent = parent
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ResourceAttributeDescriptor(ResourceMemberDescriptor):
    def extract_value(self, native: typing.Any) -> AttributeValue:
        assert self.parent is not None
        try:
            return fetch_field(native, self.field)
        except (AttributeError, KeyError) as e:
            raise AttributeNotFoundError(self.parent, self.name, native) from e

    def __init__(self, name: str, field: typing.Optional[FieldRef] = None):
        self.name = name
        self.field = name if field is None else field


class ResourceRelationshipDescriptor(ResourceMemberDescriptor):
    _destination: typing.Union["ResourceDescriptor", Deferred["ResourceDescriptor"]]
    type: RelationshipType
    path: str
    """
    The URL path segment under which the relationship is exposed.
    """

    @property
    def destination(self) -> "ResourceDescriptor":
        if isinstance(self._destination, Deferred):
            return self._destination()
        else:
            return self._destination

    def _fetch(self, native: typing.Any) -> typing.Any:
        assert self.parent is not None
        try:
            return fetch_field(native, self.field)
        except (AttributeError, KeyError) as e:
            raise RelationshipNotFoundError(self.parent, self.name, native) from e

    def extract_related(self, native: typing.Any) -> typing.Any:
        raise NotImplementedError()

    def __init__(
        self,
        destination: typing.Union["ResourceDescriptor", Deferred["ResourceDescriptor"]],
        name: str,
        path: typing.Optional[str] = None,
        field: typing.Optional[FieldRef] = None,
    ):
        self._destination = destination
        self.name = name
        self.path = name if path is None else path
        self.field = name if field is None else field


class ResourceToOneRelationshipDescriptor(ResourceRelationshipDescriptor):
    type = RelationshipType.TO_ONE
    """
    Always set to :py:class:`RelationshipType`.``TO_ONE``
    """

    def extract_related(self, native: typing.Any) -> typing.Any:
        """
        Returns the related native object, or :py:const:`None` if there is none.
        """
        return self._fetch(native)


class ResourceToManyRelationshipDescriptor(ResourceRelationshipDescriptor):
    type = RelationshipType.TO_MANY
    """
    Always set to :py:class:`RelationshipType`.``TO_MANY``
    """

    def extract_related(self, native: typing.Any) -> typing.Tuple[typing.Any, ...]:
        """
        Returns the related native objects in their original order.
        """
        related = self._fetch(native)
        if related is None:
            return ()
        try:
            return tuple(related)
        except TypeError as e:
            assert self.parent is not None
            raise RelationshipNotFoundError(self.parent, self.name, native) from e


@dataclasses.dataclass(frozen=True)
class RelatedValue:
    """
    The other side of a relationship as resolved on a specific native object.
    """

    descr: ResourceRelationshipDescriptor
    related: typing.Any

    @property
    def is_collection(self) -> bool:
        return self.descr.type is RelationshipType.TO_MANY


class ResourceDescriptor:
    """
    A :py:class:`ResourceDescriptor` holds information about a JSON-API resource,
    and reads the identifier, the attributes and the relationships off native objects.

    :param str name: The name of the resource, which is rendered as ``type``.
    :param FieldRef identifier: The field that holds the identifier.
    :param Iterable[ResourceAttributeDescriptor] attributes: The descriptors for the attributes the resource holds.
    :param Iterable[ResourceRelationshipDescriptor] relationships: The descriptors for the relationships the resource has.
    """

    name: str
    """
    The name of the resource.
    """
    identifier: FieldRef
    _attributes: typing.Mapping[str, ResourceAttributeDescriptor]
    _relationships: typing.Mapping[str, ResourceRelationshipDescriptor]

    @property
    def attributes(self) -> typing.Mapping[str, ResourceAttributeDescriptor]:
        """
        The mapping of attribute names to :py:class:`ResourceAttributeDescriptor`s.
        """
        return self._attributes

    @property
    def relationships(self) -> typing.Mapping[str, ResourceRelationshipDescriptor]:
        """
        The mapping of relationship names to :py:class:`ResourceRelationshipDescriptor`s.
        """
        return self._relationships

    def get_identity(self, native: typing.Any) -> str:
        name = field_name(self.identifier)
        try:
            value = fetch_field(native, self.identifier)
        except (AttributeError, KeyError) as e:
            raise IdentifierNotFoundError(self, name, native) from e
        if value is None:
            raise IdentifierNotFoundError(self, name, native)
        try:
            return str(value)
        except Exception as e:
            raise InvalidIdentifierError(self, name, native) from e

    def get_attributes(self, native: typing.Any) -> "OrderedDict[str, AttributeValue]":
        return OrderedDict(
            (name, attr.extract_value(native)) for name, attr in self._attributes.items()
        )

    def get_relationships(self, native: typing.Any) -> "OrderedDict[str, RelatedValue]":
        return OrderedDict(
            (name, RelatedValue(rel, rel.extract_related(native)))
            for name, rel in self._relationships.items()
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def __init__(
        self,
        name: str,
        identifier: FieldRef = "id",
        attributes: typing.Iterable[ResourceAttributeDescriptor] = (),
        relationships: typing.Iterable[ResourceRelationshipDescriptor] = (),
    ) -> None:
        self.name = name
        self.identifier = identifier
        attrs: "OrderedDict[str, ResourceAttributeDescriptor]" = OrderedDict()
        for attr in attributes:
            if attr.name in attrs:
                raise InvalidDeclarationError(
                    f'attribute "{attr.name}" is declared twice in "{name}"'
                )
            attrs[attr.name] = attr.bind(self)
        rels: "OrderedDict[str, ResourceRelationshipDescriptor]" = OrderedDict()
        for rel in relationships:
            if rel.name in rels:
                raise InvalidDeclarationError(
                    f'relationship "{rel.name}" is declared twice in "{name}"'
                )
            if rel.name in attrs:
                raise InvalidDeclarationError(
                    f'"{rel.name}" is declared both as an attribute and a relationship in "{name}"'
                )
            rels[rel.name] = rel.bind(self)
        self._attributes = attrs
        self._relationships = rels
