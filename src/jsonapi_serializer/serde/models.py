"""
Classes in :py:mod:`jsonapi_serializer.serde.models` make up the intermediate representation
of the documents a serializer emits.  Nothing in here knows about URLs or native objects;
:py:mod:`jsonapi_serializer.serde.renderer` turns the representation into JSON-compatible values.
"""

import dataclasses
import datetime
import decimal
import typing
from collections import OrderedDict

Meta = typing.Dict[str, typing.Any]


@dataclasses.dataclass
class Repr:
    """
    The base class for any model objects.
    """


@dataclasses.dataclass
class LinksRepr(Repr):
    """
    :py:class:`LinksRepr` class represents a ``links`` node.  Members left :py:const:`None`
    are not rendered.

    Ref.

    * `Document Links <https://jsonapi.org/format/#document-links>`_
    * `Related Resource Links <https://jsonapi.org/format/#document-resource-object-related-resource-links>`_
    * `Pagination <https://jsonapi.org/format/#fetching-pagination>`_
    """

    self_: typing.Optional[str] = None
    related: typing.Optional[str] = None
    first: typing.Optional[str] = None
    prev: typing.Optional[str] = None
    next: typing.Optional[str] = None
    last: typing.Optional[str] = None


@dataclasses.dataclass(init=False)
class MetaContainerRepr(Repr):
    meta: Meta = dataclasses.field(default_factory=dict)

    def __init__(self, *, meta: typing.Optional[Meta] = None):
        self.meta = meta if meta is not None else {}


@dataclasses.dataclass(init=False)
class NodeRepr(MetaContainerRepr):
    """
    :py:class:`NodeRepr` is an abstract base for the nodes that may carry ``links``.
    """

    links: typing.Optional[LinksRepr] = None

    def __init__(
        self,
        *,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[Meta] = None,
    ):
        super().__init__(meta=meta)
        self.links = links


@dataclasses.dataclass(init=False)
class ResourceIdRepr(MetaContainerRepr):
    """
    A `Resource Identifier Object <https://jsonapi.org/format/#document-resource-identifier-objects>`_.
    """

    type: str  # type: ignore
    id: str  # type: ignore

    def __init__(self, *, type: str, id: str, meta: typing.Optional[Meta] = None):
        super().__init__(meta=meta)
        self.type = type
        self.id = id


class MissingType:
    """
    The type of :py:data:`Missing`, which tells an absent member from a member
    whose value is ``null``.
    """

    def __bool__(self):
        return False

    def __repr__(self):
        return "Missing"

    def __init__(self):
        raise TypeError("Not directly instantiable")


Missing = object.__new__(MissingType)


LinkageData = typing.Union[None, ResourceIdRepr, typing.Sequence[ResourceIdRepr]]


@dataclasses.dataclass(init=False)
class LinkageRepr(NodeRepr):
    """
    :py:class:`LinkageRepr` represents a `Relationship Object <https://jsonapi.org/format/#document-resource-object-relationships>`_.

    ``data`` stays :py:data:`Missing` unless the resource linkage is rendered, in which case
    it is :py:const:`None` or a :py:class:`ResourceIdRepr` for a to-one relationship and a
    sequence of :py:class:`ResourceIdRepr` for a to-many relationship.

    :raises ValueError: if none of ``data``, ``links`` and ``meta`` is given.
    """

    data: typing.Union[LinkageData, MissingType] = Missing

    def __init__(
        self,
        *,
        data: typing.Union[LinkageData, MissingType] = Missing,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[Meta] = None,
    ):
        if data is Missing and links is None and not meta:
            raise ValueError("a relationship needs at least one of data, links, or meta")
        super().__init__(links=links, meta=meta)
        self.data = data


AttributeScalar = typing.Union[
    datetime.datetime, datetime.date, decimal.Decimal, str, int, float, bool, bytes, None
]
AttributeValue = typing.Union[
    typing.Sequence[typing.Any],
    typing.Mapping[str, typing.Any],
    AttributeScalar,
]


@dataclasses.dataclass(init=False)
class ResourceRepr(NodeRepr):
    """
    :py:class:`ResourceRepr` class represents a `Resource Object <https://jsonapi.org/format/#document-resource-objects>`_.
    Attributes and relationships keep the order they are given in.

    :param str type: the resource type name.
    :param str id: the identifier.
    :param Iterable[Tuple[str, AttributeValue]] attributes: pairs of attribute names and values.
    :param Iterable[Tuple[str, LinkageRepr]] relationships: pairs of relationship names and relationship objects.
    :param Optional[LinksRepr] links: the ``links`` of the resource object.
    :param Optional[Dict[str, Any]] meta: user-defined information.
    """

    type: str  # type: ignore
    id: str  # type: ignore
    attributes: "OrderedDict[str, AttributeValue]" = dataclasses.field(default_factory=OrderedDict)  # type: ignore
    relationships: "OrderedDict[str, LinkageRepr]" = dataclasses.field(default_factory=OrderedDict)  # type: ignore

    def __init__(
        self,
        *,
        type: str,
        id: str,
        attributes: typing.Iterable[typing.Tuple[str, AttributeValue]] = (),
        relationships: typing.Iterable[typing.Tuple[str, LinkageRepr]] = (),
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[Meta] = None,
    ):
        super().__init__(links=links, meta=meta)
        self.type = type
        self.id = id
        self.attributes = OrderedDict(attributes)
        self.relationships = OrderedDict(relationships)


@dataclasses.dataclass
class SourceRepr(Repr):
    """
    The ``source`` member of an `Error Object <https://jsonapi.org/format/#error-objects>`_.
    """

    pointer: typing.Optional[str] = None
    parameter: typing.Optional[str] = None


@dataclasses.dataclass(init=False)
class ErrorRepr(NodeRepr):
    id: typing.Optional[str] = None
    status: typing.Optional[str] = None
    code: typing.Optional[str] = None
    title: typing.Optional[str] = None
    detail: typing.Optional[str] = None
    source: typing.Optional[SourceRepr] = None

    def __init__(
        self,
        *,
        id: typing.Optional[str] = None,
        status: typing.Optional[str] = None,
        code: typing.Optional[str] = None,
        title: typing.Optional[str] = None,
        detail: typing.Optional[str] = None,
        source: typing.Optional[SourceRepr] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[Meta] = None,
    ):
        super().__init__(links=links, meta=meta)
        self.id = id
        self.status = status
        self.code = code
        self.title = title
        self.detail = detail
        self.source = source


@dataclasses.dataclass(init=False)
class DocumentReprBase(NodeRepr):
    """
    The members every top-level document may have.
    """

    jsonapi: typing.Dict[str, typing.Any] = dataclasses.field(default_factory=dict)
    errors: typing.Sequence[ErrorRepr] = ()

    def __init__(
        self,
        *,
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        errors: typing.Optional[typing.Sequence[ErrorRepr]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[Meta] = None,
    ):
        super().__init__(links=links, meta=meta)
        self.jsonapi = jsonapi if jsonapi is not None else {}
        self.errors = tuple(errors) if errors else ()


@dataclasses.dataclass(init=False)
class SingletonDocumentRepr(DocumentReprBase):
    """
    A document whose primary data is a single resource object.

    :raises ValueError: if neither ``data`` nor ``meta`` is given.
    """

    data: typing.Optional[ResourceRepr] = None

    def __init__(
        self,
        *,
        data: typing.Union[ResourceRepr, None, MissingType] = Missing,
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[Meta] = None,
    ):
        if data is Missing and meta is None:
            raise ValueError("either data or meta must be specified")
        super().__init__(jsonapi=jsonapi, links=links, meta=meta)
        self.data = None if isinstance(data, MissingType) else data


@dataclasses.dataclass(init=False)
class CollectionDocumentRepr(DocumentReprBase):
    """
    A document whose primary data is an array of resource objects, possibly empty.
    """

    data: typing.Sequence[ResourceRepr] = ()

    def __init__(
        self,
        *,
        data: typing.Optional[typing.Iterable[ResourceRepr]] = None,
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[Meta] = None,
    ):
        if data is None and meta is None:
            raise ValueError("either data or meta must be specified")
        super().__init__(jsonapi=jsonapi, links=links, meta=meta)
        self.data = tuple(data) if data is not None else ()


@dataclasses.dataclass(init=False)
class ErrorDocumentRepr(DocumentReprBase):
    def __init__(
        self,
        *,
        errors: typing.Sequence[ErrorRepr],
        jsonapi: typing.Optional[typing.Dict[str, typing.Any]] = None,
        links: typing.Optional[LinksRepr] = None,
        meta: typing.Optional[Meta] = None,
    ):
        if not errors:
            raise ValueError("an error document needs at least one error")
        super().__init__(jsonapi=jsonapi, errors=errors, links=links, meta=meta)
