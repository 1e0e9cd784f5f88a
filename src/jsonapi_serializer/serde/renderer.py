"""
:py:mod:`jsonapi_serializer.serde.renderer` turns the intermediate representation of a document
into JSON-compatible values, ready to be passed to :py:func:`json.dumps`.

Synopsis
--------

.. code-block:: python

   import json

   from jsonapi_serializer.serde.models import LinkageRepr, LinksRepr, ResourceRepr, SingletonDocumentRepr
   from jsonapi_serializer.serde.renderer import ReprRenderer

   renderer = ReprRenderer()

   doc = SingletonDocumentRepr(
       links=LinksRepr(
           self_="http://example.com/people/1",
       ),
       data=ResourceRepr(
           type="people",
           id="1",
           attributes=[
               ("first_name", "Jane"),
               ("age", 42),
           ],
           relationships=[
               (
                   "job",
                   LinkageRepr(
                       links=LinksRepr(
                           self_="http://example.com/people/1/relationships/employer/",
                           related="http://example.com/people/1/employer/",
                       ),
                   ),
               ),
           ],
       ),
   )

   print(json.dumps(renderer(doc)))

"""

import base64
import collections.abc
import datetime
import decimal
import typing
from collections import OrderedDict

from .models import (
    AttributeValue,
    CollectionDocumentRepr,
    DocumentReprBase,
    ErrorDocumentRepr,
    ErrorRepr,
    LinkageRepr,
    LinksRepr,
    MetaContainerRepr,
    Missing,
    NodeRepr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
    SourceRepr,
)
from .types import JSONScalar, JSONValue, MutableJSONObject
from .utils import JSONPointer

LINK_MEMBERS = (
    ("self", "self_"),
    ("related", "related"),
    ("first", "first"),
    ("prev", "prev"),
    ("next", "next"),
    ("last", "last"),
)
"""
Pairs of the rendered member names of a ``links`` node and the corresponding fields of :py:class:`LinksRepr`.
"""


class TZLocalizer(typing.Protocol):
    def localize(self, dt: datetime.datetime) -> datetime.datetime:
        ...  # pragma: nocover


class ReprRenderer:
    """
    Renders a document.  Members that are absent from the representation are omitted
    from the output rather than rendered as ``null``.

    :param bool render_decimal_as_str: renders :py:class:`decimal.Decimal` attribute values as strings if true, otherwise as floats.
    :param Optional[datetime.tzinfo] assume_naive_timezone_as: the timezone naive datetimes are assumed to be in.  Naive datetimes are rejected if not given.
    """

    _render_decimal_as_str: bool = True
    _assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None

    def _dict_factory(self, items: typing.Iterable[typing.Tuple[str, typing.Any]]):
        return OrderedDict(items)

    def _render_datetime(self, path: JSONPointer, value: AttributeValue) -> JSONScalar:
        dt = typing.cast(datetime.datetime, value)
        if dt.tzinfo is None:
            tz = self._assume_naive_timezone_as
            if tz is None:
                raise ValueError(f"{path}: naive datetime {dt}")
            elif hasattr(tz, "localize"):
                dt = typing.cast(TZLocalizer, tz).localize(dt)
            else:
                dt = dt.replace(tzinfo=tz)
        return dt.astimezone(datetime.timezone.utc).isoformat()

    def _render_date(self, path: JSONPointer, value: AttributeValue) -> JSONScalar:
        return typing.cast(datetime.date, value).isoformat()

    def _render_decimal(self, path: JSONPointer, value: AttributeValue) -> JSONScalar:
        d = typing.cast(decimal.Decimal, value)
        return str(d) if self._render_decimal_as_str else float(d)

    def _render_bytes(self, path: JSONPointer, value: AttributeValue) -> JSONScalar:
        return base64.b64encode(typing.cast(bytes, value)).decode("ascii")

    def _render_passthrough(self, path: JSONPointer, value: AttributeValue) -> JSONScalar:
        return typing.cast(JSONScalar, value)

    # datetime.datetime has to come before datetime.date, its base class
    _scalar_renderers: typing.ClassVar[typing.Dict[type, typing.Callable]] = {
        datetime.datetime: _render_datetime,
        datetime.date: _render_date,
        decimal.Decimal: _render_decimal,
        bytes: _render_bytes,
        str: _render_passthrough,
        bool: _render_passthrough,
        int: _render_passthrough,
        float: _render_passthrough,
        type(None): _render_passthrough,
    }

    def _render_scalar(self, path: JSONPointer, value: AttributeValue) -> JSONScalar:
        r = self._scalar_renderers.get(type(value))
        if r is None:
            for type_, candidate in self._scalar_renderers.items():
                if isinstance(value, type_):
                    r = candidate
                    break
            else:
                raise TypeError(f"{path}: unsupported type {value!r}")
        return r(self, path, value)

    def _render_attribute(self, path: JSONPointer, value: AttributeValue) -> JSONValue:
        if isinstance(value, collections.abc.Mapping):
            return self._dict_factory(
                (k, self._render_attribute(path / k, v)) for k, v in value.items()
            )
        elif isinstance(value, (str, bytes)):
            return self._render_scalar(path, value)
        elif isinstance(value, collections.abc.Sequence):
            return [self._render_attribute(path[i], v) for i, v in enumerate(value)]
        else:
            return self._render_scalar(path, value)

    def _render_links(self, repr_: LinksRepr) -> MutableJSONObject:
        return self._dict_factory(
            (name, getattr(repr_, field))
            for name, field in LINK_MEMBERS
            if getattr(repr_, field) is not None
        )

    def _populate_node(self, target: MutableJSONObject, repr_: MetaContainerRepr) -> None:
        if isinstance(repr_, NodeRepr) and repr_.links is not None:
            target["links"] = self._render_links(repr_.links)
        if repr_.meta:
            target["meta"] = repr_.meta

    def _render_resource_id(self, repr_: ResourceIdRepr) -> MutableJSONObject:
        retval: MutableJSONObject = self._dict_factory([("type", repr_.type), ("id", repr_.id)])
        self._populate_node(retval, repr_)
        return retval

    def _render_relationship(self, path: JSONPointer, repr_: LinkageRepr) -> MutableJSONObject:
        retval: MutableJSONObject = self._dict_factory([])
        self._populate_node(retval, repr_)
        if repr_.data is Missing:
            pass
        elif repr_.data is None:
            retval["data"] = None
        elif isinstance(repr_.data, ResourceIdRepr):
            retval["data"] = self._render_resource_id(repr_.data)
        else:
            retval["data"] = [
                self._render_resource_id(item)
                for item in typing.cast(typing.Sequence[ResourceIdRepr], repr_.data)
            ]
        return retval

    def _render_resource(self, path: JSONPointer, repr_: ResourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = self._dict_factory([("type", repr_.type), ("id", repr_.id)])
        if repr_.attributes:
            retval["attributes"] = self._dict_factory(
                (k, self._render_attribute(path / "attributes" / k, v))
                for k, v in repr_.attributes.items()
            )
        if repr_.relationships:
            retval["relationships"] = self._dict_factory(
                (k, self._render_relationship(path / "relationships" / k, v))
                for k, v in repr_.relationships.items()
            )
        self._populate_node(retval, repr_)
        return retval

    def _render_source(self, repr_: SourceRepr) -> MutableJSONObject:
        retval: MutableJSONObject = self._dict_factory([])
        if repr_.pointer is not None:
            retval["pointer"] = repr_.pointer
        if repr_.parameter is not None:
            retval["parameter"] = repr_.parameter
        return retval

    def _render_error(self, repr_: ErrorRepr) -> MutableJSONObject:
        retval: MutableJSONObject = self._dict_factory(
            (k, v)
            for k, v in (
                ("id", repr_.id),
                ("status", repr_.status),
                ("code", repr_.code),
                ("title", repr_.title),
                ("detail", repr_.detail),
            )
            if v is not None
        )
        if repr_.source is not None:
            retval["source"] = self._render_source(repr_.source)
        self._populate_node(retval, repr_)
        return retval

    def _render_document(self, path: JSONPointer, repr_: DocumentReprBase) -> MutableJSONObject:
        retval: MutableJSONObject = self._dict_factory([])
        if repr_.jsonapi:
            retval["jsonapi"] = repr_.jsonapi
        self._populate_node(retval, repr_)
        if repr_.errors:
            retval["errors"] = [self._render_error(e) for e in repr_.errors]
        if isinstance(repr_, SingletonDocumentRepr):
            if repr_.data is not None:
                retval["data"] = self._render_resource(path / "data", repr_.data)
        elif isinstance(repr_, CollectionDocumentRepr):
            retval["data"] = [
                self._render_resource((path / "data")[i], item)
                for i, item in enumerate(repr_.data)
            ]
        return retval

    def __call__(
        self,
        repr_: typing.Union[SingletonDocumentRepr, CollectionDocumentRepr, ErrorDocumentRepr],
    ) -> MutableJSONObject:
        if not isinstance(repr_, DocumentReprBase):
            raise TypeError(f"not a document: {repr_!r}")
        return self._render_document(JSONPointer(), repr_)

    def __init__(
        self,
        render_decimal_as_str: bool = True,
        assume_naive_timezone_as: typing.Optional[datetime.tzinfo] = None,
    ):
        self._render_decimal_as_str = render_decimal_as_str
        self._assume_naive_timezone_as = assume_naive_timezone_as
