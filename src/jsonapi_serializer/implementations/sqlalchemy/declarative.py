"""
jsonapi_serializer.implementations.sqlalchemy.declarative module contains a
facade implementation that derives resource descriptors from SQLAlchemy mapped classes.

Synopsis
--------

.. code-block:: python

   import sqlalchemy as sa
   from sqlalchemy import orm
   from jsonapi_serializer.implementations.sqlalchemy import Declarative

   Base = orm.declarative_base()
   decl = Declarative()

   @decl
   class Person(Base):
       __tablename__ = "people"

       class Meta:
           relationship_paths = {"job": "employer"}

       id = sa.Column(sa.Integer(), primary_key=True, nullable=False)
       first_name = sa.Column(sa.String(), nullable=False)
       job_id = sa.Column(sa.Integer(), sa.ForeignKey("companies.id"), nullable=True)
       job = orm.relationship("Company")

   decl.configure()

   doc = decl.serialize_single(person, "http://example.com/people/1")

"""
import typing

import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore

from ...declarative import (
    Attr,
    AttributeDeclaration,
    RelationshipDeclaration,
    ToMany,
    ToOne,
    resource,
)
from ...deferred import Deferred
from ...exceptions import InvalidDeclarationError, UnknownResourceTypeError
from ...models import FieldRef, ResourceDescriptor
from ...pagination import PaginationContext
from ...serde.types import MutableJSONObject
from ...serializer import Collection, ResourceSerializer, Single
from ...urls import URL


class Meta:
    name: typing.Optional[str] = None
    attributes: typing.Optional[typing.Sequence[AttributeDeclaration]] = None
    relationship_paths: typing.Mapping[str, str] = {}

    def __init__(
        self,
        name: typing.Optional[str] = None,
        attributes: typing.Optional[typing.Sequence[AttributeDeclaration]] = None,
        relationship_paths: typing.Optional[typing.Mapping[str, str]] = None,
    ):
        self.name = name
        self.attributes = attributes
        self.relationship_paths = relationship_paths or {}


def handle_meta(meta: typing.Type) -> Meta:
    return Meta(
        name=getattr(meta, "name", None),
        attributes=getattr(meta, "attributes", None),
        relationship_paths=getattr(meta, "relationship_paths", None),
    )


def build_identifier(sa_mapper: orm.Mapper) -> FieldRef:
    keys = [sa_mapper.get_property_by_column(col).key for col in sa_mapper.primary_key]
    if len(keys) == 1:
        return keys[0]

    def composite_identifier(native: typing.Any) -> typing.Optional[str]:
        values = [getattr(native, k) for k in keys]
        if any(v is None for v in values):
            return None
        return ",".join(str(v) for v in values)

    return composite_identifier


def extract_attributes(sa_mapper: orm.Mapper) -> typing.List[AttributeDeclaration]:
    """
    Returns the column properties of the mapper except for the ones that consist only of
    primary key or foreign key columns.
    """
    pkey_cols = set(sa_mapper.primary_key)
    attrs: typing.List[AttributeDeclaration] = []
    for prop in sa_mapper.column_attrs:
        cols = [col for col in prop.columns if isinstance(col, sa.Column)]
        if cols and all(col in pkey_cols or col.foreign_keys for col in cols):
            continue
        attrs.append(Attr(prop.key))
    return attrs


class Declarative:
    """
    The facade class that derives :py:class:`ResourceDescriptor` objects from SQLAlchemy mapped
    classes and serializes their instances.
    """

    _instrumented_classes: typing.List[typing.Type]
    _descrs: typing.Dict[typing.Type, ResourceDescriptor]

    def __call__(self, class_: typing.Type) -> typing.Type:
        self._instrumented_classes.append(class_)
        return class_

    def _build_relationships(
        self, sa_mapper: orm.Mapper, meta: Meta
    ) -> typing.List[RelationshipDeclaration]:
        rels: typing.List[RelationshipDeclaration] = []
        for prop in sa_mapper.relationships:
            destination = Deferred(self.query_descriptor_by_class, prop.mapper.class_)
            path = meta.relationship_paths.get(prop.key)
            if prop.uselist:
                rels.append(ToMany(prop.key, destination, path=path))
            else:
                rels.append(ToOne(prop.key, destination, path=path))
        unknown = set(meta.relationship_paths) - {rel.name for rel in rels}
        if unknown:
            raise InvalidDeclarationError(
                f"{sa_mapper.class_.__name__} has no relationships named {', '.join(sorted(unknown))}"
            )
        return rels

    def _configure_instrumented_class(self, class_: typing.Type) -> ResourceDescriptor:
        descr = self._descrs.get(class_)
        if descr is not None:
            return descr
        sa_mapper = orm.class_mapper(class_)
        meta_class = getattr(class_, "Meta", None)
        meta = handle_meta(meta_class) if meta_class is not None else Meta()
        descr = resource(
            meta.name or sa_mapper.local_table.name,
            id=build_identifier(sa_mapper),
            attributes=(
                meta.attributes if meta.attributes is not None else extract_attributes(sa_mapper)
            ),
            relationships=self._build_relationships(sa_mapper, meta),
        )
        self._descrs[class_] = descr
        return descr

    def configure(self) -> None:
        orm.configure_mappers()
        for c in self._instrumented_classes:
            self._configure_instrumented_class(c)

    def query_descriptor_by_class(self, class_: typing.Type) -> ResourceDescriptor:
        try:
            return self._descrs[class_]
        except KeyError:
            raise UnknownResourceTypeError(
                class_.__name__, (c.__name__ for c in self._instrumented_classes)
            )

    def query_descriptor_by_native(self, native: typing.Any) -> ResourceDescriptor:
        return self.query_descriptor_by_class(type(native))

    def serialize_single(
        self, native: typing.Any, url: typing.Union[str, URL], **kwargs: typing.Any
    ) -> MutableJSONObject:
        """
        Render a document for the native object.

        :param Any native: An SQLAlchemy-instrumented object to serialize.
        :param Union[str, URL] url: The URL of the request being served.
        :return: The rendered document.
        """
        return ResourceSerializer(
            self.query_descriptor_by_native(native), Single(native), url, **kwargs
        ).serialize()

    def serialize_collection(
        self,
        class_: typing.Type,
        natives: typing.Iterable[typing.Any],
        url: typing.Union[str, URL],
        pagination: typing.Optional[PaginationContext] = None,
        **kwargs: typing.Any,
    ) -> MutableJSONObject:
        """
        Render a document for the collection of native objects.

        :param Type[Any] class_: An SQLAlchemy-instrumented class.
        :param Iterable[Any] natives: The instances of ``class_`` to serialize.
        :param Union[str, URL] url: The URL of the request being served.
        :param Optional[PaginationContext] pagination: The requested page.
        :return: The rendered document.
        """
        return ResourceSerializer(
            self.query_descriptor_by_class(class_),
            Collection(list(natives)),
            url,
            pagination,
            **kwargs,
        ).serialize()

    def __init__(self):
        self._instrumented_classes = []
        self._descrs = {}
