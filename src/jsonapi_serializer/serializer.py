"""
:py:mod:`jsonapi_serializer.serializer` assembles JSON:API documents out of native objects.

Synopsis
--------

.. code-block:: python

   from jsonapi_serializer.pagination import PaginationContext
   from jsonapi_serializer.serializer import Collection, ResourceSerializer, Single

   # GET http://example.com/people/1
   doc = ResourceSerializer(people, Single(person), "http://example.com/people/1").serialize()

   # GET http://example.com/people/?q=a&page.number=1
   url = "http://example.com/people/?q=a&page.number=1"
   doc = ResourceSerializer(
       people,
       Collection(persons),
       url,
       PaginationContext.from_url(url, per_page=20),
   ).serialize()
"""

import dataclasses
import logging
import typing

from .models import RelatedValue, ResourceDescriptor
from .pagination import PaginationContext
from .serde.builders import (
    CollectionDocumentBuilder,
    ResourceReprBuilder,
    SingletonDocumentBuilder,
    ToManyRelReprBuilder,
    ToOneRelReprBuilder,
)
from .serde.models import CollectionDocumentRepr, LinksRepr, SingletonDocumentRepr
from .serde.renderer import ReprRenderer
from .serde.types import MutableJSONObject
from .urls import URL, URLBuilder

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Single:
    """
    A payload made of a single native object.
    """

    native: typing.Any


@dataclasses.dataclass(frozen=True)
class Collection:
    """
    A payload made of an ordered sequence of native objects.
    """

    natives: typing.Sequence[typing.Any]

    def __post_init__(self):
        object.__setattr__(self, "natives", tuple(self.natives))


Payload = typing.Union[Single, Collection]
Document = typing.Union[SingletonDocumentRepr, CollectionDocumentRepr]


class ResourceSerializer:
    """
    A :py:class:`ResourceSerializer` turns a payload into a JSON:API document.

    :param ResourceDescriptor descr: the descriptor of the resource the payload consists of.
    :param Union[Single, Collection] payload: the native object(s) to serialize.
    :param Union[str, URL] url: the URL of the request being served.
    :param Optional[PaginationContext] pagination: the requested page.  Ignored for a :py:class:`Single` payload.
    :param bool absolute_links: renders absolute URLs if true, otherwise only their paths and queries.
    :param bool include_linkage: renders the resource linkage (``data``) of relationships if true.
    :param Optional[ReprRenderer] renderer: the renderer used by :py:meth:`serialize`.
    """

    descr: ResourceDescriptor
    payload: Payload
    urls: URLBuilder
    pagination: typing.Optional[PaginationContext]
    include_linkage: bool
    renderer: ReprRenderer

    def _build_to_one_linkage(self, builder: ToOneRelReprBuilder, value: RelatedValue) -> None:
        if value.related is None:
            builder.nullify()
        else:
            dest = value.descr.destination
            builder.set(dest.name, dest.get_identity(value.related))

    def _build_to_many_linkage(self, builder: ToManyRelReprBuilder, value: RelatedValue) -> None:
        dest = value.descr.destination
        builder.empty()
        for related in value.related:
            builder.add(dest.name, dest.get_identity(related))

    def _build_relationships(
        self, builder: ResourceReprBuilder, native: typing.Any, resource_url: URL
    ) -> None:
        for name, value in self.descr.get_relationships(native).items():
            rel_builder: typing.Union[ToOneRelReprBuilder, ToManyRelReprBuilder]
            if value.is_collection:
                rel_builder = builder.to_many_relationship(name)
                if self.include_linkage:
                    self._build_to_many_linkage(rel_builder, value)
            else:
                rel_builder = builder.to_one_relationship(name)
                if self.include_linkage:
                    self._build_to_one_linkage(rel_builder, value)
            rel_builder.links = LinksRepr(
                self_=self.urls.relationship_self(resource_url, value.descr.path),
                related=self.urls.relationship_related(resource_url, value.descr.path),
            )

    def _build_resource(
        self, builder: ResourceReprBuilder, native: typing.Any, in_collection: bool
    ) -> None:
        id_ = self.descr.get_identity(native)
        builder.type = self.descr.name
        builder.id = id_
        for name, value in self.descr.get_attributes(native).items():
            builder.add_attribute(name, value)
        if in_collection:
            resource_url = self.urls.resource(id_)
            builder.links = LinksRepr(self_=self.urls.member_self(resource_url))
        else:
            resource_url = self.urls.singleton(id_)
        self._build_relationships(builder, native, resource_url)

    def _build_single(self, payload: Single) -> SingletonDocumentRepr:
        if self.pagination is not None:
            logger.debug("pagination is ignored for a single %s", self.descr.name)
        builder = SingletonDocumentBuilder()
        builder.links = LinksRepr(self_=self.urls.self_())
        self._build_resource(builder.data, payload.native, False)
        return builder()

    def _build_collection(self, payload: Collection) -> CollectionDocumentRepr:
        builder = CollectionDocumentBuilder()
        natives = payload.natives
        if self.pagination is None:
            builder.links = LinksRepr(self_=self.urls.self_())
        else:
            w = self.pagination.window(len(natives))
            natives = natives[w.start : w.stop]
            builder.links = LinksRepr(
                self_=self.urls.self_(),
                first=self.urls.page(self.pagination.query_for_page(w.first)),
                prev=(
                    self.urls.page(self.pagination.query_for_page(w.prev))
                    if w.prev is not None
                    else None
                ),
                next=(
                    self.urls.page(self.pagination.query_for_page(w.next))
                    if w.next is not None
                    else None
                ),
                last=self.urls.page(self.pagination.query_for_page(w.last)),
            )
        for native in natives:
            self._build_resource(builder.next(), native, True)
        return builder()

    def build(self) -> Document:
        """
        Builds the document as the internal representation.

        :raises MappingError: if the descriptor cannot resolve something on a native object.
        """
        logger.debug(
            "building a %s document of %s for %s",
            type(self.payload).__name__.lower(),
            self.descr.name,
            self.urls.base,
        )
        if isinstance(self.payload, Single):
            return self._build_single(self.payload)
        elif isinstance(self.payload, Collection):
            return self._build_collection(self.payload)
        else:
            raise TypeError(f"payload must be either Single or Collection: {self.payload!r}")

    def serialize(self) -> MutableJSONObject:
        """
        Builds the document and renders it into JSON-compatible values.
        """
        return self.renderer(self.build())

    def __init__(
        self,
        descr: ResourceDescriptor,
        payload: Payload,
        url: typing.Union[str, URL],
        pagination: typing.Optional[PaginationContext] = None,
        *,
        absolute_links: bool = True,
        include_linkage: bool = False,
        renderer: typing.Optional[ReprRenderer] = None,
    ):
        self.descr = descr
        self.payload = payload
        self.urls = URLBuilder(url, absolute=absolute_links)
        self.pagination = pagination
        self.include_linkage = include_linkage
        self.renderer = ReprRenderer() if renderer is None else renderer


def serialize(
    descr: ResourceDescriptor,
    payload: Payload,
    url: typing.Union[str, URL],
    pagination: typing.Optional[PaginationContext] = None,
    **kwargs,
) -> MutableJSONObject:
    """
    A shorthand for ``ResourceSerializer(descr, payload, url, pagination, **kwargs).serialize()``.
    """
    return ResourceSerializer(descr, payload, url, pagination, **kwargs).serialize()
