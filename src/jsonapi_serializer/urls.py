"""
:py:mod:`jsonapi_serializer.urls` composes the URLs that end up in ``links`` nodes.

Query parameters are handled as ordered sequences of key-value pairs rather than
mappings so that the original order and repeated keys survive a round trip.

.. code-block:: python

   >>> url = URL.parse("http://example.com/people/?q=a&page[number]=3")
   >>> str(url.join("1", "relationships", "job"))
   'http://example.com/people/1/relationships/job/'
   >>> str(url.override_query([("page[number]", "4")]))
   'http://example.com/people/?q=a&page[number]=4'
"""

import dataclasses
import typing
from urllib.parse import parse_qsl, quote, unquote, urlsplit, urlunsplit

QueryParameter = typing.Tuple[str, str]
QueryParameters = typing.Sequence[QueryParameter]

KEY_SAFE_CHARS = "[]"


def parse_query(query: str) -> typing.List[QueryParameter]:
    """
    Decodes a query string into the list of key-value pairs it is made of, in order.
    Blank values are kept.
    """
    return parse_qsl(query, keep_blank_values=True)


def encode_query(params: typing.Iterable[QueryParameter]) -> str:
    """
    Encodes key-value pairs into a query string.  Keys keep the bracket notation
    (``page[number]``) while everything else is percent-encoded.
    """
    return "&".join(
        f"{quote(str(k), safe=KEY_SAFE_CHARS)}={quote(str(v), safe='')}" for k, v in params
    )


def override_query_parameters(
    params: typing.Iterable[QueryParameter], overrides: typing.Iterable[QueryParameter]
) -> typing.List[QueryParameter]:
    """
    Returns ``params`` with every occurrence of the keys in ``overrides`` removed and
    ``overrides`` appended.  The relative order of the remaining parameters is preserved.
    """
    overrides = list(overrides)
    overridden = {k for k, _ in overrides}
    return [(k, v) for k, v in params if k not in overridden] + overrides


@dataclasses.dataclass(frozen=True)
class URL:
    scheme: str = ""
    netloc: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, url: typing.Union[str, "URL"]) -> "URL":
        if isinstance(url, URL):
            return url
        scheme, netloc, path, query, fragment = urlsplit(url)
        return cls(scheme, netloc, path, query, fragment)

    @property
    def query_parameters(self) -> typing.List[QueryParameter]:
        return parse_query(self.query)

    @property
    def path_and_query(self) -> str:
        path = self.path or "/"
        if self.query:
            return f"{path}?{self.query}"
        return path

    def join(self, *segments: str, trailing_slash: bool = True) -> "URL":
        """
        Appends path segments to the path.  The query and the fragment are dropped.

        :param segments: path segments, each of which is percent-encoded.
        :param bool trailing_slash: terminates the resulting path with a slash if true.
        :return: a new :py:class:`URL`.
        """
        path = self.path.rstrip("/")
        for segment in segments:
            path += "/" + quote(str(segment), safe="")
        if trailing_slash or not path:
            path += "/"
        return dataclasses.replace(self, path=path, query="", fragment="")

    def with_query(self, params: typing.Iterable[QueryParameter]) -> "URL":
        return dataclasses.replace(self, query=encode_query(params), fragment="")

    def override_query(
        self,
        overrides: typing.Iterable[QueryParameter],
        base: typing.Optional[typing.Iterable[QueryParameter]] = None,
    ) -> "URL":
        """
        Returns a URL whose query consists of ``base`` (the URL's own query parameters
        by default) with ``overrides`` merged in.
        """
        params = self.query_parameters if base is None else base
        return self.with_query(override_query_parameters(params, overrides))

    def without_fragment(self) -> "URL":
        return dataclasses.replace(self, fragment="")

    def __str__(self) -> str:
        return urlunsplit((self.scheme, self.netloc, self.path, self.query, self.fragment))


class URLBuilder:
    """
    A :py:class:`URLBuilder` derives the URLs of a document from the URL of the request
    that is being served.

    :param Union[str, URL] base: the request URL.
    :param bool absolute: renders absolute URLs if true, otherwise only the path and the query.
    """

    base: URL
    absolute: bool

    def render(self, url: URL) -> str:
        if self.absolute:
            return str(url.without_fragment())
        return url.path_and_query

    def self_(self) -> str:
        """
        Returns the link to the request itself, that is the request URL unmodified.
        """
        return self.render(self.base)

    def resource(self, id: str) -> URL:
        """
        Returns the URL of a member of the collection the request URL points to.
        """
        return self.base.join(id, trailing_slash=False)

    def singleton(self, id: str) -> URL:
        """
        Returns the URL of the resource the request URL points to.  The identifier is
        appended only if the request path does not end with it already.
        """
        stripped = self.base.path.rstrip("/")
        if unquote(stripped.rsplit("/", 1)[-1]) == id:
            return dataclasses.replace(self.base, path=stripped, query="", fragment="")
        return self.resource(id)

    def member_self(self, resource_url: URL) -> str:
        return self.render(resource_url.join())

    def relationship_self(self, resource_url: URL, path: str) -> str:
        return self.render(resource_url.join("relationships", path))

    def relationship_related(self, resource_url: URL, path: str) -> str:
        return self.render(resource_url.join(path))

    def page(self, params: typing.Iterable[QueryParameter]) -> str:
        """
        Returns the link to the request path with the query replaced by ``params``.
        """
        return self.render(self.base.with_query(params))

    def __init__(self, base: typing.Union[str, URL], absolute: bool = True):
        self.base = URL.parse(base)
        self.absolute = absolute
