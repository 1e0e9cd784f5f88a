"""
:py:mod:`jsonapi_serializer.pagination` holds the page requested by a client and
decides which pagination links a collection document gets.
"""

import collections.abc
import dataclasses
import logging
import re
import typing

from .exceptions import InvalidDeclarationError, InvalidPaginationParameter
from .urls import URL, QueryParameter, QueryParameters, override_query_parameters, parse_query

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10

PAGE_NUMBER_PARAMETERS = ("page.number", "page[number]")
"""
Query parameter keys a page number is read from.
"""

PAGE_NUMBER_LINK_PARAMETER = "page[number]"
"""
Query parameter key pagination links carry the page number in.
"""

# ASCII digits only
PAGE_NUMBER_PATTERN = re.compile(r"\s*(\d+)\s*", re.ASCII)

QueryInput = typing.Union[str, QueryParameters, typing.Mapping[str, str]]


def _normalize_query(query: QueryInput) -> typing.List[QueryParameter]:
    if isinstance(query, str):
        return parse_query(query.lstrip("?"))
    elif isinstance(query, collections.abc.Mapping):
        return [(str(k), str(v)) for k, v in query.items()]
    else:
        return [(str(k), str(v)) for k, v in query]


def parse_page_number(parameter: str, value: str) -> int:
    m = PAGE_NUMBER_PATTERN.fullmatch(value)
    if m is None:
        raise InvalidPaginationParameter(parameter, value)
    return int(m.group(1))


@dataclasses.dataclass(frozen=True)
class PageWindow:
    """
    The page numbers a pagination context resolves to for a specific number of items.
    ``prev`` and ``next`` are :py:const:`None` when there is no such page.
    """

    start: int
    stop: int
    first: int
    last: int
    prev: typing.Optional[int]
    next: typing.Optional[int]


@dataclasses.dataclass(frozen=True, init=False)
class PaginationContext:
    """
    A :py:class:`PaginationContext` carries the page a client asked for along with the
    rest of the query parameters, which pagination links have to preserve.

    The page number is read from ``page.number`` (or ``page[number]``) and defaults to 0.

    .. code-block:: python

       >>> ctx = PaginationContext("q=a&page.number=2", per_page=4)
       >>> ctx.page_number, ctx.query
       (2, (('q', 'a'),))

    :param Union[str, Sequence[Tuple[str, str]], Mapping[str, str]] query: the query parameters of the request.
    :param int per_page: the number of items per page.
    :param Optional[int] page_number: a page number that takes precedence over the one in ``query``.
    :raises InvalidPaginationParameter: if the page number is not a non-negative integer.
    """

    page_number: int
    per_page: int
    query: typing.Tuple[QueryParameter, ...]

    @classmethod
    def from_url(
        cls, url: typing.Union[str, URL], per_page: int = DEFAULT_PER_PAGE
    ) -> "PaginationContext":
        return cls(URL.parse(url).query_parameters, per_page=per_page)

    def last_page(self, total: int) -> int:
        if total <= 0:
            return 0
        return (total + self.per_page - 1) // self.per_page - 1

    def window(self, total: int) -> PageWindow:
        start = min(total, self.page_number * self.per_page)
        stop = min(total, (self.page_number + 1) * self.per_page)
        last = self.last_page(total)
        if self.page_number > last:
            logger.debug(
                "page %d is out of range (last page is %d of %d items)",
                self.page_number,
                last,
                total,
            )
        return PageWindow(
            start=start,
            stop=stop,
            first=0,
            last=last,
            prev=self.page_number - 1 if self.page_number > 0 else None,
            # a full page may be followed by another
            next=self.page_number + 1 if stop - start == self.per_page else None,
        )

    def slice(self, items: typing.Sequence[typing.Any]) -> typing.Sequence[typing.Any]:
        w = self.window(len(items))
        return items[w.start : w.stop]

    def query_for_page(self, page_number: int) -> typing.List[QueryParameter]:
        return override_query_parameters(
            self.query, [(PAGE_NUMBER_LINK_PARAMETER, str(page_number))]
        )

    def __init__(
        self,
        query: QueryInput = (),
        per_page: int = DEFAULT_PER_PAGE,
        page_number: typing.Optional[int] = None,
    ):
        if per_page < 1:
            raise InvalidDeclarationError(f"per_page must be a positive integer: {per_page}")
        requested_page_number = page_number
        page_number = 0
        rest: typing.List[QueryParameter] = []
        for k, v in _normalize_query(query):
            if k in PAGE_NUMBER_PARAMETERS:
                page_number = parse_page_number(k, v)
            else:
                rest.append((k, v))
        if requested_page_number is not None:
            if requested_page_number < 0:
                raise InvalidPaginationParameter(
                    PAGE_NUMBER_LINK_PARAMETER, str(requested_page_number)
                )
            page_number = requested_page_number
        object.__setattr__(self, "page_number", page_number)
        object.__setattr__(self, "per_page", per_page)
        object.__setattr__(self, "query", tuple(rest))
