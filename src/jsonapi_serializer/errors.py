"""
:py:mod:`jsonapi_serializer.errors` turns exceptions into `error documents <https://jsonapi.org/format/#errors>`_.

.. code-block:: python

   try:
       pagination = PaginationContext.from_url(request_url)
   except InvalidPaginationParameter as e:
       return 400, render_error_document(e)
"""

import typing

from .exceptions import InvalidPaginationParameter, MappingError
from .serde.models import ErrorDocumentRepr, ErrorRepr, SourceRepr
from .serde.renderer import ReprRenderer
from .serde.types import MutableJSONObject


def build_error(exc: BaseException) -> ErrorRepr:
    if isinstance(exc, InvalidPaginationParameter):
        return ErrorRepr(
            status="400",
            code="invalid_pagination_parameter",
            title="Invalid pagination parameter",
            detail=exc.message,
            source=SourceRepr(parameter=exc.parameter),
        )
    elif isinstance(exc, MappingError):
        return ErrorRepr(
            status="500",
            code="mapping_error",
            title="Resource mapping failed",
            detail=exc.message,
        )
    else:
        return ErrorRepr(
            status="500",
            title="Internal server error",
        )


def build_error_document(*excs: BaseException) -> ErrorDocumentRepr:
    return ErrorDocumentRepr(errors=[build_error(exc) for exc in excs])


def render_error_document(
    *excs: BaseException, renderer: typing.Optional[ReprRenderer] = None
) -> MutableJSONObject:
    renderer = ReprRenderer() if renderer is None else renderer
    return renderer(build_error_document(*excs))
