from .declarative import Attr, Registry, ToMany, ToOne, resource  # noqa
from .exceptions import (  # noqa
    InvalidDeclarationError,
    InvalidPaginationParameter,
    JSONAPISerializerException,
    MappingError,
)
from .models import ResourceDescriptor  # noqa
from .pagination import PaginationContext  # noqa
from .serializer import Collection, ResourceSerializer, Single, serialize  # noqa
