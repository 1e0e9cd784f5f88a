import abc
import typing

from .serde.utils import english_enumerate


class JSONAPISerializerException(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class InvalidDeclarationError(JSONAPISerializerException):
    _message: str

    @property
    def message(self):
        return self._message

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message


class MappingError(JSONAPISerializerException, metaclass=abc.ABCMeta):
    """
    Raised when a descriptor cannot resolve the identifier, an attribute or a
    relationship on a native object.  A :py:class:`MappingError` aborts the
    whole serialization.
    """


class ResourceMappingError(MappingError, metaclass=abc.ABCMeta):
    resource: "models.ResourceDescriptor"
    name: str
    native: typing.Any

    def __init__(self, resource: "models.ResourceDescriptor", name: str, native: typing.Any):
        super().__init__(resource, name)
        self.resource = resource
        self.name = name
        self.native = native


class IdentifierNotFoundError(ResourceMappingError):
    @property
    def message(self):
        return f'identifier ({self.name}) of "{self.resource.name}" could not be resolved on {self.native!r}'


class InvalidIdentifierError(ResourceMappingError):
    @property
    def message(self):
        return f'identifier ({self.name}) of "{self.resource.name}" is not convertible to a string ({self.__cause__!s})'


class AttributeNotFoundError(ResourceMappingError):
    @property
    def message(self):
        return f'attribute ({self.name}) of "{self.resource.name}" could not be resolved on {self.native!r}'


class RelationshipNotFoundError(ResourceMappingError):
    @property
    def message(self):
        return f'relationship ({self.name}) of "{self.resource.name}" could not be resolved on {self.native!r}'


class UnknownResourceTypeError(MappingError):
    name: typing.Any
    candidates: typing.Sequence[str]

    @property
    def message(self):
        msg = f'no resource known as "{self.name}"'
        if self.candidates:
            msg += f" (known resources are {english_enumerate(self.candidates)})"
        return msg

    def __init__(self, name: typing.Any, candidates: typing.Iterable[str] = ()):
        super().__init__(name)
        self.name = name
        self.candidates = sorted(candidates)


class InvalidPaginationParameter(JSONAPISerializerException):
    """
    Raised when the page number given in a query string is not a non-negative
    integer.
    """

    parameter: str
    value: str

    @property
    def message(self):
        return f'query parameter "{self.parameter}" must be a non-negative integer: {self.value!r}'

    def __init__(self, parameter: str, value: str):
        super().__init__(parameter, value)
        self.parameter = parameter
        self.value = value


if typing.TYPE_CHECKING:
    from . import models  # noqa: E402
