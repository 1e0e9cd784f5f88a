import functools
import typing

T = typing.TypeVar("T")


class Deferred(typing.Generic[T]):
    """
    A :py:class:`Deferred` stands for a value that cannot be computed yet, such as
    the destination of a relationship whose resource is declared later.
    Calling it computes the value once and returns the same value from then on.

    .. code-block:: python

       >>> d = Deferred(registry.__getitem__, "companies")
       >>> d() is registry["companies"]
       True

    :param Callable[..., T] yielder: a callable that computes the value.
    :param args: positional arguments for the yielder.
    :param kwargs: keyword arguments for the yielder.
    """

    _yielder: typing.Optional[typing.Callable[[], T]]
    _value: typing.Optional[T] = None

    @property
    def resolved(self) -> bool:
        return self._yielder is None

    def __call__(self) -> T:
        if self._yielder is not None:
            self._value = self._yielder()
            self._yielder = None
        return typing.cast(T, self._value)

    def __repr__(self) -> str:
        if self.resolved:
            return f"Deferred(resolved={self._value!r})"
        return f"Deferred({self._yielder!r})"

    def __init__(self, yielder: typing.Callable[..., T], *args, **kwargs) -> None:
        self._yielder = functools.partial(yielder, *args, **kwargs)
