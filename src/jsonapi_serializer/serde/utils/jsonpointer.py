import typing


def _escape(component: str) -> str:
    return component.replace("~", "~0").replace("/", "~1")


class JSONPointer:
    """
    An immutable `JSON Pointer <https://tools.ietf.org/html/rfc6901>`_, used to tell
    which node of a document a renderer is working on.

    .. code-block:: python

       >>> str(JSONPointer() / "data" / "attributes")
       '/data/attributes'
       >>> str((JSONPointer() / "data")[0])
       '/data/0'
    """

    components: typing.Tuple[str, ...]

    def __truediv__(self, component: str) -> "JSONPointer":
        return JSONPointer(self.components + (component,))

    def __getitem__(self, index: int) -> "JSONPointer":
        return JSONPointer(self.components + (str(index),))

    def __eq__(self, that: typing.Any) -> bool:
        if isinstance(that, JSONPointer):
            return self.components == that.components
        elif isinstance(that, str):
            return str(self) == that
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.components)

    def __str__(self) -> str:
        return "".join("/" + _escape(c) for c in self.components)

    def __repr__(self) -> str:
        return f"JSONPointer({str(self)!r})"

    def __init__(self, components: typing.Iterable[str] = ()):
        self.components = tuple(components)
