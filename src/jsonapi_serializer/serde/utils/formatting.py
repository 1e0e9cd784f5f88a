import typing


def english_enumerate(items: typing.Iterable[str], conj: str = ", and ") -> str:
    """
    Joins ``items`` the way a list is written in English prose.

    .. code-block:: python

       >>> english_enumerate(["a", "b", "c"])
       'a, b, and c'
    """
    seq = list(items)
    if len(seq) < 2:
        return "".join(seq)
    return ", ".join(seq[:-1]) + conj + seq[-1]
