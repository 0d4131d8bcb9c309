"""Split the arguments of a custom function call."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from .exceptions import MalformedArgumentsError
from .tree import Node, is_comma

_T = TypeVar("_T")

# A direct child of the call and the text it stands for in the call. The
# text is the child's source, or its expansion if it was a nested call.
Piece = tuple[Node, str]

CSS_WHITESPACE = " \t\n\r\f"


def separate_by(items: Sequence[_T], predicate: Callable[[_T], bool]) -> list[list[_T]]:
    """Split *items* into runs at every item matching *predicate*.

    Separators are dropped. An empty sequence gives no runs at all, while
    a sequence with n separators always gives n + 1 runs, some possibly
    empty.
    """
    if not items:
        return []
    runs: list[list[_T]] = [[]]
    for item in items:
        if predicate(item):
            runs.append([])
        else:
            runs[-1].append(item)
    return runs


def trim(items: Sequence[_T], is_blank: Callable[[_T], bool]) -> list[_T]:
    """Strip blank items from both ends."""
    start, end = 0, len(items)
    while start < end and is_blank(items[start]):
        start += 1
    while end > start and is_blank(items[end - 1]):
        end -= 1
    return list(items[start:end])


def _is_blank(piece: Piece) -> bool:
    return not piece[1].strip(CSS_WHITESPACE)


def split_arguments(pieces: Sequence[Piece]) -> list[str]:
    """Turn the direct children of a function call into argument strings.

    Arguments are separated by commas that are direct children of the call;
    commas inside nested functions or blocks are part of an argument, as
    are commas in the expansion of a nested call. Whitespace around each
    argument is removed and the rest is passed on exactly as written.

    ``--f()`` and ``--f( )`` have no arguments.

    Raises:
        MalformedArgumentsError: If an argument is empty, as in ``--f(,)``
            or ``--f(a, )``
    """
    runs = [trim(run, _is_blank) for run in separate_by(pieces, lambda piece: is_comma(piece[0]))]
    if len(runs) == 1 and not runs[0]:
        return []
    if any(not run for run in runs):
        raise MalformedArgumentsError("contains an empty argument")
    return ["".join(text for _, text in run) for run in runs]
