"""Recognize calls to registered custom functions."""

from __future__ import annotations

from collections.abc import Mapping

from .registry import CustomFunction
from .tree import Node, is_function


def match_function(node: Node, functions: Mapping[str, CustomFunction]) -> CustomFunction | None:
    """Return the custom function called by *node*, or None.

    Only function nodes match, and only when their name equals a registered
    name exactly. ``--Foo(`` does not call ``--foo``.
    """
    if not is_function(node):
        return None
    return functions.get(node.name)
