"""Substitution engine: expand custom function calls in declaration values.

A value is split at its top-level commas and each part is parsed into a
component value tree. The tree is walked depth first; calls nested inside
the arguments of another call (or inside a block) are expanded before the
enclosing call is looked at, so an outer custom function sees the already
expanded text of its arguments. The text a custom function returns is
parsed, serialized again by tinycss2 and put in place of the call. It is
not searched for further custom function calls.

Only the calls that are expanded get new text. Everything else, including
the rest of a segment or argument that contains an expanded call, is
copied from the source exactly as written.

Nothing that goes wrong at a single call site stops the transformation.
The call is left as it was and a Diagnostic is recorded instead.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .arguments import Piece, split_arguments
from .diagnostics import Diagnostic, DiagnosticKind
from .exceptions import MalformedArgumentsError, ValueSyntaxError
from .invoker import CallFailure, invoke
from .logger import get_logger
from .matcher import match_function
from .registry import CustomFunction, FunctionRegistry, as_registry
from .tree import (
    Segment,
    SourceNode,
    check_syntax,
    is_block,
    is_function,
    parse_comma_separated,
    parse_value,
    serialize,
)

logger = get_logger()


@dataclass(frozen=True)
class TransformResult:
    """Outcome of transforming one declaration value.

    ``value`` is the replacement text, or None when the declaration should
    be left alone.
    """

    value: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.value is not None


class SubstitutionEngine:
    """Expand custom function calls using a fixed registry."""

    def __init__(self, functions: FunctionRegistry | Mapping[str, CustomFunction]) -> None:
        self.functions = as_registry(functions)

    def transform(self, value: str) -> TransformResult:
        """Expand every registered call in *value*."""
        if not self.functions.mentioned_in(value):
            return TransformResult()

        diagnostics: list[Diagnostic] = []
        parts: list[str] = []
        any_changed = False
        for segment in parse_comma_separated(value):
            text = self._transform_segment(segment, diagnostics)
            parts.append(segment.source if text is None else text)
            any_changed = any_changed or text is not None
        modified = ",".join(parts)

        if not any_changed or modified == value:
            return TransformResult(diagnostics=diagnostics)
        logger.changes("%r -> %r", value, modified)
        return TransformResult(modified, diagnostics)

    def _transform_segment(self, segment: Segment, diagnostics: list[Diagnostic]) -> str | None:
        try:
            check_syntax(segment.tokens)
        except ValueSyntaxError as e:
            diagnostics.append(Diagnostic(DiagnosticKind.SYNTAX, str(e)))
            return None
        pieces = self._pieces(segment.nodes, diagnostics)
        if pieces is None:
            return None
        return "".join(text for _, text in pieces)

    def _pieces(
        self, nodes: Sequence[SourceNode], diagnostics: list[Diagnostic]
    ) -> list[Piece] | None:
        """Pair each node with its new text, or return None if none changed."""
        pieces: list[Piece] = []
        changed = False
        for located in nodes:
            text = self._render(located, diagnostics)
            if text is None:
                pieces.append((located.node, located.text))
            else:
                pieces.append((located.node, text))
                changed = True
        return pieces if changed else None

    def _render(self, located: SourceNode, diagnostics: list[Diagnostic]) -> str | None:
        """Return the text that takes the place of *located*, or None to keep it."""
        node = located.node
        if not is_function(node) and not is_block(node):
            return None

        pieces = self._pieces(located.children, diagnostics)
        rendered: str | None = None
        if pieces is not None:
            inner = "".join(text for _, text in pieces)
            rendered = located.prefix + inner + located.suffix

        func = match_function(node, self.functions)
        if func is not None:
            if pieces is None:
                pieces = [(child.node, child.text) for child in located.children]
            expansion = self._expand(located, func, pieces, diagnostics)
            if expansion is not None:
                return expansion
        return rendered

    def _expand(
        self,
        located: SourceNode,
        func: CustomFunction,
        pieces: Sequence[Piece],
        diagnostics: list[Diagnostic],
    ) -> str | None:
        name = located.node.name
        try:
            arguments = split_arguments(pieces)
        except MalformedArgumentsError as e:
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.MALFORMED_ARGUMENTS,
                    f"{name}() {e}: {located.text}",
                    function=name,
                )
            )
            return None

        logger.checks("Calling %s() with arguments %r", name, arguments)
        outcome = invoke(name, func, arguments)
        if isinstance(outcome, CallFailure):
            diagnostics.append(Diagnostic(DiagnosticKind.CALLBACK, outcome.message, function=name))
            return None

        try:
            return serialize(parse_value(outcome.value))
        except ValueSyntaxError as e:
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.SYNTAX,
                    f"{name}() returned invalid CSS {outcome.value!r}: {e}",
                    function=name,
                )
            )
            return None


def transform_value(
    value: str, functions: FunctionRegistry | Mapping[str, CustomFunction]
) -> TransformResult:
    """Expand custom function calls in a single declaration value.

    Args:
        value: The declaration value, e.g. ``"0 0 4px --shadow(red)"``
        functions: Registry (or plain dict) of custom functions by name

    Returns:
        TransformResult with the new value (None if unchanged) and any
        diagnostics for calls that were left in place
    """
    return SubstitutionEngine(functions).transform(value)
