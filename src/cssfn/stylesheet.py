"""Expand custom functions in every declaration of a stylesheet."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

import tinycss2
from tinycss2 import ast

from .arguments import trim
from .diagnostics import Diagnostic
from .engine import SubstitutionEngine
from .logger import get_logger
from .registry import CustomFunction, FunctionRegistry, as_registry
from .tree import Node, SourceNode, SourceText, is_whitespace, iter_source_nodes

logger = get_logger()


@dataclass(frozen=True)
class StylesheetResult:
    """Processed stylesheet text and the diagnostics of all its declarations."""

    css: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    changed_declarations: int = 0


class _StylesheetProcessor:
    """Finds declarations and collects the new text of their values.

    tinycss2 does the rule and declaration parsing on nodes that were
    located in the source beforehand, so a value can be read from, and
    written back to, its exact place in the text.
    """

    def __init__(self, engine: SubstitutionEngine, source: SourceText) -> None:
        self.engine = engine
        self.source = source
        self.nodes = source.parse()
        self._located = {id(located.node): located for located in iter_source_nodes(self.nodes)}
        self.replacements: list[tuple[int, int, str]] = []
        self.diagnostics: list[Diagnostic] = []

    def process(self) -> None:
        rules = tinycss2.parse_stylesheet(
            [located.node for located in self.nodes], skip_comments=True, skip_whitespace=True
        )
        self.process_rules(rules)

    def process_rules(self, rules: Iterable[Node]) -> None:
        for rule in rules:
            if rule.type in ("qualified-rule", "at-rule") and rule.content is not None:
                self.process_block(rule.content)

    def process_block(self, content: Sequence[Node]) -> None:
        """Process the declarations and nested rules of one ``{}`` block."""
        items = tinycss2.parse_blocks_contents(content, skip_comments=True, skip_whitespace=True)
        for item in items:
            if item.type == "declaration":
                self.process_declaration(item)
            else:
                self.process_rules([item])

    def process_declaration(self, declaration: ast.Declaration) -> None:
        # The value handed to the engine excludes surrounding whitespace and
        # !important, which tinycss2 has already removed
        value = trim(declaration.value, is_whitespace)
        if not value:
            return
        start = self._locate(value[0]).start
        end = self._locate(value[-1]).end

        result = self.engine.transform(self.source.slice(start, end))
        for diagnostic in result.diagnostics:
            self.diagnostics.append(
                diagnostic.at(declaration.name, declaration.source_line, declaration.source_column)
            )
        if result.value is None:
            return

        self.replacements.append((start, end, result.value))
        logger.changes(
            "%d:%d: %s: %s",
            declaration.source_line,
            declaration.source_column,
            declaration.name,
            result.value,
        )

    def _locate(self, node: Node) -> SourceNode:
        return self._located[id(node)]


def process_stylesheet(
    css: str, functions: FunctionRegistry | Mapping[str, CustomFunction]
) -> StylesheetResult:
    """Expand custom function calls in every declaration of *css*.

    Declarations are found inside every rule, including nested rules and
    at-rules such as ``@media``. Only the values that change are replaced;
    the rest of the stylesheet is kept as written. Diagnostics carry the
    declaration's property name and position. A stylesheet that never
    mentions a registered function is returned as is.
    """
    registry = as_registry(functions)
    if not registry.mentioned_in(css):
        return StylesheetResult(css)

    source = SourceText(css)
    processor = _StylesheetProcessor(SubstitutionEngine(registry), source)
    processor.process()
    replacements = sorted(processor.replacements)
    output = source.splice(replacements) if replacements else css
    return StylesheetResult(output, processor.diagnostics, len(replacements))
