"""Component value trees backed by tinycss2.

tinycss2 never raises on malformed input: it embeds ``ParseError`` nodes in
the tree instead. This module turns those nodes into ``ValueSyntaxError`` so
callers can treat a malformed value as a failed parse.

tinycss2 only records where a node starts, and its serializer does not
reproduce the source (``'x'`` comes back as ``"x"``, escapes are resolved).
``SourceText.parse()`` therefore pairs every node with the extent of its
text, so that anything left alone can be emitted exactly as written.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import tinycss2
from tinycss2 import ast

from .exceptions import ValueSyntaxError

Node = ast.Node

BLOCK_TYPES = frozenset({"() block", "[] block", "{} block"})


def is_whitespace(node: Node | None) -> bool:
    return node is not None and node.type == "whitespace"


def is_comma(node: Node) -> bool:
    return node.type == "literal" and node.value == ","


def is_function(node: Node) -> bool:
    return node.type == "function"


def is_block(node: Node) -> bool:
    return node.type in BLOCK_TYPES


def children_of(node: Node) -> list[Node]:
    """Arguments of a function, content of a block, nothing for a token."""
    if is_function(node):
        return node.arguments
    if is_block(node):
        return node.content
    return []


def normalize_source(text: str) -> str:
    """Apply the input preprocessing tinycss2 applies before tokenizing.

    Source positions reported by tinycss2 refer to this normalized text.
    """
    return (
        text.replace("\0", "\ufffd")
        .replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\f", "\n")
    )


@dataclass(frozen=True)
class SourceNode:
    """A tinycss2 node and the extent of its text in a SourceText.

    ``start`` and ``end`` are offsets in the normalized text. Children
    cover the text between the node's opening (``rgb(``, ``[``) and its
    closing bracket without gaps.
    """

    node: Node
    start: int
    end: int
    source: SourceText = field(repr=False, compare=False)
    children: list[SourceNode] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.source.slice(self.start, self.end)

    @property
    def prefix(self) -> str:
        """Text before the first child, such as ``rgb(``."""
        return self.source.slice(self.start, self.children[0].start)

    @property
    def suffix(self) -> str:
        """Text after the last child: the closing bracket, or nothing at end of input."""
        return self.source.slice(self.children[-1].end, self.end)


class SourceText:
    """Text to parse with tinycss2, mapped back from tinycss2 positions.

    Offsets are counted in the normalized text tinycss2 reports positions
    in. Slices are taken from the original text, so a ``\\r\\n`` stays a
    ``\\r\\n``.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.normalized = normalize_source(text)
        self._line_starts = _line_starts(self.normalized)
        self._original_offsets = _original_offsets(text) if "\r\n" in text else None

    def __len__(self) -> int:
        return len(self.normalized)

    def offset(self, node: Node) -> int:
        """Offset of the first character of *node*."""
        return self._line_starts[node.source_line - 1] + node.source_column - 1

    def slice(self, start: int, end: int) -> str:
        """Original text between two normalized offsets."""
        if self._original_offsets is None:
            return self.text[start:end]
        return self.text[self._original_offsets[start] : self._original_offsets[end]]

    def splice(self, replacements: Iterable[tuple[int, int, str]]) -> str:
        """Return the original text with each ``(start, end)`` extent replaced.

        Extents must be in order and must not overlap.
        """
        parts: list[str] = []
        position = 0
        for start, end, replacement in replacements:
            parts.append(self.slice(position, start))
            parts.append(replacement)
            position = end
        parts.append(self.slice(position, len(self)))
        return "".join(parts)

    def parse(self) -> list[SourceNode]:
        """Parse the text into component values, keeping comments.

        Parse errors are left in the tree; see check_syntax().
        """
        nodes = tinycss2.parse_component_value_list(self.normalized, skip_comments=False)
        return self._locate(nodes, len(self), self._closed_at_end(nodes))

    def _locate(
        self, nodes: Sequence[Node], end: int, closed_at_end: set[int]
    ) -> list[SourceNode]:
        starts = [self.offset(node) for node in nodes]
        starts.append(end)
        located: list[SourceNode] = []
        for node, start, stop in zip(nodes, starts, starts[1:]):
            children: list[SourceNode] = []
            if children_of(node):
                # Blocks only run to the end of input without a closing bracket
                if stop == len(self) and id(node) not in closed_at_end:
                    inner_end = stop
                else:
                    inner_end = stop - 1
                children = self._locate(children_of(node), inner_end, closed_at_end)
            located.append(SourceNode(node, start, stop, self, children))
        return located

    def _closed_at_end(self, nodes: Sequence[Node]) -> set[int]:
        """Return the ids of the blocks ending at end of input that were closed.

        tinycss2 silently closes blocks left open at the end of input. The
        innermost node there is re-parsed on its own with more and more
        trailing characters cut off: the first cut that leaves exactly that
        node gives the number of closing brackets after it.
        """
        chain: list[Node] = []
        while nodes:
            chain.append(nodes[-1])
            nodes = children_of(nodes[-1])
        if not chain:
            return set()

        innermost = chain.pop()
        start = self.offset(innermost)
        expected = innermost.serialize()
        for count in range(len(chain) + 1):
            reparsed = tinycss2.parse_component_value_list(
                self.normalized[start : len(self) - count], skip_comments=False
            )
            if len(reparsed) == 1 and reparsed[0].serialize() == expected:
                return {id(node) for node in chain[len(chain) - count :]}
        return set()


@dataclass(frozen=True)
class Segment:
    """One top-level, comma-delimited part of a value.

    ``source`` is the exact text of the segment, commas excluded.
    """

    nodes: list[SourceNode]
    source: str

    @property
    def tokens(self) -> list[Node]:
        return [located.node for located in self.nodes]


def iter_source_nodes(nodes: Iterable[SourceNode]) -> Iterator[SourceNode]:
    """Yield every node, parents before their children."""
    for located in nodes:
        yield located
        yield from iter_source_nodes(located.children)


def iter_parse_errors(nodes: Iterable[Node]) -> Iterator[ast.ParseError]:
    """Yield every parse error node, at any depth, in source order."""
    for node in nodes:
        if node.type == "error":
            yield node
        else:
            yield from iter_parse_errors(children_of(node))


def check_syntax(nodes: Iterable[Node]) -> None:
    """Raise ValueSyntaxError for the first parse error found in *nodes*."""
    for error in iter_parse_errors(nodes):
        raise ValueSyntaxError(
            f"{error.message} at {error.source_line}:{error.source_column}",
            line=error.source_line,
            column=error.source_column,
        )


def parse_value(text: str) -> list[Node]:
    """Parse *text* into a list of component values.

    Raises:
        ValueSyntaxError: If the text contains an unmatched closing bracket,
            a bad string, or a bad url.
    """
    nodes = tinycss2.parse_component_value_list(text, skip_comments=False)
    check_syntax(nodes)
    return nodes


def parse_comma_separated(text: str) -> list[Segment]:
    """Parse *text* and split it at top-level commas.

    Commas nested in functions or blocks belong to those nodes and never
    split the list. The commas themselves are dropped. Segments are not
    checked for parse errors; use check_syntax() on each one.
    """
    source = SourceText(text)
    segments: list[Segment] = []
    current: list[SourceNode] = []
    start = 0
    for located in source.parse():
        if is_comma(located.node):
            segments.append(Segment(current, source.slice(start, located.start)))
            current = []
            start = located.end
        else:
            current.append(located)
    segments.append(Segment(current, source.slice(start, len(source))))
    return segments


def serialize(nodes: Iterable[Node]) -> str:
    return tinycss2.serialize(nodes)


def _line_starts(text: str) -> list[int]:
    starts = [0]
    starts.extend(index + 1 for index, char in enumerate(text) if char == "\n")
    return starts


def _original_offsets(text: str) -> list[int]:
    # Offset in text of each character of the normalized text, plus the end
    offsets: list[int] = []
    index = 0
    while index < len(text):
        offsets.append(index)
        index += 2 if text.startswith("\r\n", index) else 1
    offsets.append(len(text))
    return offsets
