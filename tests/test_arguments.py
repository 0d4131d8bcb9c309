"""Tests for splitting custom function arguments."""

from __future__ import annotations

import pytest

from cssfn.arguments import separate_by, split_arguments, trim
from cssfn.exceptions import MalformedArgumentsError
from cssfn.tree import SourceText, is_whitespace, parse_value


def arguments_of(source: str) -> list[str]:
    """Split the arguments of the single call in *source*."""
    call = SourceText(source).parse()[0]
    return split_arguments([(child.node, child.text) for child in call.children])


class TestSeparateBy:
    """Test the generic run splitter."""

    def test_empty_sequence_has_no_runs(self) -> None:
        assert separate_by([], lambda x: x == 0) == []

    def test_separators_are_dropped(self) -> None:
        assert separate_by([1, 0, 2, 3, 0, 4], lambda x: x == 0) == [[1], [2, 3], [4]]

    def test_adjacent_separators_give_empty_runs(self) -> None:
        assert separate_by([0, 0], lambda x: x == 0) == [[], [], []]


def test_trim_strips_only_blank_items() -> None:
    """Test that only outer whitespace nodes are removed."""
    nodes = parse_value("  a  b  ")
    assert [node.type for node in trim(nodes, is_whitespace)] == ["ident", "whitespace", "ident"]


class TestSplitArguments:
    """Test splitting a call's inner nodes into argument strings."""

    def test_single_argument(self) -> None:
        assert arguments_of("--f(10px)") == ["10px"]

    def test_arguments_in_order(self) -> None:
        assert arguments_of("--f(2, 3px, red)") == ["2", "3px", "red"]

    def test_whitespace_is_trimmed(self) -> None:
        assert arguments_of("--f(  a ,\n b  )") == ["a", "b"]

    def test_nested_commas_stay_in_argument(self) -> None:
        assert arguments_of("--f(rgb(0, 0, 0), [a, b])") == ["rgb(0, 0, 0)", "[a, b]"]

    def test_comments_are_significant(self) -> None:
        assert arguments_of("--f(/* x */ a)") == ["/* x */ a"]

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("--f('a b')", ["'a b'"]),
            ("--f(\\66 oo)", ["\\66 oo"]),
            ("--f(url( a.png ))", ["url( a.png )"]),
            ("--f(1.0e1, #FFF)", ["1.0e1", "#FFF"]),
            ("--f(a\r\n b)", ["a\r\n b"]),
        ],
    )
    def test_arguments_are_passed_as_written(self, source: str, expected: list[str]) -> None:
        assert arguments_of(source) == expected

    @pytest.mark.parametrize("source", ["--f()", "--f( )", "--f(\n\t)"])
    def test_no_arguments(self, source: str) -> None:
        """Test that empty and whitespace-only calls have zero arguments."""
        assert arguments_of(source) == []

    @pytest.mark.parametrize("source", ["--f(,)", "--f( , )", "--f(a,)", "--f(,a)", "--f(a, ,b)"])
    def test_empty_argument_raises(self, source: str) -> None:
        with pytest.raises(MalformedArgumentsError):
            arguments_of(source)

    def test_expanded_text_is_used(self) -> None:
        """Test that a piece's text, not its node, makes up the argument."""
        call = parse_value("--f(--g(), b)")[0]
        inner, comma, space, b = call.arguments
        pieces = [(inner, "1px, 2px"), (comma, ","), (space, " "), (b, "b")]
        assert split_arguments(pieces) == ["1px, 2px", "b"]

    def test_blank_expansion_is_empty(self) -> None:
        """Test that a nested call expanding to nothing leaves an empty argument."""
        call = parse_value("--f(--g())")[0]
        assert split_arguments([(call.arguments[0], "")]) == []
        with pytest.raises(MalformedArgumentsError):
            split_arguments([(call.arguments[0], " "), (parse_value(",")[0], ","), (call, "a")])
