"""Tests for multiline joining."""

from fasthaml import LogicalLine, logical_lines
from fasthaml.lines import is_multiline


class TestIsMultiline:
    def test_suffix(self):
        assert is_multiline("= foo(a, |")
        assert not is_multiline("= foo(a,|")
        assert not is_multiline("= foo")

    def test_block_with_spaced_pipes(self):
        assert not is_multiline("- items.each do | item |")
        assert not is_multiline("- items.each do |a, b |")
        assert is_multiline("- items.each do |item| |")


class TestLogicalLines:
    def test_plain_lines(self):
        assert list(logical_lines("%p\n  text")) == [
            LogicalLine("%p", 1),
            LogicalLine("  text", 2),
        ]

    def test_trailing_whitespace_trimmed(self):
        assert list(logical_lines("%p   \t")) == [LogicalLine("%p", 1)]

    def test_join(self):
        assert list(logical_lines("= foo(a, |\n    b) |")) == [LogicalLine("= foo(a, b)", 1)]

    def test_group_keeps_first_line_indent(self):
        result = list(logical_lines("%div\n  = a(1, |\n        2, |\n        3) |\n  %p"))
        assert result == [
            LogicalLine("%div", 1),
            LogicalLine("  = a(1, 2, 3)", 2),
            LogicalLine("  %p", 5),
        ]

    def test_group_ends_at_ineligible_line(self):
        result = list(logical_lines("x |\ny |\nz"))
        assert result == [LogicalLine("x y", 1), LogicalLine("z", 3)]

    def test_group_at_end_of_input(self):
        assert list(logical_lines("%p\n= a |")) == [LogicalLine("%p", 1), LogicalLine("= a", 2)]

    def test_blank_lines_kept(self):
        assert [line.lineno for line in logical_lines("a\n\nb")] == [1, 2, 3]
