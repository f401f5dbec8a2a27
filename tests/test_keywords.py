"""Tests for block keyword detection."""

import pytest

from fasthaml import MID_BLOCK_KEYWORDS, block_keyword, is_mid_block_keyword


class TestBlockKeyword:
    @pytest.mark.parametrize("keyword", MID_BLOCK_KEYWORDS)
    def test_mid_block_keywords(self, keyword):
        assert block_keyword(f"- {keyword}") == keyword
        assert is_mid_block_keyword(f"- {keyword}")

    def test_elsif_is_not_else(self):
        assert block_keyword("- elsif x > 1") == "elsif"

    @pytest.mark.parametrize(
        "text,keyword",
        [
            ("- if foo", "if"),
            ("- unless foo", "unless"),
            ("- begin", "begin"),
            ("- case x", "case"),
            ("- x = if foo", "if"),
            ("- x, y = case foo", "case"),
            ("- a,b=begin", "begin"),
        ],
    )
    def test_start_block_keywords(self, text, keyword):
        assert block_keyword(text) == keyword
        assert not is_mid_block_keyword(text)

    @pytest.mark.parametrize("text", ["-else", "else", "  when 1", "- end.compact"])
    def test_marker_and_spacing_are_optional(self, text):
        assert is_mid_block_keyword(text)

    @pytest.mark.parametrize(
        "text",
        ["", "- elsewhere", "- x = 1", "%p else", "= end_date", "- endless", "- foo if bar"],
    )
    def test_no_keyword(self, text):
        assert block_keyword(text) is None
        assert not is_mid_block_keyword(text)
