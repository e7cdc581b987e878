"""
Unit tests for text segmentation.

Covers the Latin word path, the Chinese punctuation-driven path, and the
routing between them.
"""

import pytest

from rsvp.segmentation import (
    SegmentationEngine,
    contains_chinese_text,
    segment,
    split_chinese_segments,
    split_latin_words,
)


class TestRouting:
    """Test which path a text takes."""

    def test_latin_text_has_no_chinese_markers(self):
        """Test plain Latin text is not routed to the Chinese path."""
        assert contains_chinese_text("Hello, world!") is False

    def test_fullwidth_punctuation_routes_to_chinese(self):
        """Test full-width punctuation selects the Chinese path."""
        assert contains_chinese_text("你好。") is True

    def test_chinese_characters_without_markers_use_latin_path(self):
        """Test CJK text without full-width punctuation splits on whitespace."""
        # No full-width punctuation, so whitespace splitting applies
        assert segment("你好 世界") == ("你好", "世界")

    @pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
    def test_blank_input_yields_empty_sequence(self, text):
        """Test blank input produces no units."""
        assert segment(text) == ()

    def test_result_is_immutable_tuple(self):
        """Test segment() returns a tuple."""
        assert isinstance(segment("one two"), tuple)


class TestLatinWords:
    """Test whitespace splitting with edge punctuation stripping."""

    def test_strips_edge_punctuation_keeps_interior(self):
        """Test edge punctuation is stripped but hyphens inside words stay."""
        assert segment("Hello, world! Foo-bar.") == ("Hello", "world", "Foo-bar")

    def test_apostrophes_survive_inside_words(self):
        """Test contractions keep their apostrophe."""
        assert split_latin_words("don't stop") == ["don't", "stop"]

    def test_pure_punctuation_tokens_are_dropped(self):
        """Test tokens made only of punctuation are dropped."""
        assert split_latin_words("wait -- what ?!") == ["wait", "what"]

    def test_unicode_quotes_are_stripped(self):
        """Test curly quotes are treated as edge punctuation."""
        assert split_latin_words("“Quoted” words") == ["Quoted", "words"]

    def test_runs_of_whitespace(self):
        """Test any run of whitespace separates words."""
        assert split_latin_words("  a \n\n b\tc  ") == ["a", "b", "c"]


class TestChineseSegments:
    """Test punctuation-driven Chinese segmentation."""

    def test_split_after_terminators(self):
        """Test segments end after sentence terminators."""
        assert segment("你好。世界！") == ("你好。", "世界！")

    def test_quote_and_terminator_merge(self):
        """Test a closing quote stays with the terminator before it."""
        units = segment("他说：“你好。”")
        assert units == ("他说：", "“你好。”")
        assert units[-1].endswith("”")

    def test_closing_mark_before_terminator_merges(self):
        """Test a closing bracket and terminator form one segment end."""
        assert split_chinese_segments("（注释）。下一句") == ["（注释）。", "下一句"]

    def test_opening_mark_starts_new_segment(self):
        """Test an opening mark starts a new segment."""
        assert split_chinese_segments("见《红楼梦》。") == ["见", "《红楼梦》。"]

    def test_comma_and_enumeration_mark_split(self):
        """Test commas and enumeration marks end segments."""
        assert split_chinese_segments("甲、乙，丙") == ["甲、", "乙，", "丙"]

    def test_newline_splits(self):
        """Test a newline starts a new segment."""
        assert segment("第一行。\n第二行") == ("第一行。", "\n第二行")

    def test_no_whitespace_only_segments(self):
        """Test whitespace-only segments are discarded."""
        units = segment("你好。  \n  世界。")
        assert all(unit.strip() for unit in units)

    def test_concatenation_reproduces_input(self):
        """Test joining the segments gives back the text."""
        text = "他说：“今天天气很好。”我们去公园吧！好的，走（现在）。"
        assert "".join(segment(text)) == text

    def test_trailing_text_without_terminator_is_flushed(self):
        """Test trailing text without a terminator becomes the last segment."""
        assert split_chinese_segments("你好。还有") == ["你好。", "还有"]

    def test_deterministic(self):
        """Test the same text always segments the same way."""
        text = "一。二！三？四；五，"
        assert segment(text) == segment(text)


class TestSegmentationEngine:
    """Test the injectable facade."""

    def test_delegates_to_segment(self):
        """Test the engine facade calls segment()."""
        engine = SegmentationEngine()
        assert engine.segment("Hello, world!") == ("Hello", "world")
