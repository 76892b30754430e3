"""
Unit tests for marker-pair scanning and whitespace helpers.

Tests core scanning utilities in vellum.utils.text_processing.
"""

import pytest

from vellum.contexts.templating.marker_patterns import LoopPatterns, SectionPatterns
from vellum.utils.text_processing import (
    collapse_blank_lines,
    find_all_marker_pairs,
    find_marker_pairs,
    replace_marker_pairs,
    truncate_display,
)


@pytest.mark.unit
class TestFindAllMarkerPairs:
    """Tests for find_all_marker_pairs function."""

    def test_single_pair(self):
        """Test a single pair exposes its name, inner and outer text."""
        text = "a{LOOP_START:xs}b{LOOP_END:xs}c"
        pairs = find_all_marker_pairs(text, LoopPatterns.START, LoopPatterns.END)

        assert len(pairs) == 1
        assert pairs[0].name == "xs"
        assert pairs[0].inner(text) == "b"
        assert pairs[0].outer(text) == "{LOOP_START:xs}b{LOOP_END:xs}"

    def test_nested_same_name(self):
        """Inner pair closes first; outer spans the whole text."""
        text = "{LOOP_START:a}x{LOOP_START:a}y{LOOP_END:a}{LOOP_END:a}"
        pairs = find_all_marker_pairs(text, LoopPatterns.START, LoopPatterns.END)

        assert [(p.start, p.end) for p in pairs] == [(0, 54), (15, 42)]
        assert pairs[0].inner(text) == "x{LOOP_START:a}y{LOOP_END:a}"
        assert pairs[1].inner(text) == "y"

    def test_unclosed_inner_opener_is_literal(self):
        """Test an opener left unclosed inside a pair is kept as literal text."""
        text = "{LOOP_START:a}{LOOP_START:b}x{LOOP_END:a}"
        pairs = find_all_marker_pairs(text, LoopPatterns.START, LoopPatterns.END)

        assert len(pairs) == 1
        assert pairs[0].name == "a"
        assert pairs[0].inner(text) == "{LOOP_START:b}x"

    def test_stray_closer_ignored(self):
        """Test a closer with no opener does not pair."""
        text = "{LOOP_END:a}{LOOP_START:b}x{LOOP_END:b}"
        pairs = find_all_marker_pairs(text, LoopPatterns.START, LoopPatterns.END)

        assert [p.name for p in pairs] == ["b"]

    def test_mismatched_names_do_not_pair(self):
        """Test markers with different names never pair."""
        text = "{LOOP_START:a}x{LOOP_END:b}"
        assert find_all_marker_pairs(text, LoopPatterns.START, LoopPatterns.END) == []

    def test_token_matching_both_patterns(self):
        """A section named "EndNotes" opens, then closes on its own end marker."""
        text = "<!-- EndNotes section -->x<!-- EndEndNotes section -->"
        pairs = find_all_marker_pairs(text, SectionPatterns.START, SectionPatterns.END)

        assert len(pairs) == 1
        assert pairs[0].name == "EndNotes"
        assert pairs[0].inner(text) == "x"

    def test_section_names_with_spaces(self):
        """Test section names containing spaces are captured whole."""
        text = "<!-- About Me section -->hi<!-- EndAbout Me section -->"
        pairs = find_all_marker_pairs(text, SectionPatterns.START, SectionPatterns.END)

        assert len(pairs) == 1
        assert pairs[0].name == "About Me"
        assert pairs[0].inner(text) == "hi"


@pytest.mark.unit
class TestFindMarkerPairs:
    """Tests for find_marker_pairs (outermost only)."""

    def test_outermost_only(self):
        """Test nested pairs are excluded from the outermost scan."""
        text = "{LOOP_START:a}{LOOP_START:b}x{LOOP_END:b}{LOOP_END:a}{LOOP_START:c}y{LOOP_END:c}"
        pairs = find_marker_pairs(text, LoopPatterns.START, LoopPatterns.END)

        assert [p.name for p in pairs] == ["a", "c"]

    def test_no_markers(self):
        """Test text without markers yields no pairs."""
        assert find_marker_pairs("plain text", LoopPatterns.START, LoopPatterns.END) == []


@pytest.mark.unit
class TestReplaceMarkerPairs:
    """Tests for replace_marker_pairs function."""

    def test_replaces_each_region(self):
        """Test each outermost region is rewritten in one pass."""
        text = "1{LOOP_START:a}x{LOOP_END:a}2{LOOP_START:b}y{LOOP_END:b}3"
        pairs = find_marker_pairs(text, LoopPatterns.START, LoopPatterns.END)
        result = replace_marker_pairs(text, pairs, lambda pair: pair.inner(text).upper())

        assert result == "1X2Y3"

    def test_no_pairs_returns_text(self):
        """Test an empty pair list leaves the text unchanged."""
        assert replace_marker_pairs("abc", [], lambda pair: "") == "abc"


@pytest.mark.unit
class TestCollapseBlankLines:
    """Tests for collapse_blank_lines function."""

    def test_collapses_runs(self):
        """Test runs of blank lines collapse to one and trailing space is stripped."""
        assert collapse_blank_lines("a\n\n\n\nb  \n") == "a\n\nb"

    def test_whitespace_only_lines_count_as_blank(self):
        """Test whitespace-only lines are treated as blank."""
        assert collapse_blank_lines("a\n  \n\t\nb") == "a\n\nb"

    def test_single_blank_line_kept(self):
        """Test a single blank line is preserved."""
        assert collapse_blank_lines("a\n\nb") == "a\n\nb"

    def test_leading_whitespace_kept(self):
        """Test leading indentation survives collapsing."""
        assert collapse_blank_lines("\n  a\n") == "\n  a"


@pytest.mark.unit
def test_truncate_display():
    """Test long strings are cut with an ellipsis."""
    assert truncate_display("short", 10) == "short"
    assert truncate_display("this is a very long string", 10) == "this is..."
