"""
Unit tests for loop expansion.
"""

import pytest

from vellum.contexts.templating.loops import expand_loops, expand_nested_loops
from vellum.contexts.templating.placeholders import PlaceholderResolver


@pytest.mark.unit
class TestExpandLoops:
    """Tests for expand_loops function."""

    def test_entries_joined_with_newline(self):
        """Test rendered entries are joined with newlines."""
        template = "{LOOP_START:xs}<i>{n}</i>{LOOP_END:xs}"
        assert expand_loops(template, {"xs": [{"n": 1}, {"n": 2}]}) == "<i>1</i>\n<i>2</i>"

    def test_entry_count_and_order(self):
        """Test one rendering per entry in list order."""
        items = [{"name": f"Item {i}"} for i in range(5)]
        result = expand_loops("{LOOP_START:items}<li>{name}</li>{LOOP_END:items}", {"items": items})

        assert result.split("\n") == [f"<li>Item {i}</li>" for i in range(5)]

    def test_index_token(self):
        """Test the index token holds the zero-based position."""
        template = "{LOOP_START:xs}{index}:{n} {LOOP_END:xs}"
        assert expand_loops(template, {"xs": [{"n": "a"}, {"n": "b"}]}) == "0:a \n1:b "

    @pytest.mark.parametrize("value", [[], None, "abc", {"n": 1}, 5])
    def test_unusable_array_removes_region(self, value):
        """Test empty or non-list values remove the loop region."""
        template = "a{LOOP_START:xs}<i>{n}</i>{LOOP_END:xs}b"
        assert expand_loops(template, {"xs": value}) == "ab"

    def test_missing_key_removes_region(self):
        """Test a missing loop key removes the region."""
        assert expand_loops("a{LOOP_START:xs}x{LOOP_END:xs}b", {}) == "ab"

    def test_unmatched_markers_left_as_text(self):
        """Test unpaired loop markers are left untouched."""
        assert expand_loops("a{LOOP_START:xs}b", {"xs": [{}]}) == "a{LOOP_START:xs}b"
        assert expand_loops("a{LOOP_END:xs}b", {"xs": [{}]}) == "a{LOOP_END:xs}b"

    def test_global_fallback(self):
        """Test loop bodies can read global data."""
        template = "{LOOP_START:items}<li>{name} - {globalTitle}</li>{LOOP_END:items}"
        data = {"globalTitle": "Global", "items": [{"name": "Item 1"}, {"name": "Item 2"}]}

        assert expand_loops(template, data) == (
            "<li>Item 1 - Global</li>\n<li>Item 2 - Global</li>"
        )

    def test_item_shadows_global(self):
        """Test entry fields shadow global fields."""
        data = {"n": "global", "xs": [{"n": "item"}]}
        assert expand_loops("{LOOP_START:xs}{n}{LOOP_END:xs}", data) == "item"

    def test_entry_sees_only_its_own_fields(self):
        """Test entries do not leak fields into each other."""
        data = {"xs": [{"a": "1"}, {"b": "2"}]}
        result = expand_loops("{LOOP_START:xs}[{a}{b}]{LOOP_END:xs}", data)

        assert result == "[1{b}]\n[{a}2]"

    def test_plain_string_entries(self):
        """Test plain string entries leave field tokens unresolved."""
        result = expand_loops("{LOOP_START:tags}<b>{tag}</b>{LOOP_END:tags}", {"tags": ["x", "y"]})
        assert result == "<b>{tag}</b>\n<b>{tag}</b>"

    def test_url_keys_use_url_renderer(self):
        """Test URL fields inside loops use the URL renderer."""
        template = '{LOOP_START:xs}<img src="{photoUrl}">{LOOP_END:xs}'
        result = expand_loops(template, {"xs": [{"photoUrl": None}, {"photoUrl": "a.png"}]})

        assert result == '<img src="/images/placeholder.jpg">\n<img src="a.png">'

    def test_sibling_loops(self):
        """Test adjacent loops expand independently."""
        template = "{LOOP_START:a}{v}{LOOP_END:a}|{LOOP_START:b}{v}{LOOP_END:b}"
        data = {"a": [{"v": 1}], "b": [{"v": 2}]}
        assert expand_loops(template, data) == "1|2"

    def test_custom_delimiters_do_not_change_loop_markers(self):
        """Test loop markers stay fixed under custom delimiters."""
        resolver = PlaceholderResolver(("{{", "}}"))
        template = "{LOOP_START:xs}{{n}}{LOOP_END:xs}"
        assert expand_loops(template, {"xs": [{"n": 1}]}, resolver) == "1"


@pytest.mark.unit
class TestNestedLoops:
    """Tests for loops nested inside loop bodies."""

    def test_nested_array_from_entry(self):
        """Test an inner loop iterates a list taken from the outer entry."""
        template = (
            "{LOOP_START:groups}<h>{title}</h>"
            "{LOOP_START:items}<i>{label}</i>{LOOP_END:items}"
            "{LOOP_END:groups}"
        )
        data = {
            "groups": [
                {"title": "A", "items": [{"label": "a1"}, {"label": "a2"}]},
                {"title": "B", "items": []},
            ]
        }

        assert expand_loops(template, data) == "<h>A</h><i>a1</i>\n<i>a2</i>\n<h>B</h>"

    def test_inner_loop_sees_outer_entry(self):
        """Test inner loop bodies can read outer entry fields."""
        template = "{LOOP_START:groups}{LOOP_START:items}{title}/{label}{LOOP_END:items}{LOOP_END:groups}"
        data = {"groups": [{"title": "G", "items": [{"label": "x"}]}]}

        assert expand_loops(template, data) == "G/x"

    def test_inner_loop_owns_index(self):
        """Test the inner loop binds its own index."""
        template = "{LOOP_START:outer}{LOOP_START:inner}{index}{LOOP_END:inner}|{index};{LOOP_END:outer}"
        data = {"outer": [{"inner": [1, 2]}, {"inner": [3]}]}

        assert expand_loops(template, data) == "0\n1|0;\n0|1;"

    def test_same_name_nested(self):
        """Test a nested loop sharing its parent's name pairs correctly."""
        template = "{LOOP_START:xs}[{LOOP_START:xs}{n}{LOOP_END:xs}]{LOOP_END:xs}"
        data = {"xs": [{"n": 1, "xs": [{"n": "a"}]}]}

        assert expand_loops(template, data) == "[a]"


@pytest.mark.unit
class TestExpandNestedLoops:
    """Tests for the bounded repeat pass."""

    def test_expands_markers_present_after_substitution(self):
        """Test loop markers left in the text are expanded."""
        text = "{LOOP_START:xs}{n}{LOOP_END:xs}"
        assert expand_nested_loops(text, {"xs": [{"n": 1}]}) == "1"

    def test_no_markers_unchanged(self):
        """Test text without loop markers passes through."""
        assert expand_nested_loops("<p>done</p>", {}) == "<p>done</p>"

    def test_self_reproducing_loop_terminates(self):
        """Test a loop whose value reproduces itself stops."""
        body = "{LOOP_START:xs}{n}{LOOP_END:xs}"
        data = {"xs": [{"n": body}]}

        assert expand_nested_loops(body, data) == body

    def test_pass_bound(self):
        """Each pass adds one wrapper; the bound stops after max_passes."""
        body = "{LOOP_START:xs}{n}{LOOP_END:xs}"
        data = {"xs": [{"n": "<" + body + ">"}]}

        result = expand_nested_loops(body, data, max_passes=3)
        assert result == "&lt;" * 3 + body + "&gt;" * 3
