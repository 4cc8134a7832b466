"""Test locals declaration extraction.

The declaration is a comment-only pragma:

    <%# locals: (name:, age:) -%>

Key behaviors:
1. Names come back in source order
2. No declaration means no parameters
3. Defaults and annotations after each ``name:`` are ignored
4. Only the first declaration counts
5. A malformed declaration degrades to no parameters (with a warning)
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from component_subtemplates.parameters import extract_parameters, strip_declaration

identifiers = st.from_regex(r"[a-z_][a-z0-9_]{0,10}", fullmatch=True)

# Source lines that never look like a declaration
body_lines = st.lists(
    st.text(
        alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="<%\r\n"),
        max_size=40,
    ),
    max_size=5,
).map("\n".join)


def declaration(names: list[str]) -> str:
    return "<%# locals: (" + ", ".join(f"{name}:" for name in names) + ") -%>"


class TestExtractParameters:
    """Example-based extraction tests."""

    def test_two_parameters(self) -> None:
        """Declared names are returned in order."""
        assert extract_parameters("<%# locals: (a:, b:) -%>\nX") == ("a", "b")

    def test_no_declaration(self) -> None:
        """Sources without a declaration take no parameters."""
        assert extract_parameters("<div>No locals</div>") == ()

    def test_empty_declaration(self) -> None:
        """An empty parameter list is valid."""
        assert extract_parameters("<%# locals: () -%>\n<p/>") == ()

    def test_defaults_are_ignored(self) -> None:
        """Text after each marker is not validated."""
        source = "<%# locals: (title: 'Untitled', count: 3) -%>\n${title}"
        assert extract_parameters(source) == ("title", "count")

    def test_whitespace_variants(self) -> None:
        """Whitespace around the pieces is flexible."""
        assert extract_parameters("<%#locals:(name:,age:)-%>") == ("name", "age")
        assert extract_parameters("<%#   locals:   ( name: ,  age: )   -%>") == ("name", "age")

    def test_declaration_not_on_first_line(self) -> None:
        """The declaration may appear anywhere in the source."""
        source = "<div>\n<%# locals: (item:) -%>\n${item}</div>"
        assert extract_parameters(source) == ("item",)

    def test_only_first_declaration_counts(self) -> None:
        """A second declaration is not detected."""
        source = "<%# locals: (a:) -%>\n<%# locals: (b:) -%>"
        assert extract_parameters(source) == ("a",)

    def test_duplicates_are_returned_as_written(self) -> None:
        """Extraction is not validation; duplicates are rejected when binding."""
        assert extract_parameters("<%# locals: (a:, a:) -%>") == ("a", "a")

    def test_missing_trim_marker_is_malformed(self, caplog) -> None:
        """A declaration without ``-%>`` is treated as absent."""
        with caplog.at_level(logging.WARNING, logger="component_subtemplates.parameters"):
            result = extract_parameters("<%# locals: (a:) %>\nX", filename="row.html.mako")
        assert result == ()
        assert "Malformed locals declaration in row.html.mako" in caplog.text

    def test_missing_parentheses_is_malformed(self, caplog) -> None:
        """A declaration without parentheses is treated as absent."""
        with caplog.at_level(logging.WARNING, logger="component_subtemplates.parameters"):
            assert extract_parameters("<%# locals: a:, b: -%>") == ()
        assert "Malformed" in caplog.text

    def test_unrelated_comment_is_silent(self, caplog) -> None:
        """Ordinary comments do not produce warnings."""
        with caplog.at_level(logging.WARNING, logger="component_subtemplates.parameters"):
            assert extract_parameters("<%# just a note -%>\nX") == ()
        assert caplog.text == ""


class TestStripDeclaration:
    """The translator strips the pragma before compiling."""

    def test_pragma_removed_newline_kept(self) -> None:
        assert strip_declaration("<%# locals: (a:) -%>\n<p>${a}</p>") == "\n<p>${a}</p>"

    def test_multiline_pragma_keeps_line_count(self) -> None:
        source = "<%#\n  locals: (a:) -%>\n${a}"
        stripped = strip_declaration(source)
        assert stripped == "\n\n${a}"
        assert stripped.count("\n") == source.count("\n")

    def test_no_pragma_unchanged(self) -> None:
        assert strip_declaration("<p>plain</p>") == "<p>plain</p>"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("<%# locals: (a:, b:)\n<p>x</p>", "\n<p>x</p>"),
            ("<%# locals: (a:, b: -%>\n<p>x</p>", "\n<p>x</p>"),
            ("<%# locals: a:, b: %>\n<p>x</p>", "\n<p>x</p>"),
            ("<%# locals: (a:,\n b:) -%>\n<p>x</p>", "\n\n<p>x</p>"),
            ("<%# locals: (a:) -%>\n${a}\n<%# locals: (b:) -%>\n", "\n${a}\n\n"),
        ],
    )
    def test_every_comment_tag_removed(self, source: str, expected: str) -> None:
        """Malformed and repeated declarations are removed as well."""
        assert strip_declaration(source) == expected

    def test_unclosed_tag_stops_at_next_tag(self) -> None:
        """An unclosed comment never swallows a later tag."""
        source = "<%# locals: (a:)\n<% x = 1 %>${x}"
        assert strip_declaration(source) == "\n<% x = 1 %>${x}"


class TestParameterProperties:
    """Property-based invariants."""

    @given(names=st.lists(identifiers, unique=True, max_size=6), body=body_lines)
    @settings(max_examples=200)
    def test_declared_names_are_extracted_in_order(self, names: list[str], body: str) -> None:
        """Whatever the body, the declared names come back unchanged."""
        source = f"{declaration(names)}\n{body}"
        assert extract_parameters(source) == tuple(names)

    @given(body=body_lines)
    @settings(max_examples=200)
    def test_sources_without_pragma_take_no_parameters(self, body: str) -> None:
        assert extract_parameters(body) == ()

    @given(names=st.lists(identifiers, unique=True, max_size=6), body=body_lines)
    @settings(max_examples=100)
    def test_strip_preserves_line_numbers(self, names: list[str], body: str) -> None:
        source = f"{body}\n{declaration(names)}\n{body}"
        assert strip_declaration(source).count("\n") == source.count("\n")
