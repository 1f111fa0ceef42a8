"""Tests for the identifier/type-expression grammar and command-line helpers.

Covers: identifiers, pointer suffixes, bracketed type lists of every kind,
mixed nesting, total-parse wrappers, uniqueness, splitting and integers.
"""
from __future__ import annotations

import pytest

from uml_editor.errors import ConflictError, ValidationError
from uml_editor.grammar import (
    check_identifier,
    check_type,
    check_unique,
    parse_int,
    split_command,
    valid_identifier,
    valid_type,
)


# ============================================================================
# Identifiers
# ============================================================================


class TestValidIdentifier:
    @pytest.mark.parametrize(
        "text, end",
        [("Alpha ", 5), ("_Test", 5), ("test3", 5), ("a", 1), ("a_b_c(", 5)],
    )
    def test_returns_index_past_identifier(self, text, end):
        assert valid_identifier(text) == end

    def test_starts_at_offset(self):
        assert valid_identifier("x:int", 2) == 5

    @pytest.mark.parametrize("text", ["", "1test", "<test>", "(test)", " a"])
    def test_rejects_non_identifiers(self, text):
        with pytest.raises(ValidationError):
            valid_identifier(text)

    def test_rejects_start_at_end_of_text(self):
        with pytest.raises(ValidationError, match="empty"):
            valid_identifier("test", 4)

    def test_reports_offending_character(self):
        with pytest.raises(ValidationError, match=r"'1' at index 0"):
            valid_identifier("1abc")


# ============================================================================
# Type expressions
# ============================================================================


class TestValidType:
    @pytest.mark.parametrize(
        "text, end",
        [
            ("Alpha ", 5),
            ("Alph* ", 5),
            ("tes**", 5),
            ("Alpha<>", 7),
            ("Alpha[]", 7),
            ("Alpha()", 7),
            ("A<int>", 6),
            ("A<int,int>", 10),
            ("A[int,int]", 10),
            ("A<int*,int**>*", 14),
            ("A[int*,int**]*", 14),
            ("A<B[int],C(int)>", 16),
            ("A[B(int),C<int>]", 16),
            ("Map<K,List<V>>", 14),
        ],
    )
    def test_returns_end_offset(self, text, end):
        assert valid_type(text) == end

    @pytest.mark.parametrize(
        "text",
        [
            "Alpha<",
            "Alpha(",
            "A<int",
            "A[int,int",
            "A[int,int,",
            "A[int^int",
            "A<B[int],C(int)",
            "A[B(int),C<int>",
            "A<int,>",
            "A<,int>",
            "A<int]",
        ],
    )
    def test_rejects_malformed_lists(self, text):
        with pytest.raises(ValidationError):
            valid_type(text)

    def test_trailing_comma_is_reported(self):
        with pytest.raises(ValidationError):
            valid_type("A<int,>")

    def test_missing_separator_names_the_character(self):
        with pytest.raises(ValidationError, match=r"Expected ',' but got '\^' at index 5"):
            valid_type("A[int^int]")

    def test_unclosed_opener_at_end(self):
        with pytest.raises(ValidationError, match="Expected more after type specifier"):
            valid_type("List[")

    def test_deep_nesting(self):
        depth = 5000
        text = "T<" * depth + "int" + ">" * depth + "*"
        assert valid_type(text) == len(text)
        with pytest.raises(ValidationError, match="Unexpected end to type list"):
            valid_type("T<" * depth + "int")

    def test_nested_calls_do_not_share_state(self):
        # A failure deep inside one expression must not affect the next parse
        with pytest.raises(ValidationError):
            valid_type("A<B[C(int>")
        assert valid_type("X(int)") == 6


# ============================================================================
# Total-parse wrappers
# ============================================================================


class TestChecks:
    def test_identifier_must_cover_whole_text(self):
        check_identifier("name", "field name")
        with pytest.raises(ValidationError, match=r"Invalid field name: 'na me'"):
            check_identifier("na me", "field name")

    def test_type_must_cover_whole_text(self):
        check_type("List<int>", "field type")
        with pytest.raises(ValidationError, match=r"Invalid field type: 'List<int> '"):
            check_type("List<int> ", "field type")

    def test_rejects_non_strings(self):
        with pytest.raises(ValidationError, match="expected a string, got list"):
            check_type(["int stuff"], "field type")
        with pytest.raises(ValidationError, match="expected a string, got int"):
            check_identifier(5, "field name")

    def test_message_includes_reason(self):
        with pytest.raises(ValidationError, match=r"Reason: expected identifier but was empty"):
            check_type("", "class name")

    def test_unique(self):
        check_unique(["a", "b"], "names")
        with pytest.raises(ConflictError, match="Duplicate names exist"):
            check_unique(["a", "b", "a"], "names")


# ============================================================================
# Command-line helpers
# ============================================================================


class TestSplitCommand:
    @pytest.mark.parametrize(
        "line, tokens",
        [
            ("hello", ["hello"]),
            ("hello world", ["hello", "world"]),
            ("hello     world", ["hello", "world"]),
            ("     hello     world     ", ["hello", "world"]),
            ("", []),
        ],
    )
    def test_split(self, line, tokens):
        assert split_command(line) == tokens


class TestParseInt:
    @pytest.mark.parametrize("text, value", [("0", 0), ("120", 120), ("-147", -147)])
    def test_valid(self, text, value):
        assert parse_int(text) == value

    @pytest.mark.parametrize("text", ["123a", "123.0", "a123", "123 ", " 123", "", "+5", "123\n"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError, match="Couldn't parse number"):
            parse_int(text)
