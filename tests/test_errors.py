"""Tests for parse failures."""

import unittest

from enml import ParseError, extract_todos, to_html, toggle_todo


class TestParseErrors(unittest.TestCase):
    """Malformed input fails the whole call with ParseError."""

    def test_mismatched_tags(self):
        with self.assertRaises(ParseError) as ctx:
            to_html("<en-note><div></en-note>")
        assert ctx.exception.code == "malformed-document"

    def test_error_has_line_and_column(self):
        with self.assertRaises(ParseError) as ctx:
            extract_todos("<en-note>\n<div>\n</span></en-note>")
        error = ctx.exception
        assert isinstance(error.line, int)
        assert isinstance(error.column, int)
        assert error.line >= 2

    def test_error_message_is_rendered(self):
        with self.assertRaises(ParseError) as ctx:
            toggle_todo("<en-note><en-todo></en-note>", 0, True)
        text = str(ctx.exception)
        assert text.startswith(f"({ctx.exception.line},{ctx.exception.column}): malformed-document")

    def test_empty_document(self):
        for value in ("", None, b""):
            with self.subTest(value=value):
                with self.assertRaises(ParseError) as ctx:
                    extract_todos(value)
                assert ctx.exception.code == "empty-document"
                assert str(ctx.exception) == "empty-document"

    def test_parse_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            to_html("not markup at all")

    def test_original_error_is_chained(self):
        with self.assertRaises(ParseError) as ctx:
            to_html("<en-note>")
        assert ctx.exception.__cause__ is not None

    def test_repr(self):
        assert repr(ParseError("empty-document")) == "ParseError('empty-document')"
        assert repr(ParseError("x", 1, 2)) == "ParseError('x', line=1, column=2)"

    def test_str_forms(self):
        assert str(ParseError("x", 3, 4, "bad")) == "(3,4): x - bad"
        assert str(ParseError("x", 3, 4)) == "(3,4): x"
        assert str(ParseError("x", message="bad")) == "x - bad"
        assert ParseError("x", 3).located is False


if __name__ == "__main__":
    unittest.main()
