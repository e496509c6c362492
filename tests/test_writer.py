from __future__ import annotations

import unittest

from enml.writer import MarkupWriter, serialize_attribute


class TestXmlWriting(unittest.TestCase):
    def test_empty_element_self_closes(self) -> None:
        w = MarkupWriter()
        w.start_element("en-note")
        w.start_element("en-todo")
        w.attribute("checked", "true")
        w.end_element()
        w.end_element()
        assert str(w) == '<en-note><en-todo checked="true"/></en-note>'

    def test_text_is_escaped(self) -> None:
        w = MarkupWriter()
        w.start_element("div")
        w.text("a < b & c > d")
        w.end_element()
        assert w.to_string() == "<div>a &lt; b &amp; c &gt; d</div>"

    def test_attribute_values_are_escaped(self) -> None:
        assert serialize_attribute("title", 'say "hi" & <go>') == ' title="say &quot;hi&quot; &amp; &lt;go>"'

    def test_attribute_whitespace_is_written_as_character_references(self) -> None:
        assert serialize_attribute("title", "a\tb\nc\rd") == ' title="a&#9;b&#10;c&#13;d"'

    def test_carriage_return_in_text_is_a_character_reference(self) -> None:
        w = MarkupWriter()
        w.start_element("div")
        w.text("a\r\nb\tc")
        w.end_element()
        assert w.to_string() == "<div>a&#13;\nb\tc</div>"

    def test_empty_text_keeps_element_open_form(self) -> None:
        w = MarkupWriter()
        w.start_element("div")
        w.text("")
        w.end_element()
        assert w.to_string() == "<div></div>"

    def test_document_prologue(self) -> None:
        w = MarkupWriter()
        w.start_document("1.0", "UTF-8", standalone=False)
        w.raw("<!DOCTYPE en-note>\n")
        w.write_element("en-note")
        assert w.to_string() == '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n<!DOCTYPE en-note>\n<en-note/>'

    def test_end_document_closes_open_elements(self) -> None:
        w = MarkupWriter()
        w.start_element("a")
        w.start_element("b")
        w.text("x")
        w.end_document()
        assert w.to_string() == "<a><b>x</b></a>"
        assert w.depth == 0


class TestHtmlWriting(unittest.TestCase):
    def test_void_elements_have_no_end_tag(self) -> None:
        w = MarkupWriter(html=True)
        w.start_element("p")
        w.write_element("br")
        w.start_element("img")
        w.attribute("src", "x.png")
        w.end_element()
        w.end_element()
        assert w.to_string() == '<p><br><img src="x.png"></p>'

    def test_empty_non_void_element_gets_end_tag(self) -> None:
        w = MarkupWriter(html=True)
        w.write_element("a")
        assert w.to_string() == "<a></a>"

    def test_boolean_attributes_are_minimized(self) -> None:
        w = MarkupWriter(html=True)
        w.start_element("input")
        w.attribute("type", "checkbox")
        w.attribute("checked", "checked")
        w.attribute("disabled", "")
        w.end_element()
        assert w.to_string() == '<input type="checkbox" checked disabled>'

    def test_lt_is_not_escaped_in_html_attributes(self) -> None:
        assert serialize_attribute("title", "a<b", html=True) == ' title="a<b"'

    def test_html_whitespace_is_written_raw(self) -> None:
        assert serialize_attribute("title", "a\nb", html=True) == ' title="a\nb"'
        w = MarkupWriter(html=True)
        w.write_element("p", "a\rb")
        assert w.to_string() == "<p>a\rb</p>"


class TestWriterMisuse(unittest.TestCase):
    def test_close_without_open_element_raises(self) -> None:
        w = MarkupWriter()
        with self.assertRaises(ValueError):
            w.end_element()

    def test_attribute_after_content_raises(self) -> None:
        w = MarkupWriter()
        w.start_element("div")
        w.text("x")
        with self.assertRaises(ValueError):
            w.attribute("id", "late")

    def test_write_after_end_document_raises(self) -> None:
        w = MarkupWriter()
        w.write_element("div")
        w.end_document()
        with self.assertRaises(ValueError):
            w.text("more")


if __name__ == "__main__":
    unittest.main()
