"""Streaming markup writer used as the output sink of the transforms."""

from __future__ import annotations

from .constants import VOID_ELEMENTS

# An XML parser normalizes raw whitespace in attribute values to spaces and
# raw carriage returns in text to line feeds.
_XML_ATTR_WHITESPACE = str.maketrans({"\t": "&#9;", "\n": "&#10;", "\r": "&#13;"})


def _escape_text(text: str | None, *, xml: bool = False) -> str:
    if not text:
        return ""
    text = str(text).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if xml:
        text = text.replace("\r", "&#13;")
    return text


def _escape_attr_value(value: str | None, *, xml: bool = False) -> str:
    if value is None:
        return ""
    value = str(value)
    value = value.replace("&", "&amp;")
    if xml:
        value = value.replace("<", "&lt;").translate(_XML_ATTR_WHITESPACE)
    return value.replace('"', "&quot;")


def _serializer_minimize_attr_value(name: str, value: str | None, minimize_boolean_attributes: bool) -> bool:
    if not minimize_boolean_attributes:
        return False
    if value is None or value == "":
        return True
    return str(value).lower() == str(name).lower()


def serialize_attribute(name: str, value: str | None, *, html: bool = False) -> str:
    if _serializer_minimize_attr_value(name, value, html):
        return f" {name}"
    escaped = _escape_attr_value(value, xml=not html)
    return f' {name}="{escaped}"'


class MarkupWriter:
    """Accumulates a document from open/attribute/text/close calls.

    In XML mode an element closed without content is written as ``<x/>``.
    In HTML mode void elements get no end tag, other empty elements are
    written ``<x></x>``, and boolean attributes are minimized.

    The writer keeps its own stack of open elements: ``end_element`` always
    closes the innermost one.
    """

    __slots__ = ("_ended", "_open", "_parts", "_tag_open", "html")

    def __init__(self, html: bool = False) -> None:
        self.html = bool(html)
        self._parts: list[str] = []
        self._open: list[str] = []
        self._tag_open = False
        self._ended = False

    @property
    def depth(self) -> int:
        return len(self._open)

    def start_document(self, version: str = "1.0", encoding: str = "UTF-8", standalone: bool | None = None) -> None:
        self._check_writable()
        declaration = f'<?xml version="{version}" encoding="{encoding}"'
        if standalone is not None:
            declaration += f' standalone="{"yes" if standalone else "no"}"'
        self._parts.append(declaration + "?>\n")

    def raw(self, literal: str) -> None:
        """Write literal markup (e.g. a DOCTYPE line) without escaping."""
        self._check_writable()
        self._finish_start_tag()
        self._parts.append(literal)

    def start_element(self, name: str) -> None:
        self._check_writable()
        self._finish_start_tag()
        self._parts.extend(["<", name])
        self._open.append(name)
        self._tag_open = True

    def attribute(self, name: str, value: str | None) -> None:
        if not self._tag_open:
            raise ValueError(f"Attribute {name!r} written outside of a start tag")
        self._parts.append(serialize_attribute(name, value, html=self.html))

    def text(self, data: str | None) -> None:
        self._check_writable()
        self._finish_start_tag()
        self._parts.append(_escape_text(data, xml=not self.html))

    def end_element(self) -> None:
        if not self._open:
            raise ValueError("end_element() called with no open element")
        name = self._open.pop()
        is_void = self.html and name in VOID_ELEMENTS
        if self._tag_open:
            self._tag_open = False
            if not self.html:
                self._parts.append("/>")
            elif is_void:
                self._parts.append(">")
            else:
                self._parts.extend(["></", name, ">"])
            return
        if not is_void:
            self._parts.extend(["</", name, ">"])

    def write_element(self, name: str, content: str | None = None) -> None:
        self.start_element(name)
        if content:
            self.text(content)
        self.end_element()

    def end_document(self) -> None:
        while self._open:
            self.end_element()
        self._ended = True

    def to_string(self) -> str:
        return "".join(self._parts)

    __str__ = to_string

    def _finish_start_tag(self) -> None:
        if self._tag_open:
            self._parts.append(">")
            self._tag_open = False

    def _check_writable(self) -> None:
        if self._ended:
            raise ValueError("Cannot write after end_document()")
