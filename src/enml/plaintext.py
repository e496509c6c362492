"""Conversions between plain text and ENML."""

import re

from .constants import DEFAULT_NOTE_STYLE, ENML_DOCTYPE, NOTE_ELEMENT
from .writer import MarkupWriter

_LINE_BREAK = re.compile(r"\r\n|\n|\r")
_BLOCK_END = re.compile(r"</(div|ul|li)>", re.IGNORECASE)
_LIST_ITEM_START = re.compile(r"<li>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


def enml_of_plain_text(text):
    """Wrap each line of ``text`` in a ``<div>`` inside a new note."""
    writer = MarkupWriter()
    writer.start_document("1.0", "UTF-8")
    writer.raw(ENML_DOCTYPE + "\n")
    writer.start_element(NOTE_ELEMENT)
    writer.attribute("style", DEFAULT_NOTE_STYLE)

    for line in _LINE_BREAK.split(text or ""):
        writer.start_element("div")
        writer.text(line)
        writer.end_element()
        writer.text("\n")

    writer.end_element()
    writer.end_document()
    return writer.to_string()


def plain_text_of_enml(enml):
    """Strip markup from ENML, collapsing it to a single line of text.

    Block ends become separators and list items get a " - " bullet. No
    parsing happens and character references are left as written.
    """
    text = enml or ""
    text = _BLOCK_END.sub("\n", text)
    text = _LIST_ITEM_START.sub(" - ", text)
    text = _ANY_TAG.sub("", text)
    text = _LINE_BREAK.sub(" ", text)
    return _WHITESPACE.sub(" ", text)
