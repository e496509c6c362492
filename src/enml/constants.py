"""ENML element constants

This module defines the element names, attribute values and fixed strings
used when converting ENML to HTML and back.

Usage:
    from enml.constants import NOTE_ELEMENT, TODO_ELEMENT, MEDIA_ELEMENT

References:
    - http://xml.evernote.com/pub/enml2.dtd
    - https://html.spec.whatwg.org/multipage/syntax.html#void-elements
"""

# ENML custom elements
NOTE_ELEMENT = "en-note"
TODO_ELEMENT = "en-todo"
MEDIA_ELEMENT = "en-media"

ENML_DOCTYPE = '<!DOCTYPE en-note SYSTEM "http://xml.evernote.com/pub/enml2.dtd">'

DEFAULT_NOTE_STYLE = "word-wrap: break-word; -webkit-nbsp-mode: space; -webkit-line-break: after-white-space;"

# Start tags that keep the current todo open while collecting its text
INLINE_FORMATTING_ELEMENTS = frozenset({"b", "u", "i", "font", "strong"})

# HTML5 void elements (no closing tag)
VOID_ELEMENTS = frozenset({
    "area", "base", "basefont", "bgsound", "br", "col", "embed", "hr", "img",
    "input", "keygen", "link", "meta", "param", "source", "track", "wbr",
})

RESOURCE_LINK_CLASS = "en-res-link"

MEDIA_FALLBACK_TEXT = {
    "audio": "Your browser does not support the audio tag.",
    "video": "Your browser does not support the video tag.",
}

RESOURCE_BASE_URL = "https://www.evernote.com/shard/{shard}/res/{guid}"

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
