"""ENML to HTML rendering.

`HtmlRenderer` is a token sink: every start tag is classified once into an
`ElementKind`, the matching handler writes the HTML for it and returns the
`CloseAction` that its end tag must perform. Those actions are kept on a
stack parallel to the source elements, so an end tag always undoes exactly
what its start tag opened (including nothing at all, for media whose
resource could not be resolved).
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from typing import Any

from .constants import (
    DEFAULT_NOTE_STYLE,
    MEDIA_ELEMENT,
    MEDIA_FALLBACK_TEXT,
    NOTE_ELEMENT,
    RESOURCE_LINK_CLASS,
    TODO_ELEMENT,
)
from .resources import resolve_resource
from .tokenizer import Tokenizer
from .tokens import CharacterTokens, Tag
from .writer import MarkupWriter

logger = logging.getLogger(__name__)


class ElementKind(enum.Enum):
    ROOT = "root"
    CHECKLIST_ITEM = "checklist-item"
    EMBEDDED_MEDIA = "embedded-media"
    GENERIC = "generic"


class CloseAction(enum.Enum):
    BODY = "body"  # </body></html>
    NOTHING = "nothing"  # checkbox, or anything inside skipped media
    ELEMENT = "element"
    MEDIA_SKIPPED = "media-skipped"
    MEDIA_ELEMENT = "media-element"  # </img>
    MEDIA_PLAYER = "media-player"  # </source></audio|video><br>
    MEDIA_LINK = "media-link"  # label, then </a>


_KINDS = {
    NOTE_ELEMENT: ElementKind.ROOT,
    TODO_ELEMENT: ElementKind.CHECKLIST_ITEM,
    MEDIA_ELEMENT: ElementKind.EMBEDDED_MEDIA,
}


def classify(name: str) -> ElementKind:
    return _KINDS.get(name, ElementKind.GENERIC)


def _dimension(value: str | None) -> str | None:
    if not value or value == "0":
        return None
    return value


class HtmlRenderer:
    __slots__ = ("_handlers", "_pending", "_suppressed", "note_style", "resources", "writer")

    def __init__(self, resources: Mapping[str, Any] | None = None, *, note_style: str = DEFAULT_NOTE_STYLE) -> None:
        self.resources = resources or {}
        self.note_style = note_style
        self.writer = MarkupWriter(html=True)
        # (action, label) per open source element
        self._pending: list[tuple[CloseAction, str | None]] = []
        self._suppressed = 0
        self._handlers = {
            ElementKind.ROOT: self._start_root,
            ElementKind.CHECKLIST_ITEM: self._start_checklist_item,
            ElementKind.EMBEDDED_MEDIA: self._start_media,
            ElementKind.GENERIC: self._start_generic,
        }

    def process_token(self, token: Any) -> None:
        if isinstance(token, Tag):
            if token.kind == Tag.START:
                if self._suppressed:
                    # Inside media that was skipped
                    self._pending.append((CloseAction.NOTHING, None))
                    return
                handler = self._handlers[classify(token.name)]
                self._pending.append(handler(token))
            else:
                self._end(*self._pending.pop())
        elif isinstance(token, CharacterTokens):
            if not self._suppressed:
                self.writer.text(token.data)

    def finish(self) -> str:
        self.writer.end_document()
        return self.writer.to_string()

    # Start tag handlers

    def _start_root(self, tag: Tag) -> tuple[CloseAction, None]:
        w = self.writer
        w.start_element("html")
        w.start_element("head")
        w.start_element("meta")
        w.attribute("http-equiv", "Content-Type")
        w.attribute("content", "text/html; charset=UTF-8")
        w.end_element()
        w.end_element()

        w.start_element("body")
        w.attribute("style", tag.get("style", self.note_style))
        for key, value in tag.attrs:
            if key != "style":
                w.attribute(key, value)
        return CloseAction.BODY, None

    def _start_checklist_item(self, tag: Tag) -> tuple[CloseAction, None]:
        w = self.writer
        w.start_element("input")
        w.attribute("type", "checkbox")
        if tag.get("checked") == "true":
            w.attribute("checked", "checked")
        w.end_element()
        return CloseAction.NOTHING, None

    def _start_generic(self, tag: Tag) -> tuple[CloseAction, None]:
        self.writer.start_element(tag.name)
        for key, value in tag.attrs:
            self.writer.attribute(key, value)
        return CloseAction.ELEMENT, None

    def _start_media(self, tag: Tag) -> tuple[CloseAction, str | None]:
        media_type = tag.get("type") or ""
        hash_ = tag.get("hash")
        width = _dimension(tag.get("width"))
        height = _dimension(tag.get("height"))

        resource = resolve_resource(self.resources, hash_)
        if resource is None:
            logger.debug("No resource for en-media hash %r, element skipped", hash_)
            self._suppressed += 1
            return CloseAction.MEDIA_SKIPPED, None

        w = self.writer
        if "image" in media_type:
            w.start_element("img")
            w.attribute("title", resource.title)
            w.attribute("src", resource.url)
            action, label = CloseAction.MEDIA_ELEMENT, None
        elif "audio" in media_type or "video" in media_type:
            player = "audio" if "audio" in media_type else "video"
            self._write_resource_link(resource.url, resource.title)
            w.write_element("br")
            w.start_element(player)
            w.attribute("controls", "")
            w.text(MEDIA_FALLBACK_TEXT[player])
            w.start_element("source")
            w.attribute("src", resource.url)
            action, label = CloseAction.MEDIA_PLAYER, None
        else:
            # Label is written when the element closes
            w.start_element("a")
            w.attribute("href", resource.url)
            w.attribute("class", RESOURCE_LINK_CLASS)
            action, label = CloseAction.MEDIA_LINK, resource.title
        logger.debug("en-media %r (%r) rendered as %s", hash_, media_type, action.value)

        if width:
            w.attribute("width", width)
        if height:
            w.attribute("height", height)
        return action, label

    def _write_resource_link(self, url: str, title: str | None) -> None:
        w = self.writer
        w.start_element("a")
        w.attribute("href", url)
        w.attribute("class", RESOURCE_LINK_CLASS)
        w.text(title)
        w.end_element()

    # End tags

    def _end(self, action: CloseAction, label: str | None) -> None:
        w = self.writer
        if action is CloseAction.BODY:
            w.end_element()  # body
            w.end_element()  # html
        elif action is CloseAction.NOTHING:
            pass
        elif action is CloseAction.ELEMENT:
            w.end_element()
        else:
            if action is CloseAction.MEDIA_SKIPPED:
                self._suppressed -= 1
            elif action is CloseAction.MEDIA_ELEMENT:
                w.end_element()
            elif action is CloseAction.MEDIA_PLAYER:
                w.end_element()  # source
                w.end_element()  # audio or video
                w.write_element("br")
            elif action is CloseAction.MEDIA_LINK:
                w.text(label)
                w.end_element()  # a
            w.text("\n")


def to_html(enml: str | bytes, resources: Mapping[str, Any] | None = None, *, note_style: str = DEFAULT_NOTE_STYLE, opts=None) -> str:
    """Render an ENML document as an HTML page.

    ``resources`` maps ``en-media`` hashes to a URL string, a
    ``{"url": ..., "title": ...}`` mapping or a `Resource`. Media whose hash
    is missing from the table produce no output.

    Raises `ParseError` if ``enml`` is not well-formed.
    """
    return Tokenizer(HtmlRenderer(resources, note_style=note_style), opts).run(enml)
