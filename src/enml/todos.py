"""Checklist (``en-todo``) extraction and toggling.

Both traversals number checklist items by the order in which their start
tags appear in the document, so ``extract_todos(doc)[i]`` and
``toggle_todo(doc, i, ...)`` address the same element.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .constants import INLINE_FORMATTING_ELEMENTS, TODO_ELEMENT
from .tokenizer import Tokenizer
from .tokens import CharacterTokens, DoctypeToken, Tag
from .writer import MarkupWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Todo:
    text: str
    checked: bool = False


def _is_checked(tag: Tag) -> bool:
    return tag.get("checked") == "true"


class TodoCollector:
    """Collects the text and state of each checklist item.

    A todo's text is all character data seen after its ``en-todo`` start tag
    up to the next start tag that is neither another todo nor inline
    formatting (b, u, i, font, strong). End tags never close a todo, so a
    todo with no such start tag after it is not reported.
    """

    __slots__ = ("buffer", "checked", "in_todo", "todos")

    def __init__(self) -> None:
        self.todos: list[Todo] = []
        self.in_todo = False
        self.buffer = ""
        self.checked = False

    def process_token(self, token: Any) -> None:
        if isinstance(token, Tag):
            if token.kind == Tag.START:
                self._start(token)
        elif isinstance(token, CharacterTokens):
            if self.in_todo:
                self.buffer += token.data

    def _start(self, tag: Tag) -> None:
        if tag.name in INLINE_FORMATTING_ELEMENTS:
            return
        if tag.name == TODO_ELEMENT:
            self._flush()
            self.buffer = ""
            self.checked = _is_checked(tag)
            self.in_todo = True
            return
        self._flush()
        self.in_todo = False

    def _flush(self) -> None:
        if self.in_todo:
            self.todos.append(Todo(self.buffer, self.checked))

    def finish(self) -> list[Todo]:
        # A todo still open here is dropped, see class docstring.
        if self.in_todo:
            logger.debug("Trailing en-todo %r not followed by a start tag, not reported", self.buffer)
        return self.todos


class TodoToggler:
    """Copies a document, rewriting the ``checked`` state of one todo."""

    __slots__ = ("checked", "index", "matched", "ordinal", "writer")

    def __init__(self, index: int, checked: bool) -> None:
        self.index = index
        self.checked = bool(checked)
        self.ordinal = 0
        self.matched = False
        self.writer = MarkupWriter()

    def process_token(self, token: Any) -> None:
        if isinstance(token, Tag):
            if token.kind == Tag.START:
                self._start(token)
            else:
                self.writer.end_element()
        elif isinstance(token, CharacterTokens):
            self.writer.text(token.data)
        elif isinstance(token, DoctypeToken):
            self.writer.start_document()
            self.writer.raw(token.to_markup() + "\n")

    def _start(self, tag: Tag) -> None:
        w = self.writer
        w.start_element(tag.name)
        if tag.name == TODO_ELEMENT:
            target = self.ordinal == self.index
            self.ordinal += 1
            if target:
                self.matched = True
                for key, value in tag.attrs:
                    if key != "checked":
                        w.attribute(key, value)
                if self.checked:
                    w.attribute("checked", "true")
                return
        for key, value in tag.attrs:
            w.attribute(key, value)

    def finish(self) -> str:
        if not self.matched:
            logger.debug("Todo index %d out of range (%d todos), document unchanged", self.index, self.ordinal)
        self.writer.end_document()
        return self.writer.to_string()


def extract_todos(enml: str | bytes, opts=None) -> list[Todo]:
    """Return the checklist items of ``enml`` in document order."""
    todos = Tokenizer(TodoCollector(), opts).run(enml)
    logger.debug("Extracted %d todos", len(todos))
    return todos


def toggle_todo(enml: str | bytes, index: int, checked: bool, opts=None) -> str:
    """Return ``enml`` with the ``index``-th checklist item set to ``checked``.

    An index that addresses no checklist item leaves the document unchanged.
    """
    return Tokenizer(TodoToggler(index, checked), opts).run(enml)
