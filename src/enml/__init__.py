from .plaintext import enml_of_plain_text, plain_text_of_enml
from .render import to_html
from .resources import Resource, url_of_resource
from .todos import Todo, extract_todos, toggle_todo
from .tokenizer import TokenizerOpts
from .tokens import ParseError

__all__ = [
    "ParseError",
    "Resource",
    "Todo",
    "TokenizerOpts",
    "enml_of_plain_text",
    "extract_todos",
    "plain_text_of_enml",
    "to_html",
    "toggle_todo",
    "url_of_resource",
]
