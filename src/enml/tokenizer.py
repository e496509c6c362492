"""Event source for ENML documents.

The tokenizer drives lxml's parser-target interface and turns its callbacks
into `Tag`/`CharacterTokens`/`DoctypeToken` objects handed to a sink's
``process_token``. Names are reported the way they were written in the
source (``prefix:local``) so that pass-through writers can reproduce them.
"""

import logging

from lxml import etree

from .constants import XML_NAMESPACE
from .entities import expand_named_entities
from .tokens import CharacterTokens, DoctypeToken, ParseError, Tag

logger = logging.getLogger(__name__)


class TokenizerOpts:
    __slots__ = ("expand_entities", "huge_tree")

    def __init__(self, expand_entities=True, huge_tree=False):
        self.expand_entities = bool(expand_entities)
        self.huge_tree = bool(huge_tree)


class Tokenizer:
    __slots__ = ("_pending_ns", "_scopes", "opts", "sink")

    def __init__(self, sink, opts=None):
        self.sink = sink
        self.opts = opts or TokenizerOpts()
        self._pending_ns = []
        # One uri -> prefix map per open element
        self._scopes = [{XML_NAMESPACE: "xml"}]

    def run(self, text):
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        if not text:
            raise ParseError("empty-document")
        if self.opts.expand_entities:
            text = expand_named_entities(text)

        parser = etree.XMLParser(
            target=self,
            encoding="utf-8",
            no_network=True,
            load_dtd=False,
            resolve_entities=False,
            huge_tree=self.opts.huge_tree,
        )
        try:
            etree.fromstring(text.encode("utf-8"), parser)
        except etree.XMLSyntaxError as exc:
            line, column = exc.position
            logger.debug("Parse failed at %s:%s: %s", line, column, exc.msg)
            raise ParseError("malformed-document", line, column, exc.msg) from exc
        return self.sink.finish()

    # lxml parser target callbacks

    def doctype(self, name, public_id, system_id):
        self.sink.process_token(DoctypeToken(name, public_id, system_id))

    def start_ns(self, prefix, uri):
        self._pending_ns.append((prefix or "", uri))

    def end_ns(self, prefix):
        pass

    def start(self, tag, attrib):
        attrs = []
        scope = self._scopes[-1]
        if self._pending_ns:
            scope = dict(scope)
            for prefix, uri in self._pending_ns:
                scope[uri] = prefix
                attrs.append((f"xmlns:{prefix}" if prefix else "xmlns", uri))
            self._pending_ns = []
        self._scopes.append(scope)

        prefix, name = self._qualify(tag, scope)
        for key, value in attrib.items():
            attrs.append((self._qualify(key, scope)[1], value))
        self.sink.process_token(Tag(Tag.START, name, attrs, prefix))

    def end(self, tag):
        scope = self._scopes.pop()
        self.sink.process_token(Tag(Tag.END, self._qualify(tag, scope)[1]))

    def data(self, data):
        self.sink.process_token(CharacterTokens(data))

    def close(self):
        return None

    @staticmethod
    def _qualify(name, scope):
        """Map a ``{uri}local`` name back to ``(prefix, "prefix:local")``."""
        if not name.startswith("{"):
            return None, name
        uri, local = name[1:].split("}", 1)
        prefix = scope.get(uri)
        if not prefix:
            return None, local
        return prefix, f"{prefix}:{local}"
