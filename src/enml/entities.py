"""XHTML character entity translation.

ENML documents may use the named character references declared by the XHTML
entity sets its DTD pulls in (&nbsp;, &eacute;, ...). The DTD is never loaded
while parsing, so those names are rewritten to numeric references first.
"""

import html.entities
import re

# Use Python's complete HTML5 entity list (2231 entities)
# Keys include the trailing semicolon (e.g., "amp;", "lang;")
_HTML5_ENTITIES = html.entities.html5

# Predefined by XML itself, the parser handles these
XML_PREDEFINED_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})

_NAMED_REFERENCE_PATTERN = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")


def _numeric_reference(match):
    name = match.group(1)
    if name in XML_PREDEFINED_ENTITIES:
        return match.group(0)
    value = _HTML5_ENTITIES.get(name + ";")
    if value is None:
        # Left as-is so the parser reports it
        return match.group(0)
    return "".join(f"&#{ord(ch)};" for ch in value)


def expand_named_entities(text):
    """Replace non-XML named references in text with numeric references."""
    if "&" not in text:
        return text
    return _NAMED_REFERENCE_PATTERN.sub(_numeric_reference, text)
