"""Resource lookup for ``en-media`` elements."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .constants import RESOURCE_BASE_URL


@dataclass(frozen=True, slots=True)
class Resource:
    """A resolved attachment: where it lives and what to call it."""

    url: str
    title: str | None = None


def url_of_resource(guid: str, shard_id: str, base_url: str = RESOURCE_BASE_URL) -> str:
    """Build the URL of a resource stored on the note service."""
    return base_url.format(shard=shard_id, guid=guid)


def resolve_resource(resources: Mapping[str, Any] | None, hash_: str | None) -> Resource | None:
    """Look up ``hash_`` in a resource table.

    Table values may be a URL string, a mapping with ``url`` and optional
    ``title`` keys, or any object with ``url``/``title`` attributes. Returns
    ``None`` when the hash is missing or maps to an empty value.
    """
    if not resources or hash_ is None:
        return None
    value = resources.get(hash_)
    if not value:
        return None

    if isinstance(value, str):
        url, title = value, None
    elif isinstance(value, Mapping):
        url, title = value.get("url"), value.get("title")
    elif hasattr(value, "url"):
        url, title = value.url, getattr(value, "title", None)
    else:
        raise TypeError(f"Unsupported resource value for {hash_!r}: {type(value).__name__}")

    if not url:
        return None
    return Resource(url=url, title=title or url or "")
