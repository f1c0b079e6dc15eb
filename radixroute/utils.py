"""Small helpers shared by the router."""

from __future__ import annotations

import logging
import os
import posixpath
import re
from typing import Any, Callable
from xml.sax.saxutils import escape

VERSION = "v1.4.0-dev"

_log = logging.getLogger(__name__)

_XML_NAME = re.compile(r"^[A-Za-z_][\w.\-]*$")


class H(dict):
    """Shortcut for a ``str`` to any-value mapping."""

    def to_xml(self) -> str:
        """Render as ``<map>`` with one child element per key."""
        return "<map>" + "".join(_xml_element(k, v) for k, v in self.items()) + "</map>"


def _xml_element(name: str, value: Any) -> str:
    if not isinstance(name, str) or not _XML_NAME.match(name):
        raise ValueError(f"invalid XML element name {name!r}")
    if value is None:
        return ""
    if isinstance(value, H):
        return value.to_xml()
    if isinstance(value, (list, tuple)):
        return "".join(_xml_element(name, item) for item in value)
    if isinstance(value, dict):
        raise TypeError(f"unsupported type for XML element {name!r}: dict")
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return f"<{name}>{escape(text)}</{name}>"


def filter_flags(content: str) -> str:
    """Return ``content`` up to the first space or semicolon."""
    for i, char in enumerate(content):
        if char in " ;":
            return content[:i]
    return content


def choose_data(custom: Any, wildcard: Any) -> Any:
    """Return ``custom`` unless it is None, else ``wildcard``."""
    if custom is None:
        if wildcard is None:
            raise ValueError("negotiation config is invalid")
        return wildcard
    return custom


def parse_accept(accept_header: str) -> list[str]:
    """Split an Accept header into media types, dropping parameters."""
    media_types = (part.split(";")[0].strip() for part in accept_header.split(","))
    return [m for m in media_types if m]


def last_char(text: str) -> str:
    """Return the last character of a non-empty string."""
    if not text:
        raise ValueError("The length of the string can't be 0")
    return text[-1]


def name_of_function(func: Callable) -> str:
    """Return the dotted, fully qualified name of ``func``."""
    return f"{func.__module__}.{func.__qualname__}"


def _clean(path: str) -> str:
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def join_paths(absolute_path: str, relative_path: str) -> str:
    """Join two URL paths, keeping a trailing slash from the relative part."""
    if relative_path == "":
        return absolute_path
    joined = "/".join(p for p in (absolute_path, relative_path) if p)
    final_path = _clean(joined) if joined else ""
    if last_char(relative_path) == "/" and last_char(final_path) != "/":
        return final_path + "/"
    return final_path


def resolve_address(*args: str) -> str:
    """Pick the listen address from arguments or the PORT environment variable."""
    if not args:
        port = os.environ.get("PORT", "")
        if port:
            _log.debug('Environment variable PORT="%s"', port)
            return ":" + port
        _log.debug("Environment variable PORT is undefined. Using port :8080 by default")
        return ":8080"
    if len(args) == 1:
        return args[0]
    raise ValueError("too much parameters")