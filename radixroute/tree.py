"""Radix tree used to match request paths against registered routes."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

Handler = Callable[..., Any]
HandlersChain = list

_HEX_PAIR = re.compile(rb"[0-9A-Fa-f]{2}")


class RouteError(Exception):
    """Raised when a route cannot be registered or the tree is corrupt."""


@dataclass
class Param:
    """A single URL parameter, consisting of a key and a value."""

    key: str
    value: str


class Params(list):
    """Ordered list of :class:`Param`; the first URL parameter comes first."""

    def get(self, name: str) -> tuple[str, bool]:
        """Return the value of the first param named ``name`` and whether it exists."""
        for entry in self:
            if entry.key == name:
                return entry.value, True
        return "", False

    def by_name(self, name: str) -> str:
        """Return the value of the first param named ``name``, or an empty string."""
        return self.get(name)[0]


class MethodTrees(list):
    """List of ``(method, root_node)`` pairs."""

    def get(self, method: str) -> Optional["Node"]:
        """Return the root node registered for ``method``, or None."""
        for tree_method, root in self:
            if tree_method == method:
                return root
        return None


class NodeType(enum.Enum):
    STATIC = 0
    ROOT = 1
    PARAM = 2
    CATCH_ALL = 3


def count_params(path: str) -> int:
    """Count wildcard markers in ``path``, capped at 255."""
    return min(sum(1 for c in path if c in ":*"), 255)


def _query_unescape(text: str) -> str:
    """Decode a query-escaped string; raise ValueError on a malformed escape."""
    raw = text.encode("utf-8")
    out = bytearray()
    i = 0
    while i < len(raw):
        byte = raw[i]
        if byte == 0x25:  # '%'
            pair = raw[i + 1:i + 3]
            if not _HEX_PAIR.fullmatch(pair):
                raise ValueError(f"invalid URL escape {raw[i:i + 3]!r}")
            out.append(int(pair, 16))
            i += 3
        elif byte == 0x2B:  # '+'
            out.append(0x20)
            i += 1
        else:
            out.append(byte)
            i += 1
    return out.decode("utf-8", "surrogateescape")


def _common_prefix_len(a: str, b: str) -> int:
    limit = min(len(a), len(b))
    i = 0
    while i < limit and a[i] == b[i]:
        i += 1
    return i


@dataclass(eq=False)
class Node:
    """A node of the routing radix tree."""

    path: str = ""
    indices: str = ""
    children: list = field(default_factory=list)
    handlers: Optional[list] = None
    priority: int = 0
    n_type: NodeType = NodeType.STATIC
    max_params: int = 0
    wild_child: bool = False

    def _increment_child_prio(self, pos: int) -> int:
        """Bump a child's priority and move it forward; return its new position."""
        children = self.children
        children[pos].priority += 1
        prio = children[pos].priority

        new_pos = pos
        while new_pos > 0 and children[new_pos - 1].priority < prio:
            children[new_pos - 1], children[new_pos] = children[new_pos], children[new_pos - 1]
            new_pos -= 1

        if new_pos != pos:
            self.indices = (
                self.indices[:new_pos]
                + self.indices[pos]
                + self.indices[new_pos:pos]
                + self.indices[pos + 1:]
            )
        return new_pos

    def add_route(self, path: str, handlers: Optional[Iterable[Handler]]) -> None:
        """Register ``handlers`` for ``path``. Not safe for concurrent use."""
        if handlers is not None:
            handlers = list(handlers)
        full_path = path
        n = self
        n.priority += 1
        num_params = count_params(path)

        if not n.path and not n.children:
            n._insert_child(num_params, path, full_path, handlers)
            n.n_type = NodeType.ROOT
            return

        while True:
            if num_params > n.max_params:
                n.max_params = num_params

            i = _common_prefix_len(path, n.path)

            # Split edge
            if i < len(n.path):
                child = Node(
                    path=n.path[i:],
                    wild_child=n.wild_child,
                    indices=n.indices,
                    children=n.children,
                    handlers=n.handlers,
                    priority=n.priority - 1,
                )
                child.max_params = max(
                    (c.max_params for c in child.children), default=0
                )
                n.children = [child]
                n.indices = n.path[i]
                n.path = path[:i]
                n.handlers = None
                n.wild_child = False

            if i < len(path):
                path = path[i:]

                if n.wild_child:
                    n = n.children[0]
                    n.priority += 1
                    if num_params > n.max_params:
                        n.max_params = num_params
                    num_params -= 1

                    if path.startswith(n.path):
                        if len(n.path) >= len(path) or path[len(n.path)] == "/":
                            continue

                    segment = path
                    if n.n_type != NodeType.CATCH_ALL:
                        segment = path.split("/", 1)[0]
                    prefix = full_path[:full_path.index(segment)] + n.path
                    raise RouteError(
                        f"'{segment}' in new path '{full_path}' conflicts with "
                        f"existing wildcard '{n.path}' in existing prefix '{prefix}'"
                    )

                c = path[0]

                # slash after param
                if n.n_type == NodeType.PARAM and c == "/" and len(n.children) == 1:
                    n = n.children[0]
                    n.priority += 1
                    continue

                pos = n.indices.find(c)
                if pos >= 0:
                    pos = n._increment_child_prio(pos)
                    n = n.children[pos]
                    continue

                if c not in ":*":
                    n.indices += c
                    child = Node(max_params=num_params)
                    n.children.append(child)
                    n._increment_child_prio(len(n.indices) - 1)
                    n = child
                n._insert_child(num_params, path, full_path, handlers)
                return

            # the node itself becomes a leaf
            if n.handlers is not None:
                raise RouteError(
                    f"handlers are already registered for path '{full_path}'"
                )
            n.handlers = handlers
            return

    def _insert_child(self, num_params: int, path: str, full_path: str, handlers) -> None:
        n = self
        offset = 0
        end_of_path = len(path)
        i = 0
        while num_params > 0:
            c = path[i]
            if c not in ":*":
                i += 1
                continue

            end = i + 1
            while end < end_of_path and path[end] != "/":
                if path[end] in ":*":
                    raise RouteError(
                        "only one wildcard per path segment is allowed, has: "
                        f"'{path[i:]}' in path '{full_path}'"
                    )
                end += 1

            if n.children:
                raise RouteError(
                    f"wildcard route '{path[i:end]}' conflicts with existing "
                    f"children in path '{full_path}'"
                )

            if end - i < 2:
                raise RouteError(
                    "wildcards must be named with a non-empty name in path "
                    f"'{full_path}'"
                )

            if c == ":":
                if i > 0:
                    n.path = path[offset:i]
                    offset = i

                child = Node(n_type=NodeType.PARAM, max_params=num_params)
                n.children = [child]
                n.wild_child = True
                n = child
                n.priority += 1
                num_params -= 1

                if end < end_of_path:
                    n.path = path[offset:end]
                    offset = end
                    child = Node(max_params=num_params, priority=1)
                    n.children = [child]
                    n = child
            else:
                if end != end_of_path or num_params > 1:
                    raise RouteError(
                        "catch-all routes are only allowed at the end of the path "
                        f"in path '{full_path}'"
                    )
                if n.path.endswith("/"):
                    raise RouteError(
                        "catch-all conflicts with existing handle for the path "
                        f"segment root in path '{full_path}'"
                    )
                i -= 1
                if i < 0 or path[i] != "/":
                    raise RouteError(f"no / before catch-all in path '{full_path}'")

                n.path = path[offset:i]

                child = Node(wild_child=True, n_type=NodeType.CATCH_ALL, max_params=1)
                n.children = [child]
                n.indices = path[i]
                n = child
                n.priority += 1

                n.children = [
                    Node(
                        path=path[i:],
                        n_type=NodeType.CATCH_ALL,
                        max_params=1,
                        handlers=handlers,
                        priority=1,
                    )
                ]
                return
            i += 1

        n.path = path[offset:]
        n.handlers = handlers

    def get_value(self, path: str, params=None, unescape: bool = False):
        """Look up ``path``.

        Returns ``(handlers, params, tsr)`` where ``tsr`` recommends a redirect
        to the same path with or without a trailing slash when no handler is found.
        """
        n = self
        found = Params(params or ())

        def decode(value: str) -> str:
            if not unescape:
                return value
            try:
                return _query_unescape(value)
            except ValueError:
                return value

        while True:
            if len(path) > len(n.path):
                if path.startswith(n.path):
                    path = path[len(n.path):]
                    if not n.wild_child:
                        pos = n.indices.find(path[0])
                        if pos >= 0:
                            n = n.children[pos]
                            continue
                        return None, found, path == "/" and n.handlers is not None

                    n = n.children[0]
                    if n.n_type == NodeType.PARAM:
                        end = path.find("/")
                        if end < 0:
                            end = len(path)
                        found.append(Param(n.path[1:], decode(path[:end])))

                        if end < len(path):
                            if n.children:
                                path = path[end:]
                                n = n.children[0]
                                continue
                            return None, found, len(path) == end + 1

                        if n.handlers is not None:
                            return n.handlers, found, False
                        tsr = False
                        if len(n.children) == 1:
                            n = n.children[0]
                            tsr = n.path == "/" and n.handlers is not None
                        return None, found, tsr

                    if n.n_type == NodeType.CATCH_ALL:
                        found.append(Param(n.path[2:], decode(path)))
                        return n.handlers, found, False

                    raise RouteError("invalid node type")
            elif path == n.path:
                if n.handlers is not None:
                    return n.handlers, found, False

                if path == "/" and n.wild_child and n.n_type != NodeType.ROOT:
                    return None, found, True

                pos = n.indices.find("/")
                if pos >= 0:
                    n = n.children[pos]
                    tsr = (len(n.path) == 1 and n.handlers is not None) or (
                        n.n_type == NodeType.CATCH_ALL
                        and n.children[0].handlers is not None
                    )
                    return None, found, tsr
                return None, found, False

            tsr = path == "/" or (
                len(n.path) == len(path) + 1
                and n.path[len(path)] == "/"
                and path == n.path[:-1]
                and n.handlers is not None
            )
            return None, found, tsr

    def find_case_insensitive_path(self, path: str, fix_trailing_slash: bool) -> tuple[str, bool]:
        """Case-insensitive lookup; returns the case-corrected path and whether it was found."""
        n = self
        parts: list[str] = []

        while len(path) >= len(n.path) and path[:len(n.path)].lower() == n.path.lower():
            path = path[len(n.path):]
            parts.append(n.path)

            if path:
                if not n.wild_child:
                    first = path[0].lower()
                    for index, child in zip(n.indices, n.children):
                        if first == index.lower():
                            out, ok = child.find_case_insensitive_path(path, fix_trailing_slash)
                            if ok:
                                return "".join(parts) + out, True
                    ok = fix_trailing_slash and path == "/" and n.handlers is not None
                    return "".join(parts), ok

                n = n.children[0]
                if n.n_type == NodeType.PARAM:
                    k = path.find("/")
                    if k < 0:
                        k = len(path)
                    parts.append(path[:k])

                    if k < len(path):
                        if n.children:
                            path = path[k:]
                            n = n.children[0]
                            continue
                        if fix_trailing_slash and len(path) == k + 1:
                            return "".join(parts), True
                        return "".join(parts), False

                    if n.handlers is not None:
                        return "".join(parts), True
                    if fix_trailing_slash and len(n.children) == 1:
                        n = n.children[0]
                        if n.path == "/" and n.handlers is not None:
                            return "".join(parts) + "/", True
                    return "".join(parts), False

                if n.n_type == NodeType.CATCH_ALL:
                    return "".join(parts) + path, True

                raise RouteError("invalid node type")

            if n.handlers is not None:
                return "".join(parts), True

            if fix_trailing_slash:
                pos = n.indices.find("/")
                if pos >= 0:
                    n = n.children[pos]
                    if (len(n.path) == 1 and n.handlers is not None) or (
                        n.n_type == NodeType.CATCH_ALL
                        and n.children[0].handlers is not None
                    ):
                        return "".join(parts) + "/", True
            return "".join(parts), False

        if fix_trailing_slash:
            if path == "/":
                return "".join(parts), True
            if (
                len(path) + 1 == len(n.path)
                and n.path[len(path)] == "/"
                and path.lower() == n.path[:len(path)].lower()
                and n.handlers is not None
            ):
                return "".join(parts) + n.path, True
        return "".join(parts), False