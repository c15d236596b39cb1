"""
Read-only view over a parsed Degree Works page.

BeautifulSoup trees are mutable, so the extractors never touch them directly.
They receive ``Node`` wrappers that only expose navigation (children,
siblings, a depth-bounded ancestor walk, CSS selection) and text.
"""
from __future__ import annotations

import re
from typing import Iterator, Optional, Tuple

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag  # type: ignore[import]
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction  # type: ignore[import]

_WS_RE = re.compile(r"\s+")

_NON_TEXT_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)


class AuditParseError(ValueError):
    """The input could not be parsed as an HTML document at all."""


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


class Node:
    """Immutable handle on a single element of the parsed tree."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag):
        object.__setattr__(self, "_tag", tag)

    def __setattr__(self, name, value):
        raise AttributeError("Node is read-only")

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"Node(<{self.name}>)"

    # ── attributes ──────────────────────────────────────────────

    @property
    def name(self) -> str:
        return (self._tag.name or "").lower()

    def get(self, attr: str, default: str = "") -> str:
        value = self._tag.get(attr)
        if value is None:
            return default
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)

    @property
    def classes(self) -> Tuple[str, ...]:
        return tuple(self.get("class").split())

    # ── text ────────────────────────────────────────────────────

    @property
    def text(self) -> str:
        """Full text content, whitespace collapsed."""
        return _collapse(self._tag.get_text())

    @property
    def own_text(self) -> str:
        """Text of direct text children only (nested elements excluded)."""
        parts = [
            str(child)
            for child in self._tag.children
            if isinstance(child, NavigableString)
            and not isinstance(child, _NON_TEXT_STRINGS)
        ]
        return _collapse(" ".join(parts))

    # ── navigation ──────────────────────────────────────────────

    @property
    def parent(self) -> Optional["Node"]:
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return Node(parent)

    @property
    def children(self) -> Tuple["Node", ...]:
        return tuple(Node(c) for c in self._tag.children if isinstance(c, Tag))

    def next_element_sibling(self) -> Optional["Node"]:
        for sibling in self._tag.next_siblings:
            if isinstance(sibling, Tag):
                return Node(sibling)
        return None

    def ancestors(self, limit: int, include_self: bool = True) -> Iterator["Node"]:
        """Walk upward at most ``limit`` levels (self counts as the first)."""
        node: Optional[Node] = self if include_self else self.parent
        for _ in range(limit):
            if node is None:
                return
            yield node
            node = node.parent

    def closest(self, name: str) -> Optional["Node"]:
        """Nearest element (self included) with the given tag name."""
        node: Optional[Node] = self
        while node is not None:
            if node.name == name:
                return node
            node = node.parent
        return None

    def select(self, selector: str) -> Tuple["Node", ...]:
        return tuple(Node(t) for t in self._tag.select(selector))

    def select_one(self, selector: str) -> Optional["Node"]:
        found = self._tag.select_one(selector)
        return Node(found) if found is not None else None

    def descendants(self) -> Tuple["Node", ...]:
        """All element descendants in document order."""
        return tuple(Node(t) for t in self._tag.find_all(True))


class Document(Node):
    """Root of a parsed page; ``text`` covers <body> when one exists."""

    __slots__ = ()

    @property
    def body(self) -> Node:
        body = self._tag.find("body")
        if body is not None:
            return Node(body)
        html = self._tag.find("html")
        if html is not None:
            return Node(html)
        return self

    @property
    def text(self) -> str:
        body = self.body
        if body is self:
            return _collapse(self._tag.get_text())
        return body.text


def parse_document(html: str | bytes | None) -> Document:
    """
    Parse raw HTML into a read-only ``Document``.

    Raises ``AuditParseError`` when there is nothing parseable: no input,
    a non-string input, blank markup, markup the parser rejects, or
    markup that yields no elements at all.
    """
    if html is None:
        raise AuditParseError("No HTML provided.")
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="ignore")
    if not isinstance(html, str):
        raise AuditParseError(
            f"Expected HTML as str or bytes, got {type(html).__name__}."
        )
    if not html.strip():
        raise AuditParseError("HTML input is empty.")

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise AuditParseError(f"Could not parse HTML: {e}") from e

    if soup.find(True) is None:
        raise AuditParseError(
            "Input does not contain any HTML elements. "
            "Please check that the saved file is the Degree Works page."
        )
    return Document(soup)
