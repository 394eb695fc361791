"""HTML post parsing.

Uses BeautifulSoup with the stdlib ``html.parser`` backend. Only the title is
extracted; the body is kept exactly as read from disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

LOGGER = logging.getLogger(__name__)

TITLE_TAG = "h1"


class DocumentParseError(ValueError):
    """Raised when markup cannot be parsed into a tree at all."""


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    title: str
    body: str


def find_first_heading(root: PageElement, name: str = TITLE_TAG) -> Tag | None:
    """Return the first ``name`` element in pre-order depth-first order."""
    stack: list[PageElement] = [root]
    while stack:
        node = stack.pop()
        if not isinstance(node, Tag):
            continue
        if node.name == name:
            return node
        # Reversed so the leftmost child is visited next.
        stack.extend(reversed(node.contents))
    return None


def extract_text(node: PageElement) -> str:
    """Concatenate descendant text nodes left to right.

    Comments, doctypes and other non-text strings are ignored.
    """
    if isinstance(node, NavigableString):
        return "" if isinstance(node, PreformattedString) else str(node)
    if not isinstance(node, Tag):
        return ""
    return "".join(
        str(child)
        for child in node.descendants
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
    )


def parse_document(raw_text: str) -> ParsedDocument:
    """Extract the title from ``raw_text`` and keep the raw text as body."""
    if not isinstance(raw_text, str):
        raise DocumentParseError(f"Expected markup text, got {type(raw_text).__name__}")

    try:
        soup = BeautifulSoup(raw_text, "html.parser")
    except Exception as exc:
        raise DocumentParseError(f"Unable to parse markup: {exc}") from exc

    heading = find_first_heading(soup)
    if heading is None:
        LOGGER.info("No <%s> tag found, leaving title empty", TITLE_TAG)
        return ParsedDocument(title="", body=raw_text)

    return ParsedDocument(title=extract_text(heading), body=raw_text)
