"""Markup parsing and content extraction utilities."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from .structures import ReferenceKind, StructuralReference

logger = logging.getLogger(__name__)

PARSER = "lxml"
MAX_TEXT_LENGTH = 5000
NON_CONTENT_TAGS = ["script", "style", "noscript"]
WHITESPACE_RUN = re.compile(r"\s+")
ABSOLUTE_HTTP = re.compile(r"^https?://", re.IGNORECASE)

# tag name, locator attribute, default label
_REFERENCE_SOURCES: Dict[ReferenceKind, Tuple[str, str, str]] = {
    ReferenceKind.HYPERLINK: ("a", "href", "Link"),
    ReferenceKind.IMAGE: ("img", "src", "Image"),
}


def parse_markup(markup: str) -> BeautifulSoup:
    """Parse markup into a tree, degrading to an empty tree on parser failure."""

    if not isinstance(markup, str):
        raise TypeError(f"Expected markup to be a string, got {type(markup).__name__}.")
    try:
        return BeautifulSoup(markup, PARSER)
    except Exception as exc:
        logger.warning("Markup could not be parsed, treating it as empty: %s", exc)
        return BeautifulSoup("", PARSER)


def is_accepted_locator(kind: ReferenceKind, locator: str | None) -> bool:
    """Return whether a locator may take part in extraction and shuffling."""

    if not locator:
        return False
    if ABSOLUTE_HTTP.match(locator):
        return True
    return kind is ReferenceKind.IMAGE and locator.startswith("/")


def iter_reference_elements(soup: BeautifulSoup, kind: ReferenceKind) -> List[Tag]:
    """Return elements of the given kind with an accepted locator, in document order."""

    tag_name, attribute, _ = _REFERENCE_SOURCES[kind]
    return [
        element
        for element in soup.find_all(tag_name, attrs={attribute: True})
        if is_accepted_locator(kind, element.get(attribute))
    ]


def locator_attribute(kind: ReferenceKind) -> str:
    return _REFERENCE_SOURCES[kind][1]


def extract_plain_text(markup: str, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Return the visible text of a document.

    Script, style and noscript content is dropped, whitespace runs collapse
    to a single space and the result is cut to ``max_length`` characters.
    """

    soup = parse_markup(markup)
    for element in soup(NON_CONTENT_TAGS):
        element.decompose()

    root = soup.body if soup.body is not None else soup
    text = WHITESPACE_RUN.sub(" ", root.get_text()).strip()
    return text[:max_length]


def extract_references(markup: str, kind: ReferenceKind) -> List[StructuralReference]:
    """Return hyperlink or image references with an accepted locator."""

    soup = parse_markup(markup)
    _, attribute, default_label = _REFERENCE_SOURCES[kind]

    references: List[StructuralReference] = []
    for element in iter_reference_elements(soup, kind):
        if kind is ReferenceKind.HYPERLINK:
            label = element.get_text().strip()
        else:
            label = (element.get("alt") or "").strip()
        references.append(
            StructuralReference(
                kind=kind,
                locator=element.get(attribute),
                label=label or default_label,
            )
        )
    return references
