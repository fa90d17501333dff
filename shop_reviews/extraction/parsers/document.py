"""
Document Parser

Structural queries over raw page markup:
- CSS path lookups (first match / all matches)
- Predicate searches over every element
- Attribute and text extraction

Every extraction step (listing references, price, image) reads pages
through this wrapper rather than touching BeautifulSoup directly.
"""

import re
from typing import Callable, List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

Predicate = Callable[[Tag], bool]


class DocumentParser:
    """
    Parsed HTML document with structural query helpers.

    Usage:
        doc = DocumentParser(html)
        for item in doc.select_all("div.review-item"):
            link = doc.select_one("a", root=item)
            href = doc.attr(link, "href")
    """

    def __init__(self, html: str):
        """
        Parse the markup.

        Args:
            html: Raw HTML text (may be empty or malformed)
        """
        self.html = html or ""
        self.soup = BeautifulSoup(self.html, "lxml")

    def _root(self, root: Optional[Tag]):
        # Empty tags are falsy, so compare with None
        return self.soup if root is None else root

    def select_one(self, selector: str, root: Optional[Tag] = None) -> Optional[Tag]:
        """Return the first element matching a CSS selector, or None."""
        return self._root(root).select_one(selector)

    def select_all(self, selector: str, root: Optional[Tag] = None) -> List[Tag]:
        """Return all elements matching a CSS selector, in document order."""
        return list(self._root(root).select(selector))

    def find_all(self, predicate: Predicate, root: Optional[Tag] = None) -> List[Tag]:
        """Return all descendant elements for which predicate(tag) is true."""
        return self._root(root).find_all(predicate)

    def find_first(self, predicate: Predicate, root: Optional[Tag] = None) -> Optional[Tag]:
        """Return the first descendant element matching predicate, or None."""
        return self._root(root).find(predicate)

    @staticmethod
    def attr(tag: Optional[Tag], name: str, default: Optional[str] = None) -> Optional[str]:
        """
        Read an attribute value.

        Multi-valued attributes (class, rel) are joined with spaces.
        Returns default when the tag is None or lacks the attribute.
        """
        if tag is None:
            return default
        value = tag.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return value

    @staticmethod
    def text(tag: Optional[Tag]) -> str:
        """Visible text of an element with whitespace collapsed."""
        if tag is None:
            return ""
        return re.sub(r'\s+', ' ', tag.get_text()).strip()


def has_classes(name: str, classes: str) -> Predicate:
    """
    Build a predicate matching ``name`` elements carrying every class in ``classes``.

    Example:
        has_classes("a", "wt-display-block wt-text-link-no-underline")
    """
    wanted = set(classes.split())

    def predicate(tag: Tag) -> bool:
        if tag.name != name:
            return False
        return wanted.issubset(tag.get("class") or [])

    return predicate
