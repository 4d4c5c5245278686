import logging
from typing import Dict, List

from bs4 import BeautifulSoup
from bs4.element import Tag

from microdata_reader.reader.element import Element
from microdata_reader.reader.properties import properties
from microdata_reader.utils.html import make_soup

logger = logging.getLogger(__name__)


class Document:
    """
    Parsed HTML document with an id index for itemref lookups.
    """

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup
        self._ids: Dict[str, List[Tag]] = {}

        for tag in soup.find_all(id=True):
            element_id = tag.get("id")
            if isinstance(element_id, list):
                element_id = " ".join(element_id)
            self._ids.setdefault(element_id, []).append(tag)

    @classmethod
    def from_html(cls, html: str) -> "Document":
        return cls(make_soup(html))

    # --------------------------------------------------
    # DOM services
    # --------------------------------------------------

    def query_by_id(self, element_id: str) -> List[Tag]:
        return list(self._ids.get(element_id, []))

    def query_descendants(self, tag: Tag) -> List[Tag]:
        # element children only, text and comments are skipped
        return [child for child in tag.children if isinstance(child, Tag)]

    # --------------------------------------------------
    # Microdata API
    # --------------------------------------------------

    def items(self, *types: str) -> List[Element]:
        """
        Top-level items in document order.

        An item is top-level when it is not itself a property of another
        item. If ``types`` are given, only items with at least one of those
        itemtype tokens are returned.
        """
        found: List[Element] = []

        for tag in self.soup.find_all(attrs={"itemscope": True}):
            element = Element(tag)

            if element.item_prop():
                continue

            if types:
                item_type = element.item_type() or []
                if not any(t in item_type for t in types):
                    continue

            found.append(element)

        logger.debug(f"Found {len(found)} top-level microdata items")

        return found

    def properties(self, element: Element) -> List[Element]:
        return properties(element, self)
