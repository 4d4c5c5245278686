import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from bs4 import BeautifulSoup

from microdata_reader.models.item import Item, Property
from microdata_reader.reader.document import Document
from microdata_reader.reader.element import Element

logger = logging.getLogger(__name__)

# Value emitted for a nested item that is already being assembled
CYCLE_MARKER = "ERROR"


class MicrodataExtractor:
    """
    Builds Item records from the microdata in a document.
    """

    @staticmethod
    def extract_microdata(
        source: Union[BeautifulSoup, Document],
        types: Optional[Sequence[str]] = None
    ) -> List[Dict[str, Any]]:
        results: List[Dict[str, Any]] = []

        document = MicrodataExtractor._document(source)

        for element in document.items(*(types or ())):
            try:
                results.append(
                    MicrodataExtractor.build_item(document, element).to_dict()
                )
            except Exception as e:
                logger.debug(f"Microdata item ignored: {e}")

        return results

    @staticmethod
    def extract_items(
        source: Union[BeautifulSoup, Document],
        types: Optional[Sequence[str]] = None
    ) -> List[Item]:
        items: List[Item] = []

        document = MicrodataExtractor._document(source)

        for element in document.items(*(types or ())):
            try:
                items.append(MicrodataExtractor.build_item(document, element))
            except Exception as e:
                logger.debug(f"Microdata item ignored: {e}")

        return items

    # --------------------------------------------------
    # Item assembly
    # --------------------------------------------------

    @staticmethod
    def build_item(
        document: Document,
        element: Element,
        memory: Optional[List[Element]] = None
    ) -> Item:
        memory = (memory or []) + [element]

        item = Item(
            item_type=element.item_type(),
            item_id=element.item_id()
        )

        for prop in document.properties(element):
            value = prop.item_value()

            if isinstance(value, Element):
                if value in memory:
                    value = CYCLE_MARKER
                else:
                    value = MicrodataExtractor.build_item(document, value, memory)

            item.properties.append(Property(names=prop.item_prop(), value=value))

        return item

    @staticmethod
    def _document(source: Union[BeautifulSoup, Document]) -> Document:
        if isinstance(source, Document):
            return source
        return Document(source)
