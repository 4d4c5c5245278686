import re
from typing import List, Optional, Union

from bs4.element import (
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)

# Microdata attributes are split on ASCII whitespace (HTML "space characters").
_TOKEN_SEPARATOR = re.compile(r"[ \t\n\f\r]+")

# Strings that are not part of an element's textContent
_NON_TEXT = (Comment, Declaration, Doctype, ProcessingInstruction)

_SRC_TAGS = ("audio", "embed", "iframe", "img", "source", "track", "video")


def token_list(value: str) -> List[str]:
    """
    Split an unordered-set-of-tokens attribute value.

    Duplicates are dropped, first occurrence wins.
    """
    tokens: List[str] = []

    for token in _TOKEN_SEPARATOR.split(value.strip(" \t\n\f\r")):
        if token and token not in tokens:
            tokens.append(token)

    return tokens


class Element:
    """
    Microdata view over a BeautifulSoup tag.
    """

    __slots__ = ("tag",)

    def __init__(self, tag: Tag):
        self.tag = tag

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self.tag is other.tag

    def __hash__(self):
        return id(self.tag)

    def __repr__(self):
        return f"<Element {self.tag_name} itemprop={self.item_prop()!r}>"

    # --------------------------------------------------
    # DOM reads
    # --------------------------------------------------

    @property
    def tag_name(self) -> str:
        return (self.tag.name or "").lower()

    def has_attribute(self, name: str) -> bool:
        return self.tag.has_attr(name)

    def get_attribute(self, name: str) -> str:
        value = self.tag.get(name)
        if value is None:
            return ""
        # bs4 hands multi-valued attributes back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text_content(self) -> str:
        # get_text() skips script, style and template strings; textContent keeps them
        return "".join(
            node for node in self.tag.descendants
            if isinstance(node, NavigableString) and not isinstance(node, _NON_TEXT)
        )

    # --------------------------------------------------
    # Microdata accessors
    # --------------------------------------------------

    def item_scope(self) -> bool:
        return self.has_attribute("itemscope")

    def item_type(self) -> Optional[List[str]]:
        # None instead of [] so the result works in boolean tests
        tokens = token_list(self.get_attribute("itemtype"))
        return tokens or None

    def item_id(self) -> Optional[str]:
        itemid = self.get_attribute("itemid")
        if not itemid:
            return None
        return itemid

    def item_prop(self) -> List[str]:
        return token_list(self.get_attribute("itemprop"))

    def item_ref(self) -> List[str]:
        """Ids of the elements this item pulls properties from."""
        return token_list(self.get_attribute("itemref"))

    def item_value(self) -> Union[str, "Element", None]:
        """
        Resolve the property value carried by this element.

        Returns None when the element has no property names, the element
        itself when it is a nested item, and otherwise a string picked by
        tag name.
        """
        if not self.item_prop():
            return None

        if self.item_scope():
            return self

        name = self.tag_name

        if name == "meta":
            return self.get_attribute("content")

        if name in _SRC_TAGS:
            return self.get_attribute("src")

        if name == "object":
            return self.get_attribute("data")

        if name == "data":
            return self.get_attribute("value")

        if name == "time":
            datetime = self.get_attribute("datetime")
            if datetime:
                return datetime

        return self.text_content()
