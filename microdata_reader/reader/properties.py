import logging
from typing import Dict, List, Protocol, Set

from bs4.element import Tag

from microdata_reader.reader.element import Element

logger = logging.getLogger(__name__)


class IdLookup(Protocol):
    """
    DOM services the resolver needs from the document.
    """

    def query_by_id(self, element_id: str) -> List[Tag]:
        ...

    def query_descendants(self, tag: Tag) -> List[Tag]:
        ...


class _Traversal:
    """
    State of one properties() call.

    Frontier and visited set are keyed by id(tag): bs4 tags compare by
    markup, so two distinct elements with the same attributes and text
    would otherwise collide.
    """

    def __init__(self, root: Element, lookup: IdLookup):
        self.root = root
        self.lookup = lookup
        self.frontier: Dict[int, Tag] = {id(root.tag): root.tag}
        self.visited: Set[int] = set()
        self.results: List[Element] = []

    def merge(self, start: Tag) -> None:
        stack = [start]

        while stack:
            tag = stack.pop()
            key = id(tag)

            self.frontier.pop(key, None)

            if key in self.visited:
                continue
            self.visited.add(key)

            if tag is not self.root.tag:
                element = Element(tag)

                if element.item_prop():
                    # TODO: property name filtering against the itemtype vocabulary
                    self.results.append(element)

                if element.item_scope():
                    continue

            # reversed so children pop off the stack in document order
            stack.extend(reversed(self.lookup.query_descendants(tag)))

    def run(self) -> List[Element]:
        for ref in self.root.item_ref():
            referenced = self.lookup.query_by_id(ref)

            if not referenced:
                logger.debug(f"itemref '{ref}' did not resolve, skipped")
                continue

            for tag in referenced:
                self.merge(tag)

        while self.frontier:
            self.merge(next(iter(self.frontier.values())))

        return self.results


def properties(root: Element, lookup: IdLookup) -> List[Element]:
    """
    Collect the property elements of the item rooted at ``root``.

    Elements referenced through ``itemref`` come first, in token order,
    then the root's own subtree. Both walks are depth-first pre-order,
    stop at nested items and never yield the same element twice.
    """
    if not root.item_scope():
        return []

    return _Traversal(root, lookup).run()
