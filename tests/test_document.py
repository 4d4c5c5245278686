"""Tests for reader/document.py: id index, children and top-level items."""

import pytest

from microdata_reader.reader.document import Document

PAGE = """
<html><body>
  <div id="p1" itemscope itemtype="https://schema.org/Person">
    <span itemprop="name">Ada</span>
    <div itemprop="address" itemscope itemtype="https://schema.org/PostalAddress">
      <span itemprop="addressLocality">London</span>
    </div>
  </div>
  <div id="b1" itemscope itemtype="https://schema.org/Book https://schema.org/CreativeWork">
    <span itemprop="name">Notes</span>
  </div>
  <div itemscope><span itemprop="x">untyped</span></div>
</body></html>
"""


@pytest.fixture
def doc():
    return Document.from_html(PAGE)


class TestQueries:
    def test_query_by_id(self, doc):
        found = doc.query_by_id("p1")
        assert len(found) == 1
        assert found[0].get("itemtype") == "https://schema.org/Person"

    def test_query_by_id_missing(self, doc):
        assert doc.query_by_id("nope") == []

    def test_query_by_id_returns_copy(self, doc):
        doc.query_by_id("p1").clear()
        assert len(doc.query_by_id("p1")) == 1

    def test_query_descendants_elements_only(self):
        doc = Document.from_html("<ul>a<li>1</li><!-- c --><li>2</li>b</ul>")
        children = doc.query_descendants(doc.soup.find("ul"))
        assert [c.name for c in children] == ["li", "li"]


class TestItems:
    def test_top_level_only(self, doc):
        items = doc.items()
        assert [i.item_type() for i in items] == [
            ["https://schema.org/Person"],
            ["https://schema.org/Book", "https://schema.org/CreativeWork"],
            None,
        ]

    def test_filter_by_type(self, doc):
        items = doc.items("https://schema.org/CreativeWork")
        assert [i.tag.get("id") for i in items] == ["b1"]

    def test_filter_any_of_types(self, doc):
        items = doc.items("https://schema.org/Person", "https://schema.org/Book")
        assert [i.tag.get("id") for i in items] == ["p1", "b1"]

    def test_filter_nested_type_not_top_level(self, doc):
        assert doc.items("https://schema.org/PostalAddress") == []

    def test_properties_bound_to_document(self, doc):
        person = doc.items()[0]
        assert [p.item_prop() for p in doc.properties(person)] == [["name"], ["address"]]


class TestFromHtml:
    @pytest.mark.parametrize("html", ["", None, 42])
    def test_invalid_input(self, html):
        with pytest.raises(ValueError):
            Document.from_html(html)
