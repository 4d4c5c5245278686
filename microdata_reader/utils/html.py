import logging
from bs4 import BeautifulSoup

from microdata_reader.config import MAX_HTML_SIZE

logger = logging.getLogger(__name__)


def validate_html(html: str) -> str:
    """
    Gate for documents handed to the microdata reader.

    API payloads arrive as arbitrary JSON, so a missing, non-string or
    oversized "html" value is turned into a ValueError that the extract
    endpoint reports per input instead of failing the whole request.
    """
    if not html or not isinstance(html, str):
        raise ValueError("Invalid HTML input")

    if len(html) > MAX_HTML_SIZE:
        raise ValueError("HTML size exceeds safe limit")

    return html


def make_soup(html: str) -> BeautifulSoup:
    """
    Parse a validated document into the tree Document indexes by id.

    html.parser keeps attribute names lowercased, which the itemscope,
    itemprop and itemref lookups rely on.
    """
    html = validate_html(html)

    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as e:
        logger.error(f"BeautifulSoup parse failed: {e}")
        raise ValueError("HTML parsing failed") from e


def visible_text_length(html: str) -> int:
    """
    Length of the rendered text, used to spot JS shells
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    return len(" ".join(soup.get_text(separator=" ", strip=True).split()))
