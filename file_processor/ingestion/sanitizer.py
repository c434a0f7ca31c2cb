"""
HTML sanitizer - strips scripts, images and every element attribute.
Requires: beautifulsoup4, html5lib
"""

import logging
from typing import Optional, Union

from bs4 import BeautifulSoup

# Tags removed together with their whole subtree
REMOVED_TAGS = ["script", "img", "svg"]

EMPTY_DOCUMENT = "<html><head></head><body></body></html>"


def sanitize_html(
    html: Union[str, bytes, None],
    logger: Optional[logging.Logger] = None
) -> str:
    """
    Clean an HTML document.

    Removes every script, img and svg element (with its subtree), then clears
    all attributes (id, class, style, event handlers, src, href, ...) from the
    remaining elements. Tag structure, nesting and text are kept as-is.

    Args:
        html: Raw HTML text (malformed markup is accepted)
        logger: Optional logger for diagnostics

    Returns:
        Serialized HTML of the cleaned document. Empty or unparseable input
        yields the empty document ``<html><head></head><body></body></html>``.
    """
    logger = logger or logging.getLogger(__name__)

    if not html:
        logger.debug("Empty HTML input, returning empty document")
        return EMPTY_DOCUMENT

    try:
        # html5lib builds the same tree a browser would, including implied head/body
        soup = BeautifulSoup(html, "html5lib")
    except Exception as e:
        logger.warning(f"HTML could not be parsed, returning empty document: {str(e)}")
        return EMPTY_DOCUMENT

    removed = 0
    for tag in soup.find_all(REMOVED_TAGS):
        # Nested matches go away with their ancestor
        if tag.decomposed:
            continue
        tag.decompose()
        removed += 1

    stripped = 0
    for tag in soup.find_all(True):
        if tag.attrs:
            stripped += len(tag.attrs)
            tag.attrs = {}

    cleaned_html = str(soup)

    logger.info(
        f"HTML sanitized - removed {removed} elements, "
        f"stripped {stripped} attributes, {len(cleaned_html)} chars"
    )
    return cleaned_html
