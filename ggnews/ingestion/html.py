"""HTML helpers for feed content."""

import re
from typing import Optional

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")


def html_to_text(html: str) -> str:
    """Strip markup and collapse whitespace."""
    if not html:
        return ""
    if "<" not in html and "&" not in html:
        return _WHITESPACE.sub(" ", html).strip()
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return _WHITESPACE.sub(" ", text).strip()


def extract_image_url(html: str) -> Optional[str]:
    """Return the src of the first <img> in the markup, if any."""
    if not html or "<img" not in html.lower():
        return None
    img = BeautifulSoup(html, "html.parser").find("img", src=True)
    if img is None:
        return None
    src = img["src"].strip()
    return src or None
