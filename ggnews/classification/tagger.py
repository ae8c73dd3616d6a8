"""Region, category and tag derivation from article text."""

from typing import Iterable, List, Optional

from ..models.article import DEFAULT_CATEGORY, DEFAULT_REGION
from .keywords import CATEGORY_RULES, LOCAL_REGION, REGION_KEYWORDS


def detect_region(text: str, region_override: Optional[str] = None) -> str:
    """Return the local region when any regional keyword appears, else global.

    A source-level override always wins.
    """
    if region_override:
        return region_override
    lower = text.lower()
    if any(kw in lower for kw in REGION_KEYWORDS):
        return LOCAL_REGION
    return DEFAULT_REGION


def detect_category(text: str) -> str:
    """Return the category of the first rule with a keyword in the text."""
    lower = text.lower()
    for category, keywords in CATEGORY_RULES:
        if any(kw in lower for kw in keywords):
            return category
    return DEFAULT_CATEGORY


def build_tags(category: str, region: str, extra: Iterable[str] = ()) -> List[str]:
    """Region marker (for non-global regions), category, then extra tags, de-duplicated."""
    tags: List[str] = []
    if region and region != DEFAULT_REGION:
        tags.append(region.upper())
    tags.append(category.upper())
    for tag in extra:
        tag = tag.strip()
        if tag:
            tags.append(tag)
    return list(dict.fromkeys(tags))
