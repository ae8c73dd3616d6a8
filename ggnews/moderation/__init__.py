"""Moderation queue queries and operator decisions."""

from .gateway import EDITABLE_FIELDS, TRANSITIONS, ModerationGateway, can_transition, parse_draft
from .models import ArticleDraft

__all__ = [
    "EDITABLE_FIELDS",
    "TRANSITIONS",
    "ArticleDraft",
    "ModerationGateway",
    "can_transition",
    "parse_draft",
]
