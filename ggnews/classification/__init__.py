"""Game relevance scoring and article tagging.

The ``TextClassifier`` implementations live in
``ggnews.classification.classifier``.
"""

from .keywords import (
    CATEGORY_RULES,
    GAME_KEYWORDS,
    OTHER_GAME_KEYWORDS,
    REGION_KEYWORDS,
    SUPPORTED_GAMES,
    GameKeyword,
)
from .relevance import GameMatch, detect_game, mentions_other_game, relevance_score, score_games
from .tagger import build_tags, detect_category, detect_region

__all__ = [
    "CATEGORY_RULES",
    "GAME_KEYWORDS",
    "OTHER_GAME_KEYWORDS",
    "REGION_KEYWORDS",
    "SUPPORTED_GAMES",
    "GameKeyword",
    "GameMatch",
    "build_tags",
    "detect_category",
    "detect_game",
    "detect_region",
    "mentions_other_game",
    "relevance_score",
    "score_games",
]
