"""Score-based game detection."""

from typing import Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field

from .keywords import (
    CONFIDENT_SCORE,
    GAME_KEYWORDS,
    OTHER_GAME_KEYWORDS,
    RELEVANCE_SCALE,
    WEAK_SCORE,
    GameKeyword,
)


class GameMatch(BaseModel):
    """A supported game detected in article text."""

    slug: str = Field(..., description="Supported game slug")
    score: int = Field(..., description="Summed keyword weight", ge=0)

    @property
    def relevance(self) -> float:
        """Score normalized to the 0..1 range."""
        return relevance_score(self.score)


def relevance_score(score: int) -> float:
    """Normalize a raw keyword score to 0..1."""
    return min(score / RELEVANCE_SCALE, 1.0)


def score_games(
    text: str,
    game_keywords: Mapping[str, List[GameKeyword]] = GAME_KEYWORDS,
) -> Dict[str, int]:
    """Sum the weights of every keyword found in the text, per game.

    The returned dict keeps the order of ``game_keywords``.
    """
    lower = text.lower()
    scores: Dict[str, int] = {}
    for slug, keywords in game_keywords.items():
        scores[slug] = sum(kw.weight for kw in keywords if kw.term in lower)
    return scores


def mentions_other_game(text: str, other_keywords: Iterable[str] = OTHER_GAME_KEYWORDS) -> bool:
    """Whether the text names a game outside the supported set."""
    lower = text.lower()
    return any(kw.lower() in lower for kw in other_keywords)


def detect_game(
    text: str,
    game_keywords: Mapping[str, List[GameKeyword]] = GAME_KEYWORDS,
    other_keywords: Iterable[str] = OTHER_GAME_KEYWORDS,
) -> Optional[GameMatch]:
    """
    Decide which supported game, if any, the text is about.

    A score of CONFIDENT_SCORE or more is accepted even when another game is
    named. Below that, any mention of an unsupported game rejects the text,
    and otherwise a score of at least WEAK_SCORE is accepted. Equal top scores
    resolve to the game listed first.

    Args:
        text: Title and content of the article
        game_keywords: Weighted keywords per supported game
        other_keywords: Keywords of unsupported games

    Returns:
        The matched game, or None when the text is rejected
    """
    scores = score_games(text, game_keywords)
    if not scores:
        return None

    top_slug, top_score = None, -1
    for slug, score in scores.items():
        if score > top_score:
            top_slug, top_score = slug, score

    if top_score >= CONFIDENT_SCORE:
        return GameMatch(slug=top_slug, score=top_score)

    if mentions_other_game(text, other_keywords):
        return None

    if top_score >= WEAK_SCORE:
        return GameMatch(slug=top_slug, score=top_score)

    return None
