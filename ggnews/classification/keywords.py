"""Keyword tables driving game, region and category detection.

Every table is ordered. Game order decides ties between equal scores (the
first game listed wins) and category order decides which rule fires first.
"""

from typing import Dict, List, NamedTuple, Tuple


class GameKeyword(NamedTuple):
    """A keyword phrase and the weight it adds to a game's score."""

    term: str
    weight: int  # 3 = definitive, 2 = strong, 1 = weak/ambiguous


# A single definitive keyword reaches this score on its own.
CONFIDENT_SCORE = 3
WEAK_SCORE = 1
RELEVANCE_SCALE = 10.0

GAME_KEYWORDS: Dict[str, List[GameKeyword]] = {
    "valorant": [
        GameKeyword("valorant", 3),
        GameKeyword("vct", 3),
        GameKeyword("champions tour", 3),
        GameKeyword("vct pacific", 3),
        GameKeyword("vct ascension", 3),
        GameKeyword("vct masters", 3),
        GameKeyword("vct champions", 3),
        GameKeyword("valorant champions", 3),
        # Agents
        GameKeyword("jett", 1),
        GameKeyword("reyna", 1),
        GameKeyword("omen", 1),
        GameKeyword("sova", 1),
        GameKeyword("killjoy", 2),
        GameKeyword("cypher", 1),
        GameKeyword("astra", 2),
        GameKeyword("viper", 1),
        GameKeyword("brimstone", 2),
        GameKeyword("phoenix", 1),
        GameKeyword("neon", 1),
        GameKeyword("gekko", 2),
        GameKeyword("deadlock", 1),
        GameKeyword("iso", 2),
        GameKeyword("clove", 2),
        GameKeyword("vyse", 2),
        GameKeyword("tejo", 2),
        # Maps
        GameKeyword("ascent", 1),
        GameKeyword("bind", 1),
        GameKeyword("haven", 1),
        GameKeyword("split", 1),
        GameKeyword("icebox", 1),
        GameKeyword("breeze", 1),
        GameKeyword("fracture", 1),
        GameKeyword("pearl", 1),
        GameKeyword("lotus", 1),
        GameKeyword("sunset", 1),
        GameKeyword("abyss", 1),
        # Indian scene
        GameKeyword("global esports", 1),
        GameKeyword("velocity gaming", 2),
        GameKeyword("orangutan", 1),
        GameKeyword("skyesports valorant", 3),
    ],
    "bgmi": [
        GameKeyword("bgmi", 3),
        GameKeyword("battlegrounds mobile india", 3),
        GameKeyword("bgmi india", 3),
        GameKeyword("pubg mobile india", 3),
        GameKeyword("bmps", 3),  # BGMI Pro Series
        GameKeyword("bmoc", 3),  # BGMI Open Challenge
        GameKeyword("bgis", 3),  # BGMI India Series
        GameKeyword("pubg mobile", 2),
        GameKeyword("pubg", 1),
        GameKeyword("battlegrounds mobile", 2),
        # Teams
        GameKeyword("godlike esports", 2),
        GameKeyword("soul", 1),
        GameKeyword("team xspark", 2),
        GameKeyword("blind esports", 2),
        GameKeyword("jonathan gaming", 2),
        GameKeyword("krafton india", 3),
        GameKeyword("krafton", 1),
        # Maps
        GameKeyword("erangel", 2),
        GameKeyword("miramar", 2),
        GameKeyword("sanhok", 2),
    ],
    "freefire": [
        GameKeyword("free fire", 3),
        GameKeyword("freefire", 3),
        GameKeyword("garena free fire", 3),
        GameKeyword("ff max", 3),
        GameKeyword("free fire max", 3),
        GameKeyword("free fire india", 3),
        GameKeyword("ffws", 3),  # Free Fire World Series
        GameKeyword("ffic", 3),  # Free Fire India Championship
        GameKeyword("free fire continental", 3),
        GameKeyword("garena", 2),
        # Characters
        GameKeyword("chrono", 1),
        GameKeyword("alok", 2),
        GameKeyword("hayato", 2),
    ],
}

SUPPORTED_GAMES: Tuple[str, ...] = tuple(GAME_KEYWORDS)

GAME_DISPLAY_NAMES: Dict[str, str] = {
    "valorant": "Valorant",
    "bgmi": "BGMI",
    "freefire": "Free Fire",
}

# Titles the platform does not cover. Trailing spaces are significant.
OTHER_GAME_KEYWORDS: List[str] = [
    # Counter-Strike
    "counter-strike", "counter strike", "csgo", "cs:go", "cs2", "cs 2",
    "counter-strike 2", "major championship cs", "iem katowice", "blast premier",
    "esl pro league", "pgl major", "faceit",
    "zywoo", "s1mple", "niko", "device", "donk",
    # League of Legends
    "league of legends", "lol worlds", "lck", "lpl", "lec", "lcs",
    "summoner's rift", "riot games lol",
    # Dota 2
    "dota 2", "dota2", "the international dota",
    # Fortnite
    "fortnite", "fortnite battle royale", "epic games fortnite", "fncs",
    # Apex Legends
    "apex legends", "apex", "respawn entertainment",
    # Call of Duty
    "call of duty", "cod warzone", "warzone", "modern warfare", "cod mobile",
    "cdl ", "call of duty league",
    # Overwatch
    "overwatch", "overwatch 2", "owl ",
    # Supercell
    "clash of clans", "clash royale", "supercell", "coc ", "brawl stars",
    "roblox",
    "minecraft",
    # EA FC
    "ea fc", "fifa", "ea sports fc",
    # HoYoverse
    "genshin impact", "genshin", "hoyoverse", "honkai", "star rail",
    "pokemon", "pokémon",
    "mobile legends", "mlbb",
    "rocket league",
    "rainbow six", "r6 siege",
    "tekken", "street fighter",
    "gta online", "gta 6", "gta vi",
]

INDIA_KEYWORDS: List[str] = [
    "india", "indian", "south asia", "bgmi",
    "mumbai", "delhi", "bangalore", "bengaluru", "chennai", "kolkata",
    "hyderabad", "pune", "ahmedabad", "jaipur",
    "skyesports", "nodwin", "gamerji", "upthrust", "villager esports",
    "godlike", "team xspark", "orangutan", "velocity gaming",
    "bmps", "bmoc", "bgis", "ffic",
]

REGION_KEYWORDS: List[str] = INDIA_KEYWORDS + [
    "asia", "asian", "pacific", "apac",
    "sea", "southeast asia", "singapore", "indonesia", "philippines", "thailand", "vietnam", "malaysia",
    "japan", "korea", "china",
    "vct pacific", "vct ascension pacific",
]

LOCAL_REGION = "india"

# First matching rule wins.
CATEGORY_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("patch", ("patch", "update notes")),
    ("tournament", ("tournament", "championship", "masters", "finals")),
    ("event", ("event", "lan")),
    ("roster", ("roster", "transfer", "signs", "benched")),
    ("meta", ("meta", "tier list", "best agents")),
    ("update", ("update", "new season", "new map")),
]
