"""Tests for region, category and tag derivation."""

import pytest

from ggnews.classification import build_tags, detect_category, detect_region


@pytest.mark.parametrize(
    "text",
    [
        "Skyesports announces new Valorant league",
        "Velocity Gaming qualify for playoffs",
        "VCT Pacific Kickoff schedule",
        "Tournament in Mumbai this weekend",
    ],
)
def test_regional_keywords_map_to_india(text):
    assert detect_region(text) == "india"


def test_no_regional_keyword_is_global():
    assert detect_region("Valorant Patch 8.11 notes Agent changes for Jett") == "global"


def test_region_override_wins():
    assert detect_region("Skyesports Valorant league", region_override="global") == "global"
    assert detect_region("Valorant patch", region_override="sea") == "sea"


@pytest.mark.parametrize(
    "text,category",
    [
        ("Valorant Patch 8.11 notes", "patch"),
        ("BGMI update notes", "patch"),
        ("VCT Masters Toronto grand finals", "tournament"),
        ("Free Fire event rewards", "event"),
        ("Team signs new IGL", "roster"),
        ("Best agents tier list", "meta"),
        ("New map revealed for ranked", "update"),
        ("Developer interview", "general"),
    ],
)
def test_category_detection(text, category):
    assert detect_category(text) == category


def test_first_category_rule_wins():
    assert detect_category("Masters patch preview") == "patch"


def test_tags_with_local_region():
    assert build_tags("patch", "india") == ["INDIA", "PATCH"]


def test_tags_for_global_region_skip_marker():
    assert build_tags("patch", "global") == ["PATCH"]


def test_extra_tags_are_deduplicated_in_order():
    assert build_tags("meta", "asia", ["agents", "META", " agents ", ""]) == ["ASIA", "META", "agents"]
