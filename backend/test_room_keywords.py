"""
Normalizer and keyword catalog checks.

Run: python -m pytest test_room_keywords.py
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from services.room_keywords import (
    ROOM_KEYWORD_INFO,
    ROOM_KEYWORDS,
    match_room_keyword,
    names_match,
    normalize_token,
    strip_extension,
)

SAMPLES = [
    "",
    "Kitchen_3of4.png",
    "  Owner's Suite!! ",
    "photo.final.PNG",
    "__Bath3__F2__",
    "Covered Patio (1 of 2).jpeg",
    "a/b.c",
    "ALLCAPS",
]


def test_normalize_examples():
    assert normalize_token("Kitchen_3of4.png") == "kitchen_3of4"
    assert normalize_token("  Owner's Suite!! ") == "owner_s_suite"
    assert normalize_token("photo.final.PNG") == "photo_final"
    assert normalize_token("Covered Patio (1 of 2).jpeg") == "covered_patio_1_of_2"
    assert normalize_token("a/b.c") == "a_b"
    assert normalize_token("") == ""
    assert normalize_token("...") == ""


def test_normalize_is_idempotent():
    for sample in SAMPLES:
        once = normalize_token(sample)
        assert normalize_token(once) == once, sample


def test_normalize_ignores_case_and_punctuation():
    assert normalize_token("Owners-Bath 1") == normalize_token("owners_bath_1")
    assert normalize_token("KITCHEN---3") == normalize_token("kitchen 3")
    assert names_match("Great Room", "great_room")
    assert not names_match("Kitchen_1", "Kitchen_2")


def test_strip_extension_keeps_case():
    assert strip_extension("Kitchen_3of4.PNG") == "Kitchen_3of4"
    assert strip_extension("Archive.tar.gz") == "Archive.tar"
    assert strip_extension("no_extension") == "no_extension"
    assert strip_extension("dir.d/file") == "dir.d/file"


def test_catalog_contents():
    assert len(ROOM_KEYWORD_INFO) == len(ROOM_KEYWORDS) == 38
    assert {info.raw for info in ROOM_KEYWORD_INFO} == set(ROOM_KEYWORDS)
    for info in ROOM_KEYWORD_INFO:
        assert info.norm == normalize_token(info.raw)


def test_catalog_is_ordered_most_specific_first():
    lengths = [len(info.norm) for info in ROOM_KEYWORD_INFO]
    assert lengths == sorted(lengths, reverse=True)

    order = [info.raw for info in ROOM_KEYWORD_INFO]
    assert order.index("Owners_Bath") < order.index("Owners")
    assert order.index("Owners_WIC") < order.index("Owners")
    assert order.index("Kitchenette") < order.index("Kitchen")
    assert order.index("CoveredPatio") < order.index("Patio")
    assert order.index("Bath3") < order.index("Bath")


def test_catalog_ties_keep_declaration_order():
    for length in {len(info.norm) for info in ROOM_KEYWORD_INFO}:
        same_length = [info.raw for info in ROOM_KEYWORD_INFO if len(info.norm) == length]
        declared = [raw for raw in ROOM_KEYWORDS if raw in same_length]
        assert same_length == declared


def test_match_requires_whole_token():
    keyword, match = match_room_keyword("kitchenette_2")
    assert keyword.raw == "Kitchenette"
    assert match.end() == len("kitchenette_")

    assert match_room_keyword("denver_photo") is None
    assert match_room_keyword("") is None
    assert match_room_keyword("house_den")[0].raw == "Den"
