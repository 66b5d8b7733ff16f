"""
Room title -> layer token.

Run: python -m pytest test_title_deriver.py
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from services.title_deriver import derive_room_token, first_title_line, is_owners_suite_title


def test_numbered_bedrooms_and_baths():
    assert derive_room_token("Bedroom 2\nmore text") == "Bed2"
    assert derive_room_token("Bathroom 3") == "Bath3"
    assert derive_room_token("BED4") == "Bed4"
    assert derive_room_token("Jack & Jill Bath 2") == "Bath2"


def test_bedroom_checked_before_bath():
    assert derive_room_token("Bed 3 / Bath 2") == "Bed3"


def test_game_anywhere():
    assert derive_room_token("Game Room") == "Game"
    assert derive_room_token("Upstairs gameroom") == "Game"


def test_catalog_keywords():
    assert derive_room_token("Great Room") == "Great"
    assert derive_room_token("Kitchenette") == "Kitchenette"
    assert derive_room_token("Bedroom") == "Bedroom"
    assert derive_room_token("  Laundry  \nwith sink") == "Laundry"


def test_fallback_strips_non_alphanumerics():
    assert derive_room_token("Kid's Room 2") == "KidsRoom2"
    assert derive_room_token("Wine Cellar!") == "WineCellar"


def test_no_token():
    assert derive_room_token("") is None
    assert derive_room_token("   \n  ") is None
    assert derive_room_token("!!! ---") is None


def test_only_first_line_counts():
    assert first_title_line("  Great Room \n Bedroom 2") == "Great Room"
    assert derive_room_token("Great Room\nBedroom 2") == "Great"


def test_owners_suite_predicate():
    assert is_owners_suite_title("Owner's Suite")
    assert is_owners_suite_title("OWNERS SUITE\n2nd floor")
    assert not is_owners_suite_title("Bedroom 2")
    assert not is_owners_suite_title("Owners Bath")
    assert not is_owners_suite_title("Guest Suite")


def test_only_ascii_digits_number_a_room():
    # Arabic-Indic two is not a room number; the title falls through to the catalog
    assert derive_room_token("Bedroom ٢") == "Bedroom"
    assert derive_room_token("Bath ٣") == "Bath"
