"""Room title text -> canonical token used in layer names."""

import re
from typing import Optional

from services.room_keywords import match_room_keyword, normalize_token

_BED_RE = re.compile(r"bed(room)?\s*([0-9]+)", re.IGNORECASE)
_BATH_RE = re.compile(r"bath(room)?\s*([0-9]+)", re.IGNORECASE)
_GAME_RE = re.compile(r"game", re.IGNORECASE)
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]+")


def first_title_line(raw: str) -> str:
    """First line of a (possibly multi-line) title, trimmed."""
    trimmed = raw.strip()
    if not trimmed:
        return ""
    return trimmed.split("\n")[0].strip()


def is_owners_suite_title(title: str) -> bool:
    """Owners Suite blocks get the fixed Owners/Owners_Bath/Owners_WIC pattern."""
    lower = title.lower()
    return "owner" in lower and "suite" in lower


def derive_room_token(raw: str) -> Optional[str]:
    """
    Map a room title to the token its layers are named after.

    Checked in order: ``Bedroom N`` -> ``BedN``, ``Bath N`` -> ``BathN``,
    anything mentioning "game" -> ``Game``, a catalog keyword, and finally
    the title with every non-alphanumeric stripped.
    """
    first_line = first_title_line(raw)
    if not first_line:
        return None

    bed_match = _BED_RE.search(first_line)
    if bed_match:
        return f"Bed{bed_match.group(2)}"

    bath_match = _BATH_RE.search(first_line)
    if bath_match:
        return f"Bath{bath_match.group(2)}"

    if _GAME_RE.search(first_line):
        return "Game"

    found = match_room_keyword(normalize_token(first_line))
    if found is not None:
        return found[0].raw

    # Fallback tokens are not catalog keywords; uploaded files never resolve to them
    fallback = _NON_ALNUM_RE.sub("", first_line)
    return fallback or None
