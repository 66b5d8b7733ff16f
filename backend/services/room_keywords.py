"""
Room keyword catalog — single source of truth for room identifiers.

Every filename and room title is compared against this vocabulary in its
normalized form. The catalog is ordered most-specific first so that nested
keywords resolve to the longest one:

  - "Owners_Bath" / "Owners_WIC" before "Owners"
  - "Kitchenette" before "Kitchen"
  - "CoveredPatio" before "Patio"
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_NON_TOKEN_RE = re.compile(r"[^a-z0-9]+")
_REPEATED_UNDERSCORE_RE = re.compile(r"_+")


@lru_cache(maxsize=4096)
def normalize_token(raw: str) -> str:
    """
    Canonicalize text for comparison.

    Lowercases, drops a trailing ``.ext``, collapses every run of
    non-alphanumerics to a single underscore and trims underscores.

    >>> normalize_token("Owner's Bath (2).PNG")
    'owner_s_bath_2'
    """
    text = raw.lower()
    text = _EXTENSION_RE.sub("", text)
    text = _NON_TOKEN_RE.sub("_", text)
    text = _REPEATED_UNDERSCORE_RE.sub("_", text)
    return text.strip("_")


def strip_extension(name: str) -> str:
    """Remove a trailing file extension, keeping the original case."""
    return _EXTENSION_RE.sub("", name)


def names_match(a: str, b: str) -> bool:
    return normalize_token(a) == normalize_token(b)


# ===========================================================================
# KEYWORD CATALOG
# ===========================================================================

ROOM_KEYWORDS = (
    "Owners_Bath",
    "Owners_WIC",
    "Owners",
    "Kitchen",
    "Kitchenette",
    "Dining",
    "Great",
    "Living",
    "Family",
    "Bed2",
    "Bed3",
    "Bed4",
    "Bed5",
    "Bedroom",
    "Bath2",
    "Bath3",
    "Bath4",
    "Bath",
    "Powder",
    "Laundry",
    "Garage",
    "Entry",
    "Foyer",
    "Office",
    "Study",
    "WIC",
    "Suite",
    "Den",
    "Loft",
    "Bonus",
    "Media",
    "Game",
    "Gym",
    "Flex",
    "CoveredPatio",
    "Deck",
    "Patio",
    "Nook",
)


@dataclass(frozen=True)
class RoomKeyword:
    """A catalog entry: display form plus its normalized form."""

    raw: str
    norm: str

    @property
    def boundary_pattern(self) -> "re.Pattern[str]":
        """Whole-token pattern: keyword bounded by start/end or underscores."""
        return _boundary_pattern(self.norm)


@lru_cache(maxsize=None)
def _boundary_pattern(norm: str) -> "re.Pattern[str]":
    return re.compile(rf"(^|_){re.escape(norm)}($|_)", re.IGNORECASE)


# Stable sort: equal-length keywords keep declaration order
ROOM_KEYWORD_INFO: Tuple[RoomKeyword, ...] = tuple(
    sorted(
        (RoomKeyword(raw=raw, norm=normalize_token(raw)) for raw in ROOM_KEYWORDS),
        key=lambda info: -len(info.norm),
    )
)


def match_room_keyword(
    normalized: str,
) -> Optional[Tuple[RoomKeyword, "re.Match[str]"]]:
    """
    Find the most specific catalog keyword in an already-normalized string.

    Returns the keyword together with its boundary match (callers read the
    match end to find what follows the keyword), or ``None``.
    """
    for info in ROOM_KEYWORD_INFO:
        match = info.boundary_pattern.search(normalized)
        if match:
            return info, match
    return None
