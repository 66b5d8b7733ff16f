"""
Filename -> target layer name.

Examples:
  "…Kitchen_3of4…"          -> "Kitchen_3"
  "…Game_1of2…"             -> "Game_1"
  "…Bath3_F2"               -> "Bath3_1"
  "…CoveredPatio_1of2…"     -> "CoveredPatio_1"
  "…Patio_1of2…"            -> "Patio_1"
"""

import re
from typing import Optional

from services.room_keywords import match_room_keyword, normalize_token, strip_extension

# 3of4 / 1of2 — keep only the first number
_OF_INDEX_RE = re.compile(r"^_?(\d+)(?=_?of\d+)")
# _3_, _3 at end, or 3 directly after the keyword
_PLAIN_INDEX_RE = re.compile(r"^_?(\d+)(?:_|$)")

DEFAULT_INDEX = "1"


def extract_index(tail: str) -> Optional[str]:
    """Pull the layer index out of the text that follows a keyword."""
    of_match = _OF_INDEX_RE.match(tail)
    if of_match:
        return of_match.group(1)

    plain_match = _PLAIN_INDEX_RE.match(tail)
    if plain_match:
        return plain_match.group(1)

    return None


def parse_filename_to_target_layer(name: str) -> Optional[str]:
    """Resolve an uploaded filename to ``<Keyword>_<index>``, or None."""
    normalized = normalize_token(strip_extension(name))

    found = match_room_keyword(normalized)
    if found is None:
        return None

    keyword, match = found
    after_keyword = normalized[match.end():]
    index = extract_index(after_keyword)
    # "03" and "3" address the same layer
    index = (index.lstrip("0") or "0") if index else DEFAULT_INDEX

    return f"{keyword.raw}_{index}"
