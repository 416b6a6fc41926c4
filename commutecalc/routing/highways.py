"""
Highway name extraction from route segments
"""

import re
from typing import Iterable, List

from commutecalc.core.models import RouteSegment

MAX_HIGHWAYS = 4

HIGHWAY_PATTERN = re.compile(
    r"\b(?:I-\d+|US-\d+|SR-\d+|State Route \d+|Highway \d+|Route \d+|Interstate \d+)\b",
    re.IGNORECASE,
)

# Long forms folded onto the short prefix used as the dedup key
CANONICAL_PREFIXES = (
    ("INTERSTATE ", "I "),
    ("STATE ROUTE ", "SR "),
)


def canonical(identifier: str) -> str:
    """
    Comparison key for a highway identifier

    "Interstate 90", "I 90" and "i-90" all map to "I 90".
    """
    key = re.sub(r"[\s-]+", " ", identifier.upper()).strip()
    for long_form, short_form in CANONICAL_PREFIXES:
        if key.startswith(long_form):
            key = short_form + key[len(long_form):]
    return key


def extract(segments: Iterable[RouteSegment], limit: int = MAX_HIGHWAYS) -> List[str]:
    """
    Extract highway identifiers traversed by a route

    Args:
        segments: Ordered route segments
        limit: Maximum number of identifiers to return

    Returns:
        Distinct roads in first-seen order, at most ``limit`` entries.
        Each road keeps the spelling it was first seen with
    """
    found: List[str] = []
    seen = set()

    def add(identifier: str) -> None:
        identifier = identifier.strip()
        key = canonical(identifier)
        if key and key not in seen:
            seen.add(key)
            found.append(identifier)

    for segment in segments:
        if segment.name:
            for match in HIGHWAY_PATTERN.finditer(segment.name):
                add(match.group(0))
        if segment.ref:
            # OSRM joins multiple refs with ';'
            for ref in segment.ref.split(";"):
                add(ref)
        if len(found) >= limit:
            break

    return found[:limit]
