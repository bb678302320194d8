"""Module C: Room classification by name keywords.

Each rule is evaluated independently against every room with positive
area, so one room can count toward several categories ("Bedroom/Bath"
is a bedroom and a full bath). Matching is case-insensitive substring.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from plansync.core.contracts import SpatialZone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomRule:
    """Adds `weight` to `category` when a room name contains any of `keywords`,
    also contains one of `require_any` (if given) and none of `exclude_any`."""

    category: str
    keywords: tuple[str, ...]
    weight: int = 1
    require_any: tuple[str, ...] = ()
    exclude_any: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        if not any(k in name for k in self.keywords):
            return False
        if self.require_any and not any(k in name for k in self.require_any):
            return False
        return not any(k in name for k in self.exclude_any)


HALF_BATH_MARKERS = ("powder", "half")

ROOM_RULES: tuple[RoomRule, ...] = (
    RoomRule("bedrooms", ("bedroom", "bed")),
    RoomRule("full_baths", ("bath",), exclude_any=HALF_BATH_MARKERS),
    RoomRule("half_baths", ("bath",), require_any=HALF_BATH_MARKERS),
)

# Bath tallies -> bathroom count
BATHROOM_WEIGHTS: dict[str, float] = {"full_baths": 1.0, "half_baths": 0.5}

GARAGE_KEYWORD = "garage"

# Checked in order, first match wins
GARAGE_BAY_KEYWORDS: tuple[tuple[str, int], ...] = (("three", 3), ("two", 2), ("one", 1))


@dataclass(frozen=True)
class RoomCounts:
    bedrooms: int = 0
    full_baths: int = 0
    half_baths: int = 0
    garage_bays: int = 0

    @property
    def bathrooms(self) -> float:
        return (
            self.full_baths * BATHROOM_WEIGHTS["full_baths"]
            + self.half_baths * BATHROOM_WEIGHTS["half_baths"]
        )


def garage_bays_for(name: str) -> int:
    """Bay count for one lowercase room name; 0 for non-garage rooms."""
    if GARAGE_KEYWORD not in name:
        return 0
    for keyword, bays in GARAGE_BAY_KEYWORDS:
        if keyword in name:
            return bays
    return 0


def classify_rooms(rooms: Iterable[SpatialZone], rules: tuple[RoomRule, ...] = ROOM_RULES) -> RoomCounts:
    """Tally bedrooms, full/half baths and garage bays over rooms with area > 0."""
    totals = {rule.category: 0 for rule in rules}
    bays = 0
    skipped = 0

    for room in rooms:
        if room.area <= 0:
            skipped += 1
            continue
        name = room.name.lower()
        for rule in rules:
            if rule.matches(name):
                totals[rule.category] += rule.weight
        bays += garage_bays_for(name)

    if skipped:
        logger.debug(f"Skipped {skipped} unplaced/zero-area room(s)")

    return RoomCounts(
        bedrooms=totals.get("bedrooms", 0),
        full_baths=totals.get("full_baths", 0),
        half_baths=totals.get("half_baths", 0),
        garage_bays=bays,
    )
