"""Module A: Overall plan dimensions.

Combines wall bounding volumes into one envelope and formats its plan
width (X) and depth (Y) as feet-inches strings rounded to the nearest
half inch.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from plansync.core.contracts import LinearExtent
from plansync.utils.geometry import plan_size

logger = logging.getLogger(__name__)

# Inch remainders in [HALF_INCH_LOW, HALF_INCH_HIGH) get a half mark; at or
# above HALF_INCH_HIGH the inch count rounds up.
HALF_INCH_LOW = 0.25
HALF_INCH_HIGH = 0.75
HALF_INCH_MARK = " 1/2"

# Guards floor() against binary noise such as 3.2499999999 inches
_INCH_PRECISION = 6


@dataclass(frozen=True)
class Footprint:
    """Overall plan size, formatted."""

    width: str
    depth: str


def format_dimension(decimal_feet: float) -> str:
    """Format decimal feet as F'-I" with nearest-half-inch rounding.

    e.g. 42.5 -> 42'-6", 10.04 -> 10'-0 1/2", 0 -> 0'-0".
    """
    value = max(0.0, float(decimal_feet))
    feet = math.floor(value)
    total_inches = round((value - feet) * 12.0, _INCH_PRECISION)
    inches = math.floor(total_inches)
    remainder = total_inches - inches
    fraction = ""

    if HALF_INCH_LOW <= remainder < HALF_INCH_HIGH:
        fraction = HALF_INCH_MARK
    elif remainder >= HALF_INCH_HIGH:
        inches += 1

    if inches >= 12:
        feet += 1
        inches -= 12

    return f"{feet}'-{inches}{fraction}\""


def measure_footprint(walls: Iterable[LinearExtent]) -> Footprint:
    """Width and depth of the envelope around all walls; 0'-0\" each if none."""
    walls = list(walls)
    if not walls:
        logger.info("No walls in model; dimensions default to 0'-0\"")
    width, depth = plan_size(walls)
    return Footprint(width=format_dimension(width), depth=format_dimension(depth))
