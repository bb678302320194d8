"""Module D: Living and total area from the floor area schedule.

Row labels sit in the first column and areas in the last. "Living" may be
a group header with a blank area; its value then sits in the first
blank-labelled, area-bearing row beneath it. Rows labelled with a
sub-floor name (containing "Floor") stay inside the group; any other
label ends it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from plansync.core.contracts import ScheduleTable

logger = logging.getLogger(__name__)

LIVING_LABEL = "Living"
TOTAL_LABEL = "Total Covered"
SUBFLOOR_TOKEN = "Floor"
AREA_UNIT_SUFFIX = "SF"

_INTEGER = re.compile(r"^\d+$")


@dataclass(frozen=True)
class AreaSummary:
    living_area: int = 0
    total_area: int = 0


def parse_area_value(text: str, unit_suffix: str = AREA_UNIT_SUFFIX) -> int:
    """Parse schedule area text like '1,800 SF' to an int; 0 if unparsable."""
    cleaned = (text or "").replace(unit_suffix, "").strip().replace(",", "")
    if not _INTEGER.match(cleaned):
        if cleaned:
            logger.debug(f"Unparsable area text: {text!r}")
        return 0
    return int(cleaned)


def _label_matches(cell: str, label: str) -> bool:
    return cell.strip().casefold() == label.casefold()


def find_living_area(
    table: Optional[ScheduleTable],
    label: str = LIVING_LABEL,
    subfloor_token: str = SUBFLOOR_TOKEN,
    unit_suffix: str = AREA_UNIT_SUFFIX,
) -> int:
    if table is None or table.num_rows == 0:
        return 0

    area_col = table.num_columns - 1
    for row in range(table.num_rows):
        if not _label_matches(table.cell_text(row, 0), label):
            continue

        area_text = table.cell_text(row, area_col)
        if area_text:
            return parse_area_value(area_text, unit_suffix)

        # Group header: look for the first blank-labelled sub-row with an area
        for sub in range(row + 1, table.num_rows):
            sub_label = table.cell_text(sub, 0)
            sub_area = table.cell_text(sub, area_col)
            if sub_label and subfloor_token not in sub_label:
                break
            if not sub_label and sub_area:
                return parse_area_value(sub_area, unit_suffix)

    return 0


def find_total_area(
    table: Optional[ScheduleTable],
    label: str = TOTAL_LABEL,
    unit_suffix: str = AREA_UNIT_SUFFIX,
) -> int:
    if table is None or table.num_rows == 0:
        return 0

    area_col = table.num_columns - 1
    for row in range(table.num_rows):
        if _label_matches(table.cell_text(row, 0), label):
            return parse_area_value(table.cell_text(row, area_col), unit_suffix)
    return 0


def read_areas(
    table: Optional[ScheduleTable],
    *,
    living_label: str = LIVING_LABEL,
    total_label: str = TOTAL_LABEL,
    subfloor_token: str = SUBFLOOR_TOKEN,
    unit_suffix: str = AREA_UNIT_SUFFIX,
) -> AreaSummary:
    """Living and total area from the schedule; both 0 when there is no schedule."""
    if table is None:
        logger.info("No area schedule; living and total area default to 0")
        return AreaSummary()
    return AreaSummary(
        living_area=find_living_area(table, living_label, subfloor_token, unit_suffix),
        total_area=find_total_area(table, total_label, unit_suffix),
    )
