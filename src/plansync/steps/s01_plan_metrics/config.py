"""Configuration for Step 01: Plan metrics extraction."""

from pydantic import BaseModel, Field

from ._area_table import AREA_UNIT_SUFFIX, LIVING_LABEL, SUBFLOOR_TOKEN, TOTAL_LABEL
from ._story_counter import STORY_EXCLUDE_KEYWORDS


class PlanMetricsConfig(BaseModel):
    area_schedule_name: str = Field(
        "Floor Area Schedule", description="Name of the area schedule table in the snapshot"
    )

    # B. Story counter
    story_exclude_keywords: list[str] = Field(
        default_factory=lambda: list(STORY_EXCLUDE_KEYWORDS),
        description="Level names containing any of these (case-insensitive) are not stories",
    )

    # D. Area schedule
    living_label: str = Field(LIVING_LABEL, description="Row label of the living area group")
    total_label: str = Field(TOTAL_LABEL, description="Row label of the total covered area")
    subfloor_token: str = Field(
        SUBFLOOR_TOKEN, description="Labels containing this stay inside the living group"
    )
    area_unit_suffix: str = Field(AREA_UNIT_SUFFIX, description="Unit suffix stripped from area text")
