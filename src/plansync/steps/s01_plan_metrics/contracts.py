"""I/O contracts for Step 01: Plan metrics extraction."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class PlanMetricsInput(BaseModel):
    snapshot_file: Path = Field(..., description="Path to model_snapshot.json from s00")
    area_schedule_name: Optional[str] = Field(
        None, description="Schedule name resolved by s00; overrides config.area_schedule_name"
    )


class PlanMetricsOutput(BaseModel):
    metrics_file: Path = Field(..., description="Path to plan_metrics.json")
    stories: int = Field(0)
    bedrooms: int = Field(0)
    bathrooms: float = Field(0.0)
    garage_bays: int = Field(0)
    living_area: int = Field(0)
    total_area: int = Field(0)
