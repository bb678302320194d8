"""I/O contracts for Step 02: Plan record assembly."""

from pathlib import Path

from pydantic import BaseModel, Field


class PlanAssemblyInput(BaseModel):
    snapshot_file: Path = Field(..., description="Path to model_snapshot.json from s00")
    metrics_file: Path = Field(..., description="Path to plan_metrics.json from s01")


class PlanAssemblyOutput(BaseModel):
    record_file: Path = Field(..., description="Path to plan_record.json")
    plan_name: str = Field("")
    spec_level: str = Field("")
    subdivision: str = Field("")
