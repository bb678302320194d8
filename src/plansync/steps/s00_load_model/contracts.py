"""I/O contracts for Step 00: Load building model."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class LoadModelInput(BaseModel):
    source_path: Path = Field(..., description="Path to a model snapshot .json or an .ifc file")
    schedule_csv: Optional[Path] = Field(
        None, description="Area schedule exported as CSV (overrides any schedule in the model)"
    )
    project_info_file: Optional[Path] = Field(
        None, description="YAML of project attribute values written over the model's"
    )


class LoadModelOutput(BaseModel):
    snapshot_file: Path = Field(..., description="Path to model_snapshot.json")
    num_walls: int = Field(0)
    num_levels: int = Field(0)
    num_rooms: int = Field(0)
    has_area_schedule: bool = Field(False)
    area_schedule_name: str = Field("", description="Name the area schedule is stored under in the snapshot")
    added_attributes: list[str] = Field(default_factory=list)
