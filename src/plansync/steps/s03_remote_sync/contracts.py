"""I/O contracts for Step 03: Remote sync to Airtable."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class RemoteSyncInput(BaseModel):
    record_file: Path = Field(..., description="Path to plan_record.json from s02")


class RemoteSyncOutput(BaseModel):
    record_id: str = Field(..., description="Airtable record id written")
    action: Literal["created", "updated"] = Field(..., description="Whether the record was new")
