"""Configuration for Step 00: Load building model."""

from typing import Literal

from pydantic import BaseModel, Field


class LoadModelConfig(BaseModel):
    source_format: Literal["auto", "json", "ifc"] = Field(
        "auto", description="'auto': pick reader from file suffix, 'json': snapshot, 'ifc': IFC file"
    )
    area_schedule_name: str = Field(
        "Floor Area Schedule", description="Well-known name of the area schedule table"
    )
    required_attributes: list[str] = Field(
        default_factory=lambda: [
            "Project Name",
            "Spec Level",
            "Client Name",
            "Client Division",
            "Client Subdivision",
            "Garage Loading",
        ],
        description="Project attributes the model must carry; missing ones are added blank",
    )
