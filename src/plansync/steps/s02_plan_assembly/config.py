"""Configuration for Step 02: Plan record assembly."""

from pydantic import BaseModel, Field


class PlanAssemblyConfig(BaseModel):
    # Record field -> project attribute name
    attribute_names: dict[str, str] = Field(
        default_factory=lambda: {
            "plan_name": "Project Name",
            "spec_level": "Spec Level",
            "client": "Client Name",
            "division": "Client Division",
            "subdivision": "Client Subdivision",
            "garage_loading": "Garage Loading",
        },
        description="Project attribute read for each descriptive record field",
    )
