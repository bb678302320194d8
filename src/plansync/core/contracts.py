"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Source entities (read-only model snapshot) ───────────────────────


class LinearExtent(BaseModel):
    """Axis-aligned bounding volume of one wall-like element, in decimal feet."""

    min_xyz: list[float] = Field(..., min_length=3, max_length=3)
    max_xyz: list[float] = Field(..., min_length=3, max_length=3)


class LevelMarker(BaseModel):
    """A named floor reference (level / storey)."""

    name: str


class SpatialZone(BaseModel):
    """A named, area-bearing enclosed region (room)."""

    name: str
    area: float = 0.0


def _cell_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class ScheduleTable(BaseModel):
    """Rectangular grid of schedule cell text.

    The first column holds the row label (category, sub-floor label or blank
    continuation row); the last column holds the area text.
    """

    name: str = ""
    rows: list[list[str]] = Field(default_factory=list)

    @field_validator("rows", mode="before")
    @classmethod
    def _cells_as_text(cls, rows: Any) -> Any:
        # Exported grids may hold null cells and bare numeric areas
        if not isinstance(rows, list):
            return rows
        return [
            [_cell_text(c) for c in row] if isinstance(row, list) else row
            for row in rows
        ]

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_columns(self) -> int:
        return max((len(r) for r in self.rows), default=0)

    def cell_text(self, row: int, col: int) -> str:
        """Cell text, trimmed. Cells past a short row's end read as blank."""
        cells = self.rows[row]
        if col < 0 or col >= len(cells):
            return ""
        return (cells[col] or "").strip()


class ModelSnapshot(BaseModel):
    """Everything the pipeline reads from a building model, normalized."""

    source: str = ""
    project_info: dict[str, str] = Field(default_factory=dict)
    walls: list[LinearExtent] = Field(default_factory=list)
    levels: list[LevelMarker] = Field(default_factory=list)
    rooms: list[SpatialZone] = Field(default_factory=list)
    schedules: dict[str, ScheduleTable] = Field(default_factory=dict)


# ── Derived plan data ────────────────────────────────────────────────


class PlanMetrics(BaseModel):
    """Metrics derived from model geometry, rooms and the area schedule."""

    overall_width: str = "0'-0\""
    overall_depth: str = "0'-0\""
    stories: int = Field(0, ge=0)
    bedrooms: int = Field(0, ge=0)
    full_baths: int = Field(0, ge=0)
    half_baths: int = Field(0, ge=0)
    bathrooms: float = Field(0.0, ge=0)
    garage_bays: int = Field(0, ge=0)
    living_area: int = Field(0, ge=0)
    total_area: int = Field(0, ge=0)


# Remote column names, in payload order
RECORD_FIELD_COLUMNS: dict[str, str] = {
    "plan_name": "Plan Name",
    "spec_level": "Spec Level",
    "client": "Client Name",
    "division": "Client Division",
    "subdivision": "Client Subdivision",
    "overall_width": "Overall Width",
    "overall_depth": "Overall Depth",
    "stories": "Stories",
    "bedrooms": "Bedrooms",
    "bathrooms": "Bathrooms",
    "garage_bays": "Garage Bays",
    "garage_loading": "Garage Loading",
    "living_area": "Living Area",
    "total_area": "Total Area",
}


class PlanRecord(BaseModel):
    """Canonical building plan record. Immutable once assembled.

    (plan_name, spec_level, subdivision) is the identity key in the remote store.
    """

    model_config = ConfigDict(frozen=True)

    plan_name: str
    spec_level: str = ""
    subdivision: str = ""
    client: str = ""
    division: str = ""
    garage_loading: str = ""
    overall_width: str = "0'-0\""
    overall_depth: str = "0'-0\""
    stories: int = Field(0, ge=0)
    bedrooms: int = Field(0, ge=0)
    bathrooms: float = Field(0.0, ge=0)
    garage_bays: int = Field(0, ge=0)
    living_area: int = Field(0, ge=0)
    total_area: int = Field(0, ge=0)

    @field_validator("bathrooms")
    @classmethod
    def _half_bath_increments(cls, v: float) -> float:
        if (v * 2) != int(v * 2):
            raise ValueError(f"bathrooms must be a multiple of 0.5, got {v}")
        return v

    @property
    def identity_key(self) -> tuple[str, str, str]:
        return (self.plan_name, self.spec_level, self.subdivision)

    def to_fields(self) -> dict[str, Any]:
        """Serialize into the remote store's column layout."""
        fields: dict[str, Any] = {}
        for attr, column in RECORD_FIELD_COLUMNS.items():
            value = getattr(self, attr)
            fields[column] = float(value) if attr == "bathrooms" else value
        return fields


# ── Pipeline configuration ───────────────────────────────────────────


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "plansync_project"
    data_root: Path = Path("./data")
    inputs: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Explicit step inputs keyed by step name"
    )
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list."""

    name: str
    module: str
    config_file: Optional[str] = None
    depends_on: list[str] = Field(default_factory=list)
    enabled: bool = True


# Fix forward reference
PipelineConfig.model_rebuild()
