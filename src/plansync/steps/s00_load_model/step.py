"""Step 00: Load a building model into a normalized snapshot.

Reads either a host-exported JSON snapshot or an IFC file, writes any
project-info overrides over the model's project attributes, makes sure
the required attributes exist, and attaches the area schedule.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from plansync.core.contracts import ModelSnapshot
from plansync.core.errors import PreconditionError
from plansync.core.step_base import BaseStep
from plansync.utils.io import (
    read_model_snapshot,
    read_project_info_file,
    read_schedule_csv,
    write_model_snapshot,
)
from .config import LoadModelConfig
from .contracts import LoadModelInput, LoadModelOutput

logger = logging.getLogger(__name__)

_SUFFIX_FORMATS = {".json": "json", ".ifc": "ifc"}


def _resolve_format(path: Path, configured: str) -> str:
    if configured != "auto":
        return configured
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise PreconditionError(
            f"Unsupported model format '{path.suffix}'",
            details={"path": str(path), "supported": sorted(_SUFFIX_FORMATS)},
        )
    return fmt


def _load_snapshot(path: Path, fmt: str) -> ModelSnapshot:
    if fmt == "ifc":
        from plansync.utils.ifc_reader import read_ifc_model

        return read_ifc_model(path)
    return read_model_snapshot(path)


def ensure_required_attributes(
    project_info: dict[str, str], required: list[str]
) -> tuple[dict[str, str], list[str]]:
    """Add any missing required attributes with a blank value.

    Returns the completed mapping and the names that were added.
    """
    completed = dict(project_info)
    added = [name for name in required if name not in completed]
    for name in added:
        completed[name] = ""
    return completed, added


class LoadModelStep(BaseStep[LoadModelInput, LoadModelOutput, LoadModelConfig]):
    """Load a model source into model_snapshot.json for the extraction steps."""

    name: ClassVar[str] = "load_model"
    input_type: ClassVar = LoadModelInput
    output_type: ClassVar = LoadModelOutput
    config_type: ClassVar = LoadModelConfig

    def validate_inputs(self, inputs: LoadModelInput) -> bool:
        if not inputs.source_path.exists():
            logger.error(f"Model file not found: {inputs.source_path}")
            return False
        if inputs.schedule_csv is not None and not inputs.schedule_csv.exists():
            logger.error(f"Schedule CSV not found: {inputs.schedule_csv}")
            return False
        if inputs.project_info_file is not None and not inputs.project_info_file.exists():
            logger.error(f"Project info file not found: {inputs.project_info_file}")
            return False
        return True

    def run(self, inputs: LoadModelInput) -> LoadModelOutput:
        # --- 1. Read the model ---
        fmt = _resolve_format(inputs.source_path, self.config.source_format)
        logger.info(f"Reading {fmt} model: {inputs.source_path}")
        snapshot = _load_snapshot(inputs.source_path, fmt)

        # --- 2. Project attributes: required set, then overrides ---
        project_info, added = ensure_required_attributes(
            snapshot.project_info, self.config.required_attributes
        )
        if added:
            logger.info(f"Added {len(added)} missing attribute(s): {', '.join(added)}")
        else:
            logger.info("All required attributes already exist in the model")

        if inputs.project_info_file is not None:
            overrides = read_project_info_file(inputs.project_info_file)
            project_info.update(overrides)
            logger.info(f"Applied {len(overrides)} project attribute value(s) from {inputs.project_info_file.name}")

        # --- 3. Area schedule ---
        schedules = dict(snapshot.schedules)
        schedule_name = self.config.area_schedule_name
        if inputs.schedule_csv is not None:
            schedules[schedule_name] = read_schedule_csv(inputs.schedule_csv, name=schedule_name)
        has_schedule = schedule_name in schedules
        if not has_schedule:
            logger.warning(f"Area schedule '{schedule_name}' not found; areas will be 0")

        snapshot = snapshot.model_copy(
            update={"project_info": project_info, "schedules": schedules}
        )

        # --- 4. Save ---
        snapshot_path = write_model_snapshot(snapshot, self.interim_dir / "model_snapshot.json")
        logger.info(
            f"Snapshot: {len(snapshot.walls)} walls, {len(snapshot.levels)} levels, "
            f"{len(snapshot.rooms)} rooms -> {snapshot_path}"
        )

        return LoadModelOutput(
            snapshot_file=snapshot_path,
            num_walls=len(snapshot.walls),
            num_levels=len(snapshot.levels),
            num_rooms=len(snapshot.rooms),
            has_area_schedule=has_schedule,
            area_schedule_name=schedule_name,
            added_attributes=added,
        )
