"""Step 01: Plan metrics: dimensions, stories, rooms and areas.

Orchestrates sub-modules A→D over one model snapshot:
  A. Dimensions (wall envelope → formatted width/depth)
  B. Story count (level names minus roof/foundation/plate markers)
  C. Room classification (bedrooms, baths, garage bays)
  D. Area schedule (living and total covered area)

Missing data never fails the step; each metric falls back to zero.
Output: plan_metrics.json.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Optional

from plansync.core.contracts import ModelSnapshot, PlanMetrics
from plansync.core.step_base import BaseStep
from plansync.utils.io import load_snapshot_file
from ._area_table import read_areas
from ._dimensions import measure_footprint
from ._room_classifier import classify_rooms
from ._story_counter import count_stories
from .config import PlanMetricsConfig
from .contracts import PlanMetricsInput, PlanMetricsOutput

logger = logging.getLogger(__name__)


def compute_plan_metrics(
    snapshot: ModelSnapshot,
    config: PlanMetricsConfig,
    schedule_name: Optional[str] = None,
) -> PlanMetrics:
    """Derive all plan metrics from a snapshot.

    `schedule_name` overrides config.area_schedule_name when given.
    """
    schedule_name = schedule_name or config.area_schedule_name
    schedule = snapshot.schedules.get(schedule_name)
    if schedule is None and snapshot.schedules:
        logger.warning(
            f"Area schedule '{schedule_name}' not in snapshot "
            f"(has: {', '.join(sorted(snapshot.schedules))}); areas will be 0"
        )

    footprint = measure_footprint(snapshot.walls)
    stories = count_stories(snapshot.levels, config.story_exclude_keywords)
    rooms = classify_rooms(snapshot.rooms)
    areas = read_areas(
        schedule,
        living_label=config.living_label,
        total_label=config.total_label,
        subfloor_token=config.subfloor_token,
        unit_suffix=config.area_unit_suffix,
    )

    return PlanMetrics(
        overall_width=footprint.width,
        overall_depth=footprint.depth,
        stories=stories,
        bedrooms=rooms.bedrooms,
        full_baths=rooms.full_baths,
        half_baths=rooms.half_baths,
        bathrooms=rooms.bathrooms,
        garage_bays=rooms.garage_bays,
        living_area=areas.living_area,
        total_area=areas.total_area,
    )


class PlanMetricsStep(BaseStep[PlanMetricsInput, PlanMetricsOutput, PlanMetricsConfig]):
    name: ClassVar[str] = "plan_metrics"
    input_type: ClassVar = PlanMetricsInput
    output_type: ClassVar = PlanMetricsOutput
    config_type: ClassVar = PlanMetricsConfig

    def validate_inputs(self, inputs: PlanMetricsInput) -> bool:
        if not inputs.snapshot_file.exists():
            logger.error(f"Snapshot not found: {inputs.snapshot_file}")
            return False
        return True

    def run(self, inputs: PlanMetricsInput) -> PlanMetricsOutput:
        snapshot = load_snapshot_file(inputs.snapshot_file)
        metrics = compute_plan_metrics(snapshot, self.config, inputs.area_schedule_name)

        logger.info(
            f"Metrics: {metrics.overall_width} W x {metrics.overall_depth} D, "
            f"{metrics.stories} stories, {metrics.bedrooms} bed / {metrics.bathrooms} bath, "
            f"{metrics.garage_bays} bays, living {metrics.living_area} SF, total {metrics.total_area} SF"
        )

        self.interim_dir.mkdir(parents=True, exist_ok=True)
        metrics_path = self.interim_dir / "plan_metrics.json"
        metrics_path.write_text(metrics.model_dump_json(indent=2), encoding="utf-8")

        return PlanMetricsOutput(
            metrics_file=metrics_path,
            stories=metrics.stories,
            bedrooms=metrics.bedrooms,
            bathrooms=metrics.bathrooms,
            garage_bays=metrics.garage_bays,
            living_area=metrics.living_area,
            total_area=metrics.total_area,
        )
