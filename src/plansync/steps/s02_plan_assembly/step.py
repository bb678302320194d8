"""Step 02: Assemble the canonical PlanRecord.

Joins project attributes from the snapshot with the derived metrics. No
transformation beyond field copying; a model without a usable plan name
cannot be assembled.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from plansync.core.contracts import PlanMetrics, PlanRecord
from plansync.core.errors import ExtractionError
from plansync.core.step_base import BaseStep
from plansync.utils.io import load_snapshot_file
from .config import PlanAssemblyConfig
from .contracts import PlanAssemblyInput, PlanAssemblyOutput

logger = logging.getLogger(__name__)


def assemble_plan_record(
    project_info: dict[str, str],
    metrics: PlanMetrics,
    attribute_names: dict[str, str],
) -> PlanRecord:
    """Compose a PlanRecord from project attributes and metrics.

    Raises:
        ExtractionError: project attributes are empty or lack a plan name.
    """
    if not project_info:
        raise ExtractionError("Unable to extract plan data from the model: no project attributes")

    attrs = {
        field: (project_info.get(attr_name) or "").strip()
        for field, attr_name in attribute_names.items()
    }
    if not attrs.get("plan_name"):
        raise ExtractionError(
            "Unable to extract plan data from the model: plan name is empty",
            details={"attribute": attribute_names.get("plan_name")},
        )

    return PlanRecord(
        **attrs,
        overall_width=metrics.overall_width,
        overall_depth=metrics.overall_depth,
        stories=metrics.stories,
        bedrooms=metrics.bedrooms,
        bathrooms=metrics.bathrooms,
        garage_bays=metrics.garage_bays,
        living_area=metrics.living_area,
        total_area=metrics.total_area,
    )


class PlanAssemblyStep(BaseStep[PlanAssemblyInput, PlanAssemblyOutput, PlanAssemblyConfig]):
    name: ClassVar[str] = "plan_assembly"
    input_type: ClassVar = PlanAssemblyInput
    output_type: ClassVar = PlanAssemblyOutput
    config_type: ClassVar = PlanAssemblyConfig

    def validate_inputs(self, inputs: PlanAssemblyInput) -> bool:
        for path in (inputs.snapshot_file, inputs.metrics_file):
            if not path.exists():
                logger.error(f"Input not found: {path}")
                return False
        return True

    def run(self, inputs: PlanAssemblyInput) -> PlanAssemblyOutput:
        snapshot = load_snapshot_file(inputs.snapshot_file)
        metrics = PlanMetrics.model_validate_json(inputs.metrics_file.read_text(encoding="utf-8"))

        record = assemble_plan_record(snapshot.project_info, metrics, self.config.attribute_names)
        logger.info(
            f"Assembled plan '{record.plan_name}' (spec '{record.spec_level}', "
            f"subdivision '{record.subdivision}')"
        )

        output_dir = self.data_root / "processed"
        output_dir.mkdir(parents=True, exist_ok=True)
        record_path = output_dir / "plan_record.json"
        record_path.write_text(record.model_dump_json(indent=2), encoding="utf-8")

        return PlanAssemblyOutput(
            record_file=record_path,
            plan_name=record.plan_name,
            spec_level=record.spec_level,
            subdivision=record.subdivision,
        )
