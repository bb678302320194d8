"""plansync core: pipeline runner, base step, shared contracts."""

from .step_base import BaseStep
from .contracts import (
    LevelMarker,
    LinearExtent,
    ModelSnapshot,
    PipelineConfig,
    PlanMetrics,
    PlanRecord,
    ScheduleTable,
    SpatialZone,
    StepEntry,
)
from .errors import ExtractionError, PlanSyncError, PreconditionError, SyncError
from .pipeline_runner import run_pipeline, load_pipeline_config
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "LevelMarker",
    "LinearExtent",
    "ModelSnapshot",
    "PipelineConfig",
    "PlanMetrics",
    "PlanRecord",
    "ScheduleTable",
    "SpatialZone",
    "StepEntry",
    "ExtractionError",
    "PlanSyncError",
    "PreconditionError",
    "SyncError",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
