"""Step contract shared by load_model, plan_metrics, plan_assembly and remote_sync.

A step is a typed function from an Input model to an Output model,
parameterised by a Config model. The runner reads the class-level
``input_type`` and ``config_type`` to build each step; ``run-step`` lists
the required input fields from its schema when none are given.
"""

from __future__ import annotations

import time
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar, ClassVar

from pydantic import BaseModel

from .errors import PreconditionError

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """One stage of the plan pipeline.

    ``validate_inputs`` checks preconditions only (files present, remote
    target configured) and reports problems by logging and returning False;
    ``execute`` turns that into a PreconditionError before ``run`` starts.
    ``run`` writes its artifacts under ``interim_dir`` (or
    ``data_root/processed`` for the final record) and returns their paths.
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT, data_root: Path):
        self.config = config
        self.data_root = Path(data_root)

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """validate_inputs, then run, logging the elapsed time."""
        step_name = self.name or self.__class__.__name__
        logger.info(f"[{step_name}] Checking preconditions")

        if not self.validate_inputs(inputs):
            raise PreconditionError(f"[{step_name}] Input validation failed")

        t0 = time.perf_counter()
        result = self.run(inputs)
        logger.info(f"[{step_name}] Done in {time.perf_counter() - t0:.2f}s")
        return result

    @property
    def interim_dir(self) -> Path:
        return self.data_root / "interim" / (self.name or self.__class__.__name__)

    @classmethod
    def get_input_schema(cls) -> dict:
        return cls.input_type.model_json_schema()
