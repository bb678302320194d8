"""Step 03: Sync the PlanRecord to Airtable (find, then update or create)."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import ClassVar, Optional

import requests

from plansync.core.contracts import PlanRecord
from plansync.core.errors import PreconditionError
from plansync.core.step_base import BaseStep
from ._airtable_client import AirtableClient
from ._upsert import upsert_plan_record
from .config import RemoteSyncConfig
from .contracts import RemoteSyncInput, RemoteSyncOutput

logger = logging.getLogger(__name__)


class RemoteSyncStep(BaseStep[RemoteSyncInput, RemoteSyncOutput, RemoteSyncConfig]):
    """Upsert the assembled record into the configured Airtable table.

    The HTTP session can be injected; otherwise one is opened per run and
    closed when the upsert finishes.
    """

    name: ClassVar[str] = "remote_sync"
    input_type: ClassVar = RemoteSyncInput
    output_type: ClassVar = RemoteSyncOutput
    config_type: ClassVar = RemoteSyncConfig

    def __init__(
        self,
        config: RemoteSyncConfig,
        data_root: Path,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(config=config, data_root=data_root)
        self.session = session

    def validate_inputs(self, inputs: RemoteSyncInput) -> bool:
        if not inputs.record_file.exists():
            logger.error(f"Plan record not found: {inputs.record_file}")
            return False
        if not self.config.base_id or not self.config.table:
            logger.error("Airtable base_id and table must be configured")
            return False
        return True

    def make_client(self, session: requests.Session) -> AirtableClient:
        api_key = os.environ.get(self.config.api_key_env, "")
        if not api_key:
            raise PreconditionError(
                f"Airtable token not set: export {self.config.api_key_env}"
            )
        return AirtableClient(
            session,
            api_url=self.config.api_url,
            base_id=self.config.base_id,
            table=self.config.table,
            api_key=api_key,
            timeout=self.config.timeout_seconds,
        )

    def run(self, inputs: RemoteSyncInput) -> RemoteSyncOutput:
        record = PlanRecord.model_validate_json(inputs.record_file.read_text(encoding="utf-8"))

        if self.session is not None:
            result = upsert_plan_record(self.make_client(self.session), record)
        else:
            with requests.Session() as session:
                result = upsert_plan_record(self.make_client(session), record)
        logger.info(f"Airtable record {result.record_id} {result.action}")

        return RemoteSyncOutput(record_id=result.record_id, action=result.action)
