"""Find-or-create/update of a PlanRecord keyed on its identity triple.

The lookup always completes before the write is issued. Airtable has no
compare-and-swap, so two writers racing on the same key between lookup
and create can still produce a duplicate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from plansync.core.contracts import PlanRecord
from ._airtable_client import AirtableClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    record_id: str
    action: Literal["created", "updated"]


def upsert_plan_record(client: AirtableClient, record: PlanRecord) -> SyncResult:
    """Update the remote record matching the identity key, or create one."""
    existing_id = client.find_record_id(*record.identity_key)
    fields = record.to_fields()

    if existing_id is not None:
        logger.info(f"Plan '{record.plan_name}' exists as {existing_id}; updating")
        record_id = client.update_record(existing_id, fields)
        return SyncResult(record_id=record_id, action="updated")

    logger.info(f"Plan '{record.plan_name}' not found; creating")
    record_id = client.create_record(fields)
    return SyncResult(record_id=record_id, action="created")
