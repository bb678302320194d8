"""Airtable REST client for plan records.

One requests.Session is passed in and reused for every call. Each request
carries the bearer token and asks for JSON; any non-2xx response or
transport failure raises SyncError with the response text attached.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from plansync.core.errors import SyncError

logger = logging.getLogger(__name__)

# Identity key column names, in formula order
IDENTITY_COLUMNS = ("Plan Name", "Spec Level", "Client Subdivision")


def _quote_formula_value(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def build_filter_formula(plan_name: str, spec_level: str, subdivision: str) -> str:
    """AND() formula matching all three identity columns exactly."""
    conditions = [
        f"{{{column}}}={_quote_formula_value(value)}"
        for column, value in zip(IDENTITY_COLUMNS, (plan_name, spec_level, subdivision))
    ]
    return f"AND({','.join(conditions)})"


class AirtableClient:
    """Thin client over one Airtable table."""

    def __init__(
        self,
        session: requests.Session,
        *,
        api_url: str,
        base_id: str,
        table: str,
        api_key: str,
        timeout: Optional[float] = None,
    ):
        self.session = session
        self.table_url = f"{api_url.rstrip('/')}/{base_id}/{table}"
        self._api_key = api_key
        self.timeout = timeout

    def _request(self, method: str, url: str, **kwargs: Any) -> dict:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise SyncError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise SyncError(
                f"{method} {url} failed: HTTP {response.status_code}",
                details={"status": response.status_code, "body": response.text},
            )
        try:
            return response.json()
        except ValueError as e:
            raise SyncError(f"{method} {url} returned invalid JSON") from e

    def find_record_id(self, plan_name: str, spec_level: str, subdivision: str) -> Optional[str]:
        """Id of the record with this identity key, or None."""
        formula = build_filter_formula(plan_name, spec_level, subdivision)
        data = self._request(
            "GET",
            self.table_url,
            params={"filterByFormula": formula, "maxRecords": 1},
        )
        records = data.get("records") or []
        if not records:
            return None
        return records[0].get("id")

    def create_record(self, fields: dict[str, Any]) -> str:
        data = self._request("POST", self.table_url, json={"fields": fields})
        return data.get("id", "")

    def update_record(self, record_id: str, fields: dict[str, Any]) -> str:
        data = self._request("PATCH", f"{self.table_url}/{record_id}", json={"fields": fields})
        return data.get("id", record_id)
