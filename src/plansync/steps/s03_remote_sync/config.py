"""Configuration for Step 03: Remote sync to Airtable."""

from typing import Optional

from pydantic import BaseModel, Field


class RemoteSyncConfig(BaseModel):
    api_url: str = Field("https://api.airtable.com/v0", description="Airtable REST API root")
    base_id: str = Field("", description="Airtable base id (app...)")
    table: str = Field("", description="Table id or name (tbl...)")
    api_key_env: str = Field(
        "AIRTABLE_API_KEY", description="Environment variable holding the bearer token"
    )
    timeout_seconds: Optional[float] = Field(
        None, gt=0, description="Per-request timeout (None = transport default)"
    )
