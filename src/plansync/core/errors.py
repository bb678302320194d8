"""Error types for the plansync pipeline.

Fatal conditions raise one of these and unwind to the caller. Extraction
shortfalls (missing schedule, blank cells, no walls) never raise; they
resolve to zero or default values instead.
"""

from __future__ import annotations

from typing import Any, Optional


class PlanSyncError(Exception):
    """Base exception for all plansync failures."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class PreconditionError(PlanSyncError):
    """Configuration or precondition failure, raised before any extraction.

    Examples:
    - Model file not found or of an unsupported format
    - Airtable token missing from the environment
    """


class ExtractionError(PlanSyncError):
    """Plan data could not be assembled from the model (unusable project attributes)."""


class SyncError(PlanSyncError):
    """Non-success response or transport failure from the remote store."""
