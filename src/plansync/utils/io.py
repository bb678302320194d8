"""I/O utilities: model snapshot JSON, schedule CSV exports, project-info YAML."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from plansync.core.contracts import ModelSnapshot, ScheduleTable
from plansync.core.errors import PreconditionError

logger = logging.getLogger(__name__)


# ── Model snapshot JSON ──────────────────────────────────────────────

def read_model_snapshot(path: Path) -> ModelSnapshot:
    """Read a model snapshot JSON exported from the host application.

    Expected layout::

        {
          "project_info": {"Project Name": "...", ...},
          "walls":  [{"min_xyz": [x, y, z], "max_xyz": [x, y, z]}, ...],
          "levels": [{"name": "Level 1"}, ...],
          "rooms":  [{"name": "Bedroom 1", "area": 140.0}, ...],
          "schedules": {"Floor Area Schedule": [["Living", ""], ["", "1800 SF"]]}
        }

    Schedules may be given either as a bare list of rows or as a
    ``{"name": ..., "rows": [...]}`` object.
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)

    try:
        schedules = {}
        for name, table in (raw.get("schedules") or {}).items():
            if isinstance(table, dict):
                schedules[name] = ScheduleTable(name=table.get("name") or name, rows=table.get("rows", []))
            else:
                schedules[name] = ScheduleTable(name=name, rows=table)

        project_info = {
            str(k): "" if v is None else str(v)
            for k, v in (raw.get("project_info") or {}).items()
        }

        return ModelSnapshot(
            source=str(path),
            project_info=project_info,
            walls=raw.get("walls") or [],
            levels=raw.get("levels") or [],
            rooms=raw.get("rooms") or [],
            schedules=schedules,
        )
    except ValidationError as e:
        raise PreconditionError(
            f"Invalid model snapshot: {path}", {"errors": e.errors(include_url=False)}
        ) from e


def write_model_snapshot(snapshot: ModelSnapshot, path: Path) -> Path:
    """Persist a normalized snapshot for downstream steps."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
    return path


def load_snapshot_file(path: Path) -> ModelSnapshot:
    """Load a snapshot previously written by write_model_snapshot."""
    return ModelSnapshot.model_validate_json(path.read_text(encoding="utf-8"))


# ── Schedule CSV ─────────────────────────────────────────────────────

def read_schedule_csv(path: Path, name: str = "") -> ScheduleTable:
    """Read a schedule exported as delimited text into a ScheduleTable.

    Comma and tab delimiters are both accepted. Blank lines are dropped.
    """
    lines = path.read_text(encoding="utf-8-sig").splitlines()
    delimiter = "\t" if lines and "\t" in lines[0] else ","
    rows = [row for row in csv.reader(lines, delimiter=delimiter) if any(c.strip() for c in row)]
    logger.info(f"Read schedule '{name or path.stem}': {len(rows)} rows from {path.name}")
    return ScheduleTable(name=name or path.stem, rows=rows)


# ── Project info overrides ───────────────────────────────────────────

def read_project_info_file(path: Path) -> dict[str, str]:
    """Read project attribute values (attribute name -> value) from YAML."""
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise PreconditionError(f"Project info file must be a mapping: {path}")
    return {str(k): "" if v is None else str(v) for k, v in raw.items()}
