"""Shared pytest fixtures for plansync pipeline tests."""

import json
from pathlib import Path

import pytest


SAMPLE_SCHEDULE_ROWS = [
    ["Living", "", ""],
    ["First Floor", "", "1200 SF"],
    ["Second Floor", "", "600 SF"],
    ["", "", "1800 SF"],
    ["Garage", "", "450 SF"],
    ["Porch", "", "150 SF"],
    ["Total Covered", "", "2400 SF"],
]


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a temporary data root with standard directory structure."""
    for subdir in ["raw", "interim", "processed"]:
        (tmp_path / subdir).mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture
def sample_snapshot_dict() -> dict:
    """Host-exported model snapshot: 40' x 32'-6" footprint, two stories."""
    return {
        "project_info": {
            "Project Name": "Plan A",
            "Spec Level": "Elite",
            "Client Name": "Acme Homes",
            "Client Division": "Central",
            "Client Subdivision": "North",
            "Garage Loading": "Front",
        },
        "walls": [
            {"min_xyz": [0.0, 0.0, 0.0], "max_xyz": [40.0, 0.5, 9.0]},
            {"min_xyz": [0.0, 0.0, 0.0], "max_xyz": [0.5, 32.5, 9.0]},
            {"min_xyz": [39.5, 0.0, 9.0], "max_xyz": [40.0, 32.5, 18.0]},
        ],
        "levels": [
            {"name": "Foundation"},
            {"name": "Level 1"},
            {"name": "Level 2"},
            {"name": "Top of Plate"},
            {"name": "Roof"},
        ],
        "rooms": [
            {"name": "Bedroom 1", "area": 180.0},
            {"name": "Bedroom 2", "area": 140.0},
            {"name": "Bedroom 3", "area": 0.0},
            {"name": "Full Bath", "area": 60.0},
            {"name": "Powder Room Bath", "area": 25.0},
            {"name": "Garage - Two Car", "area": 450.0},
            {"name": "Kitchen", "area": 220.0},
        ],
        "schedules": {"Floor Area Schedule": SAMPLE_SCHEDULE_ROWS},
    }


@pytest.fixture
def sample_snapshot_json(data_root: Path, sample_snapshot_dict: dict) -> Path:
    """Write the sample snapshot to raw/model_snapshot.json."""
    path = data_root / "raw" / "model_snapshot.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_snapshot_dict, f)
    return path


@pytest.fixture
def sample_schedule_csv(data_root: Path) -> Path:
    """Area schedule exported as CSV."""
    path = data_root / "raw" / "floor_area_schedule.csv"
    lines = [",".join(row) for row in SAMPLE_SCHEDULE_ROWS]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_project_info_yaml(data_root: Path) -> Path:
    """Project attribute overrides, as entered on the input form."""
    path = data_root / "raw" / "project_info.yaml"
    path.write_text(
        "Spec Level: Premier\nClient Subdivision: South\n", encoding="utf-8"
    )
    return path


# ---------------------------------------------------------------------------
# In-memory Airtable
# ---------------------------------------------------------------------------

TEST_API_URL = "https://api.airtable.com/v0"
TEST_BASE_ID = "appTEST0000000000"
TEST_TABLE = "tblTEST0000000000"


def _json_response(status: int, payload: dict, url: str):
    import requests

    resp = requests.Response()
    resp.status_code = status
    resp._content = json.dumps(payload).encode("utf-8")
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = "application/json"
    resp.url = url
    return resp


class FakeAirtableSession:
    """Stands in for requests.Session against one Airtable table.

    Records every call; GET evaluates the filter formula against stored rows.
    Set ``fail_on[method] = status`` to make a method return an error.
    """

    def __init__(self):
        self.table_url = f"{TEST_API_URL}/{TEST_BASE_ID}/{TEST_TABLE}"
        self.records: dict[str, dict] = {}
        self.calls: list[dict] = []
        self.fail_on: dict[str, int] = {}
        self._next_id = 1
        self.closed = False

    def request(self, method, url, headers=None, params=None, json=None, timeout=None):
        from plansync.steps.s03_remote_sync._airtable_client import build_filter_formula

        self.calls.append({
            "method": method, "url": url, "headers": dict(headers or {}),
            "params": params, "json": json, "timeout": timeout,
        })
        if method in self.fail_on:
            return _json_response(self.fail_on[method], {"error": {"type": "INVALID_REQUEST"}}, url)

        if method == "GET":
            formula = params["filterByFormula"]
            matches = [
                {"id": rid, "fields": fields}
                for rid, fields in self.records.items()
                if build_filter_formula(
                    fields["Plan Name"], fields["Spec Level"], fields["Client Subdivision"]
                ) == formula
            ]
            return _json_response(200, {"records": matches[: params.get("maxRecords", 100)]}, url)

        if method == "POST":
            rid = f"rec{self._next_id:014d}"
            self._next_id += 1
            self.records[rid] = dict(json["fields"])
            return _json_response(200, {"id": rid, "fields": self.records[rid]}, url)

        if method == "PATCH":
            rid = url.rsplit("/", 1)[1]
            if rid not in self.records:
                return _json_response(404, {"error": "NOT_FOUND"}, url)
            self.records[rid].update(json["fields"])
            return _json_response(200, {"id": rid, "fields": self.records[rid]}, url)

        return _json_response(405, {"error": "METHOD_NOT_ALLOWED"}, url)

    def count(self, method: str) -> int:
        return sum(1 for c in self.calls if c["method"] == method)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


@pytest.fixture
def fake_airtable() -> FakeAirtableSession:
    return FakeAirtableSession()
