"""Tests for S03: Remote sync (Airtable find-then-update-or-create)."""

from pathlib import Path
from unittest.mock import Mock

import pytest
import requests

from plansync.core.contracts import PlanRecord
from plansync.core.errors import PreconditionError, SyncError
from plansync.steps.s03_remote_sync._airtable_client import AirtableClient, build_filter_formula
from plansync.steps.s03_remote_sync._upsert import SyncResult, upsert_plan_record
from plansync.steps.s03_remote_sync.config import RemoteSyncConfig
from plansync.steps.s03_remote_sync.contracts import RemoteSyncInput
from plansync.steps.s03_remote_sync.step import RemoteSyncStep

TEST_API_URL = "https://api.airtable.com/v0"
TEST_BASE_ID = "appTEST0000000000"
TEST_TABLE = "tblTEST0000000000"


def _record(**overrides) -> PlanRecord:
    data = dict(
        plan_name="Plan A", spec_level="Elite", subdivision="North",
        client="Acme Homes", division="Central", garage_loading="Front",
        overall_width="40'-0\"", overall_depth="32'-6\"",
        stories=2, bedrooms=3, bathrooms=2.5, garage_bays=2,
        living_area=1800, total_area=2400,
    )
    data.update(overrides)
    return PlanRecord(**data)


def _client(session) -> AirtableClient:
    return AirtableClient(
        session, api_url=TEST_API_URL, base_id=TEST_BASE_ID, table=TEST_TABLE, api_key="patTEST",
    )


# ── Filter formula ──


class TestFilterFormula:
    def test_formula(self):
        assert build_filter_formula("Plan A", "Elite", "North") == (
            'AND({Plan Name}="Plan A",{Spec Level}="Elite",{Client Subdivision}="North")'
        )

    def test_quotes_escaped(self):
        formula = build_filter_formula('The "Aspen"', "Elite", "North")
        assert '{Plan Name}="The \\"Aspen\\""' in formula


# ── Client ──


class TestAirtableClient:
    def test_table_url(self, fake_airtable):
        client = AirtableClient(
            fake_airtable, api_url=TEST_API_URL + "/", base_id="appX", table="tblY", api_key="k",
        )
        assert client.table_url == f"{TEST_API_URL}/appX/tblY"

    def test_lookup_request_shape(self, fake_airtable):
        assert _client(fake_airtable).find_record_id("Plan A", "Elite", "North") is None

        call = fake_airtable.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == fake_airtable.table_url
        assert call["params"] == {
            "filterByFormula": build_filter_formula("Plan A", "Elite", "North"),
            "maxRecords": 1,
        }
        assert call["headers"]["Authorization"] == "Bearer patTEST"
        assert call["headers"]["Accept"] == "application/json"

    def test_lookup_finds_existing(self, fake_airtable):
        fake_airtable.records["recEXISTING"] = _record().to_fields()
        assert _client(fake_airtable).find_record_id("Plan A", "Elite", "North") == "recEXISTING"

    def test_lookup_needs_all_three_keys(self, fake_airtable):
        fake_airtable.records["recEXISTING"] = _record().to_fields()
        assert _client(fake_airtable).find_record_id("Plan A", "Elite", "South") is None

    def test_create_and_update_payloads(self, fake_airtable):
        client = _client(fake_airtable)
        fields = _record().to_fields()
        rid = client.create_record(fields)
        assert fake_airtable.calls[-1]["json"] == {"fields": fields}

        assert client.update_record(rid, dict(fields, Bedrooms=4)) == rid
        call = fake_airtable.calls[-1]
        assert call["method"] == "PATCH"
        assert call["url"] == f"{fake_airtable.table_url}/{rid}"
        assert fake_airtable.records[rid]["Bedrooms"] == 4

    @pytest.mark.parametrize("method", ["GET", "POST", "PATCH"])
    def test_non_success_raises(self, fake_airtable, method):
        fake_airtable.fail_on[method] = 422
        client = _client(fake_airtable)
        with pytest.raises(SyncError) as exc_info:
            if method == "GET":
                client.find_record_id("Plan A", "Elite", "North")
            elif method == "POST":
                client.create_record({})
            else:
                client.update_record("recX", {})
        assert exc_info.value.details["status"] == 422
        assert "INVALID_REQUEST" in exc_info.value.details["body"]

    def test_transport_failure_raises(self):
        session = Mock()
        session.request.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(SyncError, match="connection refused"):
            _client(session).find_record_id("Plan A", "Elite", "North")

    def test_timeout_forwarded(self, fake_airtable):
        client = AirtableClient(
            fake_airtable, api_url=TEST_API_URL, base_id=TEST_BASE_ID, table=TEST_TABLE,
            api_key="k", timeout=12.5,
        )
        client.find_record_id("a", "b", "c")
        assert fake_airtable.calls[0]["timeout"] == 12.5


# ── Upsert ──


class TestUpsert:
    def test_new_record_creates(self, fake_airtable):
        result = upsert_plan_record(_client(fake_airtable), _record())

        assert result.action == "created"
        assert [c["method"] for c in fake_airtable.calls] == ["GET", "POST"]
        assert fake_airtable.records[result.record_id]["Plan Name"] == "Plan A"

    def test_existing_record_updates(self, fake_airtable):
        fake_airtable.records["recEXISTING"] = _record(bedrooms=2).to_fields()
        result = upsert_plan_record(_client(fake_airtable), _record(bedrooms=4))

        assert result == SyncResult(record_id="recEXISTING", action="updated")
        assert [c["method"] for c in fake_airtable.calls] == ["GET", "PATCH"]
        assert fake_airtable.records["recEXISTING"]["Bedrooms"] == 4

    def test_idempotent(self, fake_airtable):
        client = _client(fake_airtable)
        first = upsert_plan_record(client, _record())
        second = upsert_plan_record(client, _record(total_area=2500))

        assert len(fake_airtable.records) == 1
        assert second.record_id == first.record_id
        assert second.action == "updated"
        assert fake_airtable.count("POST") == 1
        assert fake_airtable.count("PATCH") == 1

    def test_different_spec_level_is_new_record(self, fake_airtable):
        client = _client(fake_airtable)
        upsert_plan_record(client, _record())
        upsert_plan_record(client, _record(spec_level="Premier"))
        assert len(fake_airtable.records) == 2

    def test_lookup_failure_stops_before_write(self, fake_airtable):
        fake_airtable.fail_on["GET"] = 500
        with pytest.raises(SyncError):
            upsert_plan_record(_client(fake_airtable), _record())
        assert fake_airtable.count("POST") == 0
        assert fake_airtable.count("PATCH") == 0


# ── Step ──


class TestRemoteSyncStep:
    def _config(self) -> RemoteSyncConfig:
        return RemoteSyncConfig(
            api_url=TEST_API_URL, base_id=TEST_BASE_ID, table=TEST_TABLE, api_key_env="PLANSYNC_TEST_TOKEN",
        )

    def _record_file(self, data_root: Path) -> Path:
        path = data_root / "processed" / "plan_record.json"
        path.write_text(_record().model_dump_json())
        return path

    def test_create_then_update(self, data_root: Path, fake_airtable, monkeypatch):
        monkeypatch.setenv("PLANSYNC_TEST_TOKEN", "patTEST")
        step = RemoteSyncStep(config=self._config(), data_root=data_root, session=fake_airtable)
        inp = RemoteSyncInput(record_file=self._record_file(data_root))

        first = step.execute(inp)
        second = step.execute(inp)

        assert first.action == "created"
        assert second.action == "updated"
        assert second.record_id == first.record_id
        assert [c["method"] for c in fake_airtable.calls] == ["GET", "POST", "GET", "PATCH"]

    def test_missing_token(self, data_root: Path, fake_airtable, monkeypatch):
        monkeypatch.delenv("PLANSYNC_TEST_TOKEN", raising=False)
        step = RemoteSyncStep(config=self._config(), data_root=data_root, session=fake_airtable)
        with pytest.raises(PreconditionError, match="PLANSYNC_TEST_TOKEN"):
            step.execute(RemoteSyncInput(record_file=self._record_file(data_root)))
        assert fake_airtable.calls == []

    def test_unconfigured_table(self, data_root: Path):
        step = RemoteSyncStep(config=RemoteSyncConfig(), data_root=data_root)
        assert step.validate_inputs(RemoteSyncInput(record_file=self._record_file(data_root))) is False

    def test_owned_session_closed_after_run(self, data_root: Path, fake_airtable, monkeypatch):
        monkeypatch.setenv("PLANSYNC_TEST_TOKEN", "patTEST")
        monkeypatch.setattr(requests, "Session", lambda: fake_airtable)
        step = RemoteSyncStep(config=self._config(), data_root=data_root)

        out = step.execute(RemoteSyncInput(record_file=self._record_file(data_root)))

        assert out.action == "created"
        assert fake_airtable.closed is True
        assert step.session is None

    def test_injected_session_left_open(self, data_root: Path, fake_airtable, monkeypatch):
        monkeypatch.setenv("PLANSYNC_TEST_TOKEN", "patTEST")
        step = RemoteSyncStep(config=self._config(), data_root=data_root, session=fake_airtable)
        step.execute(RemoteSyncInput(record_file=self._record_file(data_root)))
        assert fake_airtable.closed is False

    def test_make_client_uses_given_session(self, data_root: Path, monkeypatch):
        monkeypatch.setenv("PLANSYNC_TEST_TOKEN", "patTEST")
        step = RemoteSyncStep(config=self._config(), data_root=data_root)
        with requests.Session() as session:
            client = step.make_client(session)
            assert client.session is session
