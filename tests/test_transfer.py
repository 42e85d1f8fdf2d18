"""Tests for JSON export and import.

**Feature: trade-tracker**
"""

import json
from pathlib import Path

import pytest
from hypothesis import given, settings

from tradetracker.db.store import DataStore
from tradetracker.exceptions import InvalidSnapshotError
from tradetracker.models import Cashflow, DayEntry, Settings, TrackerData, WithdrawalSettings
from tradetracker.transfer import dumps_snapshot, export_snapshot, import_snapshot, loads_snapshot

from tests.test_db_store import snapshot_strategy

SAMPLE = TrackerData(
    settings=Settings(starting_capital=10000, daily_target_pct=1, start_date="2024-01-01", target_goal=20000),
    days=[
        DayEntry(id="day_1", date="2024-01-01", actual_close=10200),
        DayEntry(id="day_2", date="2024-01-02", no_trade=True),
        DayEntry(id="day_3", date="2024-01-03"),
    ],
    cashflows=[Cashflow(id="cashflow_1", date="2024-01-02", amount=250, type="deposit", note="bonus")],
    withdrawal=WithdrawalSettings(rule="profit_hwm", rate=50, buffer=500),
)


class TestRoundTrip:
    """
    **Feature: trade-tracker, Property 11: Export/Import Round Trip**

    *For any* snapshot, exporting then importing yields an identical snapshot.
    """

    @given(data=snapshot_strategy())
    @settings(max_examples=50)
    def test_dumps_loads_round_trip(self, data: TrackerData):
        assert loads_snapshot(dumps_snapshot(data)) == data

    def test_file_round_trip_through_store(self, tmp_path: Path):
        path = export_snapshot(SAMPLE, tmp_path / "backup.json")
        store = DataStore(tmp_path / "tracker.db")

        imported = import_snapshot(path, store)

        assert imported == SAMPLE
        assert store.load_snapshot() == SAMPLE

    def test_document_uses_camel_case_keys(self):
        document = json.loads(dumps_snapshot(SAMPLE))

        assert document["settings"]["startingCapital"] == 10000
        assert document["settings"]["dailyTargetPct"] == 1
        assert document["days"][0]["actualClose"] == 10200
        assert document["days"][1]["noTrade"] is True
        assert document["withdrawal"] == {"rule": "profit_hwm", "rate": 50, "buffer": 500}


class TestLenientImport:
    """Missing optional parts default instead of failing."""

    def test_missing_collections_default_to_empty(self):
        data = loads_snapshot('{"settings": {"startingCapital": 5000, "dailyTargetPct": 2}}')

        assert data.settings.starting_capital == 5000
        assert data.settings.start_date == ""
        assert data.days == []
        assert data.cashflows == []
        assert data.withdrawal == WithdrawalSettings()

    def test_null_collections_default_to_empty(self):
        data = loads_snapshot('{"settings": null, "days": null, "cashflows": null}')
        assert data == TrackerData.empty()

    def test_original_document_without_withdrawal(self):
        text = json.dumps({
            "settings": {
                "startingCapital": 10000,
                "dailyTargetPct": 1,
                "startDate": "2024-01-01",
                "targetGoal": 15000,
            },
            "days": [{"id": "day_1", "date": "2024-01-01", "actualClose": None, "noTrade": False}],
            "cashflows": [{"id": "cashflow_1", "date": "2024-01-01", "amount": 100, "type": "withdrawal"}],
        })
        data = loads_snapshot(text)

        assert data.days[0].actual_close is None
        assert data.cashflows[0].note is None
        assert data.withdrawal.rule == "profit_start"


class TestRejectedImport:
    """Invalid documents are rejected and leave the store untouched."""

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[1, 2, 3]",
            '{"settings": null, "days": [{"date": "2024-01-01"}]}',
            '{"settings": null, "cashflows": [{"id": "c", "date": "2024-01-01", "amount": 5, "type": "gift"}]}',
            '{"settings": {"startingCapital": -1, "dailyTargetPct": 1}}',
            '{"settings": null, "days": "lots"}',
            '{"name": "my-app", "version": "1.0.0"}',
            '{"days": []}',
            '{"settings": null, "extra": 1}',
            '{"settings": {"startingCapital": NaN, "dailyTargetPct": 1}}',
            '{"settings": {"startingCapital": 1000, "dailyTargetPct": Infinity}}',
            '{"settings": null, "days": [{"id": "d1", "actualClose": NaN}]}',
            '{"settings": null, "cashflows": [{"id": "c", "date": "2024-01-01", "amount": Infinity, "type": "deposit"}]}',
            '{"settings": null, "withdrawal": {"rule": "profit_start", "rate": NaN}}',
        ],
    )
    def test_invalid_documents_raise(self, text: str):
        with pytest.raises(InvalidSnapshotError):
            loads_snapshot(text)

    def test_rejected_import_keeps_existing_state(self, tmp_path: Path):
        store = DataStore(tmp_path / "tracker.db")
        store.save_snapshot(SAMPLE)
        bad = tmp_path / "bad.json"
        bad.write_text("{ broken", encoding="utf-8")

        with pytest.raises(InvalidSnapshotError) as exc_info:
            import_snapshot(bad, store)

        assert exc_info.value.source == str(bad)
        assert store.load_snapshot() == SAMPLE

    @pytest.mark.parametrize(
        "text",
        [
            '{"name": "my-app", "version": "1.0.0"}',
            '{"settings": {"startingCapital": 1000, "dailyTargetPct": 1},'
            ' "days": [{"id": "d1", "date": "2024-01-01", "actualClose": NaN, "noTrade": false}]}',
        ],
    )
    def test_non_tracker_document_keeps_existing_state(self, tmp_path: Path, text: str):
        store = DataStore(tmp_path / "tracker.db")
        store.save_snapshot(SAMPLE)
        other = tmp_path / "other.json"
        other.write_text(text, encoding="utf-8")

        with pytest.raises(InvalidSnapshotError):
            import_snapshot(other, store)

        assert store.load_snapshot() == SAMPLE
