"""Unit tests for the compliance alert pipeline."""

import asyncio
from datetime import timedelta

import pytest

from tests.factories import NOW, make_sink
from transfer_risk.domains.alerts import AlertRecorder, build_alert, idempotency_key
from transfer_risk.domains.exceptions import DuplicateAlertError, StoreUnavailableError
from transfer_risk.domains.models import AlertSeverity, AlertStatus, AlertType


def _make_alert(**kwargs):
    defaults = {
        "alert_type": AlertType.AML,
        "severity": AlertSeverity.MEDIUM,
        "account_id": "acct-1",
        "description": "Suspicious transaction pattern detected (possible structuring)",
        "created_at": NOW,
    }
    defaults.update(kwargs)
    return build_alert(**defaults)


class TestBuildAlert:
    def test_defaults(self):
        alert = _make_alert()
        assert alert.status == AlertStatus.PENDING
        assert alert.alert_id is None
        assert alert.metadata == {}
        assert alert.idempotency_key is None


class TestIdempotencyKey:
    def test_same_bucket_same_key(self):
        a = idempotency_key("acct-1", AlertType.AML, NOW, 3600)
        b = idempotency_key("acct-1", AlertType.AML, NOW + timedelta(seconds=10), 3600)
        assert a == b
        assert a.startswith("acct-1:AML:")

    def test_type_and_account_distinguish(self):
        base = idempotency_key("acct-1", AlertType.AML, NOW, 3600)
        assert base != idempotency_key("acct-1", AlertType.SANCTIONS, NOW, 3600)
        assert base != idempotency_key("acct-2", AlertType.AML, NOW, 3600)

    def test_next_bucket_differs(self):
        a = idempotency_key("acct-1", AlertType.AML, NOW, 60)
        b = idempotency_key("acct-1", AlertType.AML, NOW + timedelta(seconds=60), 60)
        assert a != b


class TestAlertRecorder:
    @pytest.mark.asyncio
    async def test_stalled_sink_times_out(self):
        sink = make_sink()

        async def _hang(alert):
            await asyncio.sleep(3600)

        sink.create.side_effect = _hang
        recorder = AlertRecorder(sink, timeout_seconds=0.01)

        alert = await asyncio.wait_for(recorder.record(_make_alert()), timeout=1)

        assert alert.alert_id is None

    @pytest.mark.asyncio
    async def test_records_and_returns_id(self):
        sink = make_sink("alert-42")
        recorder = AlertRecorder(sink)

        alert = await recorder.record(_make_alert())

        assert alert.alert_id == "alert-42"
        sink.create.assert_awaited_once()
        assert sink.create.call_args[0][0].idempotency_key is None

    @pytest.mark.asyncio
    async def test_sink_failure_is_swallowed(self):
        sink = make_sink()
        sink.create.side_effect = StoreUnavailableError("create_alert", "down")
        recorder = AlertRecorder(sink)

        alert = await recorder.record(_make_alert())

        assert alert.alert_id is None
        assert alert.description.startswith("Suspicious transaction pattern")

    @pytest.mark.asyncio
    async def test_unexpected_sink_error_is_swallowed(self):
        sink = make_sink()
        sink.create.side_effect = RuntimeError("boom")

        alert = await AlertRecorder(sink).record(_make_alert())

        assert alert.alert_id is None

    @pytest.mark.asyncio
    async def test_dedup_window_sets_key(self):
        sink = make_sink()
        recorder = AlertRecorder(sink, dedup_window_seconds=3600)

        alert = await recorder.record(_make_alert())

        expected = idempotency_key("acct-1", AlertType.AML, NOW, 3600)
        assert alert.idempotency_key == expected
        assert sink.create.call_args[0][0].idempotency_key == expected

    @pytest.mark.asyncio
    async def test_duplicate_is_skipped(self):
        sink = make_sink()
        sink.create.side_effect = DuplicateAlertError("acct-1:AML:1")
        recorder = AlertRecorder(sink, dedup_window_seconds=3600)

        alert = await recorder.record(_make_alert())

        assert alert.alert_id is None
        assert alert.idempotency_key is not None
