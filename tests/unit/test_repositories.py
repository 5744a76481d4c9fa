"""Tests for the SQL store: result extraction and failure translation."""

import asyncio
from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from tests.factories import NOW
from transfer_risk.db.repositories import AlertRepository, RiskDataRepository
from transfer_risk.domains.alerts import build_alert
from transfer_risk.domains.exceptions import DuplicateAlertError, StoreUnavailableError
from transfer_risk.domains.models import AlertSeverity, AlertType, TransferStatus


def _mock_session(scalar_value=0, row=None):
    session = AsyncMock()
    session.add = MagicMock()
    mock_result = MagicMock()
    mock_result.scalar_one.return_value = scalar_value
    mock_result.one_or_none.return_value = row
    mock_result.scalars.return_value = MagicMock(all=MagicMock(return_value=[]))
    session.execute.return_value = mock_result
    return session


def _session_factory(session):
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


def _alert(idempotency_key=None, **kwargs):
    defaults = {
        "alert_type": AlertType.AML,
        "severity": AlertSeverity.HIGH,
        "account_id": "acct-1",
        "description": "Transaction exceeds AML limits: 10000.01 USD",
        "metadata": {"rolling_total": Decimal("10000.01")},
        "created_at": NOW,
    }
    defaults.update(kwargs)
    return build_alert(**defaults).model_copy(update={"idempotency_key": idempotency_key})


class TestRiskDataRepository:
    @pytest.mark.asyncio
    async def test_count_transfers(self):
        repo = RiskDataRepository(_session_factory(_mock_session(scalar_value=4)))
        count = await repo.count_transfers(
            from_account_id="acct-1",
            since=NOW - timedelta(hours=1),
            statuses=(TransferStatus.COMPLETED,),
        )
        assert count == 4

    @pytest.mark.asyncio
    async def test_sum_is_decimal(self):
        repo = RiskDataRepository(_session_factory(_mock_session(scalar_value=Decimal("9999.99"))))
        total = await repo.sum_transfer_amounts(from_account_id="acct-1", currency="USD")
        assert total == Decimal("9999.99")

    @pytest.mark.asyncio
    async def test_average_without_history_is_none(self):
        repo = RiskDataRepository(_session_factory(_mock_session(scalar_value=None)))
        assert await repo.average_transfer_amount(from_account_id="acct-1") is None

    @pytest.mark.asyncio
    async def test_get_account_joins_owner_country(self):
        created = NOW - timedelta(days=3)
        repo = RiskDataRepository(
            _session_factory(_mock_session(row=("acct-1", "user-1", created, "KP")))
        )
        account = await repo.get_account("acct-1")
        assert account.user_id == "user-1"
        assert account.country == "KP"
        assert account.created_at == created

    @pytest.mark.asyncio
    async def test_get_account_missing(self):
        repo = RiskDataRepository(_session_factory(_mock_session(row=None)))
        assert await repo.get_account("nope") is None

    @pytest.mark.asyncio
    async def test_get_user(self):
        repo = RiskDataRepository(_session_factory(_mock_session(row=("user-1", "pending", ""))))
        user = await repo.get_user("user-1")
        assert user.kyc_status == "pending"
        assert user.country is None

    @pytest.mark.asyncio
    async def test_timeout_is_store_unavailable(self):
        session = _mock_session()

        async def _slow(*args, **kwargs):
            await asyncio.sleep(1)

        session.execute.side_effect = _slow
        repo = RiskDataRepository(_session_factory(session), timeout_seconds=0.01)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repo.count_transfers(from_account_id="acct-1")
        assert exc_info.value.operation == "count_transfers"

    @pytest.mark.asyncio
    async def test_driver_error_is_store_unavailable(self):
        session = _mock_session()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("gone"))
        repo = RiskDataRepository(_session_factory(session))

        with pytest.raises(StoreUnavailableError):
            await repo.list_transfers(from_account_id="acct-1")

    @pytest.mark.asyncio
    async def test_connection_error_is_store_unavailable(self):
        session = _mock_session()
        session.execute.side_effect = ConnectionRefusedError("refused")
        repo = RiskDataRepository(_session_factory(session))

        with pytest.raises(StoreUnavailableError):
            await repo.get_user("user-1")

    @pytest.mark.asyncio
    async def test_programming_errors_propagate(self):
        session = _mock_session()
        session.execute.side_effect = RuntimeError("bug")
        repo = RiskDataRepository(_session_factory(session))

        with pytest.raises(RuntimeError):
            await repo.count_alerts(account_id="acct-1", status="PENDING")


class TestAlertRepository:
    @pytest.mark.asyncio
    async def test_create_returns_id_and_serializes_metadata(self):
        session = _mock_session()
        repo = AlertRepository(_session_factory(session))

        alert_id = await repo.create(_alert())

        assert alert_id
        row = session.add.call_args[0][0]
        assert row.alert_id == alert_id
        assert row.alert_metadata == {"rolling_total": "10000.01"}
        assert row.status == "PENDING"
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_key_raises_duplicate(self):
        session = _mock_session()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))
        repo = AlertRepository(_session_factory(session))

        with pytest.raises(DuplicateAlertError):
            await repo.create(_alert(idempotency_key="acct-1:AML:1"))
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_integrity_error_without_key_propagates(self):
        session = _mock_session()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("fk"))
        repo = AlertRepository(_session_factory(session))

        with pytest.raises(IntegrityError):
            await repo.create(_alert())
