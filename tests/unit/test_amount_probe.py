"""Unit tests for amount signals."""

from datetime import timedelta
from decimal import Decimal

import pytest

from tests.factories import NOW, make_request, make_store
from transfer_risk.domains.exceptions import StoreUnavailableError
from transfer_risk.domains.models import TransferStatus
from transfer_risk.domains.signals import AmountDeviationProbe, RiskRule, rolling_total_with


class TestRollingTotal:
    @pytest.mark.asyncio
    async def test_adds_request_amount_to_prior_total(self):
        store = make_store()
        store.sum_transfer_amounts.return_value = Decimal("9000.00")
        statuses = (TransferStatus.PENDING, TransferStatus.COMPLETED)

        request = make_request(amount="1000.01", currency="EUR")
        total = await rolling_total_with(store, request, NOW, timedelta(hours=24), statuses)

        assert total == Decimal("10000.01")
        store.sum_transfer_amounts.assert_awaited_once_with(
            from_account_id="acct-sender",
            currency="EUR",
            statuses=statuses,
            since=NOW - timedelta(hours=24),
        )


class TestAmountDeviationProbe:
    @pytest.mark.asyncio
    async def test_deviation_from_average(self):
        store = make_store()
        store.average_transfer_amount.return_value = Decimal("200")

        result = await AmountDeviationProbe(store).evaluate(make_request(amount="5350"), NOW)

        assert result.score == 51
        assert result.triggered
        assert result.rule == RiskRule.UNUSUAL_AMOUNT

    @pytest.mark.asyncio
    async def test_average_uses_completed_in_lookback(self):
        store = make_store()

        await AmountDeviationProbe(store).evaluate(make_request(), NOW)

        store.average_transfer_amount.assert_awaited_once_with(
            from_account_id="acct-sender",
            statuses=(TransferStatus.COMPLETED,),
            since=NOW - timedelta(days=7),
        )

    @pytest.mark.asyncio
    async def test_no_history_counts_whole_amount(self):
        store = make_store()

        result = await AmountDeviationProbe(store).evaluate(make_request(amount="4999.99"), NOW)

        assert result.score == 49

    @pytest.mark.asyncio
    async def test_capped_at_one_hundred(self):
        store = make_store()

        result = await AmountDeviationProbe(store).evaluate(make_request(amount="50000"), NOW)

        assert result.score == 100

    @pytest.mark.asyncio
    async def test_below_average_deviation_counts(self):
        store = make_store()
        store.average_transfer_amount.return_value = Decimal("1000")

        result = await AmountDeviationProbe(store).evaluate(make_request(amount="100"), NOW)

        assert result.score == 9

    @pytest.mark.asyncio
    async def test_store_outage_fails_open(self):
        store = make_store()
        store.average_transfer_amount.side_effect = StoreUnavailableError("avg", "down")

        result = await AmountDeviationProbe(store).evaluate(make_request(), NOW)

        assert result.failed
        assert result.score == 0
