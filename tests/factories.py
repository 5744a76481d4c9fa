"""Builders for requests, accounts and store doubles used across the tests."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

from transfer_risk.db.repositories import AlertRepository, RiskDataRepository
from transfer_risk.domains.models import (
    Account,
    TransferRecord,
    TransferRequest,
    TransferStatus,
    User,
)

NOW = datetime(2026, 1, 15, 14, 0, 0, tzinfo=UTC)


def make_request(**kwargs) -> TransferRequest:
    defaults = {
        "from_account_id": "acct-sender",
        "to_account_id": "acct-recipient",
        "amount": Decimal("100.00"),
        "currency": "USD",
        "initiated_at": NOW,
    }
    defaults.update(kwargs)
    return TransferRequest(**defaults)


def make_account(account_id: str, age_days: float = 365, country: str | None = "US", **kwargs):
    defaults = {
        "id": account_id,
        "user_id": f"user-{account_id}",
        "created_at": NOW - timedelta(days=age_days),
        "country": country,
    }
    defaults.update(kwargs)
    return Account(**defaults)


def make_user(user_id: str = "user-1", kyc_status: str = "verified", country: str = "US") -> User:
    return User(id=user_id, kyc_status=kyc_status, country=country)


def make_transfer(transfer_id: str, created_at: datetime, **kwargs) -> TransferRecord:
    defaults = {
        "id": transfer_id,
        "from_account_id": "acct-sender",
        "to_account_id": "acct-recipient",
        "amount": Decimal("100.00"),
        "currency": "USD",
        "status": TransferStatus.COMPLETED,
        "created_at": created_at,
    }
    defaults.update(kwargs)
    return TransferRecord(**defaults)


def make_store(accounts: dict | None = None, users: dict | None = None) -> AsyncMock:
    """A read store with quiet history: no transfers, no alerts.

    Unknown account ids resolve to a year-old US account owned by a verified
    user unless ``accounts``/``users`` say otherwise. Map an id to None to
    make it unknown.
    """
    accounts = accounts or {}
    users = users or {}

    async def get_account(account_id):
        if account_id in accounts:
            return accounts[account_id]
        return make_account(account_id)

    async def get_user(user_id):
        if user_id in users:
            return users[user_id]
        return make_user(user_id)

    store = AsyncMock(spec=RiskDataRepository)
    store.count_transfers.return_value = 0
    store.sum_transfer_amounts.return_value = Decimal("0")
    store.average_transfer_amount.return_value = None
    store.list_transfers.return_value = []
    store.count_alerts.return_value = 0
    store.get_account.side_effect = get_account
    store.get_user.side_effect = get_user
    return store


def make_sink(alert_id: str = "alert-1") -> AsyncMock:
    sink = AsyncMock(spec=AlertRepository)
    sink.create.return_value = alert_id
    return sink


def store_with_country(account_id: str, country: str) -> AsyncMock:
    """Quiet store where ``account_id`` belongs to a user in ``country``."""
    return make_store(accounts={account_id: make_account(account_id, country=country)})
