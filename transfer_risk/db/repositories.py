"""Data access for the risk core.

``RiskDataRepository`` is the read side (transfers, accounts, users, alert
counts). ``AlertRepository`` is the append-only alert sink. Each query runs in
its own session so concurrent probes never share one, and every query is
bounded by a timeout. Timeouts and driver/connection failures surface as
``StoreUnavailableError``; callers decide whether that fails open or closed.
"""

import asyncio
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from transfer_risk.domains.exceptions import DuplicateAlertError, StoreUnavailableError
from transfer_risk.domains.models import (
    Account,
    ComplianceAlert,
    TransferRecord,
    TransferStatus,
    User,
)
from transfer_risk.shared.money import to_decimal

from .models import AccountDB, ComplianceAlertDB, TransferDB, UserDB

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 2.0


class _SessionRunner:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._session_factory = session_factory
        self._timeout = timeout_seconds

    async def _fetch(self, operation: str, stmt, extract: Callable[[Any], Any]) -> Any:
        """Execute ``stmt`` in a fresh session and extract rows before it closes."""
        try:
            async with asyncio.timeout(self._timeout):
                async with self._session_factory() as session:
                    result = await session.execute(stmt)
                    return extract(result)
        except TimeoutError as exc:
            logger.warning("store_query_timeout", operation=operation, timeout=self._timeout)
            raise StoreUnavailableError(operation, f"timed out after {self._timeout}s") from exc
        except (OSError, SQLAlchemyError) as exc:
            logger.warning("store_query_failed", operation=operation, error=str(exc))
            raise StoreUnavailableError(operation, str(exc)) from exc


def _status_values(statuses: Iterable[TransferStatus] | None) -> list[str] | None:
    if statuses is None:
        return None
    return [TransferStatus(s).value for s in statuses]


class RiskDataRepository(_SessionRunner):
    """Read-only queries against transfers, accounts, users and alerts."""

    def _transfer_filters(
        self,
        *,
        since: datetime | None = None,
        from_account_id: str | None = None,
        to_account_id: str | None = None,
        involving_account_id: str | None = None,
        statuses: Iterable[TransferStatus] | None = None,
        currency: str | None = None,
        min_amount: Decimal | None = None,
    ) -> list:
        filters = []
        if since is not None:
            filters.append(TransferDB.created_at >= since)
        if from_account_id is not None:
            filters.append(TransferDB.from_account_id == from_account_id)
        if to_account_id is not None:
            filters.append(TransferDB.to_account_id == to_account_id)
        if involving_account_id is not None:
            filters.append(
                or_(
                    TransferDB.from_account_id == involving_account_id,
                    TransferDB.to_account_id == involving_account_id,
                )
            )
        status_values = _status_values(statuses)
        if status_values is not None:
            filters.append(TransferDB.status.in_(status_values))
        if currency is not None:
            filters.append(TransferDB.currency == currency)
        if min_amount is not None:
            filters.append(TransferDB.amount >= min_amount)
        return filters

    async def count_transfers(self, **filters) -> int:
        """Count transfers matching the keyword filters of ``_transfer_filters``."""
        stmt = select(func.count()).select_from(TransferDB).where(
            *self._transfer_filters(**filters)
        )
        return await self._fetch("count_transfers", stmt, lambda r: int(r.scalar_one()))

    async def sum_transfer_amounts(self, **filters) -> Decimal:
        stmt = select(func.coalesce(func.sum(TransferDB.amount), 0)).where(
            *self._transfer_filters(**filters)
        )
        return await self._fetch(
            "sum_transfer_amounts", stmt, lambda r: to_decimal(r.scalar_one())
        )

    async def average_transfer_amount(self, **filters) -> Decimal | None:
        """Average amount, or None when nothing matches."""
        stmt = select(func.avg(TransferDB.amount)).where(*self._transfer_filters(**filters))
        value = await self._fetch("average_transfer_amount", stmt, lambda r: r.scalar_one())
        return None if value is None else to_decimal(value)

    async def list_transfers(self, **filters) -> list[TransferRecord]:
        """Matching transfers ordered by creation time, oldest first."""
        stmt = (
            select(TransferDB)
            .where(*self._transfer_filters(**filters))
            .order_by(TransferDB.created_at.asc())
        )
        rows = await self._fetch("list_transfers", stmt, lambda r: list(r.scalars().all()))
        return [
            TransferRecord(
                id=row.id,
                from_account_id=row.from_account_id,
                to_account_id=row.to_account_id,
                amount=to_decimal(row.amount),
                currency=row.currency,
                status=TransferStatus(row.status),
                created_at=row.created_at,
            )
            for row in rows
        ]

    async def get_account(self, account_id: str) -> Account | None:
        """Account with the owning user's country, or None."""
        stmt = (
            select(AccountDB.id, AccountDB.user_id, AccountDB.created_at, UserDB.country)
            .outerjoin(UserDB, UserDB.id == AccountDB.user_id)
            .where(AccountDB.id == account_id)
        )
        row = await self._fetch("get_account", stmt, lambda r: r.one_or_none())
        if row is None:
            return None
        return Account(id=row[0], user_id=row[1], created_at=row[2], country=row[3] or None)

    async def get_user(self, user_id: str) -> User | None:
        stmt = select(UserDB.id, UserDB.kyc_status, UserDB.country).where(UserDB.id == user_id)
        row = await self._fetch("get_user", stmt, lambda r: r.one_or_none())
        if row is None:
            return None
        return User(id=row[0], kyc_status=row[1], country=row[2] or None)

    async def count_alerts(self, *, account_id: str, status: str) -> int:
        stmt = select(func.count()).select_from(ComplianceAlertDB).where(
            ComplianceAlertDB.account_id == account_id,
            ComplianceAlertDB.status == status,
        )
        return await self._fetch("count_alerts", stmt, lambda r: int(r.scalar_one()))


class AlertRepository:
    """Append-only sink for compliance alerts."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create(self, alert: ComplianceAlert) -> str:
        """Persist ``alert`` and return its id."""
        alert_id = str(uuid.uuid4())
        row = ComplianceAlertDB(
            alert_id=alert_id,
            alert_type=alert.alert_type.value,
            severity=alert.severity.value,
            account_id=alert.account_id,
            description=alert.description,
            status=alert.status.value,
            alert_metadata=alert.model_dump(mode="json")["metadata"],
            idempotency_key=alert.idempotency_key,
            created_at=alert.created_at,
        )
        async with self._session_factory() as session:
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                if alert.idempotency_key:
                    raise DuplicateAlertError(alert.idempotency_key) from exc
                raise
        return alert_id
