"""Structuring pattern signals."""

from datetime import datetime, timedelta
from decimal import Decimal

from pydantic import BaseModel

from transfer_risk.shared.money import is_multiple_of, to_decimal

from ..models import TransferRequest


class RapidSuccession(BaseModel):
    earlier_transfer_id: str
    later_transfer_id: str
    gap_seconds: float


class RapidSuccessionProbe:
    """Finds consecutive transfers from one sender closer together than ``min_gap``.

    Only transfers already in history are compared; the in-flight request has
    no committed timestamp yet.
    """

    def __init__(
        self,
        store,
        lookback: timedelta = timedelta(hours=24),
        min_gap: timedelta = timedelta(minutes=5),
    ) -> None:
        self._store = store
        self._lookback = lookback
        self._min_gap = min_gap

    async def detect(self, account_id: str, now: datetime) -> RapidSuccession | None:
        transfers = await self._store.list_transfers(
            from_account_id=account_id, since=now - self._lookback
        )
        for previous, current in zip(transfers, transfers[1:]):
            gap = current.created_at - previous.created_at
            if gap < self._min_gap:
                return RapidSuccession(
                    earlier_transfer_id=previous.id,
                    later_transfer_id=current.id,
                    gap_seconds=gap.total_seconds(),
                )
        return None


class RoundAmountProbe:
    """Counts large round-number transfers from one sender, the current one included."""

    def __init__(
        self,
        store,
        lookback: timedelta = timedelta(hours=24),
        round_unit: Decimal = Decimal("1000"),
        min_amount: Decimal = Decimal("10000"),
    ) -> None:
        self._store = store
        self._lookback = lookback
        self._round_unit = round_unit
        self._min_amount = min_amount

    def is_candidate(self, request: TransferRequest) -> bool:
        amount = to_decimal(request.amount)
        return amount >= self._min_amount and is_multiple_of(amount, self._round_unit)

    async def count_with_current(self, request: TransferRequest, now: datetime) -> int:
        prior = await self._store.count_transfers(
            from_account_id=request.from_account_id,
            min_amount=self._min_amount,
            since=now - self._lookback,
        )
        return prior + 1
